"""Command that initializes the model and exercises the history queue."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence, TextIO

from rainrate.model import BmiRainRate
from rainrate.stored_var import ShiftQueue, format_value

DEFAULT_CONFIG = "../test/test_cfg.txt"


def _exercise_shift_queue(out: TextIO, size: int = 5) -> None:
    queue = ShiftQueue("test", 0, size)
    if any(queue[i] != 0 for i in range(size)):
        raise AssertionError("queue not filled with its initial value")
    print(queue, file=out)
    for value in range(size):
        queue.push(value)
    print(queue, file=out)
    if [queue[i] for i in range(size)] != list(range(size)):
        raise AssertionError("queue does not hold pushed values in order")
    for _ in range(size):
        print(format_value(queue.get()), file=out)
        queue.shift()
    print(queue, file=out)
    if any(queue[i] != 0 for i in range(size)):
        raise AssertionError("queue not emptied back to its initial value")


def main(argv: Sequence[str] | None = None) -> int:
    """Initialize the model from a config file, run the queue check, finalize."""
    parser = argparse.ArgumentParser(prog="rainrate")
    parser.add_argument("config", nargs="?", default=DEFAULT_CONFIG)
    args = parser.parse_args(argv)

    model = BmiRainRate()
    print("Initializing", file=sys.stderr)
    try:
        model.initialize(args.config)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    _exercise_shift_queue(sys.stdout)
    model.finalize()
    print("Finalized", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())