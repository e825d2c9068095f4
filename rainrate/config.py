"""Reading of the model's key=value initialization file."""

from __future__ import annotations

import itertools
import os
import re
from dataclasses import dataclass
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_TIME_STEP_SIZE = 3600

_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


@dataclass
class ModelConfig:
    """Settings read from an initialization file."""

    epoch_start_time: int = 0
    epoch_start_time_set: bool = False
    num_time_steps: int = 0
    time_step_size: int = DEFAULT_TIME_STEP_SIZE


def _parse_int(text: str) -> int:
    """Parse a leading decimal integer, yielding 0 when there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _read_bytes(path: PathLike) -> bytes:
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Configuration file does not exist: {path}") from exc


def count_lines(path: PathLike) -> tuple[int, int]:
    """Return the line count and the maximum line length of a file.

    The maximum length is measured in bytes over newline-terminated lines and
    is one more than the longest such line, leaving room for the newline. A
    final line without a newline is counted when it holds anything other than
    spaces and tabs.
    """
    segments = _read_bytes(path).split(b"\n")
    complete, tail = segments[:-1], segments[-1]
    line_count = len(complete)
    if tail.strip(b" \t"):
        line_count += 1
    max_length = max((len(line) for line in complete), default=0)
    return line_count, max_length + 1


def read_config(path: PathLike) -> ModelConfig:
    """Read ``key=value`` settings from ``path``; unknown keys are ignored."""
    line_count, _ = count_lines(path)
    config = ModelConfig()
    with open(path, "rb") as handle:
        for raw in itertools.islice(handle, line_count):
            line = raw.decode("utf-8", "surrogateescape").split("\n", 1)[0]
            key, sep, rest = line.partition("=")
            if key not in (
                "epoch_start_time",
                "num_time_steps",
                "time_step_size",
                "model_end_time",
            ):
                continue
            if not sep:
                raise ValueError(f"No value given for '{key}' in {path}")
            value = _parse_int(rest.split("=", 1)[0])
            match key:
                case "epoch_start_time":
                    config.epoch_start_time = value
                    config.epoch_start_time_set = True
                case "num_time_steps":
                    config.num_time_steps = value
                case "time_step_size":
                    config.time_step_size = value
                case "model_end_time":
                    # This key is read into the step size; the model derives
                    # its end time from the step count.
                    config.time_step_size = value
    return config