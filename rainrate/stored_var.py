"""Stored model variables and fixed-length history queues."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Iterator


def format_value(value: Any) -> str:
    """Render a stored value as text.

    Strings are returned unchanged, integers in plain decimal and floats in
    fixed notation with six decimal places.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:f}"
    raise TypeError(f"Cannot format value of type {type(value).__name__}")


@dataclass
class StoredVar:
    """A model variable together with its BMI metadata."""

    value: Any
    name: str
    type: str
    units: str
    location: str
    item_count: int
    grid: int
    setup_info: str = ""

    def setup(self, setup_info: str) -> StoredVar:
        """Record where the variable was set up and return the variable."""
        self.setup_info = setup_info
        return self


class ShiftQueue:
    """A fixed-length queue of past values, oldest first.

    Pushing a value drops the oldest one. Indices outside the queue
    (after wrapping one negative step) yield the initial value.
    """

    def __init__(self, name: str, init_val: Any, max_size: int) -> None:
        self.name = name
        self.init_val = init_val
        self.max_size = max(max_size, 1)
        self._queue: deque[Any] = deque(
            [init_val] * self.max_size, maxlen=self.max_size
        )

    def __getitem__(self, index: int) -> Any:
        if index < 0:
            index += self.max_size
        if not 0 <= index < self.max_size:
            return self.init_val
        return self._queue[index]

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._queue)

    def get(self) -> Any:
        """Return the oldest value in the queue."""
        return self[0]

    def shift(self) -> None:
        """Drop the oldest value and fill the newest slot with the initial value."""
        self._queue.append(self.init_val)

    def push(self, value: Any) -> None:
        """Drop the oldest value and store ``value`` as the newest."""
        self._queue.append(value)

    def __str__(self) -> str:
        return self.name + ": " + "".join(
            f"{format_value(item)}, " for item in self._queue
        )