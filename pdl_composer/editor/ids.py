"""
Id generators injected into the tree editor.

The editor never consults a clock: every id for a new node comes from one of
these generators, so a test can replay an editing session and get the same
ids back.
"""

import itertools
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    """Source of ids for nodes the editor creates."""

    def next_id(self) -> str: ...


class CounterIdGenerator:
    """Monotonic ids: ``auto-1``, ``auto-2``, ..."""

    def __init__(self, prefix: str = "auto", start: int = 1) -> None:
        self.prefix = prefix
        self._counter = itertools.count(start)

    def next_id(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


class UuidIdGenerator:
    """Random ids: ``auto-<uuid4 hex>``. Unique across sessions and processes."""

    def __init__(self, prefix: str = "auto") -> None:
        self.prefix = prefix

    def next_id(self) -> str:
        return f"{self.prefix}-{uuid.uuid4().hex}"
