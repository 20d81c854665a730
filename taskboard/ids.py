"""
Task id generators.

The board asks an IdGenerator for a fresh id on every create. Two
implementations ship:
    RandomIds      : sortable "task-<ms>-<hex8>" ids, unique across sessions
    SequentialIds  : "task-001", "task-002", … within one process
"""
import itertools
import time
import uuid
from typing import Callable, Iterable

IdGenerator = Callable[[], str]


class RandomIds:
    """Millisecond timestamp + random hex."""

    def __init__(self, prefix: str = "task"):
        self.prefix = prefix

    def __call__(self) -> str:
        ts = int(time.time() * 1000)
        rand = uuid.uuid4().hex[:8]
        return f"{self.prefix}-{ts}-{rand}"


class SequentialIds:
    """Monotonic counter ids. `start` lets a seeded board continue numbering."""

    def __init__(self, prefix: str = "task", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter):03d}"

    @classmethod
    def after(cls, existing: Iterable[str], prefix: str = "task") -> "SequentialIds":
        """Continue after the highest numbered id already in use."""
        highest = 0
        for task_id in existing:
            head, _, tail = task_id.rpartition("-")
            if head == prefix and tail.isdigit():
                highest = max(highest, int(tail))
        return cls(prefix, highest + 1)


def make_id_generator(scheme: str = "random", prefix: str = "task") -> IdGenerator:
    if scheme == "sequential":
        return SequentialIds(prefix)
    if scheme == "random":
        return RandomIds(prefix)
    raise ValueError(f"Unknown id scheme: {scheme}")
