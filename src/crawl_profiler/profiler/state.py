"""
Thread-safe aggregation of elapsed time per profiled method.
"""

from __future__ import annotations

import inspect
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, TextIO


@dataclass(frozen=True, order=True, slots=True)
class MethodKey:
    """Identity of a profiled method: declaring type, name and signature."""

    declaring_type: str
    method_name: str
    signature: str

    @classmethod
    def for_method(cls, owner: type, name: str, func: Callable[..., Any]) -> MethodKey:
        try:
            signature = str(inspect.signature(func))
        except (TypeError, ValueError):
            signature = "(...)"
        return cls(f"{owner.__module__}.{owner.__qualname__}", name, signature)

    @property
    def qualified_name(self) -> str:
        return f"{self.declaring_type}#{self.method_name}"


def format_duration(duration: timedelta) -> str:
    """Format ``duration`` as ``"<minutes>m <seconds>s <millis>ms"``."""
    total_ms = duration // timedelta(milliseconds=1)
    minutes, remainder = divmod(total_ms, 60_000)
    seconds, millis = divmod(remainder, 1000)
    return f"{minutes}m {seconds}s {millis}ms"


class ProfilingState:
    """
    Accumulates the total time spent in each profiled method.

    Entries are only ever added or increased. A single lock guards the
    mapping so concurrent ``record`` calls never lose updates.
    """

    def __init__(self) -> None:
        self._data: dict[MethodKey, timedelta] = {}
        self._lock = threading.Lock()

    def record(self, key: MethodKey, elapsed: timedelta) -> None:
        """Add ``elapsed`` to the running total for ``key``."""
        with self._lock:
            self._data[key] = self._data.get(key, timedelta(0)) + elapsed

    def snapshot(self) -> dict[MethodKey, timedelta]:
        """Return a copy of the current totals."""
        with self._lock:
            return dict(self._data)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def write(self, sink: TextIO) -> None:
        """Write one line per method, sorted by key. The sink is left open."""
        for key, total in sorted(self.snapshot().items()):
            sink.write(f"{key.qualified_name} took {format_duration(total)}\n")
