"""
Time sources used by the profiler.

The profiler never reads the system clock directly; it asks an injected
:class:`Clock` instead so tests can substitute a :class:`FakeClock`.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Protocol describing a source of the current instant."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Clock backed by the system wall clock, in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FakeClock:
    """
    Manually driven clock for deterministic tests.

    The instant only changes when :meth:`advance` or :meth:`set` is called.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2000, 1, 1, tzinfo=timezone.utc)
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            return self._now

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock forward by ``delta`` and return the new instant."""
        with self._lock:
            self._now += delta
            return self._now

    def set(self, instant: datetime) -> None:
        with self._lock:
            self._now = instant
