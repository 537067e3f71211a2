"""
The process-wide profiler session.

A :class:`Profiler` is created once at startup with a :class:`Clock`. It
fixes the session start time, owns the :class:`ProfilingState` every wrapper
records into, and writes the textual report.
"""

from __future__ import annotations

import inspect
import logging
import os
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import Any, TextIO, TypeVar

from crawl_profiler.errors import IneligibleTypeError, ReportWriteError

from .clock import Clock, SystemClock
from .interceptor import build_proxy_class, has_forwarded_profiled_methods
from .state import ProfilingState

logger = logging.getLogger("crawl_profiler.profiler")

T = TypeVar("T")


def format_start_time(instant: datetime) -> str:
    """Format ``instant`` as an RFC 1123 date-time; UTC is rendered as ``GMT``."""
    if instant.utcoffset() == timedelta(0):
        return format_datetime(instant.astimezone(timezone.utc), usegmt=True)
    return format_datetime(instant)


class Profiler:
    """Times calls to ``@profiled`` methods and reports the totals."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock if clock is not None else SystemClock()
        self._state = ProfilingState()
        self._start_time = self._clock.now()

    @property
    def start_time(self) -> datetime:
        return self._start_time

    @property
    def state(self) -> ProfilingState:
        return self._state

    def wrap(self, interface: type[T], target: T) -> T:
        """
        Return ``target`` wrapped as an instance of ``interface``.

        Calls to methods the interface hierarchy marks ``@profiled`` are
        timed with the session clock and recorded, whether they return or
        raise. Other calls are forwarded untouched.

        Raises:
            TypeError: ``interface`` is not a class, ``target`` is None, or
                ``target`` lacks methods the interface declares.
            IneligibleTypeError: no method of ``interface`` is profiled.
        """
        if not inspect.isclass(interface):
            raise TypeError(f"interface must be a class, got {interface!r}")
        if target is None:
            raise TypeError("target must not be None")
        if not has_forwarded_profiled_methods(interface):
            raise IneligibleTypeError(interface)

        proxy_class = build_proxy_class(interface)
        required = [
            *proxy_class._forwarded_methods,
            *proxy_class._forwarded_properties,
            *proxy_class._forwarded_abstract,
        ]
        missing = [name for name in required if not hasattr(target, name)]
        if missing:
            raise TypeError(
                f"{type(target).__qualname__} does not implement {interface.__qualname__}: "
                f"missing {', '.join(sorted(missing))}"
            )
        return proxy_class(target, self._clock, self._state)  # type: ignore[return-value]

    def write_data(self, destination: str | os.PathLike[str] | TextIO) -> None:
        """
        Write the report header and the recorded totals.

        ``destination`` is either a path, appended to (and created if
        missing), or an open text sink, which is written to and left open.

        Raises:
            ReportWriteError: the report could not be written.
        """
        if isinstance(destination, (str, os.PathLike)):
            self._write_path(Path(destination))
            return
        try:
            self._write_report(destination)
        except OSError as exc:
            logger.error("Failed to write profiling report: %s", exc, exc_info=True)
            raise ReportWriteError(f"Failed to write profiling report: {exc}") from exc

    def _write_path(self, path: Path) -> None:
        logger.info("Appending profiling report to %s", path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as handle:
                self._write_report(handle)
        except OSError as exc:
            logger.error("Failed to write profiling report to %s: %s", path, exc, exc_info=True)
            raise ReportWriteError(f"Failed to write profiling report to {path}: {exc}") from exc

    def _write_report(self, sink: Any) -> None:
        sink.write(f"Run at {format_start_time(self._start_time)}\n")
        self._state.write(sink)
        sink.write("\n")
