"""
Exception types raised by the profiler and the result writers.
"""

from __future__ import annotations


class IneligibleTypeError(ValueError):
    """Raised when a type declares no ``@profiled`` methods and cannot be wrapped."""

    def __init__(self, interface: type) -> None:
        self.interface = interface
        name = getattr(interface, "__qualname__", repr(interface))
        super().__init__(f"{name} doesn't have profiled methods.")


class ProfilerIOError(RuntimeError):
    """Base class for fatal I/O failures while writing reports or results."""


class ReportWriteError(ProfilerIOError):
    """Raised when the profiling report cannot be written."""


class ResultWriteError(ProfilerIOError):
    """Raised when a crawl result cannot be written."""
