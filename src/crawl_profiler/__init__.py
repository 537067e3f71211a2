"""
High-level package exports for crawl-profiler.
"""

from __future__ import annotations

from importlib import metadata
from typing import Final

try:
    __version__: Final[str] = metadata.version("crawl-profiler")
except metadata.PackageNotFoundError:  # pragma: no cover - local execution
    __version__ = "0.0.0"

# Convenience re-exports
from . import exporters, profiler  # noqa: E402
from .core.models import CrawlResult  # noqa: E402
from .errors import (  # noqa: E402
    IneligibleTypeError,
    ProfilerIOError,
    ReportWriteError,
    ResultWriteError,
)
from .exporters import CrawlResultWriter  # noqa: E402
from .profiler import Clock, FakeClock, MethodKey, Profiler, ProfilingState, SystemClock, profiled  # noqa: E402

__all__ = [
    "__version__",
    "Clock",
    "CrawlResult",
    "CrawlResultWriter",
    "FakeClock",
    "IneligibleTypeError",
    "MethodKey",
    "Profiler",
    "ProfilerIOError",
    "ProfilingState",
    "ReportWriteError",
    "ResultWriteError",
    "SystemClock",
    "exporters",
    "profiled",
    "profiler",
]
