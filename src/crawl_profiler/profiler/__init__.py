"""Method-level profiling of capability interfaces."""

from .clock import Clock, FakeClock, SystemClock
from .markers import has_profiled_methods, is_profiled, profiled
from .profiler import Profiler, format_start_time
from .state import MethodKey, ProfilingState, format_duration

__all__ = [
    "Clock",
    "FakeClock",
    "MethodKey",
    "Profiler",
    "ProfilingState",
    "SystemClock",
    "format_duration",
    "format_start_time",
    "has_profiled_methods",
    "is_profiled",
    "profiled",
]
