"""
Generated decorator classes that time calls to profiled interface methods.

For each interface a subclass is built once: every instance method the
interface hierarchy declares is implemented as a forwarder to the wrapped
target, and the forwarders for ``@profiled`` methods record the elapsed time
into a shared :class:`ProfilingState`.
"""

from __future__ import annotations

import functools
import inspect
import logging
import types
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .clock import Clock
from .markers import has_profiled_methods, is_profiled, iter_declared_methods
from .state import MethodKey, ProfilingState

logger = logging.getLogger("crawl_profiler.profiler.interceptor")

# Object-model hooks that are never forwarded to the target.
_RESERVED_NAMES = frozenset(
    {
        "__init__",
        "__new__",
        "__del__",
        "__init_subclass__",
        "__subclasshook__",
        "__class_getitem__",
        "__getattr__",
        "__getattribute__",
        "__setattr__",
        "__delattr__",
        "__dir__",
        "__repr__",
        "__str__",
        "__eq__",
        "__ne__",
        "__hash__",
        "__reduce__",
        "__reduce_ex__",
        "__getstate__",
        "__setstate__",
        "__copy__",
        "__deepcopy__",
        "__post_init__",
    }
)


@dataclass(frozen=True, slots=True)
class ForwardedMethod:
    """How one interface method is forwarded: ``key`` is None when not profiled."""

    name: str
    declaration: Callable[..., Any]
    key: MethodKey | None
    is_coroutine: bool


def _is_forwardable(name: str) -> bool:
    if name in _RESERVED_NAMES:
        return False
    if name.startswith("__") and name.endswith("__"):
        return True
    return not name.startswith("_")


def collect_forwarded_methods(interface: type) -> dict[str, ForwardedMethod]:
    """
    Build the forwarding table for ``interface``.

    A method is profiled when some declaration of it in the hierarchy carries
    the marker and has the same parameter signature as the declaration that
    method resolution picks. The key names the most-derived such declaration.
    """
    resolved: dict[str, tuple[type, Callable[..., Any]]] = {}
    marked: dict[str, list[tuple[type, Callable[..., Any]]]] = {}
    for owner, name, member in iter_declared_methods(interface):
        if not _is_forwardable(name):
            continue
        resolved.setdefault(name, (owner, member))
        if is_profiled(member):
            marked.setdefault(name, []).append((owner, member))

    table: dict[str, ForwardedMethod] = {}
    for name, (owner, member) in resolved.items():
        key = MethodKey.for_method(owner, name, member)
        profiled_key = None
        for marked_owner, marked_member in marked.get(name, ()):
            candidate = MethodKey.for_method(marked_owner, name, marked_member)
            if candidate.signature == key.signature:
                profiled_key = candidate
                break
        table[name] = ForwardedMethod(
            name=name,
            declaration=member,
            key=profiled_key,
            is_coroutine=inspect.iscoroutinefunction(member),
        )
    return table


def has_forwarded_profiled_methods(interface: type) -> bool:
    """Return True if some method the wrapper for ``interface`` forwards is profiled.

    Marked members the wrapper never forwards, such as private helpers, do
    not count.
    """
    if not has_profiled_methods(interface):
        return False
    return any(spec.key is not None for spec in collect_forwarded_methods(interface).values())


def collect_forwarded_properties(interface: type, methods: dict[str, ForwardedMethod]) -> list[str]:
    names: list[str] = []
    for owner in inspect.getmro(interface):
        for name, member in vars(owner).items():
            if isinstance(member, property) and name not in methods and name not in names:
                names.append(name)
    return names


def _make_forwarder(spec: ForwardedMethod) -> Callable[..., Any]:
    name = spec.name
    key = spec.key

    if key is None:
        def forward(self, *args, **kwargs):
            return getattr(self._profiled_target, name)(*args, **kwargs)
    elif spec.is_coroutine:
        async def forward(self, *args, **kwargs):
            bound = getattr(self._profiled_target, name)
            clock = self._profiled_clock
            start = clock.now()
            try:
                return await bound(*args, **kwargs)
            finally:
                self._profiled_state.record(key, clock.now() - start)
    else:
        def forward(self, *args, **kwargs):
            bound = getattr(self._profiled_target, name)
            clock = self._profiled_clock
            start = clock.now()
            try:
                return bound(*args, **kwargs)
            finally:
                self._profiled_state.record(key, clock.now() - start)

    # Copy identity only: copying __dict__ would carry __isabstractmethod__ over.
    return functools.update_wrapper(
        forward,
        spec.declaration,
        assigned=("__module__", "__name__", "__qualname__", "__doc__"),
        updated=(),
    )


def _make_passthrough(name: str) -> Callable[..., Any]:
    def forward(self, *args, **kwargs):
        return getattr(self._profiled_target, name)(*args, **kwargs)

    forward.__name__ = forward.__qualname__ = name
    return forward


def _make_property(name: str) -> property:
    def fget(self):
        return getattr(self._profiled_target, name)

    return property(fget, doc=f"Forwarded read of ``{name}`` on the wrapped target.")


class ProfilingProxy:
    """Base of every generated wrapper class."""

    _forwarded_methods: dict[str, ForwardedMethod] = {}
    _forwarded_properties: tuple[str, ...] = ()
    _forwarded_abstract: tuple[str, ...] = ()

    def __init__(self, target: Any, clock: Clock, state: ProfilingState) -> None:
        self._profiled_target = target
        self._profiled_clock = clock
        self._profiled_state = state

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails; guard against recursion
        # before __init__ has run.
        if name.startswith("_profiled_"):
            raise AttributeError(name)
        return getattr(self._profiled_target, name)

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} wrapping {self._profiled_target!r}>"


@functools.lru_cache(maxsize=None)
def build_proxy_class(interface: type) -> type[ProfilingProxy]:
    """Return the cached wrapper class implementing ``interface``."""
    methods = collect_forwarded_methods(interface)
    properties = collect_forwarded_properties(interface, methods)

    namespace: dict[str, Any] = {name: _make_forwarder(spec) for name, spec in methods.items()}
    namespace.update({name: _make_property(name) for name in properties})
    # Abstract members no forwarder covers (class/static methods, private
    # names) still have to be implemented for the class to be instantiable.
    leftover = sorted(set(getattr(interface, "__abstractmethods__", ())) - namespace.keys())
    namespace.update({name: _make_passthrough(name) for name in leftover})
    namespace["_forwarded_methods"] = methods
    namespace["_forwarded_properties"] = tuple(properties)
    namespace["_forwarded_abstract"] = tuple(leftover)
    namespace["__module__"] = __name__

    proxy_class = types.new_class(
        f"Profiled{interface.__name__}",
        (ProfilingProxy, interface),
        exec_body=lambda ns: ns.update(namespace),
    )
    profiled = sorted(spec.key.qualified_name for spec in methods.values() if spec.key is not None)
    logger.debug(
        "Built %s forwarding %d methods (profiled: %s)",
        proxy_class.__qualname__,
        len(methods),
        ", ".join(profiled),
    )
    return proxy_class
