"""
The ``@profiled`` marker and discovery of marked methods on a type hierarchy.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from typing import Any, Generic, Protocol, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

PROFILED_ATTR = "__profiled__"

# Bases contributing no capability methods of their own.
_IGNORED_BASES: tuple[type, ...] = (object, Protocol, Generic)  # type: ignore[arg-type]


def profiled(func: F) -> F:
    """Mark an interface method for timing by :meth:`Profiler.wrap`.

    Can be stacked with :func:`abc.abstractmethod` in either order.
    """
    setattr(_unwrap(func), PROFILED_ATTR, True)
    return func


def is_profiled(member: Any) -> bool:
    """Return whether ``member`` carries the ``@profiled`` marker."""
    return bool(getattr(_unwrap(member), PROFILED_ATTR, False))


def _unwrap(member: Any) -> Any:
    # staticmethod/classmethod keep the function on ``__func__``
    return getattr(member, "__func__", member)


def iter_declared_methods(klass: type) -> Iterator[tuple[type, str, Any]]:
    """
    Yield ``(declaring_type, name, member)`` for every method declared on
    ``klass`` or any of its ancestors, most-derived first.

    Only plain functions are reported. Static methods, class methods and
    properties are not instance methods and cannot be profiled.
    """
    for owner in inspect.getmro(klass):
        if owner in _IGNORED_BASES:
            continue
        for name, member in vars(owner).items():
            if inspect.isfunction(member):
                yield owner, name, member


def has_profiled_methods(klass: type) -> bool:
    """Return True if ``klass`` or any ancestor declares a profiled method."""
    return any(is_profiled(member) for _, _, member in iter_declared_methods(klass))
