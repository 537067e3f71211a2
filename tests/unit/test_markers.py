from __future__ import annotations

import abc
from typing import Protocol

from crawl_profiler.profiler import has_profiled_methods, is_profiled, profiled
from crawl_profiler.profiler.markers import iter_declared_methods


class Base(abc.ABC):
    @profiled
    @abc.abstractmethod
    def parse(self, url: str) -> list[str]:
        ...


class Derived(Base, abc.ABC):
    @abc.abstractmethod
    def describe(self) -> str:
        ...


class Plain(abc.ABC):
    @abc.abstractmethod
    def describe(self) -> str:
        ...


class Fetcher(Protocol):
    @abc.abstractmethod
    @profiled
    def fetch(self, url: str) -> str:
        ...


def test_marker_is_set_on_function():
    assert is_profiled(Base.parse)
    assert not is_profiled(Plain.describe)


def test_marker_stacks_with_abstractmethod_in_either_order():
    assert getattr(Base.parse, "__isabstractmethod__", False)
    assert getattr(Fetcher.fetch, "__isabstractmethod__", False)
    assert is_profiled(Fetcher.fetch)


def test_marker_on_static_method_function():
    class Tools:
        @staticmethod
        @profiled
        def helper() -> None:
            ...

    assert is_profiled(vars(Tools)["helper"])


def test_discovery_walks_ancestors():
    assert has_profiled_methods(Base)
    assert has_profiled_methods(Derived)
    assert not has_profiled_methods(Plain)


def test_discovery_on_protocol():
    assert has_profiled_methods(Fetcher)


def test_declared_methods_are_reported_most_derived_first():
    declared = [(owner, name) for owner, name, _ in iter_declared_methods(Derived)]
    assert declared.index((Derived, "describe")) < declared.index((Base, "parse"))
    assert all(owner is not object for owner, _ in declared)
