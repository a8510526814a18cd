"""Tests for Cloner and ClonerBuilder.

Critical Invariants:
- deep_clone(None) is None without touching any strategy
- Custom strategies run before the built-ins, in registration order
- Misconfigured chains surface NoStrategyFoundError to the caller
- Marker changes made after a type was cloned apply to the next clone
"""

import gc
import weakref
from dataclasses import dataclass

import pytest

from clonekit import (
    Cloner,
    CloneSettings,
    CollectionStrategy,
    ImmutableStrategy,
    Marker,
    NoStrategyFoundError,
    ReflectiveStrategy,
    StrategyChain,
)


@dataclass
class SpecialService:
    value: str


class MockedServiceStrategy:
    def __init__(self, label: str = "Mocked") -> None:
        self.label = label

    def supports(self, cls: type) -> bool:
        return cls is SpecialService

    def copy(self, origin, context):
        return SpecialService(self.label)


class ExplodingStrategy:
    def supports(self, cls: type) -> bool:
        raise AssertionError("strategy lookup for None")

    def copy(self, origin, context):
        raise AssertionError("strategy invoked for None")


def test_none_returns_none_without_strategy(registry):
    cloner = Cloner([ExplodingStrategy()], registry=registry)

    assert cloner.deep_clone(None) is None


def test_builder_appends_defaults(cloner):
    names = [type(s).__name__ for s in cloner.chain]

    assert names == [
        "ImmutableStrategy",
        "CloneHookStrategy",
        "MappingStrategy",
        "CollectionStrategy",
        "ArrayStrategy",
        "ReflectiveStrategy",
    ]


def test_custom_strategy_takes_priority(registry, settings):
    """CRITICAL: A user strategy beats the reflective walk for its type."""
    cloner = (
        Cloner.builder()
        .register_strategy(MockedServiceStrategy())
        .with_registry(registry)
        .with_settings(settings)
        .build()
    )

    clone = cloner.deep_clone(SpecialService("Real"))

    assert clone.value == "Mocked"


def test_custom_strategies_keep_registration_order(registry, settings):
    cloner = (
        Cloner.builder()
        .register_strategy(MockedServiceStrategy("first"))
        .register_strategy(MockedServiceStrategy("second"))
        .with_registry(registry)
        .with_settings(settings)
        .build()
    )

    assert cloner.deep_clone(SpecialService("Real")).value == "first"


def test_builder_rejects_non_strategy():
    with pytest.raises(TypeError, match="CloneStrategy protocol"):
        Cloner.builder().register_strategy("not a strategy")  # type: ignore[arg-type]


def test_builder_settings_reach_strategies(registry):
    @dataclass(frozen=True)
    class Point:
        x: int

    sharing = Cloner.builder().with_registry(registry).build()
    copying = (
        Cloner.builder()
        .with_registry(registry)
        .with_settings(CloneSettings(share_frozen_records=False))
        .build()
    )
    point = Point(1)

    assert sharing.deep_clone(point) is point
    assert copying.deep_clone(point) is not point
    assert copying.deep_clone(point) == point


def test_missing_fallback_surfaces_to_caller(registry):
    """CRITICAL: No fallback -> loud failure, not a partial copy."""
    cloner = Cloner([ImmutableStrategy(registry=registry), CollectionStrategy()], registry=registry)

    assert cloner.deep_clone([1, "a"]) == [1, "a"]
    with pytest.raises(NoStrategyFoundError):
        cloner.deep_clone([1, SpecialService("x")])


def test_accepts_prebuilt_chain(registry):
    chain = StrategyChain([ReflectiveStrategy()])
    cloner = Cloner(chain, registry=registry)

    assert cloner.chain is chain
    assert cloner.registry is registry
    assert isinstance(cloner.get_clone_strategy(int), ReflectiveStrategy)


def test_get_clone_strategy(cloner):
    assert isinstance(cloner.get_clone_strategy(str), ImmutableStrategy)
    assert isinstance(cloner.get_clone_strategy(list), CollectionStrategy)
    assert isinstance(cloner.get_clone_strategy(SpecialService), ReflectiveStrategy)


def test_marking_after_first_clone_takes_effect(cloner, registry):
    """CRITICAL: Cached resolutions follow later registry changes.

    Why: Types are often marked when their module is imported, which can be
    after a long-lived cloner already copied them.
    """

    class Late:
        def __init__(self) -> None:
            self.data = [1]

    value = Late()
    assert cloner.deep_clone(value) is not value

    registry.mark_type(Late, Marker.IMMUTABLE)
    assert cloner.deep_clone(value) is value

    registry.unmark_type(Late)
    assert cloner.deep_clone(value) is not value


def test_cloned_types_not_kept_alive(cloner):
    def clone_temporary_instance():
        class Temporary:
            __slots__ = ("items",)

        original = Temporary()
        original.items = [1]
        cloner.deep_clone(original)
        return weakref.ref(Temporary)

    ref = clone_temporary_instance()
    gc.collect()

    assert ref() is None
