"""Tests for the module-level deep_clone and the default cloner.

Critical Invariants:
- The default cloner is built once and shared until reset
- build_cloner never touches the default cloner
- Custom strategies run ahead of the built-ins, in the order given
"""

import threading
from dataclasses import dataclass

from clonekit import (
    Marker,
    MarkerRegistry,
    ReflectiveStrategy,
    build_cloner,
    deep_clone,
    default_cloner,
    reset_default_cloner,
)


@dataclass
class SpecialService:
    endpoint: str


class MockedServiceStrategy:
    """Replaces every SpecialService with a fixed stand-in."""

    def supports(self, cls: type) -> bool:
        return cls is SpecialService

    def copy(self, origin, context):
        mocked = SpecialService(endpoint="mock://")
        context.register_visited(origin, mocked)
        return mocked


class TaggingStrategy:
    def __init__(self, tag: str) -> None:
        self.tag = tag

    def supports(self, cls: type) -> bool:
        return cls is SpecialService

    def copy(self, origin, context):
        return self.tag


def test_none_is_none():
    assert deep_clone(None) is None


def test_default_cloner_is_shared():
    assert default_cloner() is default_cloner()


def test_reset_rebuilds_default():
    first = default_cloner()

    reset_default_cloner()

    assert default_cloner() is not first


def test_default_cloner_built_once_under_contention():
    seen = []
    barrier = threading.Barrier(8)

    def grab():
        barrier.wait()
        seen.append(default_cloner())

    threads = [threading.Thread(target=grab) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len({id(c) for c in seen}) == 1


def test_build_cloner_is_independent():
    shared = default_cloner()

    custom = build_cloner(MockedServiceStrategy())

    assert custom is not shared
    assert default_cloner() is shared
    assert deep_clone(SpecialService("http://real")) == SpecialService("http://real")


def test_custom_strategy_overrides_builtins():
    """CRITICAL: A custom strategy wins over the reflective fallback.

    Why: Callers plug in strategies precisely to change how known types copy.
    """
    cloner = build_cloner(MockedServiceStrategy())

    clone = cloner.deep_clone({"svc": SpecialService("http://real"), "n": [1]})

    assert clone["svc"].endpoint == "mock://"
    assert clone["n"] == [1]


def test_custom_strategies_keep_given_order():
    cloner = build_cloner(TaggingStrategy("first"), TaggingStrategy("second"))

    assert cloner.deep_clone(SpecialService("x")) == "first"
    assert isinstance(list(cloner.chain)[-1], ReflectiveStrategy)


def test_third_party_immutable_shared():
    class DateTime:
        def __init__(self) -> None:
            self.parts = [2024, 1, 1]

    DateTime.__module__ = "pendulum.datetime"
    value = DateTime()

    assert deep_clone({"when": value})["when"] is value


def test_registry_passed_through():
    registry = MarkerRegistry()

    @dataclass
    class Job:
        payload: list
        lock: object

    registry.mark_field(Job, "lock", Marker.IGNORE)
    cloner = build_cloner(registry=registry)

    clone = cloner.deep_clone(Job(payload=[1], lock=object()))

    assert cloner.registry is registry
    assert clone.lock is None
    assert clone.payload == [1]
