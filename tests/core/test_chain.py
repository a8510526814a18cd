"""Tests for strategy chain resolution.

Critical Invariants:
- First matching strategy wins, in chain order
- A chain without a catch-all fails loudly with NoStrategyFoundError
"""

import gc
import threading
import weakref

import pytest

from clonekit import (
    CollectionStrategy,
    ImmutableStrategy,
    NoStrategyFoundError,
    ReflectiveStrategy,
    StrategyChain,
)


class ClaimsEverything:
    def __init__(self, label: str) -> None:
        self.label = label

    def supports(self, cls: type) -> bool:
        return True

    def copy(self, origin, context):
        return self.label


class ClaimsNothing:
    def __init__(self) -> None:
        self.calls = 0

    def supports(self, cls: type) -> bool:
        self.calls += 1
        return False

    def copy(self, origin, context):
        raise AssertionError("never resolved")


def test_first_match_wins():
    first = ClaimsEverything("first")
    second = ClaimsEverything("second")
    chain = StrategyChain([first, second])

    assert chain.resolve(dict) is first


def test_skips_non_matching_strategies(registry):
    immutable = ImmutableStrategy(registry=registry)
    collection = CollectionStrategy()
    fallback = ReflectiveStrategy()
    chain = StrategyChain([immutable, collection, fallback])

    assert chain.resolve(str) is immutable
    assert chain.resolve(list) is collection
    assert chain.resolve(object) is fallback


def test_missing_fallback_raises():
    """CRITICAL: Misconfiguration surfaces instead of returning a bogus copy.

    Why: A chain without the catch-all cannot copy arbitrary types.
    """
    chain = StrategyChain([CollectionStrategy()])

    with pytest.raises(NoStrategyFoundError, match="Could not find a CloneStrategy") as info:
        chain.resolve(dict)

    assert info.value.cls is dict
    assert isinstance(info.value, LookupError)


def test_resolution_is_cached():
    miss = ClaimsNothing()
    chain = StrategyChain([miss, ClaimsEverything("hit")])

    chain.resolve(int)
    chain.resolve(int)
    chain.resolve(int)

    assert miss.calls == 1


def test_rejects_non_strategy():
    with pytest.raises(TypeError, match="does not implement the CloneStrategy protocol"):
        StrategyChain([object()])  # type: ignore[list-item]


def test_len_iter_repr():
    strategies = [CollectionStrategy(), ReflectiveStrategy()]
    chain = StrategyChain(strategies)

    assert len(chain) == 2
    assert list(chain) == strategies
    assert repr(chain) == "StrategyChain([CollectionStrategy, ReflectiveStrategy])"


def test_concurrent_resolution_agrees():
    """One chain is shared by every thread using a cloner."""
    chain = StrategyChain([CollectionStrategy(), ReflectiveStrategy()])
    types = [list, set, dict, object, tuple, frozenset] * 50
    results: list[tuple[type, object]] = []
    lock = threading.Lock()

    def worker() -> None:
        for cls in types:
            strategy = chain.resolve(cls)
            with lock:
                results.append((cls, strategy))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    by_type: dict[type, set[int]] = {}
    for cls, strategy in results:
        by_type.setdefault(cls, set()).add(id(strategy))
    assert all(len(ids) == 1 for ids in by_type.values())
    assert isinstance(chain.resolve(dict), ReflectiveStrategy)


def test_invalidate_forgets_resolutions():
    skipper = ClaimsNothing()
    chain = StrategyChain([skipper, ClaimsEverything("fallback")])
    chain.resolve(dict)

    chain.invalidate()
    chain.resolve(dict)

    assert skipper.calls == 2


def test_cache_does_not_keep_types_alive():
    chain = StrategyChain([ClaimsEverything("fallback")])

    def resolve_temporary_type():
        temporary = type("Temporary", (), {})
        chain.resolve(temporary)
        return weakref.ref(temporary)

    ref = resolve_temporary_type()
    gc.collect()

    assert ref() is None
