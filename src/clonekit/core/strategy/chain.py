"""Strategy chain: ordered, first-match-wins resolution of copy strategies."""

from __future__ import annotations

import threading
import weakref
from collections.abc import Iterable, Iterator

from clonekit.core.errors import NoStrategyFoundError
from clonekit.core.strategy.models import CloneStrategy
from clonekit.logging import get_logger

logger = get_logger(__name__)


class StrategyChain:
    """Immutable ordered sequence of strategies.

    Resolution is a linear scan; the winner per type is cached. The cache is
    the only mutable state and is guarded by a lock, so one chain can be
    shared by concurrent clone calls. It holds types weakly, so classes
    created at runtime are not kept alive by having been cloned.

    Args:
        strategies: Strategies in priority order (first wins).
    """

    def __init__(self, strategies: Iterable[CloneStrategy]) -> None:
        self._strategies: tuple[CloneStrategy, ...] = tuple(strategies)
        for strategy in self._strategies:
            if not isinstance(strategy, CloneStrategy):
                raise TypeError(
                    f"{type(strategy).__name__} does not implement the CloneStrategy protocol"
                )
        self._cache: weakref.WeakKeyDictionary[type, CloneStrategy] = weakref.WeakKeyDictionary()
        self._lock = threading.Lock()

    def resolve(self, cls: type) -> CloneStrategy:
        """Find the first strategy supporting a type.

        Args:
            cls: Runtime type of the value being cloned.

        Returns:
            The highest-priority strategy whose `supports(cls)` holds.

        Raises:
            NoStrategyFoundError: If no strategy supports the type.
        """
        cached = self._cache.get(cls)
        if cached is not None:
            return cached

        for strategy in self._strategies:
            if strategy.supports(cls):
                with self._lock:
                    self._cache[cls] = strategy
                return strategy

        logger.debug("No strategy among %d supports %s", len(self._strategies), cls)
        raise NoStrategyFoundError(cls)

    def invalidate(self) -> None:
        """Forget every cached resolution.

        Needed when the answer of some `supports` changes, e.g. after a type
        gains or loses a marker.
        """
        with self._lock:
            self._cache.clear()
        logger.debug("Cleared cached resolutions of %r", self)

    def __iter__(self) -> Iterator[CloneStrategy]:
        return iter(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)

    def __repr__(self) -> str:
        names = ", ".join(type(s).__name__ for s in self._strategies)
        return f"StrategyChain([{names}])"
