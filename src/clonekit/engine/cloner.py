"""Cloner: orchestrates one deep clone over an ordered strategy chain.

Usage:
    cloner = (
        Cloner.builder()
        .register_strategy(MoneyStrategy())
        .with_settings(CloneSettings(share_frozen_records=False))
        .build()
    )
    copy = cloner.deep_clone(original)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Self

from clonekit.config import CloneSettings
from clonekit.core.markers import MarkerRegistry, get_registry
from clonekit.core.strategy import CloneStrategy, StrategyChain
from clonekit.core.types import Copy, T
from clonekit.engine.context import CloneContext
from clonekit.logging import get_logger
from clonekit.strategies import default_strategies

logger = get_logger(__name__)


class Cloner:
    """Deep-copy engine over a fixed strategy chain.

    The chain must end in a catch-all strategy; `Cloner.builder()` appends
    the built-in chain, which does. A cloner holds no per-call state and can
    be shared by concurrent callers.

    Args:
        strategies: Complete chain in priority order, or a prebuilt StrategyChain.
        registry: Marker registry for exclusion checks. Defaults to the global one.
    """

    def __init__(
        self,
        strategies: Iterable[CloneStrategy] | StrategyChain,
        *,
        registry: MarkerRegistry | None = None,
    ) -> None:
        if not isinstance(strategies, StrategyChain):
            strategies = StrategyChain(strategies)
        self._chain = strategies
        self._registry = registry if registry is not None else get_registry()
        self._registry_version = self._registry.version
        logger.debug("Built cloner over %r", self._chain)

    @staticmethod
    def builder() -> ClonerBuilder:
        """Create a builder that prepends custom strategies to the defaults."""
        return ClonerBuilder()

    @property
    def chain(self) -> StrategyChain:
        """The strategy chain, highest priority first."""
        return self._chain

    @property
    def registry(self) -> MarkerRegistry:
        """The marker registry consulted during cloning."""
        return self._registry

    def deep_clone(self, origin: T) -> Copy[T]:
        """Create a deep, cycle-safe, topology-preserving copy.

        Args:
            origin: Root of the object graph to copy.

        Returns:
            None for None, otherwise the copy. Immutable values are returned
            as-is and instances of ignored types become None.

        Raises:
            NoStrategyFoundError: If the chain has no strategy for some type.
            UninstantiableTypeError: If the fallback cannot instantiate some type.
            FieldAccessError: If a field cannot be read or written.
        """
        if origin is None:
            return origin
        return CloneContext(self).proceed(origin)  # type: ignore[return-value]

    def get_clone_strategy(self, cls: type) -> CloneStrategy:
        """Resolve the strategy that copies instances of a type.

        Cached resolutions are dropped first if the registry changed since the
        last lookup, so marking a type after it was cloned takes effect.

        Raises:
            NoStrategyFoundError: If no strategy supports the type.
        """
        version = self._registry.version
        if version != self._registry_version:
            self._chain.invalidate()
            self._registry_version = version
        return self._chain.resolve(cls)


class ClonerBuilder:
    """Fluent builder for a Cloner with custom strategies ahead of the defaults.

    Custom strategies are consulted in registration order: the first one
    registered has the highest priority.
    """

    def __init__(self) -> None:
        self._custom: list[CloneStrategy] = []
        self._settings: CloneSettings | None = None
        self._registry: MarkerRegistry | None = None

    def register_strategy(self, strategy: CloneStrategy) -> Self:
        """Add a custom strategy after previously registered ones.

        Raises:
            TypeError: If the object does not implement the CloneStrategy protocol.
        """
        if not isinstance(strategy, CloneStrategy):
            raise TypeError(
                f"{type(strategy).__name__} does not implement the CloneStrategy protocol"
            )
        self._custom.append(strategy)
        return self

    def with_settings(self, settings: CloneSettings) -> Self:
        """Configure the built-in strategies. Defaults to `CloneSettings()`."""
        self._settings = settings
        return self

    def with_registry(self, registry: MarkerRegistry) -> Self:
        """Use a dedicated marker registry instead of the global one."""
        self._registry = registry
        return self

    def build(self) -> Cloner:
        """Append the built-in chain and construct the Cloner."""
        registry = self._registry if self._registry is not None else get_registry()
        strategies = [*self._custom, *default_strategies(self._settings, registry)]
        return Cloner(strategies, registry=registry)
