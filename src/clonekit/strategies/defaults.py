"""The built-in strategy chain."""

from __future__ import annotations

from clonekit.config import CloneSettings
from clonekit.core.markers import MarkerRegistry
from clonekit.core.strategy import CloneStrategy
from clonekit.strategies.array import ArrayStrategy
from clonekit.strategies.collection import CollectionStrategy
from clonekit.strategies.hook import CloneHookStrategy
from clonekit.strategies.immutable import ImmutableStrategy
from clonekit.strategies.mapping import MappingStrategy
from clonekit.strategies.reflective import ReflectiveStrategy


def default_strategies(
    settings: CloneSettings | None = None,
    registry: MarkerRegistry | None = None,
) -> list[CloneStrategy]:
    """Build the built-in chain, cheapest and most specific first.

    The last strategy, ReflectiveStrategy, supports every type, so the chain
    always resolves.

    Args:
        settings: Settings for the built-ins. Defaults to `CloneSettings()`,
            which reads CLONEKIT_* environment variables.
        registry: Marker registry for the immutable strategy. Defaults to global.

    Returns:
        New strategy instances in priority order.
    """
    if settings is None:
        settings = CloneSettings()
    return [
        ImmutableStrategy(
            registry=registry,
            extra_prefixes=settings.extra_immutable_prefixes,
            share_frozen_records=settings.share_frozen_records,
        ),
        CloneHookStrategy(),
        MappingStrategy(warn_on_fallback=settings.warn_on_container_fallback),
        CollectionStrategy(warn_on_fallback=settings.warn_on_container_fallback),
        ArrayStrategy(),
        ReflectiveStrategy(),
    ]
