"""Process-wide default cloner and a factory for custom ones.

Usage:
    from clonekit import deep_clone, build_cloner

    copy = deep_clone(original)

    cloner = build_cloner(MoneyStrategy(), HandleStrategy())
    copy = cloner.deep_clone(original)
"""

from __future__ import annotations

import threading

from clonekit.config import CloneSettings
from clonekit.core.markers import MarkerRegistry
from clonekit.core.strategy import CloneStrategy
from clonekit.core.types import Copy, T
from clonekit.engine import Cloner

_default_cloner: Cloner | None = None
_default_lock = threading.Lock()


def build_cloner(
    *custom_strategies: CloneStrategy,
    settings: CloneSettings | None = None,
    registry: MarkerRegistry | None = None,
) -> Cloner:
    """Create an independent cloner with custom strategies ahead of the defaults.

    Args:
        *custom_strategies: Strategies consulted before the built-ins, in the
            given order.
        settings: Settings for the built-ins. Defaults to `CloneSettings()`.
        registry: Marker registry. Defaults to the global registry.

    Returns:
        A new Cloner sharing nothing with the default one.
    """
    builder = Cloner.builder()
    for strategy in custom_strategies:
        builder.register_strategy(strategy)
    if settings is not None:
        builder.with_settings(settings)
    if registry is not None:
        builder.with_registry(registry)
    return builder.build()


def default_cloner() -> Cloner:
    """Get the shared default cloner, building it on first use.

    Returns:
        The process-wide Cloner with only the built-in strategies.
    """
    global _default_cloner
    cloner = _default_cloner
    if cloner is None:
        with _default_lock:
            if _default_cloner is None:
                _default_cloner = build_cloner()
            cloner = _default_cloner
    return cloner


def reset_default_cloner() -> None:
    """Drop the shared default cloner so the next use rebuilds it.

    Needed after changing CLONEKIT_* environment variables.
    """
    global _default_cloner
    with _default_lock:
        _default_cloner = None


def deep_clone(origin: T) -> Copy[T]:
    """Deep-copy a value with the shared default cloner.

    Args:
        origin: Root of the object graph to copy.

    Returns:
        None for None, otherwise a deep, cycle-safe copy.
    """
    return default_cloner().deep_clone(origin)
