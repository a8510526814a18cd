"""Strategy delegating to objects that implement `__clone__`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from clonekit.core.strategy import Cloneable

if TYPE_CHECKING:
    from clonekit.engine.context import CloneContext


class CloneHookStrategy:
    """Lets a type copy itself through the Cloneable protocol.

    The hook receives the live context, so it must follow the same contract
    as a strategy: register the new object before cloning children.
    """

    def supports(self, cls: type) -> bool:
        return callable(getattr(cls, "__clone__", None))

    def copy(self, origin: Any, context: CloneContext) -> Any:
        if not isinstance(origin, Cloneable):
            raise TypeError(f"{type(origin).__name__} does not implement Cloneable protocol")
        return origin.__clone__(context)
