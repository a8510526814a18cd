"""Strategy models: the extension protocols of the engine.

A strategy is a pluggable unit of copy logic for one category of runtime type.
Objects can also opt into custom copying themselves by implementing `Cloneable`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from clonekit.engine.context import CloneContext


@runtime_checkable
class CloneStrategy(Protocol):
    """Copy logic for one category of runtime type.

    Implementations must be stateless with respect to any individual clone
    call: one instance is shared by every call and every thread using the
    cloner. Any internal caching must be thread-safe.

    Contract for `copy`:
        - Allocate the new object first.
        - Call `context.register_visited(origin, new)` before touching children,
          so references back to an ancestor resolve to the in-progress copy.
        - Clone every nested value through `context.proceed`.

    Strategies that return `origin` itself (sharing) skip registration.
    """

    def supports(self, cls: type) -> bool:
        """Check if this strategy can copy instances of `cls`."""
        ...

    def copy(self, origin: Any, context: CloneContext) -> Any:
        """Copy `origin`, recursing into nested values through `context`."""
        ...


@runtime_checkable
class Cloneable(Protocol):
    """Object that knows how to deep-copy itself.

    The same registration contract as `CloneStrategy.copy` applies.
    """

    def __clone__(self, context: CloneContext) -> Self: ...
