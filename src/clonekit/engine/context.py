"""Per-call clone state: the identity map of visited objects.

A CloneContext lives exactly as long as one top-level `Cloner.deep_clone`
call. It is never shared between calls or threads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from clonekit.core.markers import MarkerRegistry
from clonekit.core.types import Copy, T

if TYPE_CHECKING:
    from clonekit.engine.cloner import Cloner


class CloneContext:
    """Identity-keyed record of original -> copy for one clone call.

    Strategies call `register_visited` right after allocating a copy and
    before cloning its children, then recurse through `proceed`. A child that
    points back at an ancestor then resolves to the in-progress copy, which
    reproduces cycles and shared references exactly.

    Args:
        cloner: Cloner used to resolve strategies for nested values.
    """

    __slots__ = ("_cloner", "_visited")

    def __init__(self, cloner: Cloner) -> None:
        self._cloner = cloner
        # id(original) -> (original, copy). Holding the original keeps its id
        # from being reused by another object during the call.
        self._visited: dict[int, tuple[Any, Any]] = {}

    @property
    def cloner(self) -> Cloner:
        """The cloner driving this call."""
        return self._cloner

    @property
    def registry(self) -> MarkerRegistry:
        """Marker registry consulted for exclusion checks."""
        return self._cloner.registry

    def register_visited(self, original: Any, copy: Any) -> None:
        """Record the copy made for an original object.

        Args:
            original: Source object.
            copy: Newly allocated (possibly still unpopulated) copy.
        """
        self._visited[id(original)] = (original, copy)

    def is_visited(self, original: Any) -> bool:
        """Check if a copy has already been registered for an object."""
        return id(original) in self._visited

    def get_visited(self, original: Any) -> Any:
        """Get the copy registered for an object.

        Raises:
            KeyError: If no copy was registered.
        """
        return self._visited[id(original)][1]

    def proceed(self, value: T) -> Copy[T] | None:
        """Clone a nested value within this call.

        Args:
            value: Field value, element, key, or slot content to clone.

        Returns:
            None for None or for instances of ignored types, the cached copy
            if the value was already visited, otherwise a fresh copy from the
            matching strategy.
        """
        if value is None:
            return None

        cls = type(value)
        if self._cloner.registry.is_ignored(cls):
            return None

        entry = self._visited.get(id(value))
        if entry is not None:
            return entry[1]  # type: ignore[no-any-return]

        strategy = self._cloner.get_clone_strategy(cls)
        return strategy.copy(value, self)  # type: ignore[no-any-return]

    def __len__(self) -> int:
        """Number of objects copied so far."""
        return len(self._visited)
