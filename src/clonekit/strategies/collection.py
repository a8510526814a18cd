"""Strategy for sequences and sets."""

from __future__ import annotations

import array
from collections import deque
from collections.abc import Collection, MutableSequence, MutableSet, Set
from typing import TYPE_CHECKING, Any

from clonekit.strategies.substitution import report_substitution

if TYPE_CHECKING:
    from clonekit.engine.context import CloneContext


class CollectionStrategy:
    """Copies lists, sets, deques, tuples, and frozensets element by element.

    Mutable containers are allocated empty, registered, then filled in source
    order. The same concrete type is used when it can be created empty
    (`deque` keeps its `maxlen`); otherwise the copy falls back to `set` for
    set sources and `list` for everything else.

    Tuples (including named tuples) and frozensets cannot be filled after
    allocation, so their elements are cloned first and the container is built
    from them. When no element changed, the original is returned as-is.

    Array-like types are left to ArrayStrategy.

    Args:
        warn_on_fallback: Emit a ContainerSubstitutionWarning on substitution.
    """

    def __init__(self, warn_on_fallback: bool = True) -> None:
        self._warn_on_fallback = warn_on_fallback

    def supports(self, cls: type) -> bool:
        if issubclass(cls, (array.array, bytearray)):
            return False
        return issubclass(cls, (MutableSequence, Set, tuple))

    def copy(self, origin: Collection[Any], context: CloneContext) -> Collection[Any]:
        if isinstance(origin, (tuple, frozenset)):
            return self._copy_sealed(origin, context)

        dest = self._allocate(origin)
        context.register_visited(origin, dest)

        add = dest.add if isinstance(dest, MutableSet) else dest.append
        for item in origin:
            add(context.proceed(item))

        return dest

    def _allocate(self, origin: Collection[Any]) -> MutableSequence[Any] | MutableSet[Any]:
        cls = type(origin)
        reason: object
        try:
            if isinstance(origin, deque):
                dest = cls(maxlen=origin.maxlen)  # type: ignore[call-arg]
            else:
                dest = cls()
        except Exception as e:  # noqa: BLE001 - any constructor failure selects the fallback
            reason = e
        else:
            if isinstance(dest, (MutableSequence, MutableSet)):
                return dest
            reason = f"{cls.__qualname__} is read-only"

        substitute: MutableSequence[Any] | MutableSet[Any] = (
            set() if isinstance(origin, Set) else []
        )
        report_substitution(origin, substitute, reason, self._warn_on_fallback)
        return substitute

    def _copy_sealed(
        self, origin: tuple[Any, ...] | frozenset[Any], context: CloneContext
    ) -> tuple[Any, ...] | frozenset[Any]:
        items = [context.proceed(item) for item in origin]

        # A cycle through a mutable element may have copied this container already.
        if context.is_visited(origin):
            return context.get_visited(origin)  # type: ignore[no-any-return]

        if all(a is b for a, b in zip(items, origin, strict=True)):
            return origin

        cls = type(origin)
        dest: tuple[Any, ...] | frozenset[Any]
        try:
            if isinstance(origin, tuple) and hasattr(cls, "_make"):
                dest = cls._make(items)  # type: ignore[attr-defined]
            else:
                dest = cls(items)
        except Exception as e:  # noqa: BLE001 - any constructor failure selects the fallback
            dest = tuple(items) if isinstance(origin, tuple) else frozenset(items)
            report_substitution(origin, dest, e, self._warn_on_fallback)
        context.register_visited(origin, dest)
        return dest
