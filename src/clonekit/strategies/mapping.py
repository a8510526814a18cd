"""Strategy for associative containers."""

from __future__ import annotations

from collections import OrderedDict, defaultdict
from collections.abc import Mapping, MutableMapping
from typing import TYPE_CHECKING, Any

from clonekit.strategies.substitution import report_substitution

if TYPE_CHECKING:
    from clonekit.engine.context import CloneContext


class MappingStrategy:
    """Copies any `Mapping`, cloning both keys and values.

    The copy has the same concrete type when that type can be created empty
    and is mutable; `defaultdict` keeps its `default_factory`. Otherwise the
    copy falls back to `OrderedDict` for ordered-dict sources and `dict` for
    everything else, which is reported as a substitution.

    Args:
        warn_on_fallback: Emit a ContainerSubstitutionWarning on substitution.
    """

    def __init__(self, warn_on_fallback: bool = True) -> None:
        self._warn_on_fallback = warn_on_fallback

    def supports(self, cls: type) -> bool:
        return issubclass(cls, Mapping)

    def copy(self, origin: Mapping[Any, Any], context: CloneContext) -> MutableMapping[Any, Any]:
        dest = self._allocate(origin)
        context.register_visited(origin, dest)

        for key, value in origin.items():
            dest[context.proceed(key)] = context.proceed(value)

        return dest

    def _allocate(self, origin: Mapping[Any, Any]) -> MutableMapping[Any, Any]:
        cls = type(origin)
        reason: object
        try:
            if isinstance(origin, defaultdict):
                dest = cls(origin.default_factory)
            else:
                dest = cls()
        except Exception as e:  # noqa: BLE001 - any constructor failure selects the fallback
            reason = e
        else:
            if isinstance(dest, MutableMapping):
                return dest
            reason = f"{cls.__qualname__} is read-only"

        substitute: MutableMapping[Any, Any] = (
            OrderedDict() if isinstance(origin, OrderedDict) else {}
        )
        report_substitution(origin, substitute, reason, self._warn_on_fallback)
        return substitute
