"""Strategy for values that are safe to share by reference."""

from __future__ import annotations

import dataclasses
import datetime
import ipaddress
import re
import types
import weakref
from collections.abc import Iterable
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import TYPE_CHECKING, Any
from uuid import UUID

from clonekit.core.markers import MarkerRegistry, get_registry

if TYPE_CHECKING:
    from clonekit.engine.context import CloneContext

# Exact types only: subclasses of these may add mutable state.
_ATOMIC_TYPES: frozenset[type] = frozenset(
    {
        type(None),
        type(Ellipsis),
        type(NotImplemented),
        range,
        slice,
        property,
        weakref.ref,
        re.Pattern,
        types.CodeType,
        types.FunctionType,
        types.BuiltinFunctionType,
        types.MethodType,
        types.MethodWrapperType,
        types.MethodDescriptorType,
        types.WrapperDescriptorType,
        types.ModuleType,
        types.MappingProxyType,
    }
)

# Value types. Subclasses are shared only when their instances carry no
# __dict__, since an instance dict is mutable state.
_IMMUTABLE_BASES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    UUID,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    PurePath,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
    Enum,
    type,
)

# Checked against "module.QualName" so the libraries never need importing.
THIRD_PARTY_PREFIXES: tuple[str, ...] = (
    "pendulum.",
    "arrow.",
    "dateutil.tz.",
    "pyrsistent.",
    "immutables.",
    "frozendict.",
    "bson.objectid.",
    "zoneinfo.",
)


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic."""
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def _is_frozen_record(cls: type) -> bool:
    """Check if class is a frozen dataclass or a frozen Pydantic model."""
    if dataclasses.is_dataclass(cls):
        return bool(cls.__dataclass_params__.frozen)  # type: ignore[attr-defined]
    if _is_pydantic(cls):
        return bool(getattr(cls, "model_config", {}).get("frozen", False))
    return False


class ImmutableStrategy:
    """Shares immutable values by reference.

    Matches, in order: builtin scalars and well-known value types (text,
    numbers, decimals, UUIDs, date/time values, paths, enum members, classes,
    functions); subclasses of those only when their instances have
    no `__dict__`; types carrying the immutable marker; frozen dataclasses and
    frozen Pydantic models when `share_frozen_records` is set; and types whose
    qualified name matches a known immutable library, or whose class name
    contains "Immutable" or starts with "Frozen".

    `copy` returns its argument: no allocation, no registration, no traversal.

    Args:
        registry: Marker registry for the immutable marker. Defaults to global.
        extra_prefixes: Additional qualified-name prefixes to treat as immutable.
        share_frozen_records: Share frozen dataclasses/Pydantic models.
    """

    def __init__(
        self,
        registry: MarkerRegistry | None = None,
        extra_prefixes: Iterable[str] = (),
        share_frozen_records: bool = True,
    ) -> None:
        self._registry = registry if registry is not None else get_registry()
        self._prefixes = THIRD_PARTY_PREFIXES + tuple(extra_prefixes)
        self._share_frozen_records = share_frozen_records

    def supports(self, cls: type) -> bool:
        # 1. Builtin and standard library value types
        if cls in _ATOMIC_TYPES or cls in _IMMUTABLE_BASES:
            return True
        if issubclass(cls, (Enum, type)):
            return True
        if issubclass(cls, _IMMUTABLE_BASES) and not cls.__dictoffset__:
            return True

        # 2. Declared by the user
        if self._registry.is_immutable(cls):
            return True
        if self._share_frozen_records and _is_frozen_record(cls):
            return True

        # 3. Name-based detection for third-party libraries
        qualified = f"{cls.__module__}.{cls.__qualname__}"
        return (
            qualified.startswith(self._prefixes)
            or "Immutable" in cls.__name__
            or cls.__name__.startswith("Frozen")
        )

    def copy(self, origin: Any, context: CloneContext) -> Any:
        return origin
