"""Marker registry, decorators, and field helpers.

Usage:
    @immutable
    class Money:
        ...

    @ignore_clone
    class DatabaseHandle:
        ...

    @ignore_clone(fields=("password",))
    class Credentials:
        ...

    @dataclass
    class Session:
        user: str
        token: str = clone_field(Marker.IGNORE, default="")
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable
from typing import Any, overload

from clonekit.core.markers.models import MARKER_KEY, Marker


class MarkerRegistry:
    """Out-of-band store of markers attached to types and fields.

    Type markers apply to the exact class they were attached to. Field markers
    apply to the declaring class and all of its subclasses.

    Populate at configuration time. Cloners built earlier pick up later
    changes on their next clone call.
    """

    def __init__(self) -> None:
        """Initialize empty marker registry."""
        self._by_type: dict[type, Marker] = {}
        self._by_field: dict[tuple[type, str], Marker] = {}
        self._version = 0

    @property
    def version(self) -> int:
        """Counter bumped on every change, for invalidating cached resolutions."""
        return self._version

    def mark_type(self, cls: type, marker: Marker) -> None:
        """Attach a marker to a type.

        Args:
            cls: Class to mark.
            marker: Marker to attach.

        Raises:
            ValueError: If the type already carries a different marker.
        """
        existing = self._by_type.get(cls)
        if existing is not None and existing is not marker:
            raise ValueError(
                f"{cls.__qualname__} is already marked {existing.name}, cannot mark {marker.name}"
            )
        self._by_type[cls] = marker
        self._version += 1

    def mark_field(self, cls: type, name: str, marker: Marker) -> None:
        """Attach a marker to a field declared on a type.

        Args:
            cls: Class declaring the field.
            name: Attribute name of the field.
            marker: Marker to attach.

        Raises:
            ValueError: If the field already carries a different marker.
        """
        key = (cls, name)
        existing = self._by_field.get(key)
        if existing is not None and existing is not marker:
            raise ValueError(
                f"{cls.__qualname__}.{name} is already marked {existing.name}, "
                f"cannot mark {marker.name}"
            )
        self._by_field[key] = marker
        self._version += 1

    def unmark_type(self, cls: type) -> None:
        """Remove any marker attached to a type."""
        self._by_type.pop(cls, None)
        self._version += 1

    def clear(self) -> None:
        """Drop every registered marker."""
        self._by_type.clear()
        self._by_field.clear()
        self._version += 1

    def type_marker(self, cls: type) -> Marker | None:
        """Get the marker attached to a type.

        Args:
            cls: Class to look up.

        Returns:
            The marker if the exact class is marked, None otherwise.
        """
        return self._by_type.get(cls)

    def field_marker(self, cls: type, name: str) -> Marker | None:
        """Get the marker attached to a field, searching the class hierarchy.

        Explicit registrations win over dataclass field metadata at the same
        level of the hierarchy.

        Args:
            cls: Runtime class of the object owning the field.
            name: Attribute name of the field.

        Returns:
            The marker if any class in the MRO marks the field, None otherwise.
        """
        for klass in cls.__mro__:
            marker = self._by_field.get((klass, name))
            if marker is not None:
                return marker
            fields = klass.__dict__.get("__dataclass_fields__")
            if fields and name in fields:
                marker = fields[name].metadata.get(MARKER_KEY)
                if marker is not None:
                    return marker
        return None

    def is_immutable(self, cls: type) -> bool:
        """Check if a type carries the immutable marker."""
        return self._by_type.get(cls) is Marker.IMMUTABLE

    def is_ignored(self, cls: type) -> bool:
        """Check if a type carries the ignore marker."""
        return self._by_type.get(cls) is Marker.IGNORE


# Module-level registry instance
_registry = MarkerRegistry()


def get_registry() -> MarkerRegistry:
    """Access the global marker registry.

    Returns:
        The process-wide MarkerRegistry instance.
    """
    return _registry


def _marker_decorator(
    marker: Marker,
    cls: type | None,
    fields: Iterable[str],
    registry: MarkerRegistry | None,
) -> type | Callable[[type], type]:
    target = registry if registry is not None else _registry
    field_names = tuple(fields)

    def decorator(c: type) -> type:
        if not isinstance(c, type):
            raise TypeError(f"@{marker.name.lower()} can only decorate classes, got {c!r}")
        if field_names:
            for name in field_names:
                target.mark_field(c, name, marker)
        else:
            target.mark_type(c, marker)
        return c

    if cls is None:
        # Called with args: @immutable() or @immutable(fields=(...))
        return decorator
    # Called bare: @immutable
    return decorator(cls)


@overload
def immutable(cls: type) -> type: ...


@overload
def immutable(
    cls: None = None,
    *,
    fields: Iterable[str] = (),
    registry: MarkerRegistry | None = None,
) -> Callable[[type], type]: ...


def immutable(
    cls: type | None = None,
    *,
    fields: Iterable[str] = (),
    registry: MarkerRegistry | None = None,
) -> type | Callable[[type], type]:
    """Mark a class, or some of its fields, as shareable by reference.

    Supports three forms:
        @immutable                          # the class itself
        @immutable()                        # same, parenthesized
        @immutable(fields=("config",))      # only the named fields

    Args:
        cls: The class to mark, or None if called with arguments.
        fields: Field names to mark instead of the class.
        registry: Registry to record into. Defaults to the global registry.

    Returns:
        Decorated class or decorator function.
    """
    return _marker_decorator(Marker.IMMUTABLE, cls, fields, registry)


@overload
def ignore_clone(cls: type) -> type: ...


@overload
def ignore_clone(
    cls: None = None,
    *,
    fields: Iterable[str] = (),
    registry: MarkerRegistry | None = None,
) -> Callable[[type], type]: ...


def ignore_clone(
    cls: type | None = None,
    *,
    fields: Iterable[str] = (),
    registry: MarkerRegistry | None = None,
) -> type | Callable[[type], type]:
    """Mark a class, or some of its fields, as omitted from copies.

    Instances of an ignored class are replaced by None wherever they occur.
    Ignored fields are set to None on the copy.

    Supports the same three forms as `immutable`.

    Args:
        cls: The class to mark, or None if called with arguments.
        fields: Field names to mark instead of the class.
        registry: Registry to record into. Defaults to the global registry.

    Returns:
        Decorated class or decorator function.
    """
    return _marker_decorator(Marker.IGNORE, cls, fields, registry)


def clone_field(marker: Marker, **kwargs: Any) -> Any:
    """Declare a dataclass field carrying a clone marker.

    Accepts every keyword of `dataclasses.field`; existing metadata is kept.

    Args:
        marker: Marker to attach to the field.
        **kwargs: Forwarded to `dataclasses.field`.

    Returns:
        A dataclass field specifier.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[MARKER_KEY] = marker
    return dataclasses.field(metadata=metadata, **kwargs)
