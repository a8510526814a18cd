"""Marker functionality: immutable and ignore signals for types and fields."""

from clonekit.core.markers.core import (
    MarkerRegistry,
    clone_field,
    get_registry,
    ignore_clone,
    immutable,
)
from clonekit.core.markers.models import MARKER_KEY, Marker

__all__ = [
    # Models
    "Marker",
    "MARKER_KEY",
    # Core
    "MarkerRegistry",
    "get_registry",
    "immutable",
    "ignore_clone",
    "clone_field",
]
