"""Marker models: declarative exclusion signals for types and fields."""

from __future__ import annotations

from enum import Enum, auto

MARKER_KEY = "clonekit.marker"
"""Key under which `clone_field` stores a marker in dataclass field metadata."""


class Marker(Enum):
    """How the engine treats a marked type or field."""

    IMMUTABLE = auto()  # Share by reference, never copy
    IGNORE = auto()  # Omit from the copy, yield None
