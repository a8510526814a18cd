"""Core type definitions for clonekit."""

from typing import TypeVar

from typing_extensions import TypeAliasType

T = TypeVar("T")

Copy = TypeAliasType("Copy", T, type_params=(T,))
"""Type alias indicating a value is a detached deep copy.

When you see `Copy[T]` in a return type, the returned value shares no mutable
state with its source. Immutable values inside it may still be the very same
objects as in the source, since sharing those is safe.
"""
