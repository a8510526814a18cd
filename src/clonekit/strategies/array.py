"""Strategy for fixed-size, homogeneous arrays."""

from __future__ import annotations

import array
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from clonekit.engine.context import CloneContext


class ArrayStrategy:
    """Copies `array.array` and `bytearray` slot by slot.

    The copy is allocated zero-filled with the same element type and length,
    registered, then every slot is cloned through the context.
    """

    def supports(self, cls: type) -> bool:
        return issubclass(cls, (array.array, bytearray))

    def copy(self, origin: array.array[Any] | bytearray, context: CloneContext) -> Any:
        cls = type(origin)
        dest: array.array[Any] | bytearray
        if isinstance(origin, bytearray):
            dest = cls(len(origin))  # type: ignore[call-arg]
        else:
            dest = cls(origin.typecode)  # type: ignore[call-arg]
            dest.frombytes(bytes(len(origin) * origin.itemsize))  # type: ignore[union-attr]

        context.register_visited(origin, dest)

        for index, value in enumerate(origin):
            dest[index] = context.proceed(value)

        return dest
