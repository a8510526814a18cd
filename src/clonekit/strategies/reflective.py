"""Catch-all strategy: copies any object by walking its attributes.

Attributes are found in the instance `__dict__` and in the `__slots__` of
every class in the MRO, which together cover own and inherited fields.
Class-level attributes are never instance state, so they are never copied.

Objects whose state lives outside those two places (a builtin base such as
`str`, `Exception` or `io.StringIO`, or a class with its own `__reduce__`)
are rebuilt through the pickle reduce protocol instead, so nothing is lost.
"""

from __future__ import annotations

import types
import weakref
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, NamedTuple

from clonekit.core.errors import FieldAccessError, UninstantiableTypeError
from clonekit.core.markers import Marker

if TYPE_CHECKING:
    from clonekit.engine.context import CloneContext

_SKIPPED_SLOTS = frozenset({"__dict__", "__weakref__"})
_REDUCE_PROTOCOL = 4


class _Layout(NamedTuple):
    """How instances of one class keep their state.

    Slots are stored as (attribute name, index of the declaring class in the
    MRO). Holding the descriptors would keep the class alive through their
    `__objclass__`.
    """

    reduce: bool
    slots: tuple[tuple[str, int], ...]


_LAYOUTS: weakref.WeakKeyDictionary[type, _Layout] = weakref.WeakKeyDictionary()


def _mangle(cls: type, name: str) -> str:
    """Apply private name mangling to a slot name declared on `cls`."""
    if name.startswith("__") and not name.endswith("__"):
        owner = cls.__name__.lstrip("_")
        if owner:
            return f"_{owner}{name}"
    return name


def _slot_positions(cls: type) -> tuple[tuple[str, int], ...]:
    """Collect (attribute name, MRO index) for every slot in the MRO."""
    seen: set[str] = set()
    positions: list[tuple[str, int]] = []
    for index, klass in enumerate(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in _SKIPPED_SLOTS:
                continue
            name = _mangle(klass, slot)
            descriptor = klass.__dict__.get(name)
            if name in seen or not hasattr(descriptor, "__set__"):
                continue
            seen.add(name)
            positions.append((name, index))
    return tuple(positions)


def _has_custom_reduce(cls: type) -> bool:
    return (
        cls.__reduce_ex__ is not object.__reduce_ex__
        or cls.__reduce__ is not object.__reduce__
    )


def _has_native_base(cls: type) -> bool:
    """Check if some base other than object is implemented in C.

    Such bases keep instance state in their own storage, invisible to a
    `__dict__` and `__slots__` walk.
    """
    for klass in cls.__mro__:
        if klass is object:
            continue
        if isinstance(klass.__dict__.get("__new__"), types.BuiltinFunctionType):
            return True
    return False


def _layout(cls: type) -> _Layout:
    """Get the cached state layout of a class; slot layouts never change at runtime."""
    layout = _LAYOUTS.get(cls)
    if layout is None:
        layout = _Layout(
            reduce=_has_custom_reduce(cls) or _has_native_base(cls),
            slots=_slot_positions(cls),
        )
        _LAYOUTS[cls] = layout
    return layout


def _dict_fields(cls: type, origin: Any) -> list[tuple[str, Any]]:
    try:
        state = getattr(origin, "__dict__", None)
        return list(state.items()) if isinstance(state, dict) else []
    except Exception as e:
        raise FieldAccessError(cls, "__dict__", e) from e


def _iter_slot_fields(cls: type, origin: Any) -> Iterator[tuple[str, Any, Any]]:
    mro = cls.__mro__
    for name, index in _layout(cls).slots:
        descriptor = mro[index].__dict__[name]
        try:
            value = descriptor.__get__(origin, cls)
        except AttributeError:
            continue  # Slot never assigned
        except Exception as e:
            raise FieldAccessError(cls, name, e) from e
        yield name, descriptor, value


class ReflectiveStrategy:
    """Copies any object field by field. Supports every type.

    A bare instance is created with `cls.__new__(cls)`, so `__init__` never
    runs. Each field is then cloned through the context and written directly
    into the instance state, bypassing `__setattr__` so frozen classes copy
    too. Fields marked ignore are set to None; fields marked immutable are
    shared.

    Types with a builtin base or a custom `__reduce__` are rebuilt from
    `__reduce_ex__` instead: the constructor arguments are cloned, the copy
    is created and registered, then its state is cloned and restored. Field
    markers apply to dict state.

    Raises:
        UninstantiableTypeError: If the copy cannot be created or rebuilt.
        FieldAccessError: If a field cannot be read from the original or
            written to the copy.
    """

    def supports(self, cls: type) -> bool:
        return True

    def copy(self, origin: Any, context: CloneContext) -> Any:
        cls = type(origin)
        if _layout(cls).reduce:
            return self._reconstruct(origin, context)

        try:
            clone = cls.__new__(cls)
        except Exception as e:
            raise UninstantiableTypeError(cls, e) from e
        if clone is origin:
            raise UninstantiableTypeError(cls, "__new__ returned the original instance")

        context.register_visited(origin, clone)

        for name, value in _dict_fields(cls, origin):
            copied = self._transfer(cls, name, value, context)
            try:
                clone.__dict__[name] = copied
            except (AttributeError, TypeError) as e:
                raise FieldAccessError(cls, name, e) from e

        for name, descriptor, value in _iter_slot_fields(cls, origin):
            copied = self._transfer(cls, name, value, context)
            try:
                descriptor.__set__(clone, copied)
            except (AttributeError, TypeError) as e:
                raise FieldAccessError(cls, name, e) from e

        return clone

    def _transfer(self, cls: type, name: str, value: Any, context: CloneContext) -> Any:
        marker = context.registry.field_marker(cls, name)
        if marker is Marker.IGNORE:
            return None
        if marker is Marker.IMMUTABLE:
            return value
        return context.proceed(value)

    def _reconstruct(self, origin: Any, context: CloneContext) -> Any:
        cls = type(origin)
        try:
            reduced = origin.__reduce_ex__(_REDUCE_PROTOCOL)
        except Exception as e:
            raise UninstantiableTypeError(cls, e) from e

        # A string names a module-level singleton.
        if isinstance(reduced, str):
            return origin
        if not isinstance(reduced, tuple) or not 2 <= len(reduced) <= 5:
            raise UninstantiableTypeError(cls, f"__reduce_ex__ returned {reduced!r}")
        func, args, state, listiter, dictiter = reduced + (None,) * (5 - len(reduced))

        args = tuple(context.proceed(arg) for arg in args)
        # Cloning the arguments may have walked a cycle back to the original.
        if context.is_visited(origin):
            return context.get_visited(origin)

        try:
            clone = func(*args)
        except Exception as e:
            raise UninstantiableTypeError(cls, e) from e
        if clone is origin:
            raise UninstantiableTypeError(cls, "reconstruction returned the original instance")

        context.register_visited(origin, clone)

        if state is not None:
            self._restore(clone, self._copy_state(cls, state, context))
        if listiter is not None:
            for item in listiter:
                clone.append(context.proceed(item))
        if dictiter is not None:
            for key, value in dictiter:
                clone[context.proceed(key)] = context.proceed(value)

        return clone

    def _copy_state(self, cls: type, state: Any, context: CloneContext) -> Any:
        if isinstance(state, dict):
            return {
                name: self._transfer(cls, name, value, context) for name, value in state.items()
            }
        # (dict_state, slot_state) as produced for slotted classes
        if (
            isinstance(state, tuple)
            and len(state) == 2
            and all(part is None or isinstance(part, dict) for part in state)
        ):
            return tuple(
                None if part is None else self._copy_state(cls, part, context) for part in state
            )
        return context.proceed(state)

    def _restore(self, clone: Any, state: Any) -> None:
        cls = type(clone)
        setstate = getattr(clone, "__setstate__", None)
        if callable(setstate):
            try:
                setstate(state)
            except Exception as e:
                raise UninstantiableTypeError(cls, e) from e
            return

        if isinstance(state, tuple) and len(state) == 2:
            dict_state, slot_state = state
        else:
            dict_state, slot_state = state, None
        if dict_state is not None and not isinstance(dict_state, dict):
            raise UninstantiableTypeError(cls, f"cannot restore state {dict_state!r}")

        for name, value in (dict_state or {}).items():
            try:
                clone.__dict__[name] = value
            except (AttributeError, TypeError) as e:
                raise FieldAccessError(cls, name, e) from e
        for name, value in (slot_state or {}).items():
            try:
                object.__setattr__(clone, name, value)
            except (AttributeError, TypeError) as e:
                raise FieldAccessError(cls, name, e) from e
