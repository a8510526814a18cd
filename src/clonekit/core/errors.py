"""Error taxonomy for clone operations.

Every failure is fatal for the top-level clone call: nothing here is retried
and no partially built copy is ever returned.
"""

from __future__ import annotations


class CloneError(Exception):
    """Base class for all clone failures."""


class NoStrategyFoundError(CloneError, LookupError):
    """No strategy in the chain supports a type.

    Only reachable when a chain was built without the reflective fallback.
    """

    def __init__(self, cls: type) -> None:
        self.cls = cls
        super().__init__(
            f"Could not find a CloneStrategy for {cls.__module__}.{cls.__qualname__}. "
            f"Is the chain missing its fallback strategy?"
        )


class UninstantiableTypeError(CloneError, TypeError):
    """A type could not be instantiated or reconstructed for its copy."""

    def __init__(self, cls: type, reason: BaseException | str | None = None) -> None:
        self.cls = cls
        message = f"Cannot create a copy of {cls.__module__}.{cls.__qualname__}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(
            f"{message}. Register a custom CloneStrategy or mark the type immutable."
        )


class FieldAccessError(CloneError, AttributeError):
    """Reading or writing a field failed during the reflective walk."""

    def __init__(self, cls: type, field: str, reason: BaseException) -> None:
        self.cls = cls
        self.field = field
        super().__init__(f"Cannot copy field {cls.__qualname__}.{field}: {reason}")


class ContainerSubstitutionWarning(UserWarning):
    """A container was copied into a generic substitute of a different type."""
