"""Reporting for containers copied into a generic substitute type."""

from __future__ import annotations

import warnings
from typing import Any

from clonekit.core.errors import ContainerSubstitutionWarning
from clonekit.logging import get_logger

logger = get_logger(__name__)


def report_substitution(origin: Any, substitute: Any, reason: object, warn: bool) -> None:
    """Log (and optionally warn) that a copy changed container type.

    Args:
        origin: Source container.
        substitute: Generic container used for the copy.
        reason: Why the concrete type could not be reused.
        warn: Also emit a ContainerSubstitutionWarning.
    """
    source_name = type(origin).__qualname__
    substitute_name = type(substitute).__qualname__
    logger.warning(
        "Copying %s into %s: cannot create an empty %s (%s)",
        source_name,
        substitute_name,
        source_name,
        reason,
    )
    if warn:
        warnings.warn(
            f"{source_name} could not be instantiated empty ({reason}); "
            f"its copy is a {substitute_name}.",
            ContainerSubstitutionWarning,
            stacklevel=4,
        )
