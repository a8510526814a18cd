"""Core functionalities: stateless protocols, markers, and errors.

Architecture Note:
    core/ contains pure, stateless building blocks with no per-call state.
    The per-call traversal state lives in engine/; the concrete copy logic
    for each category of type lives in strategies/.
"""

from clonekit.core.errors import (
    CloneError,
    ContainerSubstitutionWarning,
    FieldAccessError,
    NoStrategyFoundError,
    UninstantiableTypeError,
)
from clonekit.core.markers import (
    MARKER_KEY,
    Marker,
    MarkerRegistry,
    clone_field,
    get_registry,
    ignore_clone,
    immutable,
)
from clonekit.core.strategy import Cloneable, CloneStrategy, StrategyChain
from clonekit.core.types import Copy

__all__ = [
    # Types
    "Copy",
    # Errors
    "CloneError",
    "NoStrategyFoundError",
    "UninstantiableTypeError",
    "FieldAccessError",
    "ContainerSubstitutionWarning",
    # Markers
    "Marker",
    "MARKER_KEY",
    "MarkerRegistry",
    "get_registry",
    "immutable",
    "ignore_clone",
    "clone_field",
    # Strategy
    "CloneStrategy",
    "Cloneable",
    "StrategyChain",
]
