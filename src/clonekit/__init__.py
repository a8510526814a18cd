"""clonekit: generic, cycle-safe deep copies of arbitrary object graphs.

Usage:
    from clonekit import deep_clone, ignore_clone, immutable

    @dataclass
    class Node:
        name: str
        next: "Node | None" = None

    a = Node("a")
    a.next = Node("b", next=a)

    copy = deep_clone(a)
    assert copy.next.next is copy

    # Custom strategies win over the built-ins
    cloner = build_cloner(MoneyStrategy())
"""

__version__ = "0.1.0"

# Core primitives
from clonekit.core import (
    CloneError,
    Cloneable,
    CloneStrategy,
    ContainerSubstitutionWarning,
    Copy,
    FieldAccessError,
    Marker,
    MarkerRegistry,
    NoStrategyFoundError,
    StrategyChain,
    UninstantiableTypeError,
    clone_field,
    get_registry,
    ignore_clone,
    immutable,
)

# Configuration
from clonekit.config import CloneSettings

# Engine
from clonekit.engine import CloneContext, Cloner, ClonerBuilder

# Facade
from clonekit.facade import build_cloner, deep_clone, default_cloner, reset_default_cloner

# Built-in strategies
from clonekit.strategies import (
    ArrayStrategy,
    CloneHookStrategy,
    CollectionStrategy,
    ImmutableStrategy,
    MappingStrategy,
    ReflectiveStrategy,
    default_strategies,
)

__all__ = [
    # Version
    "__version__",
    # Facade
    "deep_clone",
    "build_cloner",
    "default_cloner",
    "reset_default_cloner",
    # Engine
    "Cloner",
    "ClonerBuilder",
    "CloneContext",
    # Core
    "Copy",
    "CloneStrategy",
    "Cloneable",
    "StrategyChain",
    "Marker",
    "MarkerRegistry",
    "get_registry",
    "immutable",
    "ignore_clone",
    "clone_field",
    # Errors
    "CloneError",
    "NoStrategyFoundError",
    "UninstantiableTypeError",
    "FieldAccessError",
    "ContainerSubstitutionWarning",
    # Configuration
    "CloneSettings",
    # Strategies
    "ImmutableStrategy",
    "CloneHookStrategy",
    "MappingStrategy",
    "CollectionStrategy",
    "ArrayStrategy",
    "ReflectiveStrategy",
    "default_strategies",
]
