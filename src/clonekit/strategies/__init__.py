"""Built-in copy strategies, in default priority order."""

from clonekit.strategies.array import ArrayStrategy
from clonekit.strategies.collection import CollectionStrategy
from clonekit.strategies.defaults import default_strategies
from clonekit.strategies.hook import CloneHookStrategy
from clonekit.strategies.immutable import THIRD_PARTY_PREFIXES, ImmutableStrategy
from clonekit.strategies.mapping import MappingStrategy
from clonekit.strategies.reflective import ReflectiveStrategy

__all__ = [
    "ImmutableStrategy",
    "CloneHookStrategy",
    "MappingStrategy",
    "CollectionStrategy",
    "ArrayStrategy",
    "ReflectiveStrategy",
    "THIRD_PARTY_PREFIXES",
    "default_strategies",
]
