"""Strategy functionality: extension protocols and the resolution chain."""

from clonekit.core.strategy.chain import StrategyChain
from clonekit.core.strategy.models import Cloneable, CloneStrategy

__all__ = [
    "CloneStrategy",
    "Cloneable",
    "StrategyChain",
]
