"""Engine: the cloner and its per-call context."""

from clonekit.engine.cloner import Cloner, ClonerBuilder
from clonekit.engine.context import CloneContext

__all__ = [
    "Cloner",
    "ClonerBuilder",
    "CloneContext",
]
