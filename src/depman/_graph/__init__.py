"""Graph module providing dependency graph abstractions.

This module contains:
- DependencyGraph[T]: A mutable graph of "depends on" relations
- TopologicalOrder[T]: Lazy producer of a dependency-resolved order
"""

from ._algorithms import TopologicalOrder
from ._dependency_graph import DependencyGraph

__all__ = ["DependencyGraph", "TopologicalOrder"]
