"""Dependency resolution in topological order."""

__all__ = [
    "DependencyError",
    "DependencyGraph",
    "DependencyManager",
    "EmptyIterationError",
    "InvalidDependencyError",
    "TopologicalOrder",
    "print_dependencies",
]

from ._errors import DependencyError, EmptyIterationError, InvalidDependencyError
from ._graph import DependencyGraph, TopologicalOrder
from ._manager import DependencyManager, print_dependencies
