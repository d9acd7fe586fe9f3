"""Exception hierarchy for dependency resolution."""


class DependencyError(Exception):
    """Base class for all depman errors."""


class InvalidDependencyError(DependencyError, ValueError):
    """Raised when an edge cannot be added to a dependency graph.

    This happens when the dependent element is ``None`` or when the new edge
    would reverse an edge that already exists (a direct circular dependency).
    The graph is not modified.
    """

    def __init__(self, msg: str, *, dependent: object = None, dependency: object = None) -> None:
        super().__init__(msg)
        self.dependent = dependent
        self.dependency = dependency


class EmptyIterationError(DependencyError, LookupError):
    """Raised by ``TopologicalOrder.next()`` when no element is ready."""
