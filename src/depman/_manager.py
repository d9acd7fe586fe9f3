"""Dependency manager facade over a graph and its topological order."""

import logging
from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import Generic, TypeVar

from rich.console import Console

from ._graph import DependencyGraph, TopologicalOrder

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class DependencyManager(Generic[T]):
    """Collect dependencies between elements and list them in processing order.

    Example:
        >>> manager = DependencyManager()
        >>> manager.add_dependency("A", "B")
        >>> manager.add_dependency("A", "C")
        >>> manager.add_dependency("C", "B")
        >>> manager.get_dependencies()
        ['B', 'C', 'A']

    """

    def __init__(self) -> None:
        self._graph: DependencyGraph[T] = DependencyGraph()

    @property
    def graph(self) -> DependencyGraph[T]:
        """The underlying dependency graph."""
        return self._graph

    def add_dependency(self, from_: T, to: T | None = None) -> None:
        """Record that ``from_`` depends on ``to`` (or just register ``from_``).

        Raises:
            InvalidDependencyError: If ``to`` already depends on ``from_``.

        """
        self._graph.add_dependency(from_, to)

    def build_dependency_graph(self, spec: Mapping[T, Iterable[T]] | None) -> None:
        """Add dependencies from a mapping of targets to their dependents.

        ``{"A": ["B", "C"]}`` means B and C both depend on A.

        Raises:
            InvalidDependencyError: On the first rejected edge.

        """
        self._graph.build_from_map(spec)

    def iterator(self) -> TopologicalOrder[T]:
        """Return a new producer over the current dependencies."""
        return self._graph.topological_order()

    def __iter__(self) -> Iterator[T]:
        return self.iterator()

    def get_dependencies(self) -> list[T]:
        """Return all orderable elements, dependencies first.

        The order is recomputed on every call. Elements caught in (or behind)
        a dependency cycle are left out.
        """
        order = self.iterator()
        result: list[T] = []
        while order.has_next():
            result.append(order.next())
        return result

    def unresolved_count(self) -> int:
        """Return how many registered elements cannot be ordered."""
        unresolved = len(self._graph) - len(self.get_dependencies())
        if unresolved:
            logger.debug(f"{unresolved} element(s) left out of the order by a dependency cycle")
        return unresolved


def print_dependencies(
    spec: Mapping[T, Iterable[T]],
    console: Console | None = None,
) -> list[T]:
    """Print the processing order for ``spec`` on one line and return it."""
    manager: DependencyManager[T] = DependencyManager()
    manager.build_dependency_graph(spec)
    result = manager.get_dependencies()
    (console or Console()).print(" ".join(str(element) for element in result), markup=False, highlight=False)
    return result
