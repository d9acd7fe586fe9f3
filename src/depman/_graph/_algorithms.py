"""Topological ordering of a dependency graph (Kahn's algorithm)."""

import logging
from collections import deque
from collections.abc import Hashable, Iterator, Sequence
from typing import Generic, TypeVar

from depman._errors import EmptyIterationError

from ._node import DependencyNode

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class TopologicalOrder(Generic[T]):
    """Lazily yield elements so that every element follows its dependencies.

    Out-degrees and dependents are snapshotted when the producer is created,
    so later changes to the graph are not seen. A node whose out-degree never
    drops to zero (because it sits on, or behind, a dependency cycle) is never
    yielded; no error is raised for it.

    Among elements that become ready at the same time, order follows node
    insertion order first, then the order in which dependents are unblocked.

    A producer can be drained once. Create a new one to iterate again.

    Example:
        >>> graph = DependencyGraph()
        >>> graph.add_dependency("app", "lib")
        >>> order = graph.topological_order()
        >>> order.next()
        'lib'
        >>> list(order)
        ['app']

    """

    __slots__ = ("_dependents", "_elements", "_out_degree", "_ready")

    def __init__(self, nodes: Sequence[DependencyNode[T]]) -> None:
        self._elements: list[T] = [node.element for node in nodes]
        self._dependents: list[tuple[int, ...]] = [tuple(node.depended_upon) for node in nodes]
        self._out_degree: list[int] = [len(node.depends_on) for node in nodes]
        self._ready: deque[int] = deque(i for i, degree in enumerate(self._out_degree) if degree == 0)
        logger.debug(f"Topological order over {len(nodes)} nodes, {len(self._ready)} initially ready")

    def has_next(self) -> bool:
        """Return True if another element can be produced."""
        return bool(self._ready)

    def next(self) -> T:
        """Return the next element in dependency order.

        Raises:
            EmptyIterationError: If no element is ready.

        """
        if not self._ready:
            msg = "No more elements in topological order"
            raise EmptyIterationError(msg)

        index = self._ready.popleft()
        self._satisfy_dependents(index)
        return self._elements[index]

    def _satisfy_dependents(self, index: int) -> None:
        """Mark one dependency of each dependent of ``index`` as resolved."""
        for dependent in self._dependents[index]:
            remaining = self._out_degree[dependent]
            if remaining > 0:
                remaining -= 1
                self._out_degree[dependent] = remaining
                if remaining == 0:
                    self._ready.append(dependent)

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if not self._ready:
            raise StopIteration
        return self.next()
