"""Mutable dependency graph with immediate circular-dependency rejection."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Mapping
from typing import Generic, TypeVar

from depman._errors import InvalidDependencyError

from ._algorithms import TopologicalOrder
from ._node import DependencyNode

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class DependencyGraph(Generic[T]):
    """A directed graph of "depends on" relations between elements.

    Nodes live in a single arena list and refer to each other by index.
    Each element owns exactly one node, created the first time the element
    is mentioned. Nodes are never removed.

    An edge ``(from_, to)`` means "from_ depends on to": ``to`` must be
    processed before ``from_``.

    Only direct mutual dependencies (a on b, then b on a) are rejected when
    an edge is added. Longer cycles are accepted here and show up later as
    elements missing from the topological order.

    Example:
        >>> graph = DependencyGraph()
        >>> graph.add_dependency("app", "lib")
        >>> graph.dependencies("app")
        ('lib',)
        >>> list(graph.topological_order())
        ['lib', 'app']

    """

    __slots__ = ("_index", "_nodes")

    def __init__(self) -> None:
        self._nodes: list[DependencyNode[T]] = []
        self._index: dict[T, int] = {}

    @classmethod
    def from_mapping(cls, spec: Mapping[T, Iterable[T]] | None) -> DependencyGraph[T]:
        """Build a graph from a mapping of targets to their dependents.

        Args:
            spec: Mapping from element to the elements that depend on it.

        Returns:
            A new DependencyGraph instance.

        Raises:
            InvalidDependencyError: If an edge reverses an earlier one.

        """
        graph: DependencyGraph[T] = cls()
        graph.build_from_map(spec)
        return graph

    def _node_index(self, element: T) -> int:
        """Return the arena index for ``element``, creating the node if needed."""
        index = self._index.get(element)
        if index is None:
            index = len(self._nodes)
            self._nodes.append(DependencyNode(element))
            self._index[element] = index
            logger.debug(f"Created node {element!r}")
        return index

    def add_dependency(self, from_: T, to: T | None = None) -> None:
        """Record that ``from_`` depends on ``to``.

        Both elements are registered if they are not in the graph yet. With
        ``to=None`` only ``from_`` is registered, without any edge.

        Args:
            from_: The dependent element. Must not be None.
            to: The element ``from_`` depends on, or None.

        Raises:
            InvalidDependencyError: If ``from_`` is None, or if ``to`` already
                depends on ``from_``. No edge is added in either case.

        """
        if from_ is None:
            msg = "Dependent element must not be None"
            raise InvalidDependencyError(msg, dependent=from_, dependency=to)

        from_index = self._node_index(from_)
        if to is None:
            return

        to_index = self._node_index(to)
        to_node = self._nodes[to_index]
        if from_index in to_node.depends_on:
            msg = f"Circular dependency: {to!r} already depends on {from_!r}"
            raise InvalidDependencyError(msg, dependent=from_, dependency=to)

        self._nodes[from_index].depends_on[to_index] = None
        to_node.depended_upon[from_index] = None
        logger.debug(f"Added dependency {from_!r} -> {to!r}")

    def add_element(self, element: T) -> None:
        """Register ``element`` without any dependency."""
        self.add_dependency(element, None)

    def build_from_map(self, spec: Mapping[T, Iterable[T]] | None) -> None:
        """Add every edge described by a mapping of targets to dependents.

        For each ``to, dependents`` pair, every element of ``dependents`` is
        recorded as depending on ``to``. A target with no dependents is not
        registered. A None spec does nothing.

        Raises:
            InvalidDependencyError: On the first rejected edge. Edges added
                before it are kept.

        """
        if spec is None:
            return
        for to, dependents in spec.items():
            for from_ in dependents:
                self.add_dependency(from_, to)

    @property
    def nodes(self) -> tuple[T, ...]:
        """All elements in the graph, in the order they were registered."""
        return tuple(node.element for node in self._nodes)

    @property
    def edge_count(self) -> int:
        """Number of recorded "depends on" edges."""
        return sum(len(node.depends_on) for node in self._nodes)

    def _elements(self, indices: Iterable[int]) -> tuple[T, ...]:
        return tuple(self._nodes[i].element for i in indices)

    def dependencies(self, element: T) -> tuple[T, ...]:
        """Get the elements ``element`` directly depends on.

        Returns an empty tuple for an element that is not in the graph.
        """
        index = self._index.get(element)
        if index is None:
            return ()
        return self._elements(self._nodes[index].depends_on)

    def dependents(self, element: T) -> tuple[T, ...]:
        """Get the elements that directly depend on ``element``.

        Returns an empty tuple for an element that is not in the graph.
        """
        index = self._index.get(element)
        if index is None:
            return ()
        return self._elements(self._nodes[index].depended_upon)

    def roots(self) -> tuple[T, ...]:
        """Get elements with no dependencies."""
        return tuple(node.element for node in self._nodes if not node.depends_on)

    def leaves(self) -> tuple[T, ...]:
        """Get elements nothing depends on."""
        return tuple(node.element for node in self._nodes if not node.depended_upon)

    def _reachable(self, element: T, *, forward: bool) -> frozenset[T]:
        start = self._index.get(element)
        if start is None:
            return frozenset()

        def step(i: int) -> Iterable[int]:
            node = self._nodes[i]
            return node.depends_on if forward else node.depended_upon

        visited: set[int] = set()
        stack = list(step(start))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(step(current))
        return frozenset(self._elements(visited))

    def ancestors(self, element: T) -> frozenset[T]:
        """Get all transitive dependencies of ``element``.

        On a cycle, ``element`` may appear in its own result.
        """
        return self._reachable(element, forward=True)

    def descendants(self, element: T) -> frozenset[T]:
        """Get all transitive dependents of ``element``."""
        return self._reachable(element, forward=False)

    def topological_order(self) -> TopologicalOrder[T]:
        """Return a new producer over the graph's current state."""
        return TopologicalOrder(self._nodes)

    def __len__(self) -> int:
        """Return the number of elements in the graph."""
        return len(self._nodes)

    def __contains__(self, element: object) -> bool:
        """Check if an element is in the graph."""
        return element in self._index
