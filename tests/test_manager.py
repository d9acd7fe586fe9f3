"""Tests for the DependencyManager facade."""

import io

import pytest
from rich.console import Console

import depman as dm


class TestGetDependencies:
    """Tests for DependencyManager.get_dependencies."""

    def test_build_dependency_graph(self) -> None:
        manager = dm.DependencyManager()
        manager.build_dependency_graph({"A": ["B", "C"], "C": ["B"]})
        assert manager.get_dependencies() == ["A", "C", "B"]

    def test_add_dependency_order(self) -> None:
        manager = dm.DependencyManager()
        manager.add_dependency("A", "B")
        manager.add_dependency("A", "C")
        manager.add_dependency("C", "B")
        assert manager.get_dependencies() == ["B", "C", "A"]

    def test_single_element_without_dependency(self) -> None:
        manager = dm.DependencyManager()
        manager.add_dependency(1)
        assert manager.get_dependencies() == [1]

    def test_empty_manager(self) -> None:
        manager = dm.DependencyManager()
        assert manager.get_dependencies() == []

    def test_none_spec_is_noop(self) -> None:
        manager = dm.DependencyManager()
        manager.build_dependency_graph(None)
        assert manager.get_dependencies() == []

    def test_multiple_independent_graphs(self) -> None:
        manager = dm.DependencyManager()
        manager.build_dependency_graph({1: [2], 3: [4]})
        assert manager.get_dependencies() == [1, 3, 2, 4]

    def test_circular_dependency_raises(self) -> None:
        manager = dm.DependencyManager()
        manager.add_dependency("A", "B")
        with pytest.raises(dm.InvalidDependencyError):
            manager.add_dependency("B", "A")
        assert manager.get_dependencies() == ["B", "A"]

    def test_circular_dependency_loop_is_empty(self) -> None:
        manager = dm.DependencyManager()
        manager.add_dependency("A", "B")
        manager.add_dependency("B", "C")
        manager.add_dependency("C", "A")
        assert manager.get_dependencies() == []

    def test_repeated_calls_are_identical(self) -> None:
        manager = dm.DependencyManager()
        manager.build_dependency_graph({"A": ["B", "C"], "C": ["B"]})
        assert manager.get_dependencies() == manager.get_dependencies()

    def test_recomputed_after_mutation(self) -> None:
        manager = dm.DependencyManager()
        manager.add_dependency("A", "B")
        assert manager.get_dependencies() == ["B", "A"]
        manager.add_dependency("B", "C")
        assert manager.get_dependencies() == ["C", "B", "A"]


class TestIteration:
    """Tests for iterating over a manager."""

    def test_iterator_is_fresh_each_time(self) -> None:
        manager = dm.DependencyManager()
        manager.add_dependency("A", "B")
        first = manager.iterator()
        assert list(first) == ["B", "A"]
        assert list(manager.iterator()) == ["B", "A"]

    def test_iter_protocol(self) -> None:
        manager = dm.DependencyManager()
        manager.add_dependency("A", "B")
        assert list(manager) == ["B", "A"]

    def test_iterator_next_when_exhausted(self) -> None:
        order = dm.DependencyManager().iterator()
        with pytest.raises(dm.EmptyIterationError):
            order.next()


class TestUnresolvedCount:
    """Tests for DependencyManager.unresolved_count."""

    def test_acyclic_has_none(self) -> None:
        manager = dm.DependencyManager()
        manager.build_dependency_graph({"A": ["B", "C"], "C": ["B"]})
        assert manager.unresolved_count() == 0

    def test_cycle_and_its_dependents(self) -> None:
        manager = dm.DependencyManager()
        manager.add_dependency("A", "B")
        manager.add_dependency("B", "C")
        manager.add_dependency("C", "A")
        manager.add_dependency("D", "A")
        manager.add_dependency("E")
        assert manager.unresolved_count() == 4

    def test_graph_property(self) -> None:
        manager = dm.DependencyManager()
        manager.add_dependency("A", "B")
        assert manager.graph.dependencies("A") == ("B",)


class TestPrintDependencies:
    """Tests for the print_dependencies helper."""

    def test_prints_space_separated_order(self) -> None:
        buffer = io.StringIO()
        console = Console(file=buffer, width=80)
        result = dm.print_dependencies({"A": ["B", "C"], "C": ["B"]}, console=console)
        assert result == ["A", "C", "B"]
        assert buffer.getvalue() == "A C B\n"
