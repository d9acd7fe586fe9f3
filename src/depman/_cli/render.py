"""Rich rendering utilities for dependency commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console


def render_order(order: list[str], console: Console) -> None:
    """Print the processing order, one element per line with its position."""
    if not order:
        console.print("[dim]No elements to order[/dim]")
        return
    width = len(str(len(order)))
    for position, element in enumerate(order, start=1):
        console.print(f"[dim]{position:>{width}}.[/dim] {escape(element)}", highlight=False)


def render_summary(
    *,
    elements: int,
    edges: int,
    ordered: int,
    console: Console,
) -> None:
    """Render graph counts as a Rich table.

    Args:
        elements: Number of registered elements.
        edges: Number of dependency edges.
        ordered: Number of elements present in the topological order.
        console: Rich Console to output to.

    """
    unresolved = elements - ordered

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Elements", justify="right")
    table.add_column("Dependencies", justify="right")
    table.add_column("Ordered", justify="right", style="green")
    table.add_column("Unresolved", justify="right", style="red" if unresolved else "dim")
    table.add_row(str(elements), str(edges), str(ordered), str(unresolved))

    console.print(table)
