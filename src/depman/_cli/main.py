import json
import logging
from pathlib import Path
from typing import Annotated

import tomli_w
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from depman._errors import InvalidDependencyError
from depman._manager import DependencyManager

from .config import ConfigError, get_config
from .render import render_order, render_summary
from .spec_file import SpecFileError, load_spec_file

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Depman CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _resolve_spec_path(spec: Path | None, config_spec: Path | None) -> Path:
    if spec is not None:
        return spec
    if config_spec is not None:
        return config_spec
    err_console.print("[red]Error:[/red] No spec file given and no \\[tool.depman].spec configured")
    raise typer.Exit(code=2)


def _load_manager(spec_path: Path) -> DependencyManager[str]:
    """Load a spec file and build its manager, exiting with code 1 on errors."""
    err_console.print(f"[cyan]Loading dependencies from:[/cyan] {spec_path}")
    try:
        return load_spec_file(spec_path).to_manager()
    except SpecFileError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e
    except InvalidDependencyError as e:
        err_console.print(f"[red]Invalid dependency:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


@app.command()
def order(
    spec: Annotated[
        Path | None,
        typer.Argument(help="Path to the dependency spec TOML file (defaults to tool.depman.spec in pyproject.toml)"),
    ] = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file for the order"),
    ] = None,
    strict: Annotated[
        bool | None,
        typer.Option("--strict/--no-strict", help="Fail if some elements cannot be ordered (defaults to tool.depman.strict)"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the order as a JSON array"),
    ] = False,
) -> None:
    """Print elements in dependency order (dependencies first)."""
    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2) from e

    spec_path = _resolve_spec_path(spec, config.spec)
    if output is None:
        output = config.output
    if strict is None:
        strict = config.strict

    manager = _load_manager(spec_path)
    result = manager.get_dependencies()
    unresolved = len(manager.graph) - len(result)

    if as_json:
        out_console.print_json(json.dumps(result))
    else:
        render_order(result, out_console)

    if output is not None:
        err_console.print(f"[cyan]Writing order to:[/cyan] {output}")
        output.parent.mkdir(parents=True, exist_ok=True)
        with output.open("wb") as f:
            tomli_w.dump({"order": result}, f)

    if unresolved:
        logger.warning(f"{unresolved} of {len(manager.graph)} elements could not be ordered (dependency cycle)")
        if strict:
            raise typer.Exit(code=1)


@app.command()
def check(
    spec: Annotated[
        Path | None,
        typer.Argument(help="Path to the dependency spec TOML file (defaults to tool.depman.spec in pyproject.toml)"),
    ] = None,
) -> None:
    """Check that every element of a spec file can be ordered."""
    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2) from e

    spec_path = _resolve_spec_path(spec, config.spec)
    manager = _load_manager(spec_path)
    graph = manager.graph
    ordered = len(manager.get_dependencies())

    render_summary(elements=len(graph), edges=graph.edge_count, ordered=ordered, console=err_console)
    err_console.print()

    if ordered < len(graph):
        err_console.print("[red]✗ Some elements are part of, or depend on, a dependency cycle[/red]")
        err_console.print()
        raise typer.Exit(code=1)

    err_console.print("[green]✓ All dependencies can be ordered[/green]")
    err_console.print()
