"""
Command line interface for building multi-pane HTML documents.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import ConfigError, PageConfig, get_settings, load_config
from .layout import LayoutError, LayoutNode, build_rich_tree
from .render import DocumentIOError, RenderResult, ScaffoldReport, build_document, generate_project, load_layout

console = Console()
app = typer.Typer(help="Render resizable multi-pane HTML layouts from JSON split trees.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: str) -> None:
    env_override = get_settings().log_level
    level_str = (env_override or level_name or "info").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "INFO"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_file(value: Optional[Path]) -> Optional[Path]:
    """Ensure an input path exists and return it absolute."""
    if value is None:
        return None
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Path must be a file, got directory: {resolved}")
    return resolved


def _load_config_or_exit(path: Path) -> PageConfig:
    try:
        return load_config(path)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _load_layout_or_exit(path: Path) -> LayoutNode:
    try:
        root = load_layout(path)
    except (DocumentIOError, LayoutError) as exc:
        console.print(f"[bold red]Layout error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    root.percolate()
    return root


def _print_summary(title: str, report: RenderResult | ScaffoldReport) -> None:
    table = Table(title=title)
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in report.summary_rows():
        table.add_row(key, value)
    console.print(table)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show panes version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]panes[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            "[bold yellow]panes[/] is ready. Run [cyan]panes init DIR[/] for a starter project "
            "or [cyan]panes build --config panes.toml[/] to render one.",
        )


@app.command()
def build(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to the TOML page configuration.",
        callback=_resolve_file,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the document here instead of the configured output_file.",
    ),
    fallback: bool = typer.Option(
        False,
        "--fallback",
        help="Emit an error page instead of failing when inputs are invalid.",
    ),
    stdout: bool = typer.Option(
        False,
        "--stdout",
        help="Print the generated document instead of a summary.",
    ),
) -> None:
    """
    Generate the multi-pane document described by a config file.
    """
    page_config = _load_config_or_exit(config)
    if output is not None:
        page_config = page_config.model_copy(update={"output_file": output.expanduser().resolve()})

    try:
        result = build_document(page_config, fallback=fallback)
    except (DocumentIOError, LayoutError) as exc:
        console.print(f"[bold red]Generation failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if stdout:
        typer.echo(result.document)
        return
    _print_summary("Build Summary", result)
    if result.failed:
        console.print("[bold yellow]Inputs were invalid; wrote the error page instead.[/]")


@app.command()
def show(
    layout: Path = typer.Option(
        ...,
        "--layout",
        "-l",
        help="Path to the layout JSON.",
        callback=_resolve_file,
    ),
) -> None:
    """
    Print the layout tree after size/style percolation.
    """
    root = _load_layout_or_exit(layout)
    console.print(build_rich_tree(root, label=f"[bold]{escape(layout.name)}[/] ({root.pane_count()} panes)"))


@app.command()
def check(
    layout: Path = typer.Option(
        ...,
        "--layout",
        "-l",
        help="Path to the layout JSON.",
        callback=_resolve_file,
    ),
) -> None:
    """
    Validate a layout file without rendering it.
    """
    root = _load_layout_or_exit(layout)
    console.print(f"[bold green]Layout OK:[/] {root.pane_count()} panes")


@app.command()
def init(
    directory: Path = typer.Argument(
        Path("."),
        help="Directory for the starter project.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite starter files that already exist.",
    ),
) -> None:
    """
    Write a sample config, layout and template to get started.
    """
    report = generate_project(directory, force=force)
    _print_summary("Scaffold Summary", report)
    console.print(f"Next: [cyan]panes build --config {escape(str(report.config_path))}[/]")


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
