"""Typer-based CLI for UIMap component analysis."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from . import __version__, config_manager
from .analyzer import ProjectAnalyzer, ProjectListingError
from .classifier import classify_path
from .config_manager import DEFAULT_ANALYSIS_CONFIG, load_config, save_config
from .report import render_table, write_json

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    help="🧩 UIMap CLI — map UI components and the imports they depend on.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ── Configuration group ──────────────────────────────────────
config_app = typer.Typer(
    help="⚙️  Configuration — analysis extensions, skip dirs and markers.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
app.add_typer(config_app, name="config")


class OutputFormat(str, Enum):
    json = "json"
    table = "table"


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"UIMap CLI v{__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    )
):
    """UIMap CLI: static detection of UI components in JS/TS projects."""
    pass


@app.command("analyze")
def analyze(
    project_path: Path = typer.Argument(..., help="Project directory or .zip archive to analyze."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the JSON report to this file."),
    output_format: OutputFormat = typer.Option(OutputFormat.json, "--format", "-f", help="Console output format."),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging."),
):
    """Detect components and their imports in every source file of a project."""
    _setup_logging(verbose)

    analyzer = ProjectAnalyzer()
    try:
        report = analyzer.analyze_path(project_path)
    except ProjectListingError as exc:
        err_console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(code=1)

    if output is not None:
        write_json(report, output)
        err_console.print(f"[green]✓[/green] Report written to {output}")

    if output_format is OutputFormat.table:
        render_table(report, console)
    elif output is None:
        typer.echo(report.to_json())


@app.command("classify")
def classify(
    paths: List[str] = typer.Argument(..., help="File paths to classify."),
):
    """Print the classification tag for each path."""
    for path in paths:
        typer.echo(f"{classify_path(path)}\t{path}")


@config_app.command("show")
def config_show():
    """Show the active analysis configuration."""
    console.print(f"[bold]Config file:[/bold] {config_manager.CONFIG_FILE}")
    for key, values in load_config().items():
        console.print(f"[cyan]{key}[/cyan] = {', '.join(values)}")


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing configuration file."),
):
    """Write the default analysis configuration to the config file."""
    if config_manager.CONFIG_FILE.exists() and not force:
        err_console.print(f"[yellow]![/yellow] {config_manager.CONFIG_FILE} already exists (use --force).")
        raise typer.Exit(code=1)
    if not save_config(DEFAULT_ANALYSIS_CONFIG):
        err_console.print(f"[red]✗[/red] Could not write {config_manager.CONFIG_FILE}")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] Wrote {config_manager.CONFIG_FILE}")
