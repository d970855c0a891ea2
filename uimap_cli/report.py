"""Rendering helpers for project reports (rich table and JSON file)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from .models import ProjectReport


def build_table(report: ProjectReport) -> Table:
    table = Table(title="UI Components", show_header=True, show_lines=False)
    table.add_column("File", style="cyan", overflow="fold")
    table.add_column("Component", style="bold")
    table.add_column("Type", style="magenta", width=10)
    table.add_column("Imports", min_width=30)

    for file_report in report.files:
        if not file_report.components:
            table.add_row(file_report.path, "[red]not parsed[/red]", "", "")
            continue
        for component in file_report.components:
            imports = ", ".join(f"{b.name} [dim]({b.source})[/dim]" for b in component.imports)
            table.add_row(file_report.path, component.name, component.type, imports or "[dim]-[/dim]")
    return table


def render_table(report: ProjectReport, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(build_table(report))
    console.print(
        f"[bold]{len(report.files)}[/bold] files, "
        f"[bold]{report.component_count}[/bold] components"
    )


def write_json(report: ProjectReport, output_file: Path) -> None:
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(report.to_json() + "\n", encoding="utf-8")
