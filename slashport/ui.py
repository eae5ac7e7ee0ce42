"""Terminal output primitives for the converter CLI.

Rendering only: banner, configuration table, per-file status line and the
final summary. No pipeline or configuration logic lives here; callers pass
in plain values.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console(highlight=False)


def ui_rule(title: str) -> None:
    """Render a horizontal section rule."""
    console.print(Rule(title, style="bold blue"))


def ui_info(message: str) -> None:
    console.print(f"[cyan]{escape(message)}[/cyan]")


def ui_success(message: str) -> None:
    console.print(f"[green]✓ {escape(message)}[/green]")


def ui_warning(message: str) -> None:
    console.print(f"[yellow]⚠ {escape(message)}[/yellow]")


def ui_error(message: str) -> None:
    console.print(f"[bold red]✗ {escape(message)}[/bold red]")


def ui_config_table(config: Any) -> None:
    """Render the run configuration (the API key is never shown).

    Parameters
    ----------
    config : Any
        Object exposing ``model``, ``base_url``, ``source_dir``,
        ``output_dir`` and ``max_content_size``.
    """
    table = Table(title="Configuration", show_header=False, title_justify="left")
    table.add_column("Setting", style="bold")
    table.add_column("Value", style="yellow")
    table.add_row("Model", escape(str(config.model)))
    table.add_row("Endpoint", escape(str(config.base_url)))
    table.add_row("Source", escape(str(config.source_dir)))
    table.add_row("Destination", escape(str(config.output_dir)))
    table.add_row("Max Size", f"{config.max_content_size} chars")
    console.print(table)


def ui_progress(index: int, total: int, name: str) -> None:
    """Render the per-file status line, e.g. ``[2/7] Processing: ping.js``."""
    counter = escape(f"[{index}/{total}]")
    console.print(f"[blue]{counter}[/blue] Processing: {escape(name)}")


def ui_summary(stats: Any) -> None:
    """Render the end-of-run summary.

    Parameters
    ----------
    stats : Any
        Object exposing ``success``, ``skipped``, ``failed``, ``total`` and
        ``failures`` (outcomes with ``source`` and ``cause``).
    """
    ui_rule("Conversion Results")
    ui_success(f"Converted: {stats.success}")
    ui_warning(f"Skipped: {stats.skipped}")
    ui_error(f"Failed: {stats.failed}")
    console.print(f"\nTotal processed: [bold]{stats.total}[/bold] files")
    if stats.failures:
        for outcome in stats.failures:
            source, cause = escape(str(outcome.source)), escape(str(outcome.cause))
            console.print(f"  [red]{source}[/red]: {cause}")
        ui_warning("Some conversions failed. Check error messages above.")
