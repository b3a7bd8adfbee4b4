"""Rich output formatting helpers for the AudioShelf CLI.

Tables for the inventory, project usage and statistics. Format badges
share one color per wire format across every table.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from audioshelf.inventory.models import ConsolidatedPlugin, WireFormat
from audioshelf.projects.models import ExtractedProject

_FORMAT_STYLES: dict[WireFormat, str] = {
    WireFormat.VST: "cyan",
    WireFormat.VST3: "green",
    WireFormat.AU: "magenta",
}

_MATCH_STYLES: dict[str, str] = {
    "exact": "green",
    "fuzzy": "yellow",
    "vendor": "yellow",
}

console = Console()


def format_badges(plugin: ConsolidatedPlugin) -> Text:
    """Colored, space-separated wire formats of a plugin."""
    text = Text()
    for index, wire_format in enumerate(plugin.wire_formats):
        if index:
            text.append(" ")
        text.append(wire_format.value, style=_FORMAT_STYLES.get(wire_format, "white"))
    return text


def _metadata_cell(plugin: ConsolidatedPlugin) -> Text:
    if not plugin.has_metadata:
        return Text("heuristic", style="dim")
    strategy = plugin.metadata_match or "exact"
    return Text(strategy, style=_MATCH_STYLES.get(strategy, "white"))


def print_inventory(plugins: Sequence[ConsolidatedPlugin], warnings: Sequence[str] = ()) -> None:
    """Print the consolidated inventory as a table.

    Args:
        plugins: Inventory sorted by display name.
        warnings: Per-source collection warnings, summarized below the table.
    """
    if not plugins:
        console.print("[dim]No plugins found.[/dim]")
        return

    table = Table(title="AudioShelf Inventory", show_header=True, header_style="bold")
    table.add_column("Plugin", style="bold")
    table.add_column("Vendor")
    table.add_column("Formats")
    table.add_column("Category")
    table.add_column("Metadata", justify="center")
    table.add_column("Demo", justify="center")

    for plugin in plugins:
        category = plugin.category
        if plugin.subcategory:
            category = f"{category} / {plugin.subcategory}"
        demo = Text("demo", style="yellow") if plugin.is_demo else Text("-", style="dim")
        table.add_row(
            plugin.display_name, plugin.vendor, format_badges(plugin),
            category, _metadata_cell(plugin), demo,
        )

    console.print(table)
    _print_inventory_summary(plugins, warnings)


def _print_inventory_summary(
    plugins: Sequence[ConsolidatedPlugin],
    warnings: Sequence[str],
) -> None:
    installations = sum(len(p.formats) for p in plugins)
    matched = sum(1 for p in plugins if p.has_metadata)
    parts = [
        f"[bold]{len(plugins)}[/bold] plugins",
        f"{installations} installations",
        f"[green]{matched} catalogued[/green]",
    ]
    if matched < len(plugins):
        parts.append(f"[yellow]{len(plugins) - matched} need metadata[/yellow]")
    if warnings:
        parts.append(f"[dim]{len(warnings)} directories skipped[/dim]")
    console.print(" | ".join(parts))


def print_usage(plugins: Sequence[ConsolidatedPlugin], projects: Sequence[ExtractedProject]) -> None:
    """Print which projects load each plugin."""
    used = [p for p in plugins if p.project_usage]
    console.print(
        Panel(
            f"[bold]{len(projects)}[/bold] projects parsed, "
            f"[bold]{len(used)}[/bold] plugins in use",
            title="Project Usage",
        )
    )
    if not used:
        console.print("[dim]No inventory plugins are loaded in these projects.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Plugin", style="bold")
    table.add_column("Projects", justify="right")
    table.add_column("Used In")
    for plugin in sorted(used, key=lambda p: (-len(p.project_usage), p.display_name)):
        names = ", ".join(u.project_name for u in plugin.project_usage)
        table.add_row(plugin.display_name, str(len(plugin.project_usage)), names)
    console.print(table)


def print_stats(stats: dict[str, Any]) -> None:
    """Print inventory statistics from ``InventorySnapshot.stats()``."""
    console.print(Panel("[bold]Inventory Statistics[/bold]", title="AudioShelf"))
    console.print(f"  Total plugins:    [bold]{stats.get('totalPlugins', 0)}[/bold]")
    console.print(f"  With metadata:    [green]{stats.get('withMetadata', 0)}[/green]")
    console.print(f"  Demo builds:      [yellow]{stats.get('demos', 0)}[/yellow]")
    console.print(f"  Used in projects: {stats.get('usedInProjects', 0)}")
    console.print(f"  Last scan:        {stats.get('lastScan') or 'never'}")

    formats = stats.get("formats", {})
    if formats:
        fmt_table = Table(title="Installations by Format", show_header=True)
        fmt_table.add_column("Format", style="bold")
        fmt_table.add_column("Count", justify="right")
        for fmt, count in formats.items():
            fmt_table.add_row(fmt, str(count))
        console.print(fmt_table)

    categories = stats.get("categories", {})
    if categories:
        cat_table = Table(title="Plugins by Category", show_header=True)
        cat_table.add_column("Category", style="bold")
        cat_table.add_column("Count", justify="right")
        for category, count in categories.items():
            cat_table.add_row(category, str(count))
        console.print(cat_table)


def print_error(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")

