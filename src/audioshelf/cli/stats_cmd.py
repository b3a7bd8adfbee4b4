"""``audioshelf stats``: inventory statistics.

Exit Codes:
    0 - Statistics shown (and, with ``--verify``, every installation exists).
    1 - No saved inventory, or installations are missing under ``--verify``.
"""

from __future__ import annotations

import json
import sys

import click

from audioshelf.cli.output import console, print_error, print_stats
from audioshelf.config import AppConfig
from audioshelf.exceptions import AudioShelfError
from audioshelf.store import InventorySnapshot


@click.command("stats")
@click.option(
    "--verify",
    is_flag=True,
    default=False,
    help="Also check that every recorded installation still exists.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.pass_obj
def stats_command(config: AppConfig, verify: bool, output_format: str) -> None:
    """Show counts by format and category for the saved inventory."""
    try:
        snapshot = InventorySnapshot.read(config.inventory_path)
    except AudioShelfError as exc:
        print_error(str(exc))
        sys.exit(1)

    stats = snapshot.stats()
    report = snapshot.verify() if verify else None
    if report is not None:
        stats["installed"] = report.installed
        stats["missing"] = [
            {"name": name, "path": str(path)} for name, path in report.missing
        ]

    if output_format == "json":
        click.echo(json.dumps(stats, indent=2))
    else:
        print_stats(stats)
        if report is not None:
            console.print(
                f"  Installed: [green]{report.installed}[/green]  "
                f"Missing: [red]{len(report.missing)}[/red]"
            )
            for name, path in report.missing:
                console.print(f"  [red]- {name}[/red] [dim]{path}[/dim]")

    if report is not None and not report.ok:
        sys.exit(1)
