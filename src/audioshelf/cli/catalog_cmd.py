"""Catalog curation commands.

``audioshelf missing`` writes a template record for every plugin the
catalog did not match, for a curator to fill in. ``audioshelf
seed-catalog`` drafts those entries straight into the catalog from the
heuristic classifier, flagged ``needsReview``.

Exit Codes:
    0 - File written (or nothing to do).
    1 - The inventory or catalog could not be read.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from audioshelf.cli.output import console, print_error
from audioshelf.config import AppConfig
from audioshelf.exceptions import AudioShelfError
from audioshelf.metadata.catalog import load_catalog, save_catalog
from audioshelf.metadata.curation import seed_catalog, write_missing_metadata
from audioshelf.store import InventorySnapshot


@click.command("missing")
@click.option(
    "--output", "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the templates (default: <data dir>/missing-metadata.json).",
)
@click.pass_obj
def missing_command(config: AppConfig, output_path: Path | None) -> None:
    """Write metadata templates for plugins without catalog entries."""
    try:
        snapshot = InventorySnapshot.read(config.inventory_path)
    except AudioShelfError as exc:
        print_error(str(exc))
        sys.exit(1)

    target = output_path or config.missing_metadata_path
    count = write_missing_metadata(snapshot.plugins, target)
    if count:
        console.print(f"[yellow]{count}[/yellow] plugins need metadata; templates written to {target}")
    else:
        console.print("[green]All plugins have metadata.[/green]")


@click.command("seed-catalog")
@click.option(
    "--catalog", "catalog_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Catalog to update (default: from config).",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Report what would change without saving.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.pass_obj
def seed_catalog_command(
    config: AppConfig,
    catalog_path: Path | None,
    dry_run: bool,
    output_format: str,
) -> None:
    """Draft catalog entries for uncatalogued plugins.

    New entries are generated by the heuristic classifier and marked
    needsReview. Existing entries are only touched when they have no tags.
    """
    target = catalog_path or config.catalog
    try:
        snapshot = InventorySnapshot.read(config.inventory_path)
        catalog = load_catalog(target)
    except AudioShelfError as exc:
        print_error(str(exc))
        sys.exit(1)

    seeded, summary = seed_catalog(catalog, snapshot.plugins)
    if not dry_run and (summary.created or summary.updated):
        save_catalog(seeded, target)

    if output_format == "json":
        click.echo(json.dumps({
            "created": summary.created,
            "updated": summary.updated,
            "total": summary.total,
            "saved": not dry_run and bool(summary.created or summary.updated),
        }))
        return

    console.print(f"  New entries:     [green]{summary.created}[/green]")
    console.print(f"  Tags added:      {summary.updated}")
    console.print(f"  Catalog entries: [bold]{summary.total}[/bold]")
    if dry_run:
        console.print("[dim]Dry run: catalog not saved.[/dim]")
    elif summary.created or summary.updated:
        console.print(f"Catalog saved to {target}")
