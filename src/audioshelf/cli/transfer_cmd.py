"""Moving an inventory between machines.

``audioshelf export PATH`` writes the saved plugin list to a portable
document; ``audioshelf import PATH`` merges such a document into the
saved inventory, skipping plugins it already holds.

Exit Codes:
    0 - Document written or merged.
    1 - The inventory or the import file could not be read.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from audioshelf.cli.output import console, print_error
from audioshelf.config import AppConfig
from audioshelf.exceptions import AudioShelfError
from audioshelf.store import InventorySnapshot


@click.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def export_command(config: AppConfig, path: Path) -> None:
    """Export the saved plugin list to PATH."""
    try:
        snapshot = InventorySnapshot.read(config.inventory_path)
    except AudioShelfError as exc:
        print_error(str(exc))
        sys.exit(1)

    snapshot.export(path)
    console.print(f"Exported [bold]{len(snapshot.plugins)}[/bold] plugins to {path}")


@click.command("import")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def import_command(config: AppConfig, path: Path) -> None:
    """Merge plugins exported on another machine into the inventory.

    Plugins whose id or name is already in the inventory are skipped.
    Without a saved inventory the import becomes the new inventory.
    """
    try:
        if config.inventory_path.exists():
            snapshot = InventorySnapshot.read(config.inventory_path)
        else:
            snapshot = InventorySnapshot.new([])
        merged = snapshot.import_(path)
    except AudioShelfError as exc:
        print_error(str(exc))
        sys.exit(1)

    merged.write(config.inventory_path)
    added = len(merged.plugins) - len(snapshot.plugins)
    console.print(
        f"Imported [green]{added}[/green] new plugins "
        f"([bold]{len(merged.plugins)}[/bold] in inventory)"
    )
