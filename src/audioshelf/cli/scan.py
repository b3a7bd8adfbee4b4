"""``audioshelf scan``: collect, consolidate and enrich installed plugins.

Walks the plugin directories for this platform (or the ones given with
``--plugin-dir``), consolidates the VST/VST3/AU installations into one
entry per product, matches them against the metadata catalog and saves
the inventory snapshot.

Exit Codes:
    0 - Inventory built and saved.
    1 - The catalog or an existing snapshot could not be read.
    2 - No plugins found in any directory.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from audioshelf.cli.output import print_error, print_inventory
from audioshelf.config import AppConfig
from audioshelf.discovery.locations import PluginLocation, resolve_locations
from audioshelf.exceptions import AudioShelfError
from audioshelf.inventory.models import WireFormat
from audioshelf.metadata.catalog import load_catalog
from audioshelf.pipeline import scan_inventory
from audioshelf.store import InventorySnapshot


def parse_plugin_dirs(values: tuple[str, ...]) -> dict[WireFormat, list[Path]]:
    """Parse ``FORMAT=PATH`` options into per-format roots.

    Raises:
        click.BadParameter: On a missing ``=`` or an unknown format.
    """
    dirs: dict[WireFormat, list[Path]] = {}
    for value in values:
        name, sep, path = value.partition("=")
        if not sep or not path:
            raise click.BadParameter(
                f"expected FORMAT=PATH, got {value!r}", param_hint="--plugin-dir",
            )
        try:
            wire_format = WireFormat(name.strip().upper())
        except ValueError as exc:
            raise click.BadParameter(
                f"unknown format {name!r} (use VST, VST3 or AU)", param_hint="--plugin-dir",
            ) from exc
        dirs.setdefault(wire_format, []).append(Path(path).expanduser())
    return dirs


def _locations(config: AppConfig, plugin_dirs: tuple[str, ...]) -> list[PluginLocation]:
    if plugin_dirs:
        dirs = parse_plugin_dirs(plugin_dirs)
        return [loc for loc in resolve_locations(dirs) if loc.wire_format in dirs]
    return config.plugin_locations()


@click.command("scan")
@click.option(
    "--plugin-dir", "plugin_dirs",
    multiple=True,
    metavar="FORMAT=PATH",
    help="Scan only the given PATH for FORMAT plugins. Repeatable.",
)
@click.option(
    "--catalog", "catalog_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Metadata catalog JSON (default: from config).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.pass_obj
def scan_command(
    config: AppConfig,
    plugin_dirs: tuple[str, ...],
    catalog_path: Path | None,
    output_format: str,
) -> None:
    """Scan installed plugins and save the inventory.

    Exit code 2 when no plugins are found.
    """
    locations = _locations(config, plugin_dirs)
    try:
        catalog = load_catalog(catalog_path or config.catalog)
        result = scan_inventory(locations, catalog)
    except AudioShelfError as exc:
        print_error(str(exc))
        sys.exit(1)

    if not result.plugins:
        if output_format == "json":
            click.echo(json.dumps({"plugins": [], "warnings": result.warnings}))
        else:
            click.echo("No plugins found in the scanned directories.")
        sys.exit(2)

    snapshot = InventorySnapshot.new(result.plugins)
    snapshot.write(config.inventory_path)

    if output_format == "json":
        payload = snapshot.to_dict()
        payload["warnings"] = result.warnings
        click.echo(json.dumps(payload, indent=2))
    else:
        print_inventory(result.plugins, result.warnings)
        click.echo(f"Inventory saved to {config.inventory_path}")
