"""AudioShelf CLI: audio plugin inventory and project usage.

Entry point for the ``audioshelf`` command-line tool. Registers all
subcommands under a single Click group; the group loads the YAML config
and configures logging before any subcommand runs.

Commands:
    scan          Collect installed plugins, consolidate and enrich them.
    projects      Parse project files and link plugin usage.
    missing       Write metadata templates for uncatalogued plugins.
    seed-catalog  Draft catalog entries for uncatalogued plugins.
    stats         Show inventory statistics.
    export        Write the plugin list to a portable file.
    import        Merge an exported plugin list into the inventory.

Usage::

    audioshelf scan
    audioshelf scan --plugin-dir VST3=/Library/Audio/Plug-Ins/VST3
    audioshelf projects ~/Music/Ableton
    audioshelf missing
    audioshelf seed-catalog
    audioshelf stats --verify
    audioshelf export ~/plugins-export.json
    audioshelf import ~/plugins-export.json
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import click

from audioshelf import __version__
from audioshelf.cli.catalog_cmd import missing_command, seed_catalog_command
from audioshelf.cli.output import print_error
from audioshelf.cli.projects_cmd import projects_command
from audioshelf.cli.scan import scan_command
from audioshelf.cli.stats_cmd import stats_command
from audioshelf.cli.transfer_cmd import export_command, import_command
from audioshelf.config import load_config
from audioshelf.exceptions import ConfigError
from audioshelf.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: ~/.audioshelf/config.yaml).",
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Override the directory holding the inventory files.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug details.")
@click.option("-q", "--quiet", is_flag=True, default=False, help="Log warnings and errors only.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write a full debug log to this file.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    data_dir: Path | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """AudioShelf: one inventory for every plugin you have installed.

    Consolidates VST, VST3 and AU installations into one entry per
    product, enriches them from a curated metadata catalog and shows
    which of your projects actually load each plugin.
    """
    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        print_error(str(exc))
        ctx.exit(1)
    if data_dir is not None:
        config = replace(config, data_dir=data_dir.expanduser())
    ctx.obj = config


# Register all subcommands
cli.add_command(scan_command)
cli.add_command(projects_command)
cli.add_command(missing_command)
cli.add_command(seed_catalog_command)
cli.add_command(stats_command)
cli.add_command(export_command)
cli.add_command(import_command)
