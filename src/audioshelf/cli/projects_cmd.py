"""``audioshelf projects [DIRS...]``: link project usage to the inventory.

Parses every project file under the given directories (or the
configured ``project_dirs``), recovers the plugins each one loads and
records the usage on the saved inventory.

Exit Codes:
    0 - Projects parsed and usage saved.
    1 - No saved inventory, or it could not be read.
    2 - No project directories given, or no project files parsed.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from audioshelf.cli.output import print_error, print_usage
from audioshelf.config import AppConfig
from audioshelf.exceptions import AudioShelfError
from audioshelf.pipeline import link_projects
from audioshelf.store import InventorySnapshot


@click.command("projects")
@click.argument(
    "dirs",
    nargs=-1,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.pass_obj
def projects_command(config: AppConfig, dirs: tuple[Path, ...], output_format: str) -> None:
    """Parse project files and show which plugins they load.

    DIRS default to ``project_dirs`` from the config file.
    """
    roots = list(dirs) or config.project_dirs
    if not roots:
        click.echo("No project directories given and none configured.")
        sys.exit(2)

    try:
        snapshot = InventorySnapshot.read(config.inventory_path)
    except AudioShelfError as exc:
        print_error(str(exc))
        sys.exit(1)

    projects, linked = link_projects(roots, snapshot.plugins, config.project_extensions)
    if not projects:
        if output_format == "json":
            click.echo(json.dumps({"projects": [], "summary": "No projects parsed"}))
        else:
            click.echo("No project files could be parsed.")
        sys.exit(2)

    snapshot = snapshot.with_projects(projects, linked)
    snapshot.write(config.inventory_path)

    if output_format == "json":
        click.echo(json.dumps({
            "projects": [p.to_dict() for p in projects],
            "usage": {
                p.display_name: [u.to_dict() for u in p.project_usage]
                for p in linked if p.project_usage
            },
        }, indent=2))
    else:
        print_usage(linked, projects)
