"""Join extracted projects onto the consolidated inventory.

``link`` is a pure join: it never mutates its inputs and rebuilds every
entity's ``project_usage`` from scratch, so linking the same
``(projects, inventory)`` pair twice yields identical results.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from audioshelf.inventory.models import ConsolidatedPlugin, ProjectUsage
from audioshelf.projects.models import ExtractedProject

logger = logging.getLogger(__name__)


def _index_by_name(inventory: Sequence[ConsolidatedPlugin]) -> dict[str, int]:
    # First entity wins on a case-insensitive display-name collision.
    index: dict[str, int] = {}
    for position, plugin in enumerate(inventory):
        index.setdefault(plugin.display_name.casefold(), position)
    return index


def link(
    projects: Iterable[ExtractedProject],
    inventory: Sequence[ConsolidatedPlugin],
) -> list[ConsolidatedPlugin]:
    """Attach project usage to the inventory.

    Args:
        projects: Parsed projects, each with its loaded plugin names.
        inventory: Consolidated plugins from the latest scan.

    Returns:
        A new list of plugin copies, in inventory order, whose
        ``project_usage`` lists the projects loading them.
    """
    index = _index_by_name(inventory)
    usage: list[list[ProjectUsage]] = [[] for _ in inventory]
    unmatched = 0

    for project in projects:
        record = ProjectUsage(
            project_name=project.name,
            project_file=project.file_path,
            last_modified_at=project.last_modified_at,
        )
        # Names differing only in case resolve to one entity; count the project once.
        seen: set[int] = set()
        for name in project.plugin_names:
            position = index.get(name.casefold())
            if position is None:
                unmatched += 1
                logger.debug("Plugin %r used in %s is not in the inventory", name, project.name)
                continue
            if position not in seen:
                seen.add(position)
                usage[position].append(record)

    linked = [
        replace(plugin, tags=set(plugin.tags), formats=list(plugin.formats), project_usage=records)
        for plugin, records in zip(inventory, usage)
    ]
    used = sum(1 for records in usage if records)
    logger.info(
        "Linked %d plugins to projects (%d names not in inventory)", used, unmatched,
    )
    return linked
