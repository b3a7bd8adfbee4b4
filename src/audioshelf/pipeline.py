"""Staged inventory pipeline.

    collect -> consolidate -> demo detection -> catalog match -> heuristic fill
    scan projects -> link

Each stage hands a complete collection to the next; no stage shares
mutable state with another scan. The catalog is a snapshot loaded once
by the caller and passed in.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from audioshelf.classify.classifier import describe, tag
from audioshelf.classify.demo import is_demo
from audioshelf.discovery.collector import collect_installations
from audioshelf.discovery.locations import PluginLocation
from audioshelf.inventory.consolidator import consolidate
from audioshelf.inventory.models import ConsolidatedPlugin, RawInstallation
from audioshelf.metadata.catalog import MetadataCatalog
from audioshelf.metadata.matcher import enrich
from audioshelf.projects.linker import link
from audioshelf.projects.models import ExtractedProject
from audioshelf.projects.reader import PROJECT_EXTENSIONS, scan_projects

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Inventory built from one collection pass."""

    plugins: list[ConsolidatedPlugin]
    warnings: list[str] = field(default_factory=list)
    installations: int = 0


def detect_demo(plugin: ConsolidatedPlugin) -> bool:
    """True when any of the plugin's installations is a demo build."""
    return any(is_demo(f.path, plugin.display_name) for f in plugin.formats)


def fill_heuristics(plugin: ConsolidatedPlugin) -> None:
    """Template description and generated tags for an uncatalogued plugin."""
    plugin.description = describe(
        plugin.display_name, plugin.vendor, plugin.category, plugin.subcategory,
    )
    plugin.tags = tag(plugin.display_name, plugin.category, plugin.subcategory, plugin.is_demo)


def build_inventory(
    raw: Iterable[RawInstallation],
    catalog: MetadataCatalog,
) -> list[ConsolidatedPlugin]:
    """Turn raw installations into the finished inventory.

    Args:
        raw: Raw installations from the collector.
        catalog: Catalog snapshot for this scan.

    Returns:
        Consolidated plugins sorted by display name, each either matched
        against the catalog or filled in by the heuristic classifier.
    """
    plugins = consolidate(raw)
    matched = 0
    for plugin in plugins:
        plugin.is_demo = detect_demo(plugin)
        if enrich(plugin, catalog):
            matched += 1
        else:
            fill_heuristics(plugin)
    logger.info(
        "Matched %d of %d plugins against the catalog (%d demos)",
        matched, len(plugins), sum(1 for p in plugins if p.is_demo),
    )
    return plugins


def scan_inventory(
    locations: Iterable[PluginLocation],
    catalog: MetadataCatalog,
) -> ScanResult:
    """Collect installations from disk and build the inventory."""
    report = collect_installations(locations)
    plugins = build_inventory(report.installations, catalog)
    return ScanResult(
        plugins=plugins,
        warnings=list(report.warnings),
        installations=len(report.installations),
    )


def link_projects(
    project_roots: Iterable[Path],
    inventory: Sequence[ConsolidatedPlugin],
    extensions: Iterable[str] = PROJECT_EXTENSIONS,
) -> tuple[list[ExtractedProject], list[ConsolidatedPlugin]]:
    """Scan project directories and link their plugins to the inventory.

    Returns:
        The parsed projects and a new, linked inventory snapshot.
    """
    projects = scan_projects(project_roots, extensions)
    return projects, link(projects, inventory)
