"""Curation workflows around the metadata catalog.

Two outputs feed the humans who maintain the catalog:

- ``missing_metadata_templates`` renders every plugin the catalog did
  not match as a template record (``needsReview: true``) that a curator
  fills in and pastes into the catalog.
- ``seed_catalog`` drafts catalog entries directly from the heuristic
  classifier for all uncatalogued plugins, and back-fills tags on
  existing entries that have none.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from audioshelf.classify.classifier import classify, describe, tag
from audioshelf.inventory.models import ConsolidatedPlugin
from audioshelf.metadata.catalog import (
    MetadataCatalog,
    MetadataCatalogEntry,
    write_json_atomic,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Missing-metadata templates
# ---------------------------------------------------------------------------


def metadata_template(plugin: ConsolidatedPlugin) -> dict[str, Any]:
    """Render one plugin as a catalog template record for curation."""
    return {
        "name": plugin.display_name,
        "vendor": plugin.vendor or "Unknown",
        "category": plugin.category,
        "subcategory": plugin.subcategory,
        "description": plugin.description,
        "tags": sorted(plugin.tags),
        "website": None,
        "price": "unknown",
        "popularity": 0,
        "needsReview": True,
    }


def missing_metadata_templates(plugins: Iterable[ConsolidatedPlugin]) -> list[dict[str, Any]]:
    """Templates for every plugin with ``has_metadata = False``."""
    return [metadata_template(p) for p in plugins if not p.has_metadata]


def write_missing_metadata(plugins: Iterable[ConsolidatedPlugin], path: Path) -> int:
    """Write the missing-metadata document and return the record count.

    Nothing is written when every plugin has metadata.
    """
    templates = missing_metadata_templates(plugins)
    if not templates:
        logger.info("All plugins have metadata; nothing written to %s", path)
        return 0
    write_json_atomic(path, {
        "plugins": templates,
        "count": len(templates),
        "generatedAt": datetime.now(timezone.utc).isoformat(),
    })
    logger.info("Saved %d plugins needing metadata to %s", len(templates), path)
    return len(templates)


# ---------------------------------------------------------------------------
# Catalog seeding
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SeedSummary:
    """Counts reported by ``seed_catalog``."""

    created: int
    updated: int
    total: int


def draft_entry(plugin: ConsolidatedPlugin) -> MetadataCatalogEntry:
    """Draft a catalog entry for a plugin from the heuristic classifier."""
    classification = classify(plugin.display_name, plugin.vendor)
    return MetadataCatalogEntry(
        name=plugin.display_name,
        vendor=plugin.vendor or "Unknown",
        description=describe(
            plugin.display_name, plugin.vendor,
            classification.category, classification.subcategory,
        ),
        category=classification.category,
        subcategory=classification.subcategory,
        tags=tuple(sorted(tag(
            plugin.display_name, classification.category,
            classification.subcategory, plugin.is_demo,
        ))),
        price="demo" if plugin.is_demo else "unknown",
        needs_review=True,
    )


def seed_catalog(
    catalog: MetadataCatalog,
    plugins: Iterable[ConsolidatedPlugin],
) -> tuple[MetadataCatalog, SeedSummary]:
    """Draft entries for uncatalogued plugins.

    Plugins whose key is already in the catalog are left alone unless
    the entry has no tags, in which case tags are generated from the
    entry's own category and subcategory.

    Returns:
        The new catalog snapshot and a summary of what changed.
    """
    entries = dict(catalog.entries)
    created = updated = 0
    for plugin in plugins:
        key = plugin.key
        if not key:
            continue
        existing = entries.get(key)
        if existing is None:
            entries[key] = draft_entry(plugin)
            created += 1
        elif not existing.tags:
            entries[key] = replace(existing, tags=tuple(sorted(tag(
                plugin.display_name, existing.category,
                existing.subcategory, plugin.is_demo,
            ))))
            updated += 1

    summary = SeedSummary(created=created, updated=updated, total=len(entries))
    logger.info(
        "Catalog seeding: %d new, %d updated, %d total",
        summary.created, summary.updated, summary.total,
    )
    return catalog.with_entries(entries), summary
