"""Curated metadata catalog, matching and curation workflows.

Submodules
----------
- ``catalog``: Catalog entry and immutable snapshot types, JSON load/save.
- ``matcher``: Exact, fuzzy and vendor-scoped matching and enrichment.
- ``curation``: Missing-metadata templates and catalog seeding.
"""

from audioshelf.metadata.catalog import (
    MetadataCatalog,
    MetadataCatalogEntry,
    load_catalog,
    save_catalog,
)
from audioshelf.metadata.curation import (
    SeedSummary,
    missing_metadata_templates,
    seed_catalog,
    write_missing_metadata,
)
from audioshelf.metadata.matcher import MatchResult, enrich, match

__all__ = [
    "MatchResult",
    "MetadataCatalog",
    "MetadataCatalogEntry",
    "SeedSummary",
    "enrich",
    "load_catalog",
    "match",
    "missing_metadata_templates",
    "save_catalog",
    "seed_catalog",
    "write_missing_metadata",
]
