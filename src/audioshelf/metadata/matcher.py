"""Metadata matching between consolidated plugins and the catalog.

Three strategies are tried in order; the first hit wins:

1. **exact**: the plugin's normalization key is a catalog key.
2. **fuzzy**: the first N characters of the plugin key equal the first
   N characters of a catalog key (or of the entry name's key), where
   N is 6 or the shorter name's length when that is under 6. Names
   shorter than 3 characters never fuzzy match.
3. **vendor**: the entry's vendor contains the plugin's vendor
   (case-insensitive) and the first four characters of the entry name's
   key occur in the plugin key.

Strategies 2 and 3 are deliberately permissive prefix heuristics. Short
or generic names can match the wrong entry; ``metadata_match`` records
which strategy fired so a curator can review those cases. Stricter
matching (edit distance, token overlap) is not applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from audioshelf.inventory.models import ConsolidatedPlugin
from audioshelf.inventory.normalizer import normalize
from audioshelf.metadata.catalog import MetadataCatalog, MetadataCatalogEntry

logger = logging.getLogger(__name__)

FUZZY_PREFIX_LENGTH = 6
FUZZY_MIN_LENGTH = 3
VENDOR_NAME_PREFIX_LENGTH = 4

_UNKNOWN_VENDORS = {"", "unknown"}


@dataclass(frozen=True)
class MatchResult:
    """A catalog entry matched to a plugin, with provenance."""

    key: str
    entry: MetadataCatalogEntry
    strategy: str  # "exact", "fuzzy", "vendor"


def is_fuzzy_match(name1: str, name2: str) -> bool:
    """Prefix equality over the first min(6, shorter length) characters."""
    shorter = min(len(name1), len(name2))
    if shorter < FUZZY_MIN_LENGTH:
        return False
    prefix = min(FUZZY_PREFIX_LENGTH, shorter)
    return name1[:prefix] == name2[:prefix]


def _match_exact(key: str, catalog: MetadataCatalog) -> MatchResult | None:
    entry = catalog.get(key)
    if entry is None:
        return None
    return MatchResult(key, entry, "exact")


def _match_fuzzy(key: str, catalog: MetadataCatalog) -> MatchResult | None:
    for catalog_key, entry in catalog.items():
        if is_fuzzy_match(key, normalize(catalog_key)) or is_fuzzy_match(
            key, normalize(entry.name)
        ):
            return MatchResult(catalog_key, entry, "fuzzy")
    return None


def _match_vendor(key: str, vendor: str, catalog: MetadataCatalog) -> MatchResult | None:
    wanted = vendor.strip().lower()
    if wanted in _UNKNOWN_VENDORS:
        return None
    for catalog_key, entry in catalog.items():
        if wanted not in entry.vendor.lower():
            continue
        name_prefix = normalize(entry.name)[:VENDOR_NAME_PREFIX_LENGTH]
        if name_prefix and name_prefix in key:
            return MatchResult(catalog_key, entry, "vendor")
    return None


def match(plugin: ConsolidatedPlugin, catalog: MetadataCatalog) -> MatchResult | None:
    """Find the catalog entry for a plugin.

    Args:
        plugin: Consolidated plugin; its ``key`` is the normalized name.
        catalog: Catalog snapshot for this scan.

    Returns:
        The first strategy's match, or None.
    """
    key = plugin.key or normalize(plugin.display_name)
    if not key:
        return None
    return (
        _match_exact(key, catalog)
        or _match_fuzzy(key, catalog)
        or _match_vendor(key, plugin.vendor, catalog)
    )


def apply_entry(plugin: ConsolidatedPlugin, result: MatchResult) -> None:
    """Overwrite a plugin's descriptive fields from a matched entry.

    The heuristic category survives only when the entry has none.
    """
    entry = result.entry
    plugin.description = entry.description
    plugin.category = entry.category or plugin.category
    plugin.subcategory = entry.subcategory
    plugin.tags = set(entry.tags)
    plugin.website = entry.website
    plugin.price = entry.price
    plugin.popularity = entry.popularity
    plugin.release_year = entry.release_year
    plugin.has_metadata = True
    plugin.metadata_match = result.strategy


def enrich(plugin: ConsolidatedPlugin, catalog: MetadataCatalog) -> bool:
    """Match a plugin against the catalog and merge the entry in place.

    Returns:
        True if a catalog entry was applied.
    """
    result = match(plugin, catalog)
    if result is None:
        plugin.has_metadata = False
        plugin.metadata_match = None
        return False

    apply_entry(plugin, result)
    if result.strategy != "exact":
        logger.info(
            "Matched %s to catalog entry %r by %s strategy; review recommended",
            plugin.display_name, result.key, result.strategy,
        )
    return True
