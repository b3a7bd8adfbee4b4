"""Consolidation of raw installations into one entity per plugin.

The collector reports every ``.dll``, ``.vst3`` and ``.component`` it
finds as its own ``RawInstallation``. Most products ship in two or three
of these formats, so the consolidator groups raw records by
``normalize(display_name_raw)`` and builds one ``ConsolidatedPlugin``
per key.

Tie-break policy
----------------
The first-seen installation seeds the entity's display name, vendor,
category and id. Later installations with the same key only add a
``formats`` entry and may advance ``modified_at``; disagreeing vendor or
category values are absorbed without error (logged at DEBUG). Given the
same raw set in any order, the set of keys and the merged ``formats``
paths are identical; only the seeded fields depend on order.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable
from pathlib import Path

from audioshelf.classify.classifier import classify
from audioshelf.inventory.models import (
    ConsolidatedPlugin,
    FormatInstallation,
    RawInstallation,
)
from audioshelf.inventory.normalizer import display_name, normalize

logger = logging.getLogger(__name__)


def plugin_id(path: Path | str) -> str:
    """Stable identifier derived from an installation path."""
    return hashlib.sha256(str(path).encode("utf-8")).hexdigest()[:16]


def consolidation_key(raw: RawInstallation) -> str:
    """Key used to group raw installations of the same product.

    Falls back to the lower-cased raw name when normalization leaves
    nothing (a stem made only of punctuation), so such installations
    are never merged with each other.
    """
    return normalize(raw.display_name_raw) or raw.display_name_raw.strip().lower()


def _new_entity(key: str, raw: RawInstallation) -> ConsolidatedPlugin:
    name = display_name(raw.display_name_raw)
    vendor = raw.vendor_guess or "Unknown"
    classification = classify(name, vendor)
    return ConsolidatedPlugin(
        id=plugin_id(raw.path),
        key=key,
        display_name=name,
        vendor=vendor,
        formats=[FormatInstallation.from_raw(raw)],
        modified_at=raw.modified_at,
        category=classification.category,
        subcategory=classification.subcategory,
    )


def _absorb(entity: ConsolidatedPlugin, raw: RawInstallation) -> None:
    if any(existing.path == raw.path for existing in entity.formats):
        return
    entity.formats.append(FormatInstallation.from_raw(raw))
    if raw.modified_at > entity.modified_at:
        entity.modified_at = raw.modified_at
    if raw.vendor_guess and raw.vendor_guess != entity.vendor:
        logger.debug(
            "Keeping vendor %r for %s; ignoring %r from %s",
            entity.vendor, entity.display_name, raw.vendor_guess, raw.path,
        )


def consolidate(raw: Iterable[RawInstallation]) -> list[ConsolidatedPlugin]:
    """Group raw installations into consolidated plugin entities.

    Args:
        raw: Raw installations in discovery order. Never rejected.

    Returns:
        One entity per normalization key, sorted by display name. Each
        entity's ``formats`` lists its installations in input order.
    """
    entities: dict[str, ConsolidatedPlugin] = {}
    for installation in raw:
        key = consolidation_key(installation)
        entity = entities.get(key)
        if entity is None:
            entities[key] = _new_entity(key, installation)
        else:
            _absorb(entity, installation)

    merged = sum(len(e.formats) for e in entities.values())
    logger.info("Consolidated %d installations into %d plugins", merged, len(entities))
    return sorted(entities.values(), key=lambda e: (e.display_name, e.key))
