"""Curated plugin metadata catalog.

The catalog is a JSON document maintained by humans (and drafted by
``seed_catalog``)::

    {
      "version": "1.0.0",
      "lastUpdated": "2026-02-17T10:00:00+00:00",
      "plugins": {
        "serum": {"name": "Serum", "vendor": "Xfer Records", ...},
        ...
      }
    }

Keys are normalization keys (see ``audioshelf.inventory.normalizer``).
``MetadataCatalog`` is an immutable snapshot of that document: one
snapshot is loaded per scan and passed into the matcher, so no stage
shares mutable catalog state.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any

from audioshelf.exceptions import CatalogError

logger = logging.getLogger(__name__)

CATALOG_VERSION = "1.0.0"


# ---------------------------------------------------------------------------
# MetadataCatalogEntry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MetadataCatalogEntry:
    """Curated descriptive fields for one plugin.

    Attributes:
        name: Product name as curated (e.g. "Pro-Q 3").
        vendor: Vendor name (e.g. "FabFilter").
        description: One or two sentence description.
        category: Coarse category, or None to keep the heuristic one.
        subcategory: Finer bucket.
        tags: Curated tags.
        website: Product page URL.
        price: Free-form price string ("$179", "free", "unknown", "demo").
        popularity: Curator-assigned popularity score.
        release_year: Year of first release.
        needs_review: True for drafted entries no human has checked yet.
    """

    name: str
    vendor: str = "Unknown"
    description: str = ""
    category: str | None = None
    subcategory: str | None = None
    tags: tuple[str, ...] = ()
    website: str | None = None
    price: str | None = None
    popularity: int = 0
    release_year: int | None = None
    needs_review: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], fallback_name: str = "") -> MetadataCatalogEntry:
        """Build an entry from its JSON object form."""
        tags = data.get("tags") or ()
        return cls(
            name=str(data.get("name") or fallback_name),
            vendor=str(data.get("vendor") or "Unknown"),
            description=str(data.get("description") or ""),
            category=data.get("category") or None,
            subcategory=data.get("subcategory") or None,
            tags=tuple(str(t) for t in tags),
            website=data.get("website"),
            price=data.get("price"),
            popularity=int(data.get("popularity") or 0),
            release_year=data.get("releaseYear"),
            needs_review=bool(data.get("needsReview", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "vendor": self.vendor,
            "category": self.category,
            "subcategory": self.subcategory,
            "description": self.description,
            "tags": list(self.tags),
            "website": self.website,
            "price": self.price,
            "popularity": self.popularity,
            "releaseYear": self.release_year,
            "needsReview": self.needs_review,
        }


# ---------------------------------------------------------------------------
# MetadataCatalog: immutable snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MetadataCatalog:
    """Read-only snapshot of the catalog document.

    Iteration order follows the document, which makes the matcher's
    fuzzy and vendor strategies deterministic for a given file.
    """

    entries: Mapping[str, MetadataCatalogEntry] = field(
        default_factory=lambda: MappingProxyType({})
    )
    version: str = CATALOG_VERSION
    last_updated: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.entries, MappingProxyType):
            object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def get(self, key: str) -> MetadataCatalogEntry | None:
        return self.entries.get(key)

    def items(self) -> Iterator[tuple[str, MetadataCatalogEntry]]:
        return iter(self.entries.items())

    def with_entries(self, entries: Mapping[str, MetadataCatalogEntry]) -> MetadataCatalog:
        """Return a new snapshot with ``entries`` replacing the current ones."""
        return MetadataCatalog(
            entries=entries,
            version=self.version,
            last_updated=datetime.now(timezone.utc).isoformat(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "lastUpdated": self.last_updated,
            "plugins": {key: entry.to_dict() for key, entry in self.entries.items()},
        }

    @classmethod
    def from_dict(cls, data: Any) -> MetadataCatalog:
        """Build a snapshot from the parsed JSON document.

        Raises:
            CatalogError: If the document or any entry has the wrong shape.
        """
        if not isinstance(data, dict):
            raise CatalogError("Catalog document must be a JSON object")
        plugins = data.get("plugins", {})
        if not isinstance(plugins, dict):
            raise CatalogError("Catalog 'plugins' must be an object keyed by name")

        entries: dict[str, MetadataCatalogEntry] = {}
        for key, raw_entry in plugins.items():
            if not isinstance(raw_entry, dict):
                raise CatalogError(f"Catalog entry {key!r} must be an object")
            try:
                entries[str(key)] = MetadataCatalogEntry.from_dict(raw_entry, fallback_name=str(key))
            except (TypeError, ValueError) as exc:
                raise CatalogError(f"Catalog entry {key!r} is malformed: {exc}") from exc
        return cls(
            entries=entries,
            version=str(data.get("version") or CATALOG_VERSION),
            last_updated=data.get("lastUpdated"),
        )


# ---------------------------------------------------------------------------
# Loading and saving
# ---------------------------------------------------------------------------


def load_catalog(path: Path) -> MetadataCatalog:
    """Load a catalog document.

    A missing file is not an error: the scan proceeds with an empty
    catalog and every plugin goes to the heuristic classifier.

    Raises:
        CatalogError: If the file exists but is not a valid catalog.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("No metadata catalog at %s, starting with an empty catalog", path)
        return MetadataCatalog()
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogError(f"Cannot read catalog {path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog {path} is not valid JSON: {exc}") from exc

    catalog = MetadataCatalog.from_dict(data)
    logger.info("Loaded %d plugin definitions from %s", len(catalog), path)
    return catalog


def write_json_atomic(path: Path, payload: Any) -> None:
    """Write JSON next to ``path`` and move it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, sort_keys=False)
            handle.write("\n")
        Path(tmp_name).replace(path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def save_catalog(catalog: MetadataCatalog, path: Path) -> None:
    """Persist a catalog snapshot as JSON."""
    write_json_atomic(path, catalog.to_dict())
    logger.info("Saved %d plugin definitions to %s", len(catalog), path)
