"""Data models for the plugin inventory.

Contains the raw per-file records produced by the collector and the
consolidated, user-facing plugin entity built from them. Models are
kept free of business logic so the discovery, metadata and project
modules can import them without circular-dependency concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any


# ---------------------------------------------------------------------------
# WireFormat: the three binary packaging conventions
# ---------------------------------------------------------------------------


class WireFormat(str, Enum):
    """Mutually exclusive binary packaging conventions for a plugin artifact."""

    VST = "VST"
    VST3 = "VST3"
    AU = "AU"


# ---------------------------------------------------------------------------
# RawInstallation: one physical artifact found on disk
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawInstallation:
    """A single plugin file or bundle found by the collector.

    Attributes:
        path: Absolute path to the file or bundle directory.
        wire_format: Packaging convention detected from the extension.
        display_name_raw: File stem as found on disk (e.g. "Serum_x64").
        vendor_guess: Vendor inferred from the folder layout or filename.
        size_bytes: File size, or the summed size of a bundle's contents.
        modified_at: Last modification time of the artifact.
        is_bundle: True for directory-style packages (.vst3, .component).
    """

    path: Path
    wire_format: WireFormat
    display_name_raw: str
    vendor_guess: str
    size_bytes: int
    modified_at: datetime
    is_bundle: bool = False


# ---------------------------------------------------------------------------
# Consolidated entity parts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FormatInstallation:
    """One installed packaging variant merged into a consolidated plugin."""

    wire_format: WireFormat
    path: Path
    size_bytes: int
    modified_at: datetime
    is_bundle: bool

    @classmethod
    def from_raw(cls, raw: RawInstallation) -> FormatInstallation:
        return cls(
            wire_format=raw.wire_format,
            path=raw.path,
            size_bytes=raw.size_bytes,
            modified_at=raw.modified_at,
            is_bundle=raw.is_bundle,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.wire_format.value,
            "path": str(self.path),
            "size": self.size_bytes,
            "modified": self.modified_at.isoformat(),
            "isBundle": self.is_bundle,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FormatInstallation:
        return cls(
            wire_format=WireFormat(data["format"]),
            path=Path(data["path"]),
            size_bytes=int(data.get("size", 0)),
            modified_at=datetime.fromisoformat(data["modified"]),
            is_bundle=bool(data.get("isBundle", False)),
        )


@dataclass(frozen=True)
class ProjectUsage:
    """A project that loads a consolidated plugin."""

    project_name: str
    project_file: Path
    last_modified_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "projectName": self.project_name,
            "projectFile": str(self.project_file),
            "lastModified": self.last_modified_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectUsage:
        return cls(
            project_name=str(data["projectName"]),
            project_file=Path(data["projectFile"]),
            last_modified_at=datetime.fromisoformat(data["lastModified"]),
        )


# ---------------------------------------------------------------------------
# ConsolidatedPlugin: the logical, user-facing entity
# ---------------------------------------------------------------------------


@dataclass
class ConsolidatedPlugin:
    """One plugin product across all of its installed packaging variants.

    Created by the consolidator, then filled in place by the metadata
    matcher, heuristic classifier and demo detector. The usage linker
    returns copies with ``project_usage`` populated.

    Attributes:
        id: Stable hash of the first-seen installation's path.
        key: Normalization key shared by every merged installation.
            Unique within one inventory.
        display_name: Human-facing name from the first-seen installation.
        vendor: Vendor from the first-seen installation.
        category: Coarse category ("Synthesizer", "Effect", ...).
        subcategory: Finer bucket ("EQ", "Wavetable", ...) or None.
        description: Curated or template-generated description.
        tags: Curated or heuristic tags.
        is_demo: True when any merged installation is a demo build.
        formats: One entry per physically distinct installation. Never empty.
        modified_at: Latest modification time among ``formats``.
        has_metadata: True when a catalog entry was matched.
        metadata_match: Strategy that produced the catalog match
            ("exact", "fuzzy", "vendor"), kept so curators can review
            heuristic matches.
        project_usage: Projects loading this plugin (usage linker output).
    """

    id: str
    key: str
    display_name: str
    vendor: str
    formats: list[FormatInstallation]
    modified_at: datetime
    category: str = "Other"
    subcategory: str | None = None
    description: str = ""
    tags: set[str] = field(default_factory=set)
    is_demo: bool = False
    has_metadata: bool = False
    metadata_match: str | None = None
    website: str | None = None
    price: str | None = None
    popularity: int = 0
    release_year: int | None = None
    project_usage: list[ProjectUsage] = field(default_factory=list)

    @property
    def wire_formats(self) -> list[WireFormat]:
        """Distinct wire formats in installation order."""
        return list(dict.fromkeys(f.wire_format for f in self.formats))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict with sorted tags."""
        return {
            "id": self.id,
            "key": self.key,
            "name": self.display_name,
            "vendor": self.vendor,
            "category": self.category,
            "subcategory": self.subcategory,
            "description": self.description,
            "tags": sorted(self.tags),
            "isDemo": self.is_demo,
            "formats": [f.to_dict() for f in self.formats],
            "modified": self.modified_at.isoformat(),
            "hasMetadata": self.has_metadata,
            "metadataMatch": self.metadata_match,
            "website": self.website,
            "price": self.price,
            "popularity": self.popularity,
            "releaseYear": self.release_year,
            "projectUsage": [u.to_dict() for u in self.project_usage],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConsolidatedPlugin:
        """Rebuild a plugin from ``to_dict`` output.

        Raises:
            KeyError, ValueError, TypeError: On missing or mistyped fields.
        """
        return cls(
            id=str(data["id"]),
            key=str(data["key"]),
            display_name=str(data["name"]),
            vendor=str(data.get("vendor") or "Unknown"),
            formats=[FormatInstallation.from_dict(f) for f in data["formats"]],
            modified_at=datetime.fromisoformat(data["modified"]),
            category=str(data.get("category") or "Other"),
            subcategory=data.get("subcategory"),
            description=str(data.get("description") or ""),
            tags=set(data.get("tags") or []),
            is_demo=bool(data.get("isDemo", False)),
            has_metadata=bool(data.get("hasMetadata", False)),
            metadata_match=data.get("metadataMatch"),
            website=data.get("website"),
            price=data.get("price"),
            popularity=int(data.get("popularity") or 0),
            release_year=data.get("releaseYear"),
            project_usage=[
                ProjectUsage.from_dict(u) for u in data.get("projectUsage") or []
            ],
        )
