"""Persisted inventory snapshot.

One JSON document holds the latest scan::

    {
      "plugins": [...],
      "projects": [...],
      "metadata": {
        "lastScan": "...", "platform": "macos", "hostname": "studio",
        "totalPlugins": 212,
        "pluginCounts": {"VST": 80, "VST3": 120, "AU": 95}
      }
    }

A new scan supersedes the previous snapshot; the file is replaced
atomically so a crash never leaves a half-written document.

``export`` writes a portable copy of the plugin list, stamped with the
exporting host::

    {"exportDate": "...", "exportedBy": "AudioShelf", "platform": "macos",
     "hostname": "studio", "plugins": [...]}

``import_`` merges such a document into a snapshot, adding only plugins
whose id and normalization key are not already present.
"""

from __future__ import annotations

import json
import logging
import platform as _platform
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from audioshelf.discovery.locations import current_platform
from audioshelf.exceptions import InventoryError
from audioshelf.inventory.models import ConsolidatedPlugin, WireFormat
from audioshelf.metadata.catalog import write_json_atomic
from audioshelf.projects.models import ExtractedProject

logger = logging.getLogger(__name__)

EXPORTED_BY = "AudioShelf"


@dataclass(frozen=True)
class VerificationReport:
    """Installations whose path no longer exists on disk.

    Attributes:
        installed: Number of installations still present.
        missing: ``(display_name, path)`` for every vanished installation.
    """

    installed: int
    missing: list[tuple[str, Path]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing


@dataclass
class InventorySnapshot:
    """The inventory, parsed projects and scan metadata of one scan."""

    plugins: list[ConsolidatedPlugin] = field(default_factory=list)
    projects: list[ExtractedProject] = field(default_factory=list)
    last_scan: datetime | None = None
    platform: str = ""
    hostname: str = ""

    @classmethod
    def new(
        cls,
        plugins: Iterable[ConsolidatedPlugin],
        projects: Iterable[ExtractedProject] = (),
    ) -> InventorySnapshot:
        """Snapshot stamped with the current time and host."""
        return cls(
            plugins=list(plugins),
            projects=list(projects),
            last_scan=datetime.now(timezone.utc),
            platform=current_platform(),
            hostname=_platform.node(),
        )

    def with_projects(
        self,
        projects: Iterable[ExtractedProject],
        plugins: Iterable[ConsolidatedPlugin],
    ) -> InventorySnapshot:
        """Copy carrying new projects and the linked inventory."""
        return replace(self, plugins=list(plugins), projects=list(projects))

    # -- Derived views ----------------------------------------------------

    def plugin_counts(self) -> dict[str, int]:
        """Installations per wire format."""
        counts = Counter(f.wire_format for p in self.plugins for f in p.formats)
        return {wf.value: counts.get(wf, 0) for wf in WireFormat}

    def metadata(self) -> dict[str, Any]:
        return {
            "lastScan": self.last_scan.isoformat() if self.last_scan else None,
            "platform": self.platform,
            "hostname": self.hostname,
            "totalPlugins": len(self.plugins),
            "pluginCounts": self.plugin_counts(),
        }

    def verify(self) -> VerificationReport:
        """Check that every recorded installation still exists."""
        installed = 0
        missing: list[tuple[str, Path]] = []
        for plugin in self.plugins:
            for installation in plugin.formats:
                if installation.path.exists():
                    installed += 1
                else:
                    logger.warning(
                        "Plugin no longer exists: %s at %s",
                        plugin.display_name, installation.path,
                    )
                    missing.append((plugin.display_name, installation.path))
        logger.info(
            "Verification complete: %d installed, %d missing", installed, len(missing),
        )
        return VerificationReport(installed=installed, missing=missing)

    def stats(self) -> dict[str, Any]:
        """Summary counts for display."""
        categories = Counter(p.category or "Other" for p in self.plugins)
        return {
            "totalPlugins": len(self.plugins),
            "formats": self.plugin_counts(),
            "categories": dict(sorted(categories.items())),
            "withMetadata": sum(1 for p in self.plugins if p.has_metadata),
            "demos": sum(1 for p in self.plugins if p.is_demo),
            "usedInProjects": sum(1 for p in self.plugins if p.project_usage),
            "projects": len(self.projects),
            "lastScan": self.metadata()["lastScan"],
            "platform": self.platform or current_platform(),
        }

    # -- Serialization ----------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "plugins": [p.to_dict() for p in self.plugins],
            "projects": [p.to_dict() for p in self.projects],
            "metadata": self.metadata(),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Any) -> InventorySnapshot:
        """Rebuild a snapshot from ``to_dict`` output.

        Raises:
            InventoryError: If the document or a record is malformed.
        """
        if not isinstance(data, dict):
            raise InventoryError("Inventory document must be a JSON object")
        meta = data.get("metadata") or {}
        try:
            plugins = [ConsolidatedPlugin.from_dict(p) for p in data.get("plugins") or []]
            projects = [ExtractedProject.from_dict(p) for p in data.get("projects") or []]
            last_scan = meta.get("lastScan")
            return cls(
                plugins=plugins,
                projects=projects,
                last_scan=datetime.fromisoformat(last_scan) if last_scan else None,
                platform=str(meta.get("platform") or ""),
                hostname=str(meta.get("hostname") or ""),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise InventoryError(f"Malformed inventory record: {exc}") from exc

    def write(self, path: Path) -> None:
        """Atomically replace the snapshot file at ``path``."""
        write_json_atomic(path, self.to_dict())
        logger.info("Saved %d plugins to %s", len(self.plugins), path)

    @classmethod
    def read(cls, path: Path) -> InventorySnapshot:
        """Load a snapshot file.

        Raises:
            InventoryError: If the file is missing, unreadable or malformed.
        """
        if not path.exists():
            raise InventoryError(f"No inventory at {path}; run 'audioshelf scan' first")
        snapshot = cls.from_dict(_read_json(path, "inventory"))
        logger.info("Loaded %d plugins from %s", len(snapshot.plugins), path)
        return snapshot

    # -- Export and import ------------------------------------------------

    def export(self, path: Path) -> dict[str, Any]:
        """Write the plugin list to a portable export document.

        Returns:
            The document that was written.
        """
        document = {
            "exportDate": datetime.now(timezone.utc).isoformat(),
            "exportedBy": EXPORTED_BY,
            "platform": current_platform(),
            "hostname": _platform.node(),
            "plugins": [p.to_dict() for p in self.plugins],
        }
        write_json_atomic(path, document)
        logger.info("Exported %d plugins to %s", len(self.plugins), path)
        return document

    def import_(self, path: Path) -> InventorySnapshot:
        """Merge the plugins of an export document into a copy of this snapshot.

        A plugin is added only when neither its id nor its key is already
        in the inventory, so importing the same file twice adds nothing.
        Imported plugins follow the existing ones in document order.

        Raises:
            InventoryError: If the file is unreadable, is not JSON, lacks a
                ``plugins`` array or holds a malformed plugin record.
        """
        data = _read_json(path, "export file")
        records = data.get("plugins") if isinstance(data, dict) else None
        if not isinstance(records, list):
            raise InventoryError(f"Invalid import file {path}: expected a 'plugins' array")
        try:
            incoming = [ConsolidatedPlugin.from_dict(r) for r in records]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise InventoryError(f"Malformed plugin record in {path}: {exc}") from exc

        ids = {p.id for p in self.plugins}
        keys = {p.key for p in self.plugins}
        added: list[ConsolidatedPlugin] = []
        for plugin in incoming:
            if plugin.id in ids or plugin.key in keys:
                logger.debug("Skipping %s: already in the inventory", plugin.display_name)
                continue
            ids.add(plugin.id)
            keys.add(plugin.key)
            added.append(plugin)

        logger.info("Imported %d new plugins from %s", len(added), path)
        return replace(self, plugins=[*self.plugins, *added])


def _read_json(path: Path, label: str) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise InventoryError(f"No {label} at {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InventoryError(f"Cannot read {label} {path}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InventoryError(f"{label.capitalize()} {path} is not valid JSON: {exc}") from exc
