"""Data model for parsed project files."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ExtractedProject:
    """Result of parsing one project file.

    Attributes:
        name: Project title from the document, or the file's base name.
        file_path: Absolute path to the project file.
        file_name: Base name of the project file, extension included.
        last_modified_at: Project file modification time.
        plugin_names: Sorted, de-duplicated names of the third-party
            plugins loaded as devices. Browser history is never included.
    """

    name: str
    file_path: Path
    file_name: str
    last_modified_at: datetime
    plugin_names: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "filePath": str(self.file_path),
            "fileName": self.file_name,
            "lastModified": self.last_modified_at.isoformat(),
            "vstPlugins": list(self.plugin_names),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExtractedProject:
        return cls(
            name=str(data["name"]),
            file_path=Path(data["filePath"]),
            file_name=str(data.get("fileName") or Path(data["filePath"]).name),
            last_modified_at=datetime.fromisoformat(data["lastModified"]),
            plugin_names=tuple(sorted(set(data.get("vstPlugins") or []))),
        )
