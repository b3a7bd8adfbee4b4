"""User configuration loaded from YAML.

The default file is ``~/.audioshelf/config.yaml``::

    data_dir: ~/.audioshelf
    catalog: ~/.audioshelf/plugin-metadata.json
    plugin_dirs:
      VST3: [/Library/Audio/Plug-Ins/VST3]
    project_dirs: [~/Music/Ableton Projects]
    project_extensions: [.als]

Every key is optional. Plugin directories default to the platform
location table; ``plugin_dirs`` replaces the roots of the formats it
names.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from audioshelf.discovery.locations import PluginLocation, resolve_locations
from audioshelf.exceptions import ConfigError
from audioshelf.inventory.models import WireFormat
from audioshelf.projects.reader import PROJECT_EXTENSIONS

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path("~/.audioshelf")
DEFAULT_CONFIG_PATH = DEFAULT_DATA_DIR / "config.yaml"

INVENTORY_FILENAME = "plugins.json"
CATALOG_FILENAME = "plugin-metadata.json"
MISSING_METADATA_FILENAME = "missing-metadata.json"

_KNOWN_KEYS = {"data_dir", "catalog", "plugin_dirs", "project_dirs", "project_extensions"}


@dataclass(frozen=True)
class AppConfig:
    """Resolved configuration.

    Attributes:
        data_dir: Directory holding the inventory and missing-metadata files.
        catalog_path: Metadata catalog document.
        plugin_dirs: Per-format root overrides for the collector.
        project_dirs: Directories scanned for project files.
        project_extensions: Project file suffixes, lower-case with dot.
        source: Config file that was loaded, or None for defaults.
    """

    data_dir: Path = field(default_factory=lambda: DEFAULT_DATA_DIR.expanduser())
    catalog_path: Path | None = None
    plugin_dirs: dict[WireFormat, list[Path]] = field(default_factory=dict)
    project_dirs: list[Path] = field(default_factory=list)
    project_extensions: tuple[str, ...] = PROJECT_EXTENSIONS
    source: Path | None = None

    @property
    def inventory_path(self) -> Path:
        return self.data_dir / INVENTORY_FILENAME

    @property
    def missing_metadata_path(self) -> Path:
        return self.data_dir / MISSING_METADATA_FILENAME

    @property
    def catalog(self) -> Path:
        return self.catalog_path or self.data_dir / CATALOG_FILENAME

    def plugin_locations(self) -> list[PluginLocation]:
        return resolve_locations(self.plugin_dirs or None)


def _expand(value: Any, key: str) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"'{key}' must be a non-empty path string")
    return Path(value).expanduser()


def _path_list(value: Any, key: str) -> list[Path]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a path or a list of paths")
    return [_expand(item, key) for item in value]


def _plugin_dirs(value: Any) -> dict[WireFormat, list[Path]]:
    if not isinstance(value, dict):
        raise ConfigError("'plugin_dirs' must map a format (VST, VST3, AU) to paths")
    dirs: dict[WireFormat, list[Path]] = {}
    for name, paths in value.items():
        try:
            wire_format = WireFormat(str(name).upper())
        except ValueError as exc:
            raise ConfigError(f"Unknown plugin format in 'plugin_dirs': {name!r}") from exc
        dirs[wire_format] = _path_list(paths, f"plugin_dirs.{name}")
    return dirs


def _extensions(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ConfigError("'project_extensions' must be a list of suffixes")
    return tuple(v.lower() if v.startswith(".") else f".{v.lower()}" for v in value)


def config_from_dict(data: dict[str, Any], source: Path | None = None) -> AppConfig:
    """Build an ``AppConfig`` from parsed YAML.

    Raises:
        ConfigError: If a value has the wrong type.
    """
    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))

    kwargs: dict[str, Any] = {"source": source}
    if data.get("data_dir") is not None:
        kwargs["data_dir"] = _expand(data["data_dir"], "data_dir")
    if data.get("catalog") is not None:
        kwargs["catalog_path"] = _expand(data["catalog"], "catalog")
    if data.get("plugin_dirs") is not None:
        kwargs["plugin_dirs"] = _plugin_dirs(data["plugin_dirs"])
    if data.get("project_dirs") is not None:
        kwargs["project_dirs"] = _path_list(data["project_dirs"], "project_dirs")
    if data.get("project_extensions") is not None:
        kwargs["project_extensions"] = _extensions(data["project_extensions"])
    return AppConfig(**kwargs)


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from ``path`` or the default location.

    A missing default file yields the defaults; a missing explicit file
    is an error.

    Raises:
        ConfigError: On unreadable files, invalid YAML or wrong types.
    """
    explicit = path is not None
    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        logger.debug("No config file at %s, using defaults", config_path)
        return AppConfig()

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must be a mapping at the top level")

    config = config_from_dict(data, source=config_path)
    logger.debug("Loaded config from %s", config_path)
    return config
