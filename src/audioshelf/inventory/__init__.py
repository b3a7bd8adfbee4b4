"""Plugin inventory: data models, name normalization and consolidation.

Public API::

    from audioshelf.inventory import consolidate, normalize

    plugins = consolidate(raw_installations)
    for plugin in plugins:
        print(plugin.display_name, [f.wire_format.value for f in plugin.formats])
"""

from __future__ import annotations

from audioshelf.inventory.consolidator import consolidate, plugin_id
from audioshelf.inventory.models import (
    ConsolidatedPlugin,
    FormatInstallation,
    ProjectUsage,
    RawInstallation,
    WireFormat,
)
from audioshelf.inventory.normalizer import display_name, normalize

__all__ = [
    "ConsolidatedPlugin",
    "FormatInstallation",
    "ProjectUsage",
    "RawInstallation",
    "WireFormat",
    "consolidate",
    "display_name",
    "normalize",
    "plugin_id",
]
