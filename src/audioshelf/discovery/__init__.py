"""Plugin discovery: platform install locations and the filesystem collector.

Public API::

    from audioshelf.discovery import collect_installations, resolve_locations

    report = collect_installations(resolve_locations())
    for warning in report.warnings:
        print(warning)
"""

from audioshelf.discovery.collector import (
    CollectionReport,
    collect_installations,
    guess_vendor,
)
from audioshelf.discovery.locations import (
    PluginLocation,
    current_platform,
    default_locations,
    resolve_locations,
)

__all__ = [
    "CollectionReport",
    "PluginLocation",
    "collect_installations",
    "current_platform",
    "default_locations",
    "guess_vendor",
    "resolve_locations",
]
