"""Filesystem collector producing ``RawInstallation`` records.

Discovery Algorithm:
    1. For each ``PluginLocation``, walk every root recursively.
    2. A directory whose suffix is one of the location's extensions is a
       bundle: it becomes one installation (size = sum of the files it
       contains) and is not descended into.
    3. A regular file with one of the extensions is a single-file
       installation.
    4. The vendor is guessed from the nearest non-generic folder between
       the root and the artifact, then from a known filename prefix,
       else "Unknown".

Missing roots, permission errors and artifacts that cannot be stat'ed
are recorded as warnings on the ``CollectionReport``; the walk always
continues.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from audioshelf.discovery.locations import PluginLocation
from audioshelf.inventory.models import RawInstallation

logger = logging.getLogger(__name__)

# Folder names that describe the install layout rather than a vendor.
GENERIC_FOLDERS: frozenset[str] = frozenset({
    "vst",
    "vst2",
    "vst3",
    "au",
    "components",
    "plug-ins",
    "plugins",
    "vstplugins",
    "common files",
    "x64",
    "x86",
    "64-bit",
    "32-bit",
    "64bit",
    "32bit",
})

# Filename prefixes of well-known products, longest first.
FILENAME_VENDORS: tuple[tuple[str, str], ...] = (
    ("native instruments", "Native Instruments"),
    ("guitar rig", "Native Instruments"),
    ("omnisphere", "Spectrasonics"),
    ("decapitator", "Soundtoys"),
    ("echoboy", "Soundtoys"),
    ("soundtoys", "Soundtoys"),
    ("fabfilter", "FabFilter"),
    ("valhalla", "Valhalla DSP"),
    ("sylenth", "LennarDigital"),
    ("kontakt", "Native Instruments"),
    ("massive", "Native Instruments"),
    ("reaktor", "Native Instruments"),
    ("neutron", "iZotope"),
    ("izotope", "iZotope"),
    ("arturia", "Arturia"),
    ("softube", "Softube"),
    ("ozone", "iZotope"),
    ("serum", "Xfer Records"),
    ("pro-q", "FabFilter"),
    ("pro-l", "FabFilter"),
    ("pro-c", "FabFilter"),
    ("helix", "Line 6"),
    ("waves", "Waves"),
    ("zebra", "u-he"),
    ("vital", "Vital Audio"),
    ("diva", "u-he"),
    ("tdr", "Tokyo Dawn Labs"),
)

UNKNOWN_VENDOR = "Unknown"


@dataclass
class CollectionReport:
    """Result of one collection pass.

    Attributes:
        installations: Raw installations in discovery order.
        warnings: Per-source problems (missing directory, permission
            denied, unreadable artifact).
        directories_scanned: Number of directories listed successfully.
    """

    installations: list[RawInstallation] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    directories_scanned: int = 0

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)


# ---------------------------------------------------------------------------
# Artifact facts
# ---------------------------------------------------------------------------


def guess_vendor(path: Path, root: Path) -> str:
    """Guess an artifact's vendor from its folders, then its filename."""
    try:
        folders = path.parent.relative_to(root).parts
    except ValueError:
        folders = ()
    for folder in reversed(folders):
        if folder and folder.lower() not in GENERIC_FOLDERS:
            return folder

    stem = path.stem.lower()
    for prefix, vendor in FILENAME_VENDORS:
        if stem.startswith(prefix):
            return vendor
    return UNKNOWN_VENDOR


def bundle_size(path: Path) -> int:
    """Summed size of every regular file inside a bundle directory."""
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for filename in filenames:
            try:
                total += os.lstat(os.path.join(dirpath, filename)).st_size
            except OSError:
                continue
    return total


def analyze_artifact(
    path: Path,
    location: PluginLocation,
    root: Path,
    is_bundle: bool,
) -> RawInstallation:
    """Build a raw record for one artifact.

    Raises:
        OSError: If the artifact cannot be stat'ed.
    """
    stat = path.stat()
    return RawInstallation(
        path=path,
        wire_format=location.wire_format,
        display_name_raw=path.stem,
        vendor_guess=guess_vendor(path, root),
        size_bytes=bundle_size(path) if is_bundle else stat.st_size,
        modified_at=datetime.fromtimestamp(stat.st_mtime),
        is_bundle=is_bundle,
    )


# ---------------------------------------------------------------------------
# Walking
# ---------------------------------------------------------------------------


def _scan_root(root: Path, location: PluginLocation, report: CollectionReport) -> None:
    extensions = {ext.lower() for ext in location.extensions}
    pending = [root]
    visited: set[str] = set()

    while pending:
        directory = pending.pop()
        real = os.path.realpath(directory)
        if real in visited:
            continue
        visited.add(real)

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except PermissionError:
            report.warn(f"Permission denied: {directory}")
            continue
        except OSError as exc:
            report.warn(f"Cannot read directory {directory}: {exc.strerror or exc}")
            continue
        report.directories_scanned += 1

        subdirectories: list[Path] = []
        for entry in entries:
            path = Path(entry.path)
            suffix = path.suffix.lower()
            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError:
                continue

            if is_dir and suffix not in extensions:
                subdirectories.append(path)
                continue
            if suffix not in extensions or not (is_dir or is_file):
                continue
            try:
                raw = analyze_artifact(path, location, root, is_bundle=is_dir)
            except OSError as exc:
                report.warn(f"Failed to analyze {path}: {exc.strerror or exc}")
                continue
            logger.debug(
                "Found %s %s: %s", raw.wire_format.value,
                "bundle" if raw.is_bundle else "file", path,
            )
            report.installations.append(raw)

        # Reversed so the stack pops subdirectories in name order.
        pending.extend(reversed(subdirectories))


def collect_installations(locations: Iterable[PluginLocation]) -> CollectionReport:
    """Walk plugin locations and report every installation found.

    Args:
        locations: Locations to scan, usually from
            ``audioshelf.discovery.locations.resolve_locations``.

    Returns:
        A report with installations in location, root and path order.
    """
    report = CollectionReport()
    for location in locations:
        before = len(report.installations)
        for root in location.roots:
            if not root.is_dir():
                report.warn(f"Directory does not exist: {root}")
                continue
            _scan_root(root, location, report)
        logger.info(
            "Found %d %s plugins in %d directories",
            len(report.installations) - before,
            location.wire_format.value,
            len(location.roots),
        )
    logger.info("Found %d plugin installations total", len(report.installations))
    return report
