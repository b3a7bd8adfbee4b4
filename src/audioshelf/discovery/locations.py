"""Static registry of plugin install locations per platform.

Each ``PluginLocation`` says where one wire format is installed on one
platform and which file extensions identify it there. The collector walks
every location for the current platform; checking a directory that does
not exist only produces a warning.

Platform Notes:
    Windows installs VST2 ``.dll`` files into user-chosen ``VstPlugins``
    folders and VST3 bundles into ``Common Files\\VST3``.
    macOS keeps all three formats under ``/Library/Audio/Plug-Ins`` plus a
    per-user copy under ``~/Library``. Audio Units exist only on macOS.
    Linux hosts follow the ``~/.vst``/``/usr/lib/vst`` convention.
"""

from __future__ import annotations

import os
import platform as _platform
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from audioshelf.inventory.models import WireFormat

PLATFORMS: tuple[str, ...] = ("windows", "macos", "linux")


@dataclass(frozen=True)
class PluginLocation:
    """Where one wire format is installed on one platform.

    Attributes:
        wire_format: Packaging convention found in these directories.
        extensions: Lower-case suffixes (with dot) that identify an
            artifact of this format. Bundles are directories carrying one
            of these suffixes.
        roots: Directories to walk recursively.
        platform: "windows", "macos" or "linux".
    """

    wire_format: WireFormat
    extensions: tuple[str, ...]
    roots: tuple[Path, ...] = field(default_factory=tuple)
    platform: str = "macos"


def current_platform() -> str:
    """Return the current platform identifier."""
    system = _platform.system().lower()
    if system == "darwin":
        return "macos"
    return "windows" if system == "windows" else "linux"


def _windows_locations() -> list[PluginLocation]:
    program_files = Path(os.environ.get("PROGRAMFILES", r"C:\Program Files"))
    program_files_x86 = Path(os.environ.get("PROGRAMFILES(X86)", r"C:\Program Files (x86)"))
    return [
        PluginLocation(
            wire_format=WireFormat.VST,
            extensions=(".dll", ".vst"),
            roots=(
                program_files / "VstPlugins",
                program_files / "Steinberg" / "VstPlugins",
                program_files_x86 / "VstPlugins",
                program_files_x86 / "Steinberg" / "VstPlugins",
                Path(r"C:\VstPlugins"),
            ),
            platform="windows",
        ),
        PluginLocation(
            wire_format=WireFormat.VST3,
            extensions=(".vst3",),
            roots=(
                program_files / "Common Files" / "VST3",
                program_files_x86 / "Common Files" / "VST3",
            ),
            platform="windows",
        ),
    ]


def _macos_locations(home: Path) -> list[PluginLocation]:
    system = Path("/Library/Audio/Plug-Ins")
    user = home / "Library" / "Audio" / "Plug-Ins"
    return [
        PluginLocation(
            wire_format=WireFormat.VST,
            extensions=(".vst",),
            roots=(system / "VST", user / "VST"),
        ),
        PluginLocation(
            wire_format=WireFormat.VST3,
            extensions=(".vst3",),
            roots=(system / "VST3", user / "VST3"),
        ),
        PluginLocation(
            wire_format=WireFormat.AU,
            extensions=(".component",),
            roots=(system / "Components", user / "Components"),
        ),
    ]


def _linux_locations(home: Path) -> list[PluginLocation]:
    return [
        PluginLocation(
            wire_format=WireFormat.VST,
            extensions=(".so",),
            roots=(home / ".vst", Path("/usr/lib/vst"), Path("/usr/local/lib/vst")),
            platform="linux",
        ),
        PluginLocation(
            wire_format=WireFormat.VST3,
            extensions=(".vst3",),
            roots=(home / ".vst3", Path("/usr/lib/vst3"), Path("/usr/local/lib/vst3")),
            platform="linux",
        ),
    ]


def default_locations(
    platform: str | None = None,
    home: Path | None = None,
) -> list[PluginLocation]:
    """Known plugin locations for a platform.

    Args:
        platform: Platform identifier; defaults to the running one.
        home: Override the home directory (for testing).

    Returns:
        One location per wire format supported on the platform.
    """
    platform = platform or current_platform()
    home_dir = home if home is not None else Path.home()
    if platform == "windows":
        return _windows_locations()
    if platform == "macos":
        return _macos_locations(home_dir)
    return _linux_locations(home_dir)


def resolve_locations(
    overrides: Mapping[WireFormat, Iterable[Path]] | None = None,
    platform: str | None = None,
    home: Path | None = None,
) -> list[PluginLocation]:
    """Platform defaults with per-format root overrides applied.

    A format named in ``overrides`` scans only the given roots. A format
    that the platform does not know (e.g. AU off macOS) is added when
    overridden, using the macOS extensions for it.
    """
    locations = default_locations(platform, home)
    if not overrides:
        return locations

    platform = platform or current_platform()
    by_format = {loc.wire_format: loc for loc in locations}
    fallback = {
        loc.wire_format: loc
        for loc in _macos_locations(home if home is not None else Path.home())
    }
    for wire_format, roots in overrides.items():
        base = by_format.get(wire_format) or replace(fallback[wire_format], platform=platform)
        by_format[wire_format] = replace(base, roots=tuple(Path(r) for r in roots))
    return [by_format[wf] for wf in WireFormat if wf in by_format]
