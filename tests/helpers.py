"""Shared test builders for raw installations, plugins and Live sets.

Imported by test modules as ``tests.helpers``; ``tests/conftest.py``
wraps the same builders as fixtures.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from audioshelf.inventory.models import (
    ConsolidatedPlugin,
    FormatInstallation,
    RawInstallation,
    WireFormat,
)

BASE_TIME = datetime(2025, 3, 1, 12, 0, 0)


def raw_installation(
    name: str,
    wire_format: WireFormat = WireFormat.VST3,
    path: str | None = None,
    vendor: str = "Unknown",
    modified_at: datetime = BASE_TIME,
    size_bytes: int = 1024,
) -> RawInstallation:
    """Build a raw installation; the path defaults to /plugins/<name>.<ext>."""
    suffix = {WireFormat.VST: ".dll", WireFormat.VST3: ".vst3", WireFormat.AU: ".component"}
    return RawInstallation(
        path=Path(path or f"/plugins/{name}{suffix[wire_format]}"),
        wire_format=wire_format,
        display_name_raw=name,
        vendor_guess=vendor,
        size_bytes=size_bytes,
        modified_at=modified_at,
        is_bundle=wire_format is not WireFormat.VST,
    )


def consolidated_plugin(
    display_name: str,
    key: str | None = None,
    vendor: str = "Unknown",
    paths: tuple[str, ...] = (),
    category: str = "Other",
) -> ConsolidatedPlugin:
    """Build a consolidated plugin with one VST3 installation per path."""
    paths = paths or (f"/plugins/{display_name}.vst3",)
    return ConsolidatedPlugin(
        id=f"id-{display_name.lower()}",
        key=key if key is not None else display_name.lower(),
        display_name=display_name,
        vendor=vendor,
        formats=[
            FormatInstallation(
                wire_format=WireFormat.VST3,
                path=Path(p),
                size_bytes=100,
                modified_at=BASE_TIME,
                is_bundle=True,
            )
            for p in paths
        ],
        modified_at=BASE_TIME,
        category=category,
    )


def device_block(name: str, shape: str = "Vst3PluginInfo", wrapper: str = "PluginDevice") -> str:
    """XML for one plugin instantiated as a device on a track."""
    field = "FileName" if shape == "VstPluginInfo" else "Name"
    return (
        f'<{wrapper} Id="0"><PluginDesc>'
        f'<{shape} Id="0"><{field} Value="{name}" /></{shape}>'
        f"</PluginDesc></{wrapper}>"
    )


def live_set(*devices: str, history: str = "", root_attrs: str = "") -> str:
    """A minimal Ableton Live set document holding the given device blocks."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<Ableton MajorVersion="5" Creator="Ableton Live 12.0"{root_attrs}>'
        "<LiveSet><Tracks><AudioTrack Id=\"1\"><DeviceChain><DeviceChain><Devices>"
        + "".join(devices)
        + "</Devices></DeviceChain></DeviceChain></AudioTrack></Tracks>"
        + history
        + "</LiveSet></Ableton>"
    )
