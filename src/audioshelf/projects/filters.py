"""Cleanup and rejection rules for plugin names recovered from projects.

A raw value read from a plugin-info block is cleaned by stripping a
binary/bundle extension and surrounding whitespace, then rejected when
it is too short, names a built-in (native) device, or matches one of
the ordered junk patterns. Patterns only cover shapes that are never
third-party plugin names.
"""

from __future__ import annotations

import re

MIN_NAME_LENGTH = 2

_EXTENSION_RE = re.compile(r"\.(?:dll|vst|vst3|component)$", re.IGNORECASE)

# Native Ableton devices. These are instruments and effects built into the
# host; they are never third-party plugins even when they appear in
# plugin-shaped fields.
BUILT_IN_DEVICES: frozenset[str] = frozenset({
    "Operator", "Simpler", "Sampler", "Impulse", "DrumRack", "Drum Rack",
    "InstrumentRack", "Instrument Rack", "Wavetable", "Bass", "Collision",
    "Tension", "Electric", "Analog", "Drift", "Meld", "Compressor",
    "Glue Compressor", "EQ Eight", "EQ Three", "Reverb", "Delay", "Echo",
    "Chorus", "Chorus-Ensemble", "Flanger", "Phaser", "Phaser-Flanger",
    "AutoFilter", "Auto Filter", "AutoPan", "Auto Pan", "Saturator",
    "Redux", "Vocoder", "Spectrum", "Tuner", "Limiter", "Gate",
    "Multiband Dynamics", "Utility", "Overdrive", "Pedal", "Amp", "Cabinet",
})

# (name, pattern) pairs, evaluated in order.
JUNK_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("track-label", re.compile(r"^(?:Track|Audio|MIDI|Master|Return)\s*\d*$", re.IGNORECASE)),
    ("numbered-prefix", re.compile(r"^\d+\s*-\s*")),
    ("date-stamp", re.compile(r"\d{4}-\d{2}-\d{2}")),
    ("guid", re.compile(r"^[a-f0-9]{8}-[a-f0-9]{4}", re.IGNORECASE)),
)


def junk_reason(name: str) -> str | None:
    """Return the name of the first junk pattern matching ``name``."""
    for reason, pattern in JUNK_PATTERNS:
        if pattern.search(name):
            return reason
    return None


def clean_plugin_name(raw: str | None) -> str | None:
    """Clean a raw plugin-info value, or return None to reject it.

    >>> clean_plugin_name("Serum_x64.dll")
    'Serum_x64'
    >>> clean_plugin_name("EQ Eight") is None
    True
    """
    if not raw:
        return None
    cleaned = _EXTENSION_RE.sub("", raw.strip()).strip()
    if len(cleaned) < MIN_NAME_LENGTH:
        return None
    if cleaned in BUILT_IN_DEVICES:
        return None
    if junk_reason(cleaned) is not None:
        return None
    return cleaned
