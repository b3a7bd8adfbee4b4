"""Plugin name normalization.

``normalize`` maps a display string to the comparison key used by the
consolidator, the metadata catalog and the matcher. Names that differ
only by casing, a packaging annotation ("(VST3)", "[Bundle]", "_x64")
or a duplicated vendor prefix ("FabFilter Pro-Q 3" vs "Pro-Q 3") share
one key. Underscores count as word separators, so "Kick_2" and
"Kick 2" share a key just as they share the display name "Kick 2".

The cleanup steps are applied until the string stops changing. Every
step after the first pass only removes characters, so the loop terminates
and ``normalize(normalize(x)) == normalize(x)`` holds for any input.

``display_name`` is the human-facing counterpart used to seed a
consolidated plugin's name from a raw file stem.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Pattern tables
# ---------------------------------------------------------------------------

# Vendor prefixes stripped from the front of a name when followed by a
# separator. Longer prefixes first so "xfer records" wins over "xfer".
VENDOR_PREFIXES: tuple[str, ...] = (
    "native instruments",
    "plugin alliance",
    "slate digital",
    "xfer records",
    "tokyo dawn labs",
    "spectrasonics",
    "fabfilter",
    "soundtoys",
    "valhalla",
    "izotope",
    "arturia",
    "softube",
    "eventide",
    "waves",
    "u-he",
    "xfer",
    "tdr",
    "bx",
)

_PREFIX_SEPARATORS = " _-"

# Format, bundle and architecture annotations in brackets: "(VST3)",
# "[Bundle]", "(x64)", "(Mono)".
_ANNOTATION_RE = re.compile(
    r"[(\[]\s*(?:vst[23]?|au|aax|component|bundle|file|x86_64|x64|x86|"
    r"64[- ]?bit|32[- ]?bit|mono|stereo)\s*[)\]]",
    re.IGNORECASE,
)

# Leading format tags left by installers: "VST3_Serum", "AU_Diva".
_FORMAT_PREFIX_RE = re.compile(r"^(?:vst3?|au)_", re.IGNORECASE)

# Trailing architecture / platform tags: "Serum_x64", "Diva 64", "Sylenth1_win".
_ARCH_SUFFIX_RE = re.compile(
    r"[ _-](?:x86_64|x64|x86|win64|win32|64bit|32bit|64|32|win|mac)$",
    re.IGNORECASE,
)

# Binary / bundle extensions that occasionally survive in names.
_EXTENSION_RE = re.compile(r"\.(?:dll|vst3?|component)$", re.IGNORECASE)

_DISALLOWED_RE = re.compile(r"[^a-z0-9 _.\-]")


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def _strip_vendor_prefix(key: str) -> str:
    for prefix in VENDOR_PREFIXES:
        if not key.startswith(prefix):
            continue
        rest = key[len(prefix):]
        if not rest or rest[0] not in _PREFIX_SEPARATORS:
            continue
        remainder = rest.lstrip(_PREFIX_SEPARATORS)
        if remainder:
            return remainder
    return key


def _strip_annotations(key: str) -> str:
    key = _EXTENSION_RE.sub("", key)
    key = _ANNOTATION_RE.sub(" ", key)
    key = _FORMAT_PREFIX_RE.sub("", key)
    return _ARCH_SUFFIX_RE.sub("", key.rstrip())


def _normalize_once(key: str) -> str:
    key = key.lower()
    key = _strip_annotations(key)
    key = _strip_vendor_prefix(key.strip())
    key = _DISALLOWED_RE.sub("", key)
    # Underscores separate words the same way spaces do.
    return " ".join(key.replace("_", " ").split())


def normalize(name: str) -> str:
    """Map a plugin display string to its canonical comparison key.

    Lower-cases, strips known vendor prefixes and packaging annotations,
    drops characters outside ``[a-z0-9 _.-]``, treats underscores as spaces
    and collapses whitespace.
    Total: never raises, returns "" for names made only of annotations
    or punctuation.

    Args:
        name: Display string or raw file stem.

    Returns:
        The normalization key.
    """
    key = name
    while True:
        nxt = _normalize_once(key)
        if nxt == key:
            return key
        key = nxt


# ---------------------------------------------------------------------------
# Display names
# ---------------------------------------------------------------------------


def display_name(raw: str) -> str:
    """Turn a raw file stem into a human-facing plugin name.

    "Serum_x64" becomes "Serum", "VST3_pro-q 3" becomes "Pro-Q 3". Inner
    capitalisation is kept ("FabFilter Pro-C 2" is unchanged).
    """
    name = _EXTENSION_RE.sub("", raw.strip())
    name = _FORMAT_PREFIX_RE.sub("", name)
    name = _ANNOTATION_RE.sub(" ", name)
    name = _ARCH_SUFFIX_RE.sub("", name.rstrip())
    name = " ".join(name.replace("_", " ").split())
    name = re.sub(r"\b\w", lambda m: m.group(0).upper(), name)
    return name or raw.strip()
