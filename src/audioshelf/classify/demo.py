"""Demo / trial / limited-build detection.

An installation counts as a demo when any rule in ``DEMO_RULES`` fires.
Rules are evaluated in order over the lower-cased filename, each path
segment and the display name. Matching is plain substring containment,
so a folder such as "Satellite" also trips the "lite" keyword; the
inventory keeps such plugins and only sets ``is_demo``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import PurePath

DEMO_KEYWORDS: tuple[str, ...] = ("demo", "trial", "lite", "limited", "beta", "preview")

# Free player / reader editions that only run commercial libraries.
KNOWN_DEMO_PRODUCTS: frozenset[str] = frozenset({
    "kontakt player",
    "kontakt 5 player",
    "kontakt 6 player",
    "kontakt 7 player",
    "kontakt 8 player",
    "reaktor player",
    "reaktor 6 player",
    "guitar rig player",
    "guitar rig 6 player",
    "guitar rig 7 player",
    "komplete start",
    "uvi workstation",
    "sine player",
})

_Subject = tuple[str, tuple[str, ...], str]
DemoRule = tuple[str, Callable[[_Subject], bool]]


def _contains_keyword(text: str) -> bool:
    return any(keyword in text for keyword in DEMO_KEYWORDS)


def _stem(filename: str) -> str:
    return filename.rsplit(".", 1)[0] if "." in filename else filename


DEMO_RULES: tuple[DemoRule, ...] = (
    ("filename-keyword", lambda s: _contains_keyword(s[0])),
    ("segment-keyword", lambda s: any(_contains_keyword(seg) for seg in s[1])),
    ("known-product-name", lambda s: s[2] in KNOWN_DEMO_PRODUCTS),
    ("known-product-filename", lambda s: _stem(s[0]) in KNOWN_DEMO_PRODUCTS),
    ("known-product-segment", lambda s: any(seg in KNOWN_DEMO_PRODUCTS for seg in s[1])),
)


def _subject(path: str | PurePath, display_name: str) -> _Subject:
    # Split on both separators so Windows paths work on any host.
    parts = [part for part in re.split(r"[\\/]+", str(path)) if part]
    filename = parts[-1].lower() if parts else ""
    segments = tuple(part.lower() for part in parts[:-1])
    return filename, segments, display_name.strip().lower()


def matching_demo_rule(path: str | PurePath, display_name: str) -> str | None:
    """Return the name of the first demo rule that fires, or None."""
    subject = _subject(path, display_name)
    for name, predicate in DEMO_RULES:
        if predicate(subject):
            return name
    return None


def is_demo(path: str | PurePath, display_name: str) -> bool:
    """True if the installation looks like a demo, trial or player build."""
    return matching_demo_rule(path, display_name) is not None
