"""Recover the plugins actually loaded in an Ableton Live set.

A decompressed ``.als`` document is XML. Third-party plugins that are
instantiated on a track appear as a device wrapper holding a typed
plugin-info block::

    <PluginDevice Id="3">
      <PluginDesc>
        <Vst3PluginInfo Id="0">
          <Name Value="Helix Native" />
        </Vst3PluginInfo>
      </PluginDesc>
    </PluginDevice>

The same document also records the user's browser navigation with
superficially similar vocabulary (``BrowserContentPath``,
``BranchSourceContext``, preset references). Those are history, not
loaded plugins.

Extraction therefore works on the parsed tree, not on the text: every
plugin-info element is accepted only when, walking up its ancestors, a
device wrapper is reached before any browser/history scope or the
document root.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from audioshelf.projects.filters import clean_plugin_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InfoShape:
    """Where a plugin-info block keeps the plugin's name.

    Attributes:
        tag: Plugin-info element tag.
        fields: Direct-child element names tried in order. The value is
            the child's ``Value`` attribute, or its text.
    """

    tag: str
    fields: tuple[str, ...]


INFO_SHAPES: tuple[InfoShape, ...] = (
    InfoShape("Vst3PluginInfo", ("Name",)),
    InfoShape("VstPluginInfo", ("FileName", "PlugName")),
    InfoShape("AuPluginInfo", ("Name",)),
)

_SHAPES_BY_TAG: dict[str, InfoShape] = {shape.tag: shape for shape in INFO_SHAPES}

# Elements that instantiate a plugin on a track.
DEVICE_TAGS: frozenset[str] = frozenset({"PluginDevice", "AuPluginDevice"})

# Elements that scope browser navigation and preset history.
HISTORY_TAGS: frozenset[str] = frozenset({
    "BrowserContentPath",
    "BranchSourceContext",
    "SourceContext",
    "PresetRef",
    "LastPresetRef",
    "FilePresetRef",
    "PluginPresetRef",
    "BrowserState",
    "ViewStates",
})


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_document(document: str) -> ET.Element | None:
    """Parse project XML, returning None when it is not well-formed."""
    try:
        return ET.fromstring(document)
    except ET.ParseError as exc:
        logger.warning("Project document is not valid XML: %s", exc)
        return None


def _parent_map(root: ET.Element) -> dict[ET.Element, ET.Element]:
    return {child: parent for parent in root.iter() for child in parent}


def is_device_scoped(element: ET.Element, parents: dict[ET.Element, ET.Element]) -> bool:
    """True if the nearest enclosing scope of ``element`` is a device wrapper."""
    node = parents.get(element)
    while node is not None:
        if node.tag in DEVICE_TAGS:
            return True
        if node.tag in HISTORY_TAGS:
            return False
        node = parents.get(node)
    return False


def _field_value(info: ET.Element, field: str) -> str | None:
    child = info.find(field)
    if child is None:
        return None
    value = child.get("Value")
    if value is None:
        value = child.text
    return value


def _raw_name(info: ET.Element, shape: InfoShape) -> str | None:
    for field in shape.fields:
        value = _field_value(info, field)
        if value and value.strip():
            return value
    return None


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


def loaded_plugins_from_tree(root: ET.Element) -> list[str]:
    """Sorted unique names of the device-scoped plugins in a parsed tree."""
    parents = _parent_map(root)
    names: set[str] = set()
    for element in root.iter():
        shape = _SHAPES_BY_TAG.get(element.tag)
        if shape is None:
            continue
        if not is_device_scoped(element, parents):
            logger.debug("Skipping %s outside a device wrapper", element.tag)
            continue
        raw = _raw_name(element, shape)
        cleaned = clean_plugin_name(raw)
        if cleaned is None:
            if raw:
                logger.debug("Filtered plugin name %r", raw)
            continue
        names.add(cleaned)
    return sorted(names)


def extract_loaded_plugins(document: str) -> list[str] | None:
    """Extract the plugins loaded as devices in a decompressed project.

    Args:
        document: Decompressed project XML text.

    Returns:
        Sorted, case-sensitively de-duplicated plugin names, or None when
        the document is not parseable XML (the caller skips the project).
    """
    root = parse_document(document)
    if root is None:
        return None
    return loaded_plugins_from_tree(root)


def extract_project_name(root: ET.Element, fallback: str) -> str:
    """Project title from the document, else ``fallback``.

    Checks a ``Name``/``Title`` attribute on the root element and on its
    ``LiveSet`` child, then a ``Title`` element's ``Value``.
    """
    candidates: list[ET.Element] = [root]
    live_set = root if root.tag == "LiveSet" else root.find("LiveSet")
    if live_set is not None and live_set is not root:
        candidates.append(live_set)

    for element in candidates:
        for attribute in ("Name", "Title"):
            value = (element.get(attribute) or "").strip()
            if value:
                return value

    title = root.find(".//Title")
    if title is not None:
        value = (title.get("Value") or title.text or "").strip()
        if value:
            return value
    return fallback
