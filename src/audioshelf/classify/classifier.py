"""Heuristic category, description and tag generation.

Used in two places: the consolidator seeds every new entity's category
with ``classify``, and the inventory pipeline fills ``description`` and
``tags`` for plugins the metadata catalog does not know. Catalog seeding
reuses the same functions to draft entries for human review.

All three functions are deterministic: identical inputs always yield
identical outputs, so re-running a classification pass never disturbs
curated metadata.
"""

from __future__ import annotations

from dataclasses import dataclass

from audioshelf.classify.rules import (
    CATEGORY_DESCRIPTIONS,
    CATEGORY_RULES,
    CATEGORY_TAGS,
    CONTENT_TAG_RULES,
    DEMO_TAGS,
    DESCRIPTION_TEMPLATES,
    OTHER_CATEGORY,
    SUBCATEGORY_TAGS,
    Rule,
)

_UNKNOWN_VENDORS = {"", "unknown"}


@dataclass(frozen=True)
class Classification:
    """Result of the category cascade."""

    category: str
    subcategory: str | None
    rule: str | None = None


def first_matching_rule(display_name: str) -> Rule | None:
    """Return the highest-priority rule matching the display name, if any."""
    text = display_name.lower()
    for rule in CATEGORY_RULES:
        if rule.matches(text):
            return rule
    return None


def classify(display_name: str, vendor: str | None = None) -> Classification:
    """Derive a coarse category and subcategory from a plugin's name.

    Args:
        display_name: Plugin display name.
        vendor: Vendor name. Accepted for signature symmetry with
            ``describe``; the cascade reads the name only.

    Returns:
        The first matching rule's classification, or ``Other``/``None``.
    """
    rule = first_matching_rule(display_name)
    if rule is None:
        return Classification(OTHER_CATEGORY, None)
    return Classification(rule.category, rule.subcategory, rule.name)


def _has_vendor(vendor: str | None) -> bool:
    return (vendor or "").strip().lower() not in _UNKNOWN_VENDORS


def describe(
    display_name: str,
    vendor: str | None,
    category: str | None,
    subcategory: str | None,
) -> str:
    """Build a template description for a plugin without curated metadata.

    Subcategory templates take precedence, then category templates; when
    neither exists the generic "<category> by <vendor>." sentence is used.
    """
    template = DESCRIPTION_TEMPLATES.get(subcategory or "") or CATEGORY_DESCRIPTIONS.get(
        category or ""
    )
    if template is None:
        return f"{category or 'Audio plugin'} by {vendor if _has_vendor(vendor) else 'Unknown'}."
    if _has_vendor(vendor):
        return f"{template} By {vendor}."
    return template


def tag(
    display_name: str,
    category: str | None,
    subcategory: str | None,
    is_demo: bool = False,
) -> set[str]:
    """Generate category-derived and content tags for a plugin."""
    tags: set[str] = set()
    tags.update(CATEGORY_TAGS.get((category or "").lower(), ()))
    tags.update(SUBCATEGORY_TAGS.get((subcategory or "").lower(), ()))

    text = display_name.lower()
    for pattern, content_tags in CONTENT_TAG_RULES:
        if pattern.search(text):
            tags.update(content_tags)
    if is_demo:
        tags.update(DEMO_TAGS)
    return tags
