"""Heuristic classification of plugins without curated metadata.

Submodules
----------
- ``rules``: Ordered keyword rule tables (category cascade, templates, tags).
- ``classifier``: ``classify``, ``describe`` and ``tag``.
- ``demo``: Demo / trial / player build detection.
"""

from audioshelf.classify.classifier import Classification, classify, describe, tag
from audioshelf.classify.demo import is_demo

__all__ = [
    "Classification",
    "classify",
    "describe",
    "is_demo",
    "tag",
]
