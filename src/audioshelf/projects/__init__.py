"""Project file parsing and usage linking.

Submodules
----------
- ``models``: ``ExtractedProject``.
- ``filters``: Built-in device list and junk-name rules.
- ``extractor``: Device-scoped plugin extraction from project XML.
- ``reader``: ``.als`` decoding and project directory scanning.
- ``linker``: Joins extracted projects onto the inventory.
"""

from audioshelf.projects.extractor import extract_loaded_plugins, extract_project_name
from audioshelf.projects.filters import clean_plugin_name
from audioshelf.projects.linker import link
from audioshelf.projects.models import ExtractedProject
from audioshelf.projects.reader import parse_project, read_project_document, scan_projects

__all__ = [
    "ExtractedProject",
    "clean_plugin_name",
    "extract_loaded_plugins",
    "extract_project_name",
    "link",
    "parse_project",
    "read_project_document",
    "scan_projects",
]
