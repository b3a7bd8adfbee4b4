"""Project file discovery and decoding.

Ableton ``.als`` files are gzip-compressed XML. ``read_project_document``
turns one file into text (plain, uncompressed XML is accepted as well),
``parse_project`` builds an ``ExtractedProject`` from it, and
``scan_projects`` walks directory trees and parses every project found.

A file that cannot be read, decompressed or parsed is skipped with a
warning; the batch always continues.
"""

from __future__ import annotations

import gzip
import logging
import os
import zlib
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from audioshelf.exceptions import ProjectParseError
from audioshelf.projects.extractor import (
    extract_project_name,
    loaded_plugins_from_tree,
    parse_document,
)
from audioshelf.projects.models import ExtractedProject

logger = logging.getLogger(__name__)

PROJECT_EXTENSIONS: tuple[str, ...] = (".als",)

_GZIP_MAGIC = b"\x1f\x8b"


def decode_project_bytes(data: bytes) -> str:
    """Decompress (when gzip) and decode project bytes to text.

    Raises:
        ProjectParseError: On a corrupt gzip stream or undecodable text.
    """
    if data[:2] == _GZIP_MAGIC:
        try:
            data = gzip.decompress(data)
        except (OSError, EOFError, zlib.error) as exc:
            raise ProjectParseError(f"Corrupt gzip stream: {exc}") from exc
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ProjectParseError(f"Project is not UTF-8 text: {exc}") from exc


def read_project_document(path: Path) -> str:
    """Read and decode one project file.

    Raises:
        ProjectParseError: If the file cannot be read or decoded.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ProjectParseError(f"Cannot read {path}: {exc}") from exc
    return decode_project_bytes(data)


def parse_project(path: Path) -> ExtractedProject | None:
    """Parse one project file, or return None if it must be skipped."""
    try:
        document = read_project_document(path)
        modified = datetime.fromtimestamp(path.stat().st_mtime)
    except (ProjectParseError, OSError) as exc:
        logger.warning("Failed to read project %s: %s", path, exc)
        return None

    root = parse_document(document)
    if root is None:
        logger.warning("Skipping project %s: not a valid project document", path)
        return None

    plugins = loaded_plugins_from_tree(root)
    project = ExtractedProject(
        name=extract_project_name(root, fallback=path.stem),
        file_path=path,
        file_name=path.name,
        last_modified_at=modified,
        plugin_names=tuple(plugins),
    )
    logger.debug("Project %s loads %d plugins: %s", project.name, len(plugins), plugins)
    return project


def find_project_files(
    root: Path,
    extensions: Iterable[str] = PROJECT_EXTENSIONS,
) -> list[Path]:
    """Recursively find project files under ``root``, sorted by path.

    Unreadable subdirectories are logged and skipped. Ableton's
    ``Backup`` folders are included like any other directory.
    """
    suffixes = {ext.lower() for ext in extensions}
    found: list[Path] = []

    def _on_error(exc: OSError) -> None:
        logger.warning("Cannot read directory %s: %s", exc.filename, exc.strerror)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames.sort()
        for filename in filenames:
            if Path(filename).suffix.lower() in suffixes:
                found.append(Path(dirpath) / filename)
    return sorted(found)


def scan_projects(
    roots: Iterable[Path],
    extensions: Iterable[str] = PROJECT_EXTENSIONS,
) -> list[ExtractedProject]:
    """Find and parse all project files under the given roots."""
    extensions = tuple(extensions)
    projects: list[ExtractedProject] = []
    for root in roots:
        if not root.is_dir():
            logger.warning("Project directory does not exist: %s", root)
            continue
        files = find_project_files(root, extensions)
        logger.info("Found %d project files in %s", len(files), root)
        for path in files:
            project = parse_project(path)
            if project is not None:
                projects.append(project)
    logger.info("Successfully parsed %d projects", len(projects))
    return projects
