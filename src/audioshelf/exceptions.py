"""AudioShelf exception hierarchy.

All public exceptions inherit from AudioShelfError, giving callers a single
base class to catch when they want to handle any AudioShelf-specific failure
without swallowing unrelated errors.

The consolidation, matching, classification and linking stages never raise
on data: sources that cannot be processed are skipped with a log entry.
These exceptions belong to the I/O edges (catalog, snapshot, config, and
project container decoding).
"""


class AudioShelfError(Exception):
    """Base exception for all AudioShelf errors."""


class CatalogError(AudioShelfError):
    """Raised when a metadata catalog document cannot be read.

    Covers malformed JSON, a ``plugins`` section that is not a mapping,
    and entries that are not objects.
    """


class InventoryError(AudioShelfError):
    """Raised when a persisted inventory snapshot is malformed."""


class ProjectParseError(AudioShelfError):
    """Raised when a project file container cannot be decoded.

    Covers truncated gzip streams and files that are neither gzip nor
    plain text. The project scanner catches it, logs a warning and moves
    on to the next file.
    """


class ConfigError(AudioShelfError):
    """Raised for invalid configuration files.

    Covers YAML syntax errors and keys holding values of the wrong type.
    """
