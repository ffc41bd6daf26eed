"""Exception types raised inside the archiver."""

from __future__ import annotations


class ArchiverError(Exception):
    """Base class for archiver failures."""


class DirectoryCreationError(ArchiverError):
    """An archive directory or the run log could not be created."""


class SnapshotError(ArchiverError):
    """Rendering a page to PDF failed."""


class DownloadError(ArchiverError):
    """Fetching or storing an attachment failed."""
