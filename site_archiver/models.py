"""Data models used throughout the archiver pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import DirectoryCreationError


class PageClassification(enum.Enum):
    """Structural page type derived from the shape of a URL."""

    NEWS_MODULE = "news_module"
    GALLERY_INDEX = "gallery_index"
    SINGLE_IMAGE = "single_image"
    REDIRECT_MODULE = "redirect_module"
    GENERIC = "generic"


class PageStatus(enum.Enum):
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class PageMetadata:
    """Breadcrumb trail and title read from a rendered page."""

    source_url: str
    title: str
    breadcrumb: Tuple[str, ...]


@dataclass(frozen=True)
class ArchivePath:
    """Location of a page inside the archive tree.

    ``leaf`` is false for pages that write into their caller's directory
    instead of getting a directory of their own.
    """

    root: Path
    segments: Tuple[str, ...] = ()
    leaf: bool = False

    @property
    def directory(self) -> Path:
        return self.root.joinpath(*self.segments)

    def ensure(self) -> Path:
        """Create the directory and any missing ancestors."""
        directory = self.directory
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationError(f"Cannot create {directory}: {exc}") from exc
        return directory


@dataclass(frozen=True)
class DownloadTask:
    """One attachment to fetch into a resolved archive directory."""

    url: str
    destination: Path


@dataclass
class AssetResult:
    """Result of a single attachment download."""

    url: str
    path: Optional[Path] = None
    skipped: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.path is not None


@dataclass
class PageOutcome:
    """What happened while archiving one URL."""

    url: str
    classification: PageClassification
    status: PageStatus
    directory: Optional[Path] = None
    snapshot: Optional[Path] = None
    attachments: List[AssetResult] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class CrawlReport:
    """Summary of a finished crawl."""

    visited: int = 0
    done: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    attachments: int = 0
    total_seconds: float = 0.0
