"""Derive archive directories from page metadata."""

from __future__ import annotations

from typing import List, Sequence

from .config import ArchiveConfig
from .models import ArchivePath, PageClassification
from .utils import safe_url_filename, sanitize_title


def leaf_name(title: str, url: str) -> str:
    """Name shared by a page's own directory and its snapshot file."""
    return f"{sanitize_title(title)}_{safe_url_filename(url)}"


def resolve_archive_path(
    config: ArchiveConfig,
    breadcrumb: Sequence[str],
    title: str,
    classification: PageClassification,
    url: str,
) -> ArchivePath:
    """Build the archive location of a page and create its leaf directory.

    News articles are filed under a single fixed segment no matter what
    their breadcrumb says; every other page mirrors its breadcrumb. Gallery
    pages get the gallery segments appended. Redirect-style module pages
    stop there and write into the resulting directory without creating it.
    """
    segments: List[str] = []
    if classification is PageClassification.NEWS_MODULE:
        segments.append(config.latest_news_label)
    elif breadcrumb:
        segments.extend(breadcrumb)

    if classification is PageClassification.GALLERY_INDEX:
        segments.append(config.gallery_label)
    if classification is PageClassification.SINGLE_IMAGE:
        segments.extend((config.gallery_label, config.single_image_label))

    if classification is PageClassification.REDIRECT_MODULE:
        return ArchivePath(root=config.archive_root, segments=tuple(segments))

    segments.append(leaf_name(title, url))
    path = ArchivePath(root=config.archive_root, segments=tuple(segments), leaf=True)
    path.ensure()
    return path
