"""HTML extraction of breadcrumbs, titles and outbound links."""

from __future__ import annotations

from typing import List, Tuple
from urllib.parse import urldefrag, urljoin

from bs4 import BeautifulSoup

from .config import ArchiveConfig
from .models import PageMetadata
from .utils import sanitize_title

_SKIPPED_SCHEMES = ("javascript:", "mailto:", "tel:", "data:")


def _extract_breadcrumb(soup: BeautifulSoup, config: ArchiveConfig) -> Tuple[str, ...]:
    """Return sanitized breadcrumb segments without the home entry."""
    items: List[str] = []
    for element in soup.select(config.breadcrumb_selector):
        text = element.get_text().strip()
        if text and text != config.home_label:
            items.append(sanitize_title(text))
    return tuple(items)


def _extract_title(soup: BeautifulSoup, config: ArchiveConfig) -> str:
    element = soup.select_one(config.title_selector)
    text = element.get_text() if element else ""
    return sanitize_title(text)


def extract_metadata(html: str, url: str, config: ArchiveConfig) -> PageMetadata:
    """Read the title and breadcrumb trail of a rendered page."""
    soup = BeautifulSoup(html, "html.parser")
    return PageMetadata(
        source_url=url,
        title=_extract_title(soup, config),
        breadcrumb=_extract_breadcrumb(soup, config),
    )


def extract_links(html: str, base_url: str) -> List[str]:
    """Collect anchor targets resolved against ``base_url``, without fragments."""
    soup = BeautifulSoup(html, "html.parser")
    links: List[str] = []
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or href.startswith("#") or href.lower().startswith(_SKIPPED_SCHEMES):
            continue
        absolute, _ = urldefrag(urljoin(base_url, href))
        links.append(absolute)
    return links
