"""URL validation and page-type classification for the archived origin."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlparse

from .models import PageClassification

# /p/406-1038-193282,r4551.php?Lang=zh-tw
NEWS_MODULE_PATTERN = re.compile(r"^/p/406-\d+-\d+,\w+\.php\?Lang=[\w-]+$")
# /p/132-1038-2588.php?Lang=zh-tw
GALLERY_INDEX_PATTERN = re.compile(r"^/p/132-\d+-\d+\.php\?Lang=[\w-]+$")
# /var/file/38/1038/gallery/86/2586/gallery_2586_765420_51686.jpg
SINGLE_IMAGE_PATTERN = re.compile(r"^/var/file/\d+/\d+/gallery/")
# /p/16-1038-193282.php?Lang=zh-tw and /p/403-1038-1234-1.php?Lang=zh-tw
REDIRECT_MODULE_PATTERNS = (
    re.compile(r"^/p/16-\d+-\d+\.php\?Lang=[\w-]+$"),
    re.compile(r"^/p/403-\d+-\d+-\d+\.php\?Lang=[\w-]+$"),
)

# Pages whose content only appears after scrolling.
LAZY_LOAD_CLASSES = frozenset(
    {
        PageClassification.REDIRECT_MODULE,
        PageClassification.GALLERY_INDEX,
        PageClassification.SINGLE_IMAGE,
    }
)


def _path_and_query(url: str) -> str:
    parsed = urlparse(url)
    if parsed.query:
        return f"{parsed.path}?{parsed.query}"
    return parsed.path


@dataclass(frozen=True)
class SiteScope:
    """The single host the archiver may traverse."""

    origin_host: str

    def is_valid(self, url: str) -> bool:
        try:
            parsed = urlparse(url)
            host = parsed.hostname
        except ValueError:
            return False
        if parsed.scheme not in ("http", "https") or not host:
            return False
        return host.lower() == self.origin_host.lower()

    def classify(self, url: str) -> PageClassification:
        """Map a URL to exactly one page type; off-origin URLs are generic."""
        if not self.is_valid(url):
            return PageClassification.GENERIC
        target = _path_and_query(url)
        if NEWS_MODULE_PATTERN.match(target):
            return PageClassification.NEWS_MODULE
        if GALLERY_INDEX_PATTERN.match(target):
            return PageClassification.GALLERY_INDEX
        if SINGLE_IMAGE_PATTERN.match(target):
            return PageClassification.SINGLE_IMAGE
        if any(pattern.match(target) for pattern in REDIRECT_MODULE_PATTERNS):
            return PageClassification.REDIRECT_MODULE
        return PageClassification.GENERIC
