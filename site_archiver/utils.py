"""Utility helpers for string normalization and path handling."""

from __future__ import annotations

import re
from urllib.parse import urlparse

CONTROL_CHARS_PATTERN = re.compile(r"[\u0000-\u001F\u007F-\u009F]")
RESERVED_CHARS_PATTERN = re.compile(r'[/\\?*|":<>]')
DEFAULT_LABEL = "untitled"


def replace_reserved(value: str) -> str:
    """Swap characters that are illegal in file names for underscores."""
    return RESERVED_CHARS_PATTERN.sub("_", value)


def sanitize_title(value: str | None, fallback: str = DEFAULT_LABEL) -> str:
    """Turn page text into a single, filesystem-safe path segment.

    Control characters are dropped, reserved characters become ``_`` and the
    result is trimmed. Text that ends up empty yields ``fallback``.
    """
    text = CONTROL_CHARS_PATTERN.sub("", value or "")
    text = replace_reserved(text).strip()
    return text or fallback


def safe_url_filename(url: str) -> str:
    """Flatten a URL's path and query into one file-name fragment."""
    parsed = urlparse(url)
    name = parsed.path
    if parsed.query:
        name += "?" + parsed.query
    return replace_reserved(name)
