"""Attachment downloading for document links found on archived pages."""

from __future__ import annotations

import asyncio
import logging
from pathlib import PurePosixPath
from typing import List, Optional, Sequence
from urllib.parse import unquote, urlparse

import requests
from filetype import guess

from .config import ArchiveConfig
from .errors import DirectoryCreationError, DownloadError
from .models import AssetResult, DownloadTask
from .utils import replace_reserved

logger = logging.getLogger("site_archiver.assets")

DOCUMENT_EXTENSIONS = (".pdf", ".doc", ".docx", ".xls", ".xlsx")

# Signature-based extension that each document extension may sniff as.
_EXPECTED_KINDS = {
    ".pdf": {"pdf"},
    ".doc": {"doc"},
    ".docx": {"docx", "zip"},
    ".xls": {"xls", "doc"},
    ".xlsx": {"xlsx", "zip"},
}


def is_document_url(url: str) -> bool:
    """True when the URL path ends in a downloadable document extension."""
    return urlparse(url).path.lower().endswith(DOCUMENT_EXTENSIONS)


def asset_filename(url: str) -> str:
    """Sanitized basename of the URL path."""
    return replace_reserved(unquote(PurePosixPath(urlparse(url).path).name))


def detect_document_kind(data: bytes) -> Optional[str]:
    """Detect the file type from its signature; returns a lowercase extension."""
    kind = guess(data)
    if kind:
        return kind.extension.lower()
    return None


class AssetDownloader:
    """Fetch attachments with ``requests`` and store them in archive directories."""

    def __init__(
        self,
        session: requests.Session,
        config: ArchiveConfig,
        run_log: logging.Logger,
    ) -> None:
        self.session = session
        self.config = config
        self.run_log = run_log

    def _fetch(self, url: str) -> bytes:
        try:
            resp = self.session.get(url, timeout=self.config.download_timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise DownloadError(str(exc)) from exc
        return resp.content

    def _check_kind(self, url: str, data: bytes) -> None:
        suffix = PurePosixPath(urlparse(url).path.lower()).suffix
        detected = detect_document_kind(data)
        expected = _EXPECTED_KINDS.get(suffix)
        if expected and detected not in expected:
            logger.warning(
                "Attachment %s does not look like %s (detected %s)",
                url,
                suffix,
                detected or "unknown",
            )

    def download(self, task: DownloadTask) -> AssetResult:
        """Download one attachment; failures are logged, never raised."""
        filename = asset_filename(task.url)
        if filename in self.config.excluded_asset_names:
            self.run_log.info("Skip attachment download: %s", filename)
            return AssetResult(url=task.url, skipped=True)
        try:
            data = self._fetch(task.url)
            self._check_kind(task.url, data)
            try:
                task.destination.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise DirectoryCreationError(str(exc)) from exc
            destination = task.destination / filename
            try:
                destination.write_bytes(data)
            except OSError as exc:
                raise DownloadError(f"cannot write {destination}: {exc}") from exc
        except (DownloadError, DirectoryCreationError) as exc:
            self.run_log.error("Attachment download failed %s: %s", task.url, exc)
            return AssetResult(url=task.url, error=str(exc))
        self.run_log.info("Attachment downloaded: %s", filename)
        return AssetResult(url=task.url, path=destination)

    async def download_all(self, tasks: Sequence[DownloadTask]) -> List[AssetResult]:
        """Run every download concurrently and wait for all of them."""
        if not tasks:
            return []
        results = await asyncio.gather(
            *(asyncio.to_thread(self.download, task) for task in tasks),
            return_exceptions=True,
        )
        collected: List[AssetResult] = []
        for task, result in zip(tasks, results):
            if isinstance(result, BaseException):
                self.run_log.error("Attachment download failed %s: %s", task.url, result)
                collected.append(AssetResult(url=task.url, error=str(result)))
            else:
                collected.append(result)
        return collected
