"""Stand-ins for the Playwright objects used by the archiver."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from site_archiver.models import AssetResult


class FakePage:
    def __init__(self, site: "FakeBrowser") -> None:
        self.site = site
        self.url: Optional[str] = None
        self.evaluated: List[tuple] = []
        self.pdf_calls: List[dict] = []
        self.navigation_timeout: Optional[float] = None
        self.waits: List[int] = []

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self.navigation_timeout = timeout

    async def goto(self, url: str, wait_until: str = "load") -> None:
        self.site.navigations.append((url, wait_until))
        if url in self.site.timeouts:
            raise PlaywrightTimeoutError(f"Timeout exceeded navigating to {url}")
        self.url = url

    async def evaluate(self, script: str, arg=None):
        self.evaluated.append((script, arg))
        return None

    async def wait_for_timeout(self, timeout: int) -> None:
        self.waits.append(timeout)

    async def content(self) -> str:
        return self.site.pages.get(self.url, "<html><head><title>Empty</title></head></html>")

    async def pdf(self, **options) -> bytes:
        if self.site.pdf_error is not None:
            raise self.site.pdf_error
        self.pdf_calls.append(options)
        Path(options["path"]).write_bytes(b"%PDF-1.4\n")
        return b""


class FakeContext:
    def __init__(self, site: "FakeBrowser", options: dict) -> None:
        self.site = site
        self.options = options
        self.closed = False
        self.page: Optional[FakePage] = None

    async def new_page(self) -> FakePage:
        self.page = FakePage(self.site)
        return self.page

    async def close(self) -> None:
        self.closed = True
        self.site.open_contexts -= 1


class FakeBrowser:
    """Serves canned HTML per URL and records every context it opens."""

    def __init__(self, pages: Optional[Dict[str, str]] = None) -> None:
        self.pages = pages or {}
        self.timeouts: set = set()
        self.pdf_error: Optional[Exception] = None
        self.contexts: List[FakeContext] = []
        self.navigations: List[tuple] = []
        self.open_contexts = 0
        self.max_open_contexts = 0

    async def new_context(self, **options) -> FakeContext:
        context = FakeContext(self, options)
        self.contexts.append(context)
        self.open_contexts += 1
        self.max_open_contexts = max(self.max_open_contexts, self.open_contexts)
        return context


class RecordingDownloader:
    """Collects download tasks instead of fetching them."""

    def __init__(self) -> None:
        self.tasks = []

    async def download_all(self, tasks):
        self.tasks.extend(tasks)
        return [AssetResult(url=task.url, path=task.destination / "stub") for task in tasks]
