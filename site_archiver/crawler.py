"""High-level orchestration: breadth-first crawl, snapshots and attachments."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional, Set

import requests
from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .assets import AssetDownloader, asset_filename, is_document_url
from .classify import LAZY_LOAD_CLASSES, SiteScope
from .config import ArchiveConfig
from .content import extract_links, extract_metadata
from .frontier import Frontier
from .models import (
    CrawlReport,
    DownloadTask,
    PageClassification,
    PageOutcome,
    PageStatus,
)
from .paths import resolve_archive_path
from .runlog import close_run_log, open_run_log
from .snapshot import snapshot_page

logger = logging.getLogger("site_archiver")

AUTO_SCROLL_SCRIPT = """
async ({step, interval}) => {
    await new Promise((resolve) => {
        let totalHeight = 0;
        const timer = setInterval(() => {
            const scrollHeight = document.documentElement.scrollHeight;
            window.scrollBy(0, step);
            totalHeight += step;
            if (totalHeight >= scrollHeight) {
                clearInterval(timer);
                resolve();
            }
        }, interval);
    });
}
"""


class SiteArchiver:
    """Sequential crawl over a single origin.

    The archiver owns its :class:`Frontier`; one browser context is open at
    a time and the attachments of a page are fetched concurrently before
    that context is closed.
    """

    def __init__(
        self,
        config: ArchiveConfig,
        run_log: logging.Logger,
        downloader: AssetDownloader,
    ) -> None:
        self.config = config
        self.run_log = run_log
        self.downloader = downloader
        self.scope = SiteScope(config.origin_host)
        self.frontier = Frontier(self.scope)

    def seed(self) -> bool:
        return self.frontier.enqueue(self.config.origin_url)

    async def _open_context(self, browser: Browser) -> BrowserContext:
        return await browser.new_context(
            locale=self.config.locale,
            user_agent=self.config.user_agent,
            viewport={
                "width": self.config.viewport_width,
                "height": self.config.viewport_height,
            },
            extra_http_headers={"Accept-Language": self.config.accept_language},
        )

    async def _auto_scroll(self, page: Page) -> None:
        """Scroll to the bottom in small steps so lazy content gets loaded."""
        try:
            await page.evaluate(
                AUTO_SCROLL_SCRIPT,
                {
                    "step": self.config.scroll_step,
                    "interval": int(self.config.scroll_interval * 1000),
                },
            )
            await page.wait_for_timeout(int(self.config.settle_delay * 1000))
        except Exception as exc:  # pylint: disable=broad-except
            self.run_log.error("Scrolling lazy-loaded page failed: %s", exc)

    def _route_links(self, html: str, destination: Path) -> List[DownloadTask]:
        """Queue crawlable links and return download tasks for documents.

        Relative links resolve against the origin. Documents sharing a file
        name are fetched once, since they would land on the same path.
        """
        tasks: List[DownloadTask] = []
        seen_filenames: Set[str] = set()
        for link in extract_links(html, self.config.origin_url):
            if is_document_url(link):
                filename = asset_filename(link)
                if filename not in seen_filenames:
                    seen_filenames.add(filename)
                    tasks.append(DownloadTask(url=link, destination=destination))
            elif self.scope.is_valid(link) and not self.frontier.is_visited(link):
                self.frontier.enqueue(link)
        return tasks

    async def _visit(
        self,
        browser: Browser,
        url: str,
        classification: PageClassification,
    ) -> PageOutcome:
        context = await self._open_context(browser)
        try:
            page = await context.new_page()
            page.set_default_navigation_timeout(self.config.navigation_timeout * 1000)
            await page.goto(url, wait_until="networkidle")

            if classification in LAZY_LOAD_CLASSES:
                await self._auto_scroll(page)

            html = await page.content()
            metadata = extract_metadata(html, url, self.config)
            archive_path = resolve_archive_path(
                self.config,
                metadata.breadcrumb,
                metadata.title,
                classification,
                url,
            )
            snapshot = await snapshot_page(
                page, url, archive_path, metadata.title, self.config, self.run_log
            )

            tasks = self._route_links(html, archive_path.directory)
            attachments = await self.downloader.download_all(tasks)
        finally:
            await context.close()

        return PageOutcome(
            url=url,
            classification=classification,
            status=PageStatus.DONE,
            directory=archive_path.directory,
            snapshot=snapshot,
            attachments=attachments,
        )

    async def process_next(self, browser: Browser) -> Optional[PageOutcome]:
        """Archive the next frontier URL.

        Returns ``None`` when the frontier is empty or the URL was already
        visited; otherwise the outcome, which is ``FAILED`` when anything in
        the page pipeline raised.
        """
        url = self.frontier.dequeue_next()
        if url is None or self.frontier.is_visited(url):
            return None

        self.frontier.mark_visited(url)
        classification = self.scope.classify(url)
        self.run_log.info("Processing page: %s", url)
        try:
            return await self._visit(browser, url, classification)
        except PlaywrightTimeoutError as exc:
            self.run_log.error("Timeout while loading %s: %s", url, exc)
            error = f"timeout: {exc}"
        except Exception as exc:  # pylint: disable=broad-except
            self.run_log.error("Processing page failed %s: %s", url, exc)
            logger.debug("Failure details for %s", url, exc_info=True)
            error = str(exc)
        return PageOutcome(
            url=url,
            classification=classification,
            status=PageStatus.FAILED,
            error=error,
        )

    async def run(self, browser: Browser) -> CrawlReport:
        """Drain the frontier and summarise the crawl."""
        start = time.perf_counter()
        report = CrawlReport()
        while self.frontier:
            outcome = await self.process_next(browser)
            if outcome is None:
                continue
            if outcome.status is PageStatus.DONE:
                report.done.append(outcome.url)
            else:
                report.failed.append(outcome.url)
            report.attachments += sum(1 for asset in outcome.attachments if asset.ok)

        report.visited = len(self.frontier.visited)
        report.total_seconds = time.perf_counter() - start
        self.run_log.info("Crawl finished")
        self.run_log.info("Visited %d pages in total", report.visited)
        return report


async def archive_site(config: ArchiveConfig) -> CrawlReport:
    """Launch Chromium and archive ``config.origin_url`` end to end.

    Raises :class:`~site_archiver.errors.DirectoryCreationError` when the
    archive root or its run log cannot be created.
    """
    run_log = open_run_log(config.log_path, config.timezone)
    try:
        with requests.Session() as session:
            archiver = SiteArchiver(config, run_log, AssetDownloader(session, config, run_log))
            archiver.seed()
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(
                    headless=config.headless,
                    args=list(config.browser_args),
                )
                try:
                    return await archiver.run(browser)
                finally:
                    await browser.close()
    finally:
        close_run_log(run_log)
