"""Print rendered pages to PDF with a provenance footer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from .config import ArchiveConfig
from .errors import ArchiverError, SnapshotError
from .models import ArchivePath
from .paths import leaf_name
from .runlog import local_timestamp

logger = logging.getLogger("site_archiver.snapshot")

PDF_FORMAT = "A4"
PDF_MARGIN = {"top": "20px", "bottom": "20px", "left": "20px", "right": "20px"}
FOOTER_RESERVED_SPACE = "100px"

INJECT_FOOTER_SCRIPT = """
({url, timestamp, urlLabel, timeLabel, reserved}) => {
    const footer = document.createElement('div');
    footer.id = 'pdf-footer';
    footer.style.position = 'fixed';
    footer.style.bottom = '0';
    footer.style.left = '0';
    footer.style.right = '0';
    footer.style.padding = '10px';
    footer.style.borderTop = '1px solid #ccc';
    footer.style.backgroundColor = '#f9f9f9';
    footer.style.fontSize = '10px';
    footer.style.color = '#666';
    footer.appendChild(document.createTextNode(`${urlLabel}: ${url}`));
    footer.appendChild(document.createElement('br'));
    footer.appendChild(document.createTextNode(`${timeLabel}: ${timestamp}`));
    document.body.appendChild(footer);
    document.body.style.paddingBottom = reserved;
}
"""

FORCE_BACKGROUNDS_SCRIPT = """
() => {
    document.querySelectorAll('*').forEach(el => {
        const style = window.getComputedStyle(el);
        if (style.backgroundColor !== 'rgba(0, 0, 0, 0)' &&
            style.backgroundColor !== 'transparent') {
            el.style.webkitPrintColorAdjust = 'exact';
            el.style.printColorAdjust = 'exact';
        }
    });
}
"""


def snapshot_filename(title: str, url: str) -> str:
    return f"{leaf_name(title, url)}.pdf"


async def _render(
    page: Page,
    url: str,
    destination: Path,
    config: ArchiveConfig,
) -> None:
    try:
        await page.evaluate(
            INJECT_FOOTER_SCRIPT,
            {
                "url": url,
                "timestamp": local_timestamp(config.timezone),
                "urlLabel": config.footer_url_label,
                "timeLabel": config.footer_time_label,
                "reserved": FOOTER_RESERVED_SPACE,
            },
        )
        await page.evaluate(FORCE_BACKGROUNDS_SCRIPT)
        await page.pdf(
            path=str(destination),
            format=PDF_FORMAT,
            print_background=True,
            prefer_css_page_size=True,
            margin=PDF_MARGIN,
        )
    except (PlaywrightError, OSError) as exc:
        raise SnapshotError(str(exc)) from exc


async def snapshot_page(
    page: Page,
    url: str,
    archive_path: ArchivePath,
    title: str,
    config: ArchiveConfig,
    run_log: logging.Logger,
) -> Optional[Path]:
    """Save the current page as a PDF inside ``archive_path``.

    Returns the written file, or ``None`` when rendering failed; failures are
    logged and never propagate to the crawl loop.
    """
    filename = snapshot_filename(title, url)
    try:
        directory = archive_path.ensure()
        destination = directory / filename
        await _render(page, url, destination, config)
    except ArchiverError as exc:
        run_log.error("Saving page as PDF failed %s: %s", url, exc)
        return None
    run_log.info("Saved page as PDF: %s", filename)
    logger.debug("Snapshot for %s written to %s", url, destination)
    return destination
