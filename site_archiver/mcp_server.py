"""MCP server exposing the site archiver as a tool."""

from __future__ import annotations

import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from .config import DEFAULT_ORIGIN_URL, ArchiveConfig
from .crawler import archive_site
from .models import CrawlReport

logger = logging.getLogger("site_archiver.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="site-archiver")


def format_report(report: CrawlReport, archive_root: Path) -> str:
    lines = [
        f"Archive written to {archive_root}",
        f"Visited pages: {report.visited}",
        f"Failed pages: {len(report.failed)}",
        f"Attachments: {report.attachments}",
    ]
    lines.extend(f"- failed: {url}" for url in report.failed)
    return "\n".join(lines)


@mcp.tool()
async def archive(
    output: str,
    origin_url: str = DEFAULT_ORIGIN_URL,
) -> str:
    """Crawl a website, saving each page as PDF under ``output``."""

    archive_root = Path(output).expanduser().resolve()
    config = ArchiveConfig(origin_url=origin_url, archive_root=archive_root)
    report = await archive_site(config)
    return format_report(report, archive_root)


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
