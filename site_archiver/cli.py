"""Command-line entry point for the site archiver."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import DEFAULT_ARCHIVE_ROOT, DEFAULT_ORIGIN_URL, ArchiveConfig
from .crawler import archive_site
from .errors import DirectoryCreationError

logger = logging.getLogger("site_archiver.cli")


def _timezone(value: str) -> str:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise argparse.ArgumentTypeError(f"unknown timezone: {value}") from exc
    return value


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Crawl a single-origin website with Playwright, save every page as PDF "
            "and mirror its breadcrumb hierarchy on disk."
        ),
    )
    parser.add_argument(
        "--origin",
        default=DEFAULT_ORIGIN_URL,
        help="Start URL; only pages on its host are crawled",
    )
    parser.add_argument(
        "--output",
        default=DEFAULT_ARCHIVE_ROOT,
        type=Path,
        help="Directory where the archive tree and run log are written",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Navigation timeout in seconds",
    )
    parser.add_argument(
        "--timezone",
        default="Asia/Taipei",
        type=_timezone,
        help="Timezone used for log lines and snapshot footers",
    )
    parser.add_argument(
        "--headful",
        action="store_true",
        help="Show the browser window while crawling",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(list(sys.argv[1:] if argv is None else argv))


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
        force=True,
    )

    config = ArchiveConfig(
        origin_url=args.origin,
        archive_root=Path(args.output).resolve(),
        navigation_timeout=args.timeout,
        timezone=args.timezone,
        headless=not args.headful,
    )

    try:
        report = asyncio.run(archive_site(config))
    except DirectoryCreationError as exc:
        logger.error("Cannot prepare archive directory: %s", exc)
        return 1

    logger.info(
        "Finished in %.2fs (%d visited, %d failed, %d attachments)",
        report.total_seconds,
        report.visited,
        len(report.failed),
        report.attachments,
    )
    if args.verbose:
        for url in report.failed:
            logger.debug("Failed: %s", url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
