"""Configuration objects and constants for the archiver."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
from urllib.parse import urlparse

DEFAULT_ORIGIN_URL = "https://am.ndhu.edu.tw/"
DEFAULT_ARCHIVE_ROOT = Path("ndhu_am_archive")
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEFAULT_ACCEPT_LANGUAGE = "zh-TW,zh;q=0.9,en-US;q=0.8,en;q=0.7"

CHROMIUM_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    # Subpixel glyph positioning produces garbled text in printed PDFs.
    "--disable-font-subpixel-positioning",
)


@dataclass
class ArchiveConfig:
    """Top-level settings that control crawling, snapshots and downloads."""

    origin_url: str = DEFAULT_ORIGIN_URL
    archive_root: Path = DEFAULT_ARCHIVE_ROOT
    log_filename: str = "crawler.log"
    timezone: str = "Asia/Taipei"
    locale: str = "zh-TW"
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE
    user_agent: str = DEFAULT_USER_AGENT
    viewport_width: int = 1920
    viewport_height: int = 1080
    navigation_timeout: float = 30.0
    scroll_step: int = 100
    scroll_interval: float = 0.1
    settle_delay: float = 2.0
    download_timeout: float = 30.0
    headless: bool = True
    home_label: str = "首頁"
    latest_news_label: str = "最新消息"
    gallery_label: str = "線上相簿"
    single_image_label: str = "單張圖片"
    excluded_asset_names: Tuple[str, ...] = ("169376631.pdf",)
    breadcrumb_selector: str = ".breadcrumb li"
    title_selector: str = "title"
    footer_url_label: str = "網址"
    footer_time_label: str = "列印時間"

    @property
    def origin_host(self) -> str:
        return (urlparse(self.origin_url).hostname or "").lower()

    @property
    def log_path(self) -> Path:
        return self.archive_root / self.log_filename

    @property
    def browser_args(self) -> Tuple[str, ...]:
        return (*CHROMIUM_ARGS, f"--lang={self.locale}")
