"""Breadcrumb-mirroring website archiver built on Playwright."""

__version__ = "0.1.0"
