# site_mapper/errors.py
"""
Error taxonomy for the SiteMapper crawl engine.

Only :class:`SeedParseError` ever reaches the caller of the core; every other
error is absorbed by the task that detected it and surfaced through logging.
"""
from __future__ import annotations

from typing import Optional

__all__ = (
    "SiteMapperError",
    "SeedParseError",
    "FetchError",
    "ReferenceParseError",
    "UnsupportedContentType",
)


class SiteMapperError(Exception):
    """Base class for all SiteMapper errors."""


class SeedParseError(SiteMapperError, ValueError):
    """Seed URL is not an absolute http(s) URL; no crawl can start."""

    def __init__(self, seed: str, reason: str) -> None:
        super().__init__(f"couldn't parse seed URL {seed!r}: {reason}")
        self.seed = seed
        self.reason = reason


class FetchError(SiteMapperError):
    """Transport failure while fetching one page."""

    def __init__(self, url: str, reason: object) -> None:
        super().__init__(f"failed to get URL {url}: {reason}")
        self.url = url
        self.reason = reason


class ReferenceParseError(SiteMapperError, ValueError):
    """A raw href/src value could not be turned into a URL."""

    def __init__(self, reference: str, base: Optional[str], reason: str) -> None:
        where = f" on page {base}" if base else ""
        super().__init__(f"failed to parse URL {reference!r}{where}: {reason}")
        self.reference = reference
        self.base = base
        self.reason = reason


class UnsupportedContentType(SiteMapperError):
    """Response is not HTML; the page is kept as a leaf."""

    def __init__(self, url: str, content_type: str) -> None:
        super().__init__(f"skipping {url}: content type {content_type!r}")
        self.url = url
        self.content_type = content_type
