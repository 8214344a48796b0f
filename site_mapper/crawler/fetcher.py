# site_mapper/crawler/fetcher.py
"""
Fetcher module: one GET per page over a shared aiohttp session.

No retries and no status filtering: any delivered body is crawlable.
Redirects are followed by aiohttp itself.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional, Protocol

from aiohttp import ClientError, ClientSession

from site_mapper.crawler.extractor import is_html
from site_mapper.errors import FetchError

__all__ = ("FetchedPage", "PageFetcher", "Fetcher")


@dataclass(slots=True)
class FetchedPage:
    """Response of one fetch. ``body`` is empty for non-HTML responses."""

    url: str
    status: int
    content_type: str
    body: bytes = b""
    charset: Optional[str] = None


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> FetchedPage: ...


class Fetcher:
    """Handles HTTP fetching for the crawler."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> FetchedPage:
        """
        GET *url*.

        Returns FetchedPage on any delivered response; raises FetchError on
        transport failure or timeout.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                ctype = resp.headers.get("Content-Type", "")
                # non-HTML bodies are never tokenized, don't download them
                body = await resp.read() if is_html(ctype) else b""
                return FetchedPage(
                    url=url,
                    status=resp.status,
                    content_type=ctype,
                    body=body,
                    charset=resp.charset,
                )
        except (ClientError, asyncio.TimeoutError) as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
