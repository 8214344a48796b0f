# File: tests/conftest.py
import asyncio
from collections.abc import AsyncIterator
from typing import Dict, List, Tuple, Union

import pytest
import pytest_asyncio
from aiohttp import web

from site_mapper.config import CrawlConfig
from site_mapper.crawler.fetcher import FetchedPage
from site_mapper.errors import FetchError

#: url -> HTML body, or (content type, body)
SitePages = Dict[str, Union[str, Tuple[str, str]]]


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


class FakeFetcher:
    """
    In-memory transport for engine tests.

    Unknown URLs fail like a refused connection. ``delay`` makes every fetch
    yield to the loop so that concurrency can be observed.
    """

    def __init__(self, pages: SitePages, delay: float = 0.0) -> None:
        self.pages = pages
        self.delay = delay
        self.calls: List[str] = []
        self.in_flight = 0
        self.peak = 0

    async def fetch(self, url: str) -> FetchedPage:
        self.calls.append(url)
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            entry = self.pages.get(url)
            if entry is None:
                raise FetchError(url, "connection refused")
            if isinstance(entry, tuple):
                ctype, body = entry
            else:
                ctype, body = "text/html; charset=utf-8", entry
            return FetchedPage(url=url, status=200, content_type=ctype, body=body.encode("utf-8"), charset="utf-8")
        finally:
            self.in_flight -= 1


@pytest.fixture()
def make_config():
    """Factory for CrawlConfig with test-friendly defaults."""

    def _make(seed_url: str = "http://x.test/", max_depth: int = 1, **kwargs) -> CrawlConfig:
        kwargs.setdefault("timeout", 2.0)
        kwargs.setdefault("user_agent", "TestAgent/1.0")
        return CrawlConfig(seed_url=seed_url, max_depth=max_depth, **kwargs)

    return _make


async def serve_app(app: web.Application) -> AsyncIterator[str]:
    """Start *app* on a free local port, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    host, port = runner.addresses[0][:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def html_site() -> AsyncIterator[str]:
    """
    Small site: / -> /page1 -> /page2 -> /page3, plus statics and a JSON page.
    """
    app = web.Application()

    async def handle_root(_):
        return web.Response(
            text=(
                '<link rel="stylesheet" href="/style.css">'
                '<a href="/page1">Page1</a><a href="/page1#top">Page1 again</a>'
                '<a href="/data.json">Data</a>'
                '<a href="http://external.test/">External</a>'
                '<img src="/logo.png"><script src="http://cdn.test/lib.js"></script>'
            ),
            content_type="text/html",
        )

    async def handle_page1(_):
        return web.Response(text='<a href="/page2">Page2</a><a href="/">Home</a>', content_type="text/html")

    async def handle_page2(_):
        return web.Response(text='<a href="/page3">Page3</a>', content_type="text/html")

    async def handle_page3(_):
        return web.Response(text='<img src="/deep.png">', content_type="text/html")

    async def handle_css(_):
        return web.Response(text="body {}", content_type="text/css")

    async def handle_json(_):
        return web.json_response({"a": '<a href="/hidden">'})

    app.router.add_get("/", handle_root)
    app.router.add_get("/page1", handle_page1)
    app.router.add_get("/page2", handle_page2)
    app.router.add_get("/page3", handle_page3)
    app.router.add_get("/style.css", handle_css)
    app.router.add_get("/data.json", handle_json)

    async for url in serve_app(app):
        yield url
