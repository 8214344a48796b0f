# === FILE: site_mapper/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import contextlib
import time
from typing import AsyncContextManager, List, Optional

from aiohttp import ClientSession, ClientTimeout

from site_mapper.config import CrawlConfig
from site_mapper.crawler.extractor import ReferenceKind, is_html, scan_references
from site_mapper.crawler.fetcher import FetchedPage, Fetcher, PageFetcher
from site_mapper.crawler.models import CrawlResult, PageNode
from site_mapper.crawler.seen import SeenSet
from site_mapper.crawler.tracker import CompletionTracker
from site_mapper.crawler.urls import parse_seed, resolve, same_host
from site_mapper.errors import FetchError, ReferenceParseError, UnsupportedContentType
from site_mapper.logger import get_logger

__all__ = ("SiteCrawler",)


class SiteCrawler:
    """
    Асинхронный рекурсивный краулер одного хоста.

    Каждая страница обходится в собственной задаче глобального трекера;
    ссылки и статические ресурсы страницы разрешаются параллельно во
    вложенной области (page scope). Страница считается готовой, когда эта
    область закрылась, а весь обход, когда закрылся глобальный трекер.
    """

    def __init__(
        self,
        config: CrawlConfig,
        *,
        fetcher: Optional[PageFetcher] = None,
        seen: Optional[SeenSet] = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.seen = seen if seen is not None else SeenSet()
        self.session: Optional[ClientSession] = None
        self.logger = get_logger("crawler")
        self._tracker: Optional[CompletionTracker] = None
        self._claimed = 0
        self._limiter: AsyncContextManager = (
            asyncio.Semaphore(config.max_concurrency) if config.max_concurrency else contextlib.nullcontext()
        )

    async def __aenter__(self) -> SiteCrawler:
        if self.fetcher is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    # ------------------------------------------------------------------ #
    # Public API                                                          #
    # ------------------------------------------------------------------ #

    async def crawl(self) -> CrawlResult:
        """Обходит сайт от seed_url и возвращает корневой узел и число уникальных URL."""
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized, use 'async with SiteCrawler(...)'")
        root = PageNode(parse_seed(self.config.seed_url))
        self.logger.info("Старт обхода: %s (глубина %d)", root.url, self.config.max_depth)
        start = time.monotonic()

        self._claimed = 0
        self._claim(root.url)
        async with CompletionTracker(name="crawl") as tracker:
            self._tracker = tracker
            tracker.spawn(self._crawl_page(root, self.config.max_depth), name=f"page:{root.url}")
        self._tracker = None

        elapsed = time.monotonic() - start
        claimed = self._claimed
        self.logger.info("Unique links crawled: %d", claimed)
        self.logger.info("Crawling took %.2f s", elapsed)
        return CrawlResult(root=root, claimed=claimed, elapsed=elapsed)

    # alias for compatibility with the scanner facade
    run = crawl

    # ------------------------------------------------------------------ #
    # Page orchestration                                                  #
    # ------------------------------------------------------------------ #

    async def _crawl_page(self, node: PageNode, depth: int) -> None:
        if depth <= 0:
            return
        try:
            page = await self._fetch(node.url)
        except FetchError as exc:
            self.logger.error("%s", exc)
            return
        except UnsupportedContentType as exc:
            self.logger.debug("%s", exc)
            return

        links: List[asyncio.Task[Optional[PageNode]]] = []
        statics: List[asyncio.Task[Optional[str]]] = []
        async with CompletionTracker(self._tracker, name=f"page:{node.url}") as page_scope:
            for ref in scan_references(page.body, page.charset):
                if ref.kind is ReferenceKind.LINK:
                    links.append(page_scope.spawn(self._resolve_link(ref.raw, node, depth)))
                else:
                    statics.append(page_scope.spawn(self._resolve_static(ref.raw, node)))

        # page scope closed: every resolution task has reported in
        node.children.extend(child for child in (t.result() for t in links) if child is not None)
        node.statics.extend(url for url in (t.result() for t in statics) if url is not None)
        self.logger.debug(
            "Done %s: %d links, %d statics", node.url, len(node.children), len(node.statics)
        )

    def _claim(self, url: str) -> bool:
        # URLs already present in an injected seen-set are not counted
        if not self.seen.claim(url):
            return False
        self._claimed += 1
        return True

    async def _fetch(self, url: str) -> FetchedPage:
        async with self._limiter:
            page = await self.fetcher.fetch(url)  # type: ignore[union-attr]
        if not is_html(page.content_type):
            raise UnsupportedContentType(url, page.content_type)
        return page

    async def _resolve_link(self, raw: str, current: PageNode, depth: int) -> Optional[PageNode]:
        try:
            url = resolve(current.url, raw)
        except ReferenceParseError as exc:
            self.logger.error("%s", exc)
            return None
        if not same_host(current.url, url):
            return None
        if not self._claim(url):
            return None
        child = PageNode(url)
        # child crawl belongs to the global scope, not to this page
        self._tracker.spawn(self._crawl_page(child, depth - 1), name=f"page:{url}")  # type: ignore[union-attr]
        return child

    async def _resolve_static(self, raw: str, current: PageNode) -> Optional[str]:
        try:
            return resolve(current.url, raw)
        except ReferenceParseError as exc:
            self.logger.error("%s", exc)
            return None
