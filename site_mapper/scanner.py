# === FILE: site_mapper/scanner.py ===
"""
Модуль-обёртка для функции запуска обхода.
"""
from typing import Any, Optional

from site_mapper.config import CrawlConfig
from site_mapper.crawler.crawler import SiteCrawler
from site_mapper.crawler.fetcher import PageFetcher
from site_mapper.crawler.models import CrawlResult
from site_mapper.crawler.urls import parse_seed


async def start_scan(cfg: CrawlConfig, fetcher: Optional[PageFetcher] = None) -> CrawlResult:
    """
    Запускает краулер в контексте и возвращает результат обхода.

    Parameters
    ----------
    cfg : CrawlConfig
        Конфигурация обхода.
    fetcher : PageFetcher, optional
        Альтернативный транспорт (по умолчанию aiohttp).

    Returns
    -------
    CrawlResult
        Корневой узел дерева страниц и число уникальных URL.
    """
    async with SiteCrawler(cfg, fetcher=fetcher) as crawler:
        return await crawler.crawl()


async def crawl_site(seed_url: str, max_depth: int, **options: Any) -> CrawlResult:
    """
    Основной контракт ядра: (seed URL, глубина) -> CrawlResult.

    Некорректный seed_url приводит к SeedParseError до начала обхода.
    """
    seed = parse_seed(seed_url)
    fetcher = options.pop("fetcher", None)
    cfg = CrawlConfig(seed_url=seed, max_depth=max_depth, **options)
    return await start_scan(cfg, fetcher=fetcher)


__all__ = ["start_scan", "crawl_site"]
