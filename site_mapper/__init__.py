# site_mapper/__init__.py
"""
SiteMapper package initializer.
Defines package version and exposes the crawl entry points.
"""
__version__ = "0.1.0"

from site_mapper.crawler.models import CrawlResult, PageNode
from site_mapper.scanner import crawl_site, start_scan

__all__ = ["__version__", "CrawlResult", "PageNode", "crawl_site", "start_scan"]
