"""
Concurrent crawl engine: URL normalizer, seen-set, extractor, completion
tracker and the page orchestrator (:mod:`site_mapper.crawler.crawler`).
"""
