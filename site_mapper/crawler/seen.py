# site_mapper/crawler/seen.py
"""
Process-wide registry of URLs claimed for crawling.
"""
from __future__ import annotations

import threading
from typing import FrozenSet, Iterable, Set

__all__ = ("SeenSet",)


class SeenSet:
    """
    Grow-only set of canonical URLs with an atomic test-and-set.

    Every caller shares one lock; the critical section is a single
    membership check plus insert.
    """

    def __init__(self, urls: Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        self._urls: Set[str] = set(urls)

    def claim(self, url: str) -> bool:
        """Record *url*; True iff nobody had claimed it before."""
        with self._lock:
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def snapshot(self) -> FrozenSet[str]:
        """Copy of the claimed URLs; meaningful only after the crawl completed."""
        with self._lock:
            return frozenset(self._urls)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} urls)"
