# site_mapper/crawler/tracker.py
"""Completion tracking for the crawl engine.

A :class:`CompletionTracker` is a scope of concurrent units of work built on
:class:`asyncio.TaskGroup`. Leaving ``async with`` blocks until every unit
spawned into the scope has finished, including units spawned while the scope
is already waiting.

Scopes nest: a page scope created with ``parent=<global scope>`` counts its
units in its own ``pending`` and in every ancestor's, so the outermost scope
always knows how much work is outstanding in the whole crawl.

Usage::

    async with CompletionTracker() as crawl_scope:
        crawl_scope.spawn(crawl_page(root, depth))
    # every page, fetch and resolution task is done here
"""
from __future__ import annotations

import asyncio
from typing import Any, Coroutine, Iterator, Optional, TypeVar

from site_mapper.logger import get_logger

__all__ = ("CompletionTracker",)

logger = get_logger("tracker")

T = TypeVar("T")


class CompletionTracker:
    """Scope counting outstanding units of work; closes when the count is zero."""

    def __init__(self, parent: Optional[CompletionTracker] = None, *, name: str = "crawl") -> None:
        self.parent = parent
        self.name = name
        self._group: Optional[asyncio.TaskGroup] = None
        self._pending = 0
        self._spawned = 0
        self._failed = 0

    # ------------------------------------------------------------------ #
    # Scope lifetime                                                      #
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> CompletionTracker:
        if self._group is not None:
            raise RuntimeError(f"scope {self.name!r} is already open")
        group = asyncio.TaskGroup()
        await group.__aenter__()
        self._group = group
        return self

    async def __aexit__(self, exc_type, exc, tb) -> Optional[bool]:
        group = self._group
        if group is None:
            raise RuntimeError(f"scope {self.name!r} was never opened")
        try:
            return await group.__aexit__(exc_type, exc, tb)
        finally:
            self._group = None

    # ------------------------------------------------------------------ #
    # Units of work                                                       #
    # ------------------------------------------------------------------ #

    def spawn(self, coro: Coroutine[Any, Any, T], *, name: Optional[str] = None) -> asyncio.Task[Optional[T]]:
        """Count one unit, then schedule *coro* in this scope."""
        if self._group is None:
            coro.close()
            raise RuntimeError(f"scope {self.name!r} is not open")
        self._acquire()
        try:
            return self._group.create_task(self._run(coro), name=name)
        except BaseException:
            self._release()
            coro.close()
            raise

    async def _run(self, coro: Coroutine[Any, Any, T]) -> Optional[T]:
        try:
            return await coro
        except Exception:
            self._failed += 1
            task = asyncio.current_task()
            logger.exception("Unit %s in scope %s failed", task.get_name() if task else "?", self.name)
            return None
        finally:
            self._release()

    def _chain(self) -> Iterator[CompletionTracker]:
        scope: Optional[CompletionTracker] = self
        while scope is not None:
            yield scope
            scope = scope.parent

    def _acquire(self) -> None:
        self._spawned += 1
        for scope in self._chain():
            scope._pending += 1

    def _release(self) -> None:
        for scope in self._chain():
            scope._pending -= 1

    # ------------------------------------------------------------------ #
    # Introspection                                                       #
    # ------------------------------------------------------------------ #

    @property
    def pending(self) -> int:
        """Units spawned in this scope or any nested scope and not finished yet."""
        return self._pending

    @property
    def spawned(self) -> int:
        """Units spawned directly into this scope."""
        return self._spawned

    @property
    def failed(self) -> int:
        """Units of this scope that ended with an unexpected exception."""
        return self._failed

    @property
    def is_open(self) -> bool:
        return self._group is not None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} pending={self._pending} spawned={self._spawned}>"
