# site_mapper/crawler/models.py
"""
Data models for the SiteMapper crawler.

Trees can be as deep as ``max_depth``, so traversals use an explicit stack
instead of Python recursion.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple


@dataclass(slots=True)
class PageNode:
    """One crawled page: its canonical URL, child pages and static resources."""

    url: str
    children: List[PageNode] = field(default_factory=list)
    statics: List[str] = field(default_factory=list)

    def walk(self, depth: int = 0) -> Iterator[Tuple[int, PageNode]]:
        """Depth-first ``(distance from self, node)`` pairs, self first."""
        stack: List[Tuple[int, PageNode]] = [(depth, self)]
        while stack:
            level, node = stack.pop()
            yield level, node
            stack.extend((level + 1, child) for child in reversed(node.children))

    def to_dict(self) -> Dict[str, Any]:
        def shell(node: PageNode) -> Dict[str, Any]:
            return {"url": node.url, "statics": list(node.statics), "children": []}

        top = shell(self)
        stack: List[Tuple[PageNode, Dict[str, Any]]] = [(self, top)]
        while stack:
            node, out = stack.pop()
            for child in node.children:
                child_out = shell(child)
                out["children"].append(child_out)
                stack.append((child, child_out))
        return top


@dataclass(slots=True)
class CrawlResult:
    """Completed crawl: root node, number of URLs claimed by this crawl, wall time."""

    root: PageNode
    claimed: int
    elapsed: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"claimed": self.claimed, "elapsed": round(self.elapsed, 3), "root": self.root.to_dict()}
