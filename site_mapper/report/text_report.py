# site_mapper/report/text_report.py
"""
Indented text rendering of a crawled page tree.

Each page prints its URL, then a ``Statics:`` block, then a ``Links:`` block
whose child pages are indented two levels deeper.
"""
from __future__ import annotations

from typing import List

from site_mapper.crawler.models import PageNode

INDENT = "    "


def render_tree(root: PageNode, indent: int = 0) -> str:
    """Return the whole tree below *root* as newline-joined text."""
    lines: List[str] = []
    # walk() is pre-order, so a page's Links block directly follows its statics
    for depth, page in root.walk():
        level = indent + 2 * depth
        lines.append(INDENT * level + page.url)
        if page.statics:
            lines.append(INDENT * (level + 1) + "Statics:")
            lines.extend(INDENT * (level + 2) + static for static in page.statics)
        if page.children:
            lines.append(INDENT * (level + 1) + "Links:")
    return "\n".join(lines)
