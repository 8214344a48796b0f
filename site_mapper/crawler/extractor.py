# site_mapper/crawler/extractor.py
"""
Tag stream and reference extraction for one fetched page.

Anchor and stylesheet tags (``a``, ``link``) with an ``href`` are link
candidates; ``img``, ``image`` and ``script`` tags with a ``src`` are static
candidates. Identical raw values are emitted once per page.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Optional, Set, Tuple, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.builder import HTMLParserTreeBuilder

from site_mapper.logger import get_logger

__all__ = ("ReferenceKind", "Reference", "is_html", "iter_start_tags", "scan_references")

logger = get_logger("extractor")

Markup = Union[str, bytes]


class ReferenceKind(enum.Enum):
    LINK = "link"
    STATIC = "static"


#: tag name -> (attribute holding the reference, kind)
TAG_RULES: Mapping[str, Tuple[str, ReferenceKind]] = {
    "a": ("href", ReferenceKind.LINK),
    "link": ("href", ReferenceKind.LINK),
    "img": ("src", ReferenceKind.STATIC),
    "image": ("src", ReferenceKind.STATIC),
    "script": ("src", ReferenceKind.STATIC),
}


@dataclass(frozen=True, slots=True)
class Reference:
    """A raw, unresolved href/src value found on a page."""

    kind: ReferenceKind
    raw: str


def is_html(content_type: Optional[str]) -> bool:
    """Missing Content-Type is accepted; otherwise it must be ``text/html``."""
    if not content_type:
        return True
    return content_type.strip().lower().startswith("text/html")


class _TolerantBuilder(HTMLParserTreeBuilder):
    """``html.parser`` builder that keeps the tags parsed before a rejection."""

    def feed(self, markup: str) -> None:
        try:
            super().feed(markup)
        except ParserRejectedMarkup as exc:
            # the soup keeps what was built so far, the rest of the page is dropped
            logger.debug("Tag stream ended early: %s", exc)


def iter_start_tags(markup: Markup, encoding: Optional[str] = None) -> Iterator[Tuple[str, Dict[str, Any]]]:
    """
    Yield ``(tag name, attributes)`` for every start tag in document order.

    A tokenizer error ends the stream the same way end-of-input does: tags
    seen before the error are still yielded.
    """
    if isinstance(markup, bytes):
        soup = BeautifulSoup(markup, builder=_TolerantBuilder(), from_encoding=encoding)
    else:
        soup = BeautifulSoup(markup, builder=_TolerantBuilder())
    for tag in soup.find_all(True):
        yield tag.name, tag.attrs


def scan_references(markup: Markup, encoding: Optional[str] = None) -> Iterator[Reference]:
    """Yield each unique link/static reference of one page."""
    seen_refs: Set[str] = set()
    for name, attrs in iter_start_tags(markup, encoding):
        rule = TAG_RULES.get(name)
        if rule is None:
            continue
        attr, kind = rule
        value = attrs.get(attr)
        if not isinstance(value, str) or value in seen_refs:
            continue
        seen_refs.add(value)
        yield Reference(kind, value)
