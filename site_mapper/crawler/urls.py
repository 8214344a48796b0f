# site_mapper/crawler/urls.py
"""
URL canonicalisation for the crawl engine.

A canonical URL is absolute and carries no fragment; two pages are the same
page iff their canonical strings are equal.
"""
from __future__ import annotations

import re
from urllib.parse import SplitResult, urldefrag, urljoin, urlsplit

from site_mapper.errors import ReferenceParseError, SeedParseError

__all__ = ("resolve", "same_host", "parse_seed", "host_of")

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_SEED_SCHEMES = ("http", "https")


def _split(raw: str) -> SplitResult:
    """urlsplit() plus the checks it defers (port range, control characters)."""
    if _CONTROL_RE.search(raw):
        raise ValueError("invalid control character in URL")
    parts = urlsplit(raw)
    parts.port  # raises ValueError for non-numeric or out-of-range ports
    return parts


def resolve(base: str, reference: str) -> str:
    """
    Resolve *reference* against the absolute *base* and drop its fragment.

    Raises :class:`ReferenceParseError` when *reference* is not a valid URL
    reference.
    """
    raw = reference.strip()
    try:
        _split(raw)
        joined = urljoin(base, raw)
    except ValueError as exc:
        raise ReferenceParseError(reference, base, str(exc)) from exc
    return urldefrag(joined).url


def host_of(url: str) -> str:
    """Lower-cased ``host[:port]`` part of *url* without user-info."""
    return urlsplit(url).netloc.rpartition("@")[2].lower()


def same_host(base: str, resolved: str) -> bool:
    return host_of(base) == host_of(resolved)


def parse_seed(seed: str) -> str:
    """Canonical form of the crawl seed; only absolute http(s) URLs qualify."""
    raw = seed.strip() if isinstance(seed, str) else ""
    if not raw:
        raise SeedParseError(str(seed), "empty URL")
    try:
        parts = _split(raw)
    except ValueError as exc:
        raise SeedParseError(raw, str(exc)) from exc
    if parts.scheme.lower() not in _SEED_SCHEMES:
        raise SeedParseError(raw, f"unsupported scheme {parts.scheme!r}")
    if not parts.hostname:
        raise SeedParseError(raw, "missing host")
    return urldefrag(raw).url
