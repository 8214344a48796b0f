# File: tests/test_urls.py
import pytest

from site_mapper.crawler.urls import host_of, parse_seed, resolve, same_host
from site_mapper.errors import ReferenceParseError, SeedParseError

BASE = "http://x.test/dir/page.html"


@pytest.mark.parametrize(
    "reference,expected",
    [
        ("/about", "http://x.test/about"),
        ("other.html", "http://x.test/dir/other.html"),
        ("../up", "http://x.test/up"),
        ("?q=1", "http://x.test/dir/page.html?q=1"),
        ("//cdn.test/lib.js", "http://cdn.test/lib.js"),
        ("https://y.test/a#frag", "https://y.test/a"),
        ("  /padded  ", "http://x.test/padded"),
        ("", "http://x.test/dir/page.html"),
        ("#only-fragment", "http://x.test/dir/page.html"),
    ],
)
def test_resolve(reference, expected):
    assert resolve(BASE, reference) == expected


def test_fragments_collapse():
    assert resolve("http://x.test/", "/a#x") == resolve("http://x.test/", "/a#y") == "http://x.test/a"


@pytest.mark.parametrize(
    "reference",
    ["http://[::1", "http://x.test:99999/", "http://x.test:port/", "/a\x00b", "/tab\there"],
)
def test_resolve_rejects_malformed(reference):
    with pytest.raises(ReferenceParseError) as info:
        resolve(BASE, reference)
    assert info.value.reference == reference
    assert info.value.base == BASE


def test_reference_parse_error_is_value_error():
    with pytest.raises(ValueError):
        resolve(BASE, "http://[broken")


@pytest.mark.parametrize(
    "other,expected",
    [
        ("http://x.test/elsewhere", True),
        ("https://x.test/secure", True),
        ("http://X.Test/upper", True),
        ("http://user:pw@x.test/", True),
        ("http://x.test:8080/", False),
        ("http://sub.x.test/", False),
        ("mailto:me@x.test", False),
    ],
)
def test_same_host(other, expected):
    assert same_host("http://x.test/", other) is expected


def test_host_of_keeps_port():
    assert host_of("http://Example.COM:8080/path") == "example.com:8080"


@pytest.mark.parametrize(
    "seed,expected",
    [
        ("http://x.test/", "http://x.test/"),
        ("https://x.test/start#top", "https://x.test/start"),
        ("  http://x.test  ", "http://x.test"),
    ],
)
def test_parse_seed(seed, expected):
    assert parse_seed(seed) == expected


@pytest.mark.parametrize("seed", ["", "   ", "x.test", "/relative", "ftp://x.test/", "http://", "http://[::1"])
def test_parse_seed_rejects(seed):
    with pytest.raises(SeedParseError):
        parse_seed(seed)
