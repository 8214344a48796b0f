# File: tests/test_extractor.py
import pytest
from bs4 import ParserRejectedMarkup
from bs4.builder import HTMLParserTreeBuilder

from site_mapper.crawler.extractor import (
    Reference,
    ReferenceKind,
    is_html,
    iter_start_tags,
    scan_references,
)

LINK = ReferenceKind.LINK
STATIC = ReferenceKind.STATIC


def test_classifies_tags():
    html = """
    <html><head>
      <link rel="stylesheet" href="/style.css">
      <script src="/app.js"></script>
      <script>var inline = 1;</script>
    </head><body>
      <a href="/about">About</a>
      <a name="anchor-without-href">x</a>
      <img src="/logo.png" alt="">
      <image src="/legacy.png">
      <img data-src="/lazy.png">
      <iframe src="/frame.html"></iframe>
    </body></html>
    """
    refs = list(scan_references(html))
    assert set(refs) == {
        Reference(LINK, "/style.css"),
        Reference(STATIC, "/app.js"),
        Reference(LINK, "/about"),
        Reference(STATIC, "/logo.png"),
        Reference(STATIC, "/legacy.png"),
    }


def test_page_local_dedup():
    html = '<a href="/a">1</a><a href="/a">2</a><img src="/i.png"><img src="/i.png"><a href="/a#x">3</a>'
    refs = list(scan_references(html))
    assert refs == [Reference(LINK, "/a"), Reference(STATIC, "/i.png"), Reference(LINK, "/a#x")]


def test_raw_value_shared_between_kinds():
    refs = list(scan_references('<img src="/x"><a href="/x">x</a>'))
    assert refs == [Reference(STATIC, "/x")]


def test_uppercase_markup():
    refs = list(scan_references('<A HREF="/Upper">u</A><IMG SRC="/I.PNG">'))
    assert refs == [Reference(LINK, "/Upper"), Reference(STATIC, "/I.PNG")]


def test_bytes_with_declared_charset():
    body = '<a href="/café">c</a>'.encode("latin-1")
    refs = list(scan_references(body, "latin-1"))
    assert refs == [Reference(LINK, "/café")]


def test_malformed_tail_ends_stream():
    refs = list(scan_references('<a href="/ok">ok</a><img src="/broken'))
    assert Reference(LINK, "/ok") in refs


def test_rejected_tail_keeps_earlier_references():
    # html.parser rejects an unknown marked section keyword
    refs = list(scan_references('<a href="/ok">ok</a><img src="/i.png"><![foo[x]]>'))
    assert refs[:2] == [Reference(LINK, "/ok"), Reference(STATIC, "/i.png")]


def test_rejection_after_partial_parse(monkeypatch):
    original_feed = HTMLParserTreeBuilder.feed

    def feed_then_reject(self, markup):
        original_feed(self, markup)
        raise ParserRejectedMarkup("unknown status keyword")

    monkeypatch.setattr(HTMLParserTreeBuilder, "feed", feed_then_reject)
    markup = "<a href='/x'>x</a><script src='/s.js'></script>"
    assert [name for name, _ in iter_start_tags(markup.encode())] == ["a", "script"]
    assert list(scan_references(markup)) == [Reference(LINK, "/x"), Reference(STATIC, "/s.js")]


def test_iter_start_tags_document_order():
    names = [name for name, _ in iter_start_tags("<div><p><a href='/x'>x</a></p><img src='/i'></div>")]
    assert names == ["div", "p", "a", "img"]


@pytest.mark.parametrize(
    "content_type,expected",
    [
        (None, True),
        ("", True),
        ("text/html", True),
        ("text/html; charset=utf-8", True),
        ("TEXT/HTML", True),
        ("application/json", False),
        ("text/plain", False),
        ("application/xhtml+xml", False),
        ("image/png", False),
    ],
)
def test_is_html(content_type, expected):
    assert is_html(content_type) is expected
