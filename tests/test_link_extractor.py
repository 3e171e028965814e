# File: tests/test_link_extractor.py
import types

import pytest

from site_mirror.crawler.link_extractor import LinkExtractor
from site_mirror.crawler.models import Resource

SOURCE = "http://a.com/x"


@pytest.fixture()
def extractor() -> LinkExtractor:
    return LinkExtractor()


@pytest.mark.parametrize(
    "candidate,expected",
    [
        ("/y", "http://a.com/y"),
        ("y", "http://a.com/y"),
        ("../dir/page.html", "http://a.com/dir/page.html"),
        ("http://a.com/p?x=1#f", "http://a.com/p"),
        ("http://a.com/p?x=2", "http://a.com/p"),
        ("page#frag", "http://a.com/page"),
        ("  /spaced  ", "http://a.com/spaced"),
        ("http://A.COM/Case", "http://a.com/Case"),
        ("http://b.com/y", None),
        ("https://a.com/y", None),
        ("http://a.com:8080/y", None),
        ("//b.com/y", None),
        ("mailto:someone@a.com", None),
        ("javascript:void(0)", None),
        ("data:image/png;base64,AAAA", None),
        ("news:comp.lang.python", None),
    ],
)
def test_resolve_scope(extractor, candidate, expected):
    assert extractor.resolve(candidate, SOURCE) == expected


@pytest.mark.parametrize("candidate", ["http://[::1", "http://a.com:abc/", "//a.com:port/"])
def test_malformed_links_are_discarded(extractor, candidate):
    assert extractor.resolve(candidate, SOURCE) is None


def test_extract_order_follows_selectors(extractor, html_resource):
    html = """
    <html><head>
      <link rel="stylesheet" href="/style.css">
      <style src="/legacy.css"></style>
      <script src="/app.js"></script>
    </head><body>
      <img src="/logo.png">
      <a href="/first">1</a>
      <a href="/second">2</a>
    </body></html>
    """
    links = extractor.extract_links(html_resource("http://a.com/", html))
    assert links == [
        "http://a.com/first",
        "http://a.com/second",
        "http://a.com/logo.png",
        "http://a.com/app.js",
        "http://a.com/legacy.css",
        "http://a.com/style.css",
    ]


def test_extract_filters_scope_and_deduplicates(extractor, html_resource):
    html = (
        '<a href="/about.html">About</a>'
        '<a href="/about.html?ref=nav#top">About again</a>'
        '<a href="mailto:me@x.test">Mail</a>'
        '<a>No href</a>'
        '<img src="http://other.test/logo.png">'
        '<a href="http://x.test/contact">Contact</a>'
    )
    links = extractor.extract_links(html_resource("http://x.test/", html))
    assert links == ["http://x.test/about.html", "http://x.test/contact"]


def test_malformed_link_does_not_abort_extraction(extractor, html_resource):
    html = '<a href="http://[broken">bad</a><a href="/good">good</a>'
    assert extractor.extract_links(html_resource("http://a.com/", html)) == ["http://a.com/good"]


def test_extract_is_lazy(extractor, html_resource):
    links = extractor.extract(html_resource("http://a.com/", '<a href="/1"></a><a href="/2"></a>'))
    assert isinstance(links, types.GeneratorType)
    assert next(links) == "http://a.com/1"
    assert list(links) == ["http://a.com/2"]


def test_declared_encoding_is_used(extractor, html_resource):
    html = '<html><body><a href="/страница">Страница</a></body></html>'
    links = extractor.extract_links(html_resource("http://a.com/", html, encoding="cp1251"))
    assert links == ["http://a.com/страница"]


def test_fallback_encoding_applies_when_undeclared():
    resource = Resource("http://a.com/")
    resource.load('<a href="/café">x</a>'.encode("latin-1"), None, "text/html")
    links = LinkExtractor(fallback_encoding="latin-1").extract_links(resource)
    assert links == ["http://a.com/café"]


def test_non_html_resource_yields_nothing(extractor):
    resource = Resource("http://a.com/logo.png")
    resource.load(b"\x89PNG\r\n\x1a\n<a href='/x'>", None, "image/png")
    assert extractor.extract_links(resource) == []


def test_missing_content_type_is_parsed_as_html(extractor):
    resource = Resource("http://a.com/")
    resource.load(b'<a href="/x">x</a>', None, None)
    assert extractor.extract_links(resource) == ["http://a.com/x"]


def test_garbage_document_yields_empty_set(extractor):
    resource = Resource("http://a.com/")
    resource.load(b"\x00\x01\x02 not html at all \xff\xfe", None, "text/html")
    assert extractor.extract_links(resource) == []


def test_unfetched_resource_is_rejected(extractor):
    with pytest.raises(ValueError):
        extractor.extract(Resource("http://a.com/"))
