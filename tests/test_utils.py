import time

import pytest

from site_mirror.errors import CrawlCancelled, CrawlTimeout
from site_mirror.utils import (
    CancelToken,
    extract_host,
    normalize_url,
    same_origin,
)


@pytest.mark.parametrize(
    "url,expected",
    [
        ("http://a.com/p?x=1#f", "http://a.com/p"),
        ("http://a.com/p?x=2", "http://a.com/p"),
        ("http://a.com/p#f", "http://a.com/p"),
        ("http://A.com", "http://a.com/"),
        ("https://a.com/dir/", "https://a.com/dir/"),
    ],
)
def test_normalize_url(url, expected):
    assert normalize_url(url) == expected


def test_same_origin():
    assert same_origin("http://a.com/x", "http://A.COM/y")
    assert not same_origin("http://a.com/x", "https://a.com/x")
    assert not same_origin("http://a.com/x", "http://b.com/x")
    assert not same_origin("http://a.com/x", "http://a.com:81/x")


def test_extract_host():
    assert extract_host("http://Example.com:8080/x") == "example.com"
    assert extract_host("mailto:someone") == ""


def test_cancel_token_without_deadline():
    token = CancelToken()
    assert token.remaining() is None
    token.check()
    token.cancel()
    with pytest.raises(CrawlCancelled):
        token.check()


def test_cancel_token_deadline():
    token = CancelToken(timeout=0.01)
    assert token.remaining() <= 0.01
    time.sleep(0.02)
    assert token.expired
    assert token.remaining() == 0.0
    with pytest.raises(CrawlTimeout):
        token.check()
