# File: tests/conftest.py
from pathlib import Path
from typing import Dict, List, Tuple, Union

import pytest

from site_mirror.config import MirrorConfig
from site_mirror.crawler.models import Resource
from site_mirror.crawler.store import LocalStore
from site_mirror.errors import FetchError
from site_mirror.logger import init_logging

_Page = Union[str, bytes, Tuple[Union[str, bytes], str], Exception]


class FakeFetcher:
    """
    In-memory fetcher: maps URL -> HTML string, (body, content_type) or an exception.
    Records every fetched URL in ``calls``.
    """

    def __init__(self, pages: Dict[str, _Page]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> Resource:
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            raise FetchError(url, "HTTP 404")
        if isinstance(page, Exception):
            raise page
        content_type = "text/html"
        if isinstance(page, tuple):
            page, content_type = page
        body = page.encode("utf-8") if isinstance(page, str) else page
        resource = Resource(url)
        resource.load(body, "utf-8", content_type)
        return resource


@pytest.fixture()
def make_fetcher():
    """Factory for :class:`FakeFetcher` instances."""
    return FakeFetcher


@pytest.fixture()
def mirror_root(tmp_path) -> Path:
    return tmp_path / "out"


@pytest.fixture()
def store(mirror_root) -> LocalStore:
    return LocalStore(mirror_root)


@pytest.fixture()
def basic_config(mirror_root) -> MirrorConfig:
    """
    Return a basic valid MirrorConfig for crawler tests.
    """
    return MirrorConfig(root=mirror_root, request_timeout=2.0, user_agent="TestAgent/1.0")


@pytest.fixture()
def html_resource():
    """Build a loaded HTML Resource for *url* with *html* body."""

    def _make(url: str, html: str, encoding: str = "utf-8") -> Resource:
        resource = Resource(url)
        resource.load(html.encode(encoding), encoding, "text/html")
        return resource

    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI tests rebind the project logger to CliRunner's stdout; restore it afterwards."""
    yield
    init_logging(level="DEBUG")
