# site_mirror/crawler/link_extractor.py
"""
Link extraction and crawl-scope resolution for SiteMirror.

Collects ``a/href``, ``img/src``, ``script/src``, ``style/src`` and
``link/href`` values from an HTML resource, resolves them against the page URL
and keeps only links on the page's own scheme and host. Query strings and
fragments are dropped, so ``page?x=1``, ``page?x=2`` and ``page#top`` all
become ``page``.
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Set, Tuple
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_mirror.crawler.models import Resource
from site_mirror.logger import logger
from site_mirror.utils import normalize_url, same_origin

__all__ = ("LinkExtractor", "LINK_SELECTORS")

#: (element, attribute) pairs queried, in discovery order
LINK_SELECTORS: Sequence[Tuple[str, str]] = (
    ("a", "href"),
    ("img", "src"),
    ("script", "src"),
    ("style", "src"),
    ("link", "href"),
)

_HTML_TYPES = ("text/html", "application/xhtml+xml")


def _split(url: str):
    parts = urlsplit(url)
    parts.port  # raises ValueError on a bad port
    return parts


class LinkExtractor:
    """Turns a fetched HTML :class:`Resource` into in-scope absolute URLs."""

    def __init__(self, fallback_encoding: Optional[str] = None) -> None:
        self.fallback_encoding = fallback_encoding

    def extract(self, resource: Resource) -> Iterator[str]:
        """
        Lazily yield scope-filtered links of *resource* in discovery order.

        Each link is yielded once. Non-HTML resources yield nothing.
        """
        if not resource.loaded:
            raise ValueError(f"Resource {resource.url} has not been fetched")
        return self._iter_links(resource)

    def extract_links(self, resource: Resource) -> List[str]:
        return list(self.extract(resource))

    def resolve(self, candidate: str, source_url: str) -> Optional[str]:
        """Return the absolute in-scope form of *candidate*, or ``None`` to discard it."""
        raw = candidate.strip()
        try:
            parts = _split(raw)
            if not parts.scheme:
                # relative reference
                absolute = urljoin(source_url, raw)
                _split(absolute)
            elif not parts.netloc:
                # absolute but opaque: mailto:, data:, javascript:, news:, ...
                logger.debug("\t- %s", raw)
                return None
            else:
                absolute = raw
        except ValueError as exc:
            logger.warning("\t* malformed link %r on %s: %s", raw, source_url, exc)
            return None

        if not same_origin(absolute, source_url):
            logger.debug("\t- %s", raw)
            return None

        link = normalize_url(absolute)
        logger.debug("\t+ %s", link)
        return link

    # ------------------------------------------------------------------ #

    def _iter_links(self, resource: Resource) -> Iterator[str]:
        if not self._is_html(resource):
            logger.debug("Skip link extraction for %s (%s)", resource.url, resource.content_type)
            return

        soup = self._parse(resource)
        if soup is None:
            return

        seen: Set[str] = set()
        for tag_name, attr in LINK_SELECTORS:
            for tag in soup.find_all(tag_name):
                if not isinstance(tag, Tag):
                    continue
                value = tag.get(attr)
                if not isinstance(value, str):
                    continue
                link = self.resolve(value, resource.url)
                if link is None or link in seen:
                    continue
                seen.add(link)
                yield link

    def _parse(self, resource: Resource) -> Optional[BeautifulSoup]:
        encoding = resource.encoding or self.fallback_encoding
        try:
            return BeautifulSoup(resource.body, "html.parser", from_encoding=encoding)
        except Exception as exc:
            logger.warning("\t* %s may be broken; %s", resource.url, exc)
            return None

    @staticmethod
    def _is_html(resource: Resource) -> bool:
        if not resource.content_type:
            return True
        return resource.content_type.lower() in _HTML_TYPES
