# === FILE: site_mirror/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from contextlib import AsyncExitStack
from typing import Dict, Optional, Tuple, Union
from urllib.parse import urlsplit

from site_mirror.config import FetchErrorPolicy, MirrorConfig, OverwritePolicy
from site_mirror.crawler.fetcher import Fetcher, ResourceFetcher
from site_mirror.crawler.frontier import Frontier
from site_mirror.crawler.link_extractor import LinkExtractor
from site_mirror.crawler.models import CrawlSummary, Resource
from site_mirror.crawler.store import LocalStore
from site_mirror.errors import ConfigError, CrawlTimeout, FetchError
from site_mirror.logger import logger
from site_mirror.utils import CancelToken, extract_host, normalize_url

__all__ = ("SiteCrawler",)


class SiteCrawler:
    """
    Зеркалирует один сайт: fetch → store → extract → enqueue, пока frontier не пуст.

    Обход последовательный и в глубину: новые ссылки кладутся в стек, последняя
    найденная ссылка посещается первой. Каждый URL загружается не более одного
    раза за вызов :meth:`crawl`.
    """

    def __init__(
        self,
        homepage: str,
        config: Optional[MirrorConfig] = None,
        fetcher: Optional[ResourceFetcher] = None,
        extractor: Optional[LinkExtractor] = None,
    ) -> None:
        self.config = config or MirrorConfig()
        self.homepage = self._validate_homepage(homepage)
        self.fetcher = fetcher
        self.extractor = extractor or LinkExtractor(self.config.fallback_encoding)
        self.frontier = Frontier()
        self.pages: Dict[str, Tuple[str, ...]] = {}
        self._depths: Dict[str, int] = {}
        self._exit_stack: Optional[AsyncExitStack] = None

    async def __aenter__(self) -> SiteCrawler:
        self._exit_stack = AsyncExitStack()
        if self.fetcher is None:
            self.fetcher = await self._exit_stack.enter_async_context(Fetcher.open(self.config))
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._exit_stack is not None:
            await self._exit_stack.aclose()
            self._exit_stack = None

    async def crawl(
        self,
        store: LocalStore,
        overwrite: Union[OverwritePolicy, str, None] = None,
        token: Optional[CancelToken] = None,
    ) -> CrawlSummary:
        """Run the crawl to completion and return what was stored, skipped and failed."""
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized; use 'async with SiteCrawler(...)'")
        overwrite = OverwritePolicy(overwrite or self.config.overwrite)
        token = token or CancelToken(self.config.timeout)

        self.frontier = Frontier()
        self.pages = {}
        self._depths = {}
        summary = CrawlSummary(self.homepage, pages=self.pages)
        store.home = extract_host(self.homepage)

        logger.info("Старт обхода: %s", self.homepage)
        start = time.monotonic()
        self.frontier.push(self.homepage, 0)

        while self.frontier:
            token.check()
            url, depth = self.frontier.pop()
            if url in self.pages:
                self._reexpand(url, depth)
                continue
            self.pages[url] = ()
            self._depths[url] = depth

            resource = await self._fetch(url, token, summary)
            if resource is None:
                continue

            path = store.store(resource, overwrite)
            if path is None:
                summary.skipped.append(url)
                continue
            summary.stored[url] = path

            links = tuple(self.extractor.extract(resource))
            self.pages[url] = links

            max_pages = self.config.max_pages
            if max_pages is not None and len(summary.stored) >= max_pages:
                logger.info("Достигнут лимит max_pages=%d", max_pages)
                break

            max_depth = self.config.max_depth
            if max_depth is not None and depth >= max_depth:
                logger.debug("Depth limit reached at %s, %d links not followed", url, len(links))
                continue
            self.frontier.push_all(links, depth + 1)

        duration = time.monotonic() - start
        logger.info(
            "Завершено: %s — сохранено %d, пропущено %d, ошибок %d за %.2f с",
            self.homepage,
            len(summary.stored),
            len(summary.skipped),
            len(summary.failed),
            duration,
        )
        return summary

    def _reexpand(self, url: str, depth: int) -> None:
        """Follow the stored links of an already visited page reached again on a shorter path."""
        max_depth = self.config.max_depth
        if max_depth is None or depth >= self._depths[url]:
            return
        self._depths[url] = depth
        if depth < max_depth and self.pages[url]:
            logger.debug("Re-expanding %s at depth %d", url, depth)
            self.frontier.push_all(self.pages[url], depth + 1)

    async def _fetch(
        self, url: str, token: CancelToken, summary: CrawlSummary
    ) -> Optional[Resource]:
        try:
            return await asyncio.wait_for(self.fetcher.fetch(url), timeout=token.remaining())
        except asyncio.TimeoutError as exc:
            raise CrawlTimeout(f"Crawl deadline reached while fetching {url}") from exc
        except FetchError as exc:
            if self.config.on_fetch_error is FetchErrorPolicy.ABORT:
                raise
            logger.warning("Skip %s: %s", url, exc.reason)
            summary.failed.append(url)
            return None

    @staticmethod
    def _validate_homepage(homepage: Optional[str]) -> str:
        if not homepage or not homepage.strip():
            raise ConfigError("Homepage URL is required")
        homepage = homepage.strip()
        try:
            parts = urlsplit(homepage)
            parts.port
        except ValueError as exc:
            raise ConfigError(f"Invalid homepage URL {homepage!r}: {exc}") from exc
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ConfigError(f"Homepage must be an absolute http(s) URL: {homepage!r}")
        return normalize_url(homepage)
