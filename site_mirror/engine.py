# File: site_mirror/engine.py
"""site_mirror.engine: запуск обхода для каждой домашней страницы с общим хранилищем."""

from __future__ import annotations

from typing import Iterable, List

from site_mirror.config import MirrorConfig
from site_mirror.crawler.crawler import SiteCrawler
from site_mirror.crawler.models import CrawlSummary
from site_mirror.crawler.store import LocalStore
from site_mirror.logger import logger

__all__ = ["start_mirror"]


async def start_mirror(cfg: MirrorConfig, urls: Iterable[str]) -> List[CrawlSummary]:
    """
    Зеркалирует каждый URL из *urls* в ``cfg.root``.

    Обходы независимы и выполняются по очереди; первая фатальная ошибка
    прерывает весь запуск.
    """
    store = LocalStore(cfg.root)
    summaries: List[CrawlSummary] = []
    for url in urls:
        logger.info("Mirroring %s into %s", url, store.root)
        async with SiteCrawler(url, cfg) as crawler:
            summaries.append(await crawler.crawl(store, cfg.overwrite))
    return summaries
