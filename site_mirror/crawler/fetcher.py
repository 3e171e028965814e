# site_mirror/crawler/fetcher.py
"""
Fetcher module: HTTP transport for the crawler, with optional retry/backoff and timeout.
"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Protocol, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_mirror.config import MirrorConfig
from site_mirror.crawler.models import Resource
from site_mirror.errors import FetchError
from site_mirror.logger import logger

__all__ = ("Fetcher", "ResourceFetcher")


class ResourceFetcher(Protocol):
    """Anything able to turn a URL into a loaded :class:`Resource`."""

    async def fetch(self, url: str) -> Resource: ...


class Fetcher:
    """Fetches one URL at a time through an aiohttp session."""

    _RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)
    #: seconds before the first retry, doubled on each further attempt
    backoff_base: float = 1.0

    def __init__(self, session: ClientSession, config: MirrorConfig) -> None:
        self.session = session
        self.config = config

    @classmethod
    @asynccontextmanager
    async def open(cls, config: MirrorConfig) -> AsyncIterator["Fetcher"]:
        """Create a session configured from *config* and close it on exit."""
        timeout = ClientTimeout(total=config.request_timeout)
        async with ClientSession(
            timeout=timeout,
            headers={"User-Agent": config.user_agent},
            raise_for_status=False,
        ) as session:
            yield cls(session, config)

    async def fetch(self, url: str) -> Resource:
        """
        GET *url* and return a loaded Resource.

        Raises FetchError for non-2xx responses, connection errors and timeouts
        once the retries are exhausted.
        """
        attempts = 0
        while True:
            try:
                async with self.session.get(url) as resp:
                    status = resp.status
                    if status in self._RETRY_STATUS:
                        raise ClientError(f"retryable status {status}")
                    if not 200 <= status < 300:
                        raise FetchError(url, f"HTTP {status}")
                    body = await resp.read()
                    resource = Resource(url)
                    resource.load(body, resp.charset, self._mime_type(resp.headers.get("Content-Type")))
                    logger.debug("Fetched %s (%d bytes, %s)", url, len(body), resource.encoding)
                    return resource
            except (ClientError, asyncio.TimeoutError) as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    raise FetchError(url, str(exc) or type(exc).__name__) from exc
                backoff = min(60.0, self.backoff_base * 2 ** (attempts - 1))
                logger.debug(
                    "Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, backoff
                )
                await asyncio.sleep(backoff)

    @staticmethod
    def _mime_type(header: Optional[str]) -> Optional[str]:
        if not header:
            return None
        return header.split(";", 1)[0].strip().lower() or None
