# File: site_mirror/utils.py
"""site_mirror.utils: URL-нормализация, проверка области обхода, разбор длительностей и токен отмены."""

from __future__ import annotations

import re
import time
from typing import Optional, Sequence, Union
from urllib.parse import urlsplit, urlunsplit

from site_mirror.errors import CrawlCancelled, CrawlTimeout
from site_mirror.logger import logger

__all__: Sequence[str] = (
    "normalize_url",
    "same_origin",
    "extract_host",
    "parse_duration",
    "CancelToken",
)

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h)?\s*$", re.IGNORECASE)
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def normalize_url(url: str) -> str:
    """Убирает query и fragment, приводит хост к нижнему регистру, пустой путь → ``/``."""
    parts = urlsplit(url)
    path = parts.path or "/"
    normalized = urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, "", ""))
    if normalized != url:
        logger.debug("Normalized URL: %s -> %s", url, normalized)
    return normalized


def same_origin(url: str, other: str) -> bool:
    """True, если у обоих URL совпадают схема и хост (с портом)."""
    a, b = urlsplit(url), urlsplit(other)
    return a.scheme.lower() == b.scheme.lower() and a.netloc.lower() == b.netloc.lower()


def extract_host(url: str) -> str:
    """Возвращает имя хоста без порта (в нижнем регистре) или пустую строку."""
    return urlsplit(url).hostname or ""


def parse_duration(value: Union[str, int, float, None]) -> Optional[float]:
    """Convert ``30``, ``"30s"``, ``"250ms"``, ``"5m"`` or ``"1h"`` to seconds.

    ``None`` passes through. Raises :class:`ValueError` for anything else.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        match = _DURATION_RE.match(value)
        if not match:
            raise ValueError(f"Invalid duration: {value!r}")
        number, unit = match.groups()
        seconds = float(number) * _DURATION_UNITS[(unit or "s").lower()]
    if seconds <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")
    return seconds


class CancelToken:
    """Deadline plus manual cancellation, polled by the crawler between steps."""

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout
        self._deadline = None if timeout is None else time.monotonic() + timeout
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, ``None`` when unbounded."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def check(self) -> None:
        if self._cancelled:
            raise CrawlCancelled("Crawl cancelled")
        if self.expired:
            raise CrawlTimeout(f"Crawl did not finish within {self.timeout} seconds")
