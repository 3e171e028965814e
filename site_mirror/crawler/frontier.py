# site_mirror/crawler/frontier.py
"""
Frontier: LIFO work list of URLs waiting to be fetched.

The most recently discovered URL is popped first, so the crawl is depth-first.
Entries are not deduplicated here; the crawler checks its visited map on pop.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from site_mirror.crawler.models import FrontierEntry

__all__ = ("Frontier",)


class Frontier:
    """Stack of :class:`FrontierEntry` items."""

    def __init__(self) -> None:
        self._stack: List[FrontierEntry] = []

    def push(self, url: str, depth: int = 0) -> None:
        self._stack.append(FrontierEntry(url, depth))

    def push_all(self, urls: Iterable[str], depth: int = 0) -> int:
        """Push *urls* in order; the last one is popped first. Returns the count pushed."""
        before = len(self._stack)
        self._stack.extend(FrontierEntry(url, depth) for url in urls)
        return len(self._stack) - before

    def pop(self) -> Optional[FrontierEntry]:
        if not self._stack:
            return None
        return self._stack.pop()

    def is_empty(self) -> bool:
        return not self._stack

    def __len__(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return bool(self._stack)
