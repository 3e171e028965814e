# site_mirror/errors.py
"""
Иерархия исключений SiteMirror.

Фатальные ошибки (FetchError, StorageConflict, ConfigError, CrawlTimeout,
CrawlCancelled) останавливают обход; ошибки разбора ссылок и HTML
обрабатываются в LinkExtractor и только логируются.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

__all__ = (
    "MirrorError",
    "ConfigError",
    "FetchError",
    "StorageConflict",
    "CrawlTimeout",
    "CrawlCancelled",
)


class MirrorError(Exception):
    """Базовое исключение проекта."""


class ConfigError(MirrorError):
    """Неверная конфигурация: корень хранилища, домашняя страница и т.п."""


class FetchError(MirrorError):
    """Network or protocol failure while retrieving *url*."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class StorageConflict(MirrorError):
    """Локальный путь уже занят (строгий режим перезаписи)."""

    def __init__(
        self,
        url: str,
        path: Union[str, Path],
        previous_url: Optional[str] = None,
    ) -> None:
        self.url = url
        self.path = Path(path)
        self.previous_url = previous_url
        if previous_url and previous_url != url:
            msg = f"{url} maps to {self.path}, already written for {previous_url}"
        else:
            msg = f"{url} maps to {self.path}, which already exists"
        super().__init__(msg)


class CrawlTimeout(MirrorError):
    """Обход не завершён до дедлайна."""


class CrawlCancelled(MirrorError):
    """Обход отменён через CancelToken."""
