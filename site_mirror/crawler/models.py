# site_mirror/crawler/models.py
"""
Data models for the SiteMirror crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, List, NamedTuple, Optional, Tuple

__all__ = ("Resource", "FrontierEntry", "CrawlSummary")


@dataclass(slots=True)
class Resource:
    """One fetched byte stream: source URL, raw body, declared encoding and local path."""

    url: str
    body: Optional[bytes] = None
    encoding: Optional[str] = None
    content_type: Optional[str] = None
    local_path: Optional[Path] = None

    @property
    def loaded(self) -> bool:
        return self.body is not None

    def load(self, body: bytes, encoding: Optional[str], content_type: Optional[str] = None) -> None:
        """Set body and encoding together after a successful fetch."""
        if body is None:
            raise ValueError(f"Empty fetch result for {self.url}")
        self.body = bytes(body)
        self.encoding = encoding
        self.content_type = content_type

    def attach(self, path: Path) -> None:
        self.local_path = Path(path)

    def save(self, out: BinaryIO) -> int:
        """Write the raw body to an open binary file, return the number of bytes written."""
        if self.body is None:
            raise ValueError(f"Resource {self.url} has no body")
        return out.write(self.body)


class FrontierEntry(NamedTuple):
    """URL pending visitation and its link depth from the homepage."""

    url: str
    depth: int = 0


@dataclass(slots=True)
class CrawlSummary:
    """Итог одного обхода: карта посещённых страниц и сохранённые файлы."""

    homepage: str
    pages: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    stored: Dict[str, Path] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
