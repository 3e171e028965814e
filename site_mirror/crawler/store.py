# site_mirror/crawler/store.py
"""
Local storage for fetched resources.

Layout: ``<root>/<homepage-host>/<url path segments>``. A path that is empty or
ends with ``/`` is stored as ``index.html`` inside that directory. Files are
created with exclusive mode, so checking for an existing file and writing the
new one is a single step.
"""
from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Dict, List, Optional, Union
from urllib.parse import urlsplit

from site_mirror.config import OverwritePolicy
from site_mirror.crawler.models import Resource
from site_mirror.errors import ConfigError, StorageConflict
from site_mirror.logger import logger

__all__ = ("LocalStore", "INDEX_FILE")

INDEX_FILE = "index.html"


class LocalStore:
    """Maps resources to files under *root* and writes their bodies."""

    def __init__(self, root: Union[str, Path] = ".", home: Optional[str] = None) -> None:
        path = Path(root).expanduser().resolve()
        if path.exists() and not path.is_dir():
            raise ConfigError(f"Storage root {path} exists and is not a directory")
        path.mkdir(parents=True, exist_ok=True)
        self.root = path
        self.home = home
        self.owners: Dict[Path, str] = {}

    def path_for(self, url: str) -> Path:
        """Deterministic local path of *url*; query and fragment are ignored."""
        if not self.home:
            raise ConfigError("Homepage host is not set on the store")
        raw_path = urlsplit(url).path or "/"
        segments: List[str] = [
            s for s in posixpath.normpath(raw_path).split("/") if s not in ("", ".", "..")
        ]
        if raw_path.endswith("/") or not segments:
            segments.append(INDEX_FILE)
        return self.root.joinpath(self.home, *segments)

    def store(
        self,
        resource: Resource,
        overwrite: Union[OverwritePolicy, str] = OverwritePolicy.SKIP,
    ) -> Optional[Path]:
        """
        Write *resource* to its local path.

        Returns the path, or ``None`` when it is already present and *overwrite*
        is ``skip``. With ``fail`` an existing path raises :class:`StorageConflict`.
        """
        overwrite = OverwritePolicy(overwrite)
        if not resource.loaded:
            raise ValueError(f"Resource {resource.url} has not been fetched")

        path = self.path_for(resource.url)
        resource.attach(path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fh = path.open("xb")
        except (FileExistsError, IsADirectoryError, NotADirectoryError):
            return self._already_present(resource.url, path, overwrite)

        try:
            with fh:
                resource.save(fh)
        except BaseException:
            # a partial file would count as "already present" on the next run
            path.unlink(missing_ok=True)
            raise

        self.owners[path] = resource.url
        logger.info("+ %s => %s", resource.url, path)
        return path

    def _already_present(self, url: str, path: Path, overwrite: OverwritePolicy) -> None:
        previous = self.owners.get(path)
        if overwrite is OverwritePolicy.FAIL:
            raise StorageConflict(url, path, previous)
        logger.info("= %s => %s (already present)", url, path)
        return None
