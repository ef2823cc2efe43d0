"""Repository listing backed by cached descriptors and on-demand scans."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import List, Optional

from sirtiles.core.errors import (
    MalformedSidecar,
    RepositoryNotFoundError,
    ScanFailure,
    ShardIOError,
)
from sirtiles.core.models import RepositoryDescriptor, repository_path
from sirtiles.logging import get_logger, repository_logger

from .lock import RepositoryLocks
from .scanner import RepositoryScanner
from .sidecar import SIDECAR_NAME, read_sidecar

LOGGER = get_logger(__name__)


class RepositoryCatalog:
    """Describe every repository under a root directory.

    Each entry comes from the first tier that works: the cached
    ``repository.json``, a fresh scan (which writes the cache), or a
    placeholder. Placeholders are not cached, so broken repositories are
    rescanned on every listing.
    """

    def __init__(
        self,
        root: Path | str,
        *,
        scanner: Optional[RepositoryScanner] = None,
        sidecar_name: str = SIDECAR_NAME,
        scan_timeout: Optional[float] = None,
    ) -> None:
        self._root = Path(root)
        self._sidecar_name = sidecar_name
        self._scanner = scanner or RepositoryScanner(
            locks=RepositoryLocks(),
            sidecar_name=sidecar_name,
            timeout=scan_timeout,
        )

    @property
    def root(self) -> Path:
        return self._root

    def list_repositories(
        self, *, cancel_event: Optional[threading.Event] = None
    ) -> List[RepositoryDescriptor]:
        return [
            self._describe_dir(path, cancel_event=cancel_event)
            for path in self._repository_dirs()
        ]

    def describe(self, name: str) -> RepositoryDescriptor:
        return self._describe_dir(self._repository_dir(name))

    def rescan(self, name: str, *, cancel_event: Optional[threading.Event] = None) -> RepositoryDescriptor:
        """Scan ``name`` even if a sidecar exists; scan errors propagate."""

        return self._scanner.scan(self._repository_dir(name), cancel_event=cancel_event)

    def _repository_dirs(self) -> List[Path]:
        if not self._root.is_dir():
            raise RepositoryNotFoundError(f"{self._root} is not a directory")
        try:
            entries = sorted(self._root.iterdir())
        except OSError as exc:
            raise ShardIOError(f"cannot list {self._root}: {exc}") from exc
        return [entry for entry in entries if entry.is_dir()]

    def _repository_dir(self, name: str) -> Path:
        path = repository_path(self._root, name)
        if not path.is_dir():
            raise RepositoryNotFoundError(f"{path} is not a directory")
        return path

    def _describe_dir(
        self, path: Path, *, cancel_event: Optional[threading.Event] = None
    ) -> RepositoryDescriptor:
        cached = self._read_cached(path)
        if cached is not None:
            return cached

        with self._scanner.locks.get(path):
            # another thread may have finished a scan while we waited
            cached = self._read_cached(path)
            if cached is not None:
                return cached
            try:
                return self._scanner.scan(path, cancel_event=cancel_event)
            except (ScanFailure, ShardIOError) as exc:
                repository_logger(LOGGER, path).warning(
                    "using placeholder for repository %s: %s", path.name, exc
                )
                return RepositoryDescriptor.placeholder(path.name)

    def _read_cached(self, path: Path) -> Optional[RepositoryDescriptor]:
        try:
            return read_sidecar(path, name=self._sidecar_name)
        except MalformedSidecar as exc:
            repository_logger(LOGGER, path).warning("ignoring cached descriptor for %s: %s", path.name, exc)
            return None
