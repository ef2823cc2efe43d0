"""Derive a repository descriptor from the tiles stored in its shards."""

from __future__ import annotations

import re
import sqlite3
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from sirtiles.core.errors import ScanCancelled, ScanFailure, ShardIOError
from sirtiles.core.models import DISPLAY_ZOOM, BoundingBox, RepositoryDescriptor
from sirtiles.logging import get_logger, repository_logger
from sirtiles.storage.shard import list_tile_tables, open_shard, quote_identifier
from sirtiles.tiling.address import SHARD_SUFFIX, letter_zoom
from sirtiles.tiling.mercator import tile_bound

from .lock import RepositoryLocks
from .sidecar import SIDECAR_NAME, write_sidecar

LOGGER = get_logger(__name__)

_ZOOM_DIR = re.compile(r"^[A-Z]$")


@dataclass
class ScanResult:
    """Raw totals accumulated while walking a repository."""

    box: BoundingBox
    size_bytes: int
    shard_count: int
    table_count: int


class RepositoryScanner:
    """Walk zoom-letter directories and measure the extent of stored tiles.

    Scans of the same directory are serialised through ``locks`` so two
    callers never race on writing the sidecar.
    """

    def __init__(
        self,
        *,
        locks: Optional[RepositoryLocks] = None,
        sidecar_name: str = SIDECAR_NAME,
        timeout: Optional[float] = None,
    ) -> None:
        self._locks = locks or RepositoryLocks()
        self._sidecar_name = sidecar_name
        self._timeout = timeout

    @property
    def locks(self) -> RepositoryLocks:
        return self._locks

    def scan(
        self,
        repository_dir: Path | str,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> RepositoryDescriptor:
        """Analyse ``repository_dir`` and persist the descriptor next to it."""

        repository_dir = Path(repository_dir)
        with self._locks.get(repository_dir):
            descriptor = self.analyse(repository_dir, timeout=timeout, cancel_event=cancel_event)
            write_sidecar(repository_dir, descriptor, name=self._sidecar_name)
        return descriptor

    def analyse(
        self,
        repository_dir: Path | str,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> RepositoryDescriptor:
        """Return a fresh descriptor without touching the sidecar."""

        repository_dir = Path(repository_dir)
        limit = timeout if timeout is not None else self._timeout
        deadline = time.monotonic() + limit if limit is not None else None
        started = time.monotonic()

        result = self._walk(repository_dir, deadline, cancel_event)
        if result.box.is_empty:
            raise ScanFailure(f"no tile tables found under {repository_dir}")

        lng, lat = result.box.center
        descriptor = RepositoryDescriptor(
            name=repository_dir.name,
            lng=lng,
            lat=lat,
            zoom=DISPLAY_ZOOM,
            size_bytes=float(result.size_bytes),
            url=repository_dir.name,
            analyzed=True,
        )
        repository_logger(LOGGER, repository_dir).info(
            "scanned repository %s: %d shards, %d tables, %d bytes in %.2fs",
            repository_dir.name,
            result.shard_count,
            result.table_count,
            result.size_bytes,
            time.monotonic() - started,
        )
        return descriptor

    def _walk(
        self,
        repository_dir: Path,
        deadline: Optional[float],
        cancel_event: Optional[threading.Event],
    ) -> ScanResult:
        result = ScanResult(box=BoundingBox.empty(), size_bytes=0, shard_count=0, table_count=0)
        for zoom_dir in self._zoom_dirs(repository_dir):
            for shard_path in self._shard_files(zoom_dir):
                self._check_deadline(repository_dir, deadline, cancel_event)
                result.table_count += self._extend_from_shard(shard_path, result.box)
                try:
                    result.size_bytes += shard_path.stat().st_size
                except OSError as exc:
                    raise ShardIOError(f"cannot stat {shard_path}: {exc}") from exc
                result.shard_count += 1
        return result

    @staticmethod
    def _check_deadline(
        repository_dir: Path,
        deadline: Optional[float],
        cancel_event: Optional[threading.Event],
    ) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise ScanCancelled(f"scan of {repository_dir} cancelled")
        if deadline is not None and time.monotonic() >= deadline:
            raise ScanCancelled(f"scan of {repository_dir} timed out")

    @staticmethod
    def _zoom_dirs(repository_dir: Path) -> List[Path]:
        try:
            entries = sorted(repository_dir.iterdir())
        except OSError as exc:
            raise ShardIOError(f"cannot list {repository_dir}: {exc}") from exc
        return [entry for entry in entries if entry.is_dir() and _ZOOM_DIR.match(entry.name)]

    @staticmethod
    def _shard_files(zoom_dir: Path) -> List[Path]:
        try:
            entries = sorted(zoom_dir.iterdir())
        except OSError as exc:
            raise ShardIOError(f"cannot list {zoom_dir}: {exc}") from exc
        return [entry for entry in entries if entry.is_file() and entry.name.endswith(SHARD_SUFFIX)]

    @staticmethod
    def _extend_from_shard(shard_path: Path, box: BoundingBox) -> int:
        """Grow ``box`` by every populated tile table in the shard."""

        used = 0
        try:
            with open_shard(shard_path) as conn:
                for table in list_tile_tables(conn):
                    x_min, x_max, y_min, y_max = conn.execute(
                        f"SELECT MIN(X), MAX(X), MIN(Y), MAX(Y) FROM {quote_identifier(table)}"
                    ).fetchone()
                    if x_min is None:
                        LOGGER.debug("table %s in %s is empty", table, shard_path.name)
                        continue
                    # tile indices grow right and down from the top-left corner
                    zoom = letter_zoom(table)
                    box.extend(tile_bound(int(x_min), int(y_min), zoom))
                    box.extend(tile_bound(int(x_max), int(y_max), zoom))
                    used += 1
        except sqlite3.Error as exc:
            raise ShardIOError(f"cannot analyse {shard_path}: {exc}") from exc
        return used
