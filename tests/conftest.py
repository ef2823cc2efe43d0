import sqlite3
import threading
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

import pytest

from sirtiles.catalog import RepositoryScanner
from sirtiles.tiling.address import resolve

TileMap = Dict[Tuple[int, int, int], bytes]


def write_tiles(repository_dir: Path, tiles: TileMap) -> None:
    """Store ``{(x, y, zoom): payload}`` the way the rasterizing pipeline does."""

    for (x, y, zoom), payload in tiles.items():
        address = resolve(x, y, zoom)
        shard_path = address.shard_path(repository_dir)
        shard_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(shard_path)
        try:
            conn.execute(
                f'CREATE TABLE IF NOT EXISTS "{address.table}" '
                "(ID INTEGER PRIMARY KEY, X INTEGER, Y INTEGER, Data BLOB)"
            )
            conn.execute(
                f'INSERT OR REPLACE INTO "{address.table}" (ID, X, Y, Data) VALUES (?, ?, ?, ?)',
                (address.row, x, y, payload),
            )
            conn.commit()
        finally:
            conn.close()


@pytest.fixture()
def make_repository(tmp_path: Path) -> Callable[..., Path]:
    def _make(name: str = "repo", tiles: Optional[TileMap] = None) -> Path:
        repository_dir = tmp_path / "root" / name
        repository_dir.mkdir(parents=True, exist_ok=True)
        write_tiles(repository_dir, tiles or {})
        return repository_dir

    return _make


class OverlapTrackingScanner(RepositoryScanner):
    """Counts analyse calls and the most that ever ran at the same time."""

    def __init__(self, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.calls = 0
        self.peak = 0
        self._active = 0
        self._guard = threading.Lock()

    def analyse(self, repository_dir, **kwargs):  # type: ignore[no-untyped-def, override]
        with self._guard:
            self.calls += 1
            self._active += 1
            self.peak = max(self.peak, self._active)
        try:
            # long enough for unserialised callers to pile up
            time.sleep(0.05)
            return super().analyse(repository_dir, **kwargs)
        finally:
            with self._guard:
                self._active -= 1


@pytest.fixture()
def tracking_scanner() -> OverlapTrackingScanner:
    return OverlapTrackingScanner()
