"""Point lookups of tiles stored in sharded SQLite files."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from sirtiles.core.errors import RepositoryNotFoundError, ShardIOError, TileNotFoundError
from sirtiles.core.models import repository_path
from sirtiles.logging import get_logger
from sirtiles.tiling.address import resolve

from .base import TileSource
from .shard import open_shard, quote_identifier, table_exists

LOGGER = get_logger(__name__)


class TileStore(TileSource):
    """Serve raw tile bytes from one repository directory.

    The payload is returned exactly as stored; the image format is opaque to
    the store.
    """

    def __init__(self, repository_dir: Path | str) -> None:
        self._repository_dir = Path(repository_dir)

    @classmethod
    def open(cls, root: Path | str, name: str, *, create: bool = False) -> "TileStore":
        """Return a store for repository ``name`` under ``root``.

        A missing directory is reported as ``RepositoryNotFoundError``. With
        ``create`` the directory is made first, so the next open succeeds.
        """

        repository_dir = repository_path(root, name)
        if not repository_dir.exists():
            if create:
                repository_dir.mkdir(parents=True, exist_ok=True)
                LOGGER.info("created repository directory %s", repository_dir)
            raise RepositoryNotFoundError(f"{repository_dir} not exist")
        if not repository_dir.is_dir():
            raise RepositoryNotFoundError(f"{repository_dir} is not a directory")
        return cls(repository_dir)

    @property
    def repository_dir(self) -> Path:
        return self._repository_dir

    def has_shard(self, x: int, y: int, zoom: int) -> bool:
        return resolve(x, y, zoom).shard_path(self._repository_dir).is_file()

    def fetch(self, x: int, y: int, zoom: int) -> bytes:
        address = resolve(x, y, zoom)
        shard_path = address.shard_path(self._repository_dir)
        if not self.has_shard(x, y, zoom):
            raise TileNotFoundError(f"{shard_path} not exist")

        try:
            with open_shard(shard_path) as conn:
                if not table_exists(conn, address.table):
                    raise TileNotFoundError(f"table {address.table} not in {shard_path}")
                row = conn.execute(
                    f"SELECT Data FROM {quote_identifier(address.table)} WHERE ID = ?",
                    (address.row,),
                ).fetchone()
        except sqlite3.Error as exc:
            LOGGER.error("failed to read shard %s: %s", shard_path, exc)
            raise ShardIOError(f"cannot read {shard_path}: {exc}") from exc

        if row is None or row[0] is None:
            raise TileNotFoundError(
                f"tile {zoom}/{x}/{y} not in {address.table} of {shard_path}"
            )
        payload = row[0]
        if isinstance(payload, bytes):
            return payload
        # writers that bound a str end up with a TEXT value in the Data column
        if isinstance(payload, str):
            return payload.encode("utf-8")
        raise ShardIOError(
            f"tile {zoom}/{x}/{y} in {shard_path} holds {type(payload).__name__}, not a blob"
        )


def fetch_tile(repository_dir: Path | str, x: int, y: int, zoom: int) -> bytes:
    """Convenience wrapper around :meth:`TileStore.fetch`."""

    return TileStore(repository_dir).fetch(x, y, zoom)
