"""Read-only access to SQLite shard files."""

from __future__ import annotations

import contextlib
import sqlite3
from pathlib import Path
from typing import Iterator, List

from sirtiles.logging import get_logger

LOGGER = get_logger(__name__)


@contextlib.contextmanager
def open_shard(path: Path) -> Iterator[sqlite3.Connection]:
    """Open ``path`` read-only and close it when the block exits.

    The ``mode=ro`` URI keeps SQLite from creating a missing file or
    writing to a shard.
    """

    uri = f"{Path(path).resolve().as_uri()}?mode=ro"
    LOGGER.debug("opening shard %s", path)
    conn = sqlite3.connect(uri, uri=True)
    try:
        yield conn
    finally:
        conn.close()


def quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def table_exists(conn: sqlite3.Connection, table: str) -> bool:
    cursor = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
        (table,),
    )
    return cursor.fetchone() is not None


def list_tile_tables(conn: sqlite3.Connection) -> List[str]:
    """Return tables named ``{letter}_{bx}_{by}``, skipping anything else."""

    cursor = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name")
    return [name for (name,) in cursor.fetchall() if len(name.split("_")) == 3]
