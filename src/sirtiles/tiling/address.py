"""Tile → shard addressing.

Tiles are partitioned with a fixed three-level fan-out::

    repository/
      └─ {letter}/                       one directory per shard zoom
          └─ {letter}_{x//256}_{y//256}.s   SQLite shard, 256x256 tiles
              └─ {letter}_{x//64}_{y//64}   table, 64x64 tiles
                  └─ ID = x%64 + 64*(y%64)  one row per tile

The letter is ``'A' + zoom``. Zoom levels below 9 share the partitioning of
level 9. Zoom 25 (``'Z'``) is the last level that maps to a letter; higher
levels produce punctuation characters, which is how existing repositories
were written, so it is kept as is. The letter is not wrapped into a signed
byte, so zooms above 62 keep counting up through the code points
rather than folding back to negative values.
"""

from __future__ import annotations

from sirtiles.core.models import MIN_SHARD_ZOOM, ShardAddress, TileCoordinate

SHARD_SUFFIX = ".s"
SHARD_SPAN = 256
TABLE_SPAN = 64


def zoom_letter(zoom: int) -> str:
    """Return the naming letter used for tiles requested at ``zoom``."""

    return chr(ord("A") + max(zoom, MIN_SHARD_ZOOM))


def letter_zoom(name: str) -> int:
    """Return the zoom encoded by the first character of a shard/table name."""

    return ord(name[0]) - ord("A")


def resolve(x: int, y: int, zoom: int) -> ShardAddress:
    return resolve_coordinate(TileCoordinate(x, y, zoom))


def resolve_coordinate(tile: TileCoordinate) -> ShardAddress:
    x, y = tile.x, tile.y
    letter = zoom_letter(tile.shard_zoom)
    return ShardAddress(
        subdirectory=letter,
        shard_file=f"{letter}_{x // SHARD_SPAN}_{y // SHARD_SPAN}{SHARD_SUFFIX}",
        table=f"{letter}_{x // TABLE_SPAN}_{y // TABLE_SPAN}",
        row=(x % TABLE_SPAN) + TABLE_SPAN * (y % TABLE_SPAN),
    )
