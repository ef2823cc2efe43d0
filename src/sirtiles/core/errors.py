"""Exception hierarchy shared by the tile store and the repository catalog."""

from __future__ import annotations


class SirTilesError(RuntimeError):
    """Base class for every failure raised by SirTiles."""


class TileNotFoundError(SirTilesError):
    """Raised when the shard file, table or row for a tile does not exist."""


class ShardIOError(SirTilesError):
    """Raised when an existing shard or repository directory cannot be read."""


class ScanFailure(SirTilesError):
    """Raised when a repository scan finds no usable tile data."""


class ScanCancelled(ScanFailure):
    """Raised when a scan is cancelled or exceeds its deadline."""


class MalformedSidecar(SirTilesError):
    """Raised when a cached repository descriptor cannot be parsed."""


class RepositoryNotFoundError(SirTilesError):
    """Raised when a repository (or the repository root) is not a directory."""
