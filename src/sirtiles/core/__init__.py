"""Core data models and errors for SirTiles."""

from .errors import (
    MalformedSidecar,
    RepositoryNotFoundError,
    ScanCancelled,
    ScanFailure,
    ShardIOError,
    SirTilesError,
    TileNotFoundError,
)
from .models import (
    DISPLAY_ZOOM,
    MIN_SHARD_ZOOM,
    BoundingBox,
    RepositoryDescriptor,
    ServerInfo,
    ShardAddress,
    TileCoordinate,
)

__all__ = [
    "DISPLAY_ZOOM",
    "MIN_SHARD_ZOOM",
    "BoundingBox",
    "MalformedSidecar",
    "RepositoryDescriptor",
    "RepositoryNotFoundError",
    "ScanCancelled",
    "ScanFailure",
    "ServerInfo",
    "ShardAddress",
    "ShardIOError",
    "SirTilesError",
    "TileCoordinate",
    "TileNotFoundError",
]
