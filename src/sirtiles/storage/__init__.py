"""Tile storage interfaces for SirTiles."""

from .base import TileSource
from .store import TileStore, fetch_tile

__all__ = ["TileSource", "TileStore", "fetch_tile"]
