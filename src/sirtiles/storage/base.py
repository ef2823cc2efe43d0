"""Protocol definitions for tile storage components."""

from __future__ import annotations

from typing import Protocol


class TileSource(Protocol):
    """Interface for reading raw tile payloads from a repository."""

    def fetch(self, x: int, y: int, zoom: int) -> bytes:
        """Return the stored bytes for tile ``(x, y, zoom)``."""

    def has_shard(self, x: int, y: int, zoom: int) -> bool:
        """Return True when the shard file that would hold the tile exists."""
