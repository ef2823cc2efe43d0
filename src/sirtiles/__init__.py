"""SirTiles sharded raster tile store."""

from __future__ import annotations

import importlib
from typing import Any

__version__ = "0.1.0"

__all__ = [
    "BoundingBox",
    "ConfigLoader",
    "RepositoryCatalog",
    "RepositoryDescriptor",
    "RepositoryScanner",
    "ServerConfig",
    "ServerInfo",
    "ShardAddress",
    "TileCoordinate",
    "TileStore",
    "fetch_tile",
    "load_config",
    "resolve",
]

_MODULE_MAP = {
    "BoundingBox": ("sirtiles.core", "BoundingBox"),
    "ConfigLoader": ("sirtiles.config", "ConfigLoader"),
    "RepositoryCatalog": ("sirtiles.catalog", "RepositoryCatalog"),
    "RepositoryDescriptor": ("sirtiles.core", "RepositoryDescriptor"),
    "RepositoryScanner": ("sirtiles.catalog", "RepositoryScanner"),
    "ServerConfig": ("sirtiles.config", "ServerConfig"),
    "ServerInfo": ("sirtiles.core", "ServerInfo"),
    "ShardAddress": ("sirtiles.core", "ShardAddress"),
    "TileCoordinate": ("sirtiles.core", "TileCoordinate"),
    "TileStore": ("sirtiles.storage", "TileStore"),
    "fetch_tile": ("sirtiles.storage", "fetch_tile"),
    "load_config": ("sirtiles.config", "load_config"),
    "resolve": ("sirtiles.tiling", "resolve"),
}


def __getattr__(name: str) -> Any:
    if name not in _MODULE_MAP:
        raise AttributeError(f"module 'sirtiles' has no attribute '{name}'")
    module_name, attr = _MODULE_MAP[name]
    module = importlib.import_module(module_name)
    return getattr(module, attr)
