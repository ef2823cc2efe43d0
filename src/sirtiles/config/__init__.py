"""Configuration loading utilities for SirTiles."""

from .loader import ConfigLoader, ServerConfig, load_config

__all__ = ["ConfigLoader", "ServerConfig", "load_config"]
