"""Command-line interface for SirTiles."""
