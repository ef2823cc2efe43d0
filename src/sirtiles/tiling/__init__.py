"""Tile addressing and Web Mercator projection for SirTiles."""

from .address import letter_zoom, resolve, resolve_coordinate, zoom_letter
from .mercator import (
    lnglat_to_meters,
    meters_to_lnglat,
    meters_to_pixels,
    pixels_to_meters,
    tile_bound,
)

__all__ = [
    "letter_zoom",
    "lnglat_to_meters",
    "meters_to_lnglat",
    "meters_to_pixels",
    "pixels_to_meters",
    "resolve",
    "resolve_coordinate",
    "tile_bound",
    "zoom_letter",
]
