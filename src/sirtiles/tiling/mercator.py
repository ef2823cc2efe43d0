"""Spherical Web Mercator helpers for 256px XYZ tiles.

Pixel coordinates grow right and down from the top-left of the world, while
Mercator meters grow right and up from the map center, hence the sign flip on
the Y axis.
"""

from __future__ import annotations

import math
from typing import Tuple

from sirtiles.core.models import BoundingBox

TILE_SIZE = 256
EARTH_RADIUS_M = 6378137.0
INITIAL_RESOLUTION = 2.0 * math.pi * EARTH_RADIUS_M / TILE_SIZE
ORIGIN_SHIFT = math.pi * EARTH_RADIUS_M


def resolution(zoom: int) -> float:
    """Meters per pixel at the equator for ``zoom``."""

    return INITIAL_RESOLUTION / (2 ** zoom)


def pixels_to_meters(px: float, py: float, zoom: int) -> Tuple[float, float]:
    res = resolution(zoom)
    mx = px * res - ORIGIN_SHIFT
    my = -(py * res - ORIGIN_SHIFT)
    return mx, my


def meters_to_pixels(mx: float, my: float, zoom: int) -> Tuple[float, float]:
    res = resolution(zoom)
    px = (mx + ORIGIN_SHIFT) / res
    py = (ORIGIN_SHIFT - my) / res
    return px, py


def meters_to_lnglat(mx: float, my: float) -> Tuple[float, float]:
    lon = (mx / ORIGIN_SHIFT) * 180.0
    lat = (my / ORIGIN_SHIFT) * 180.0
    lat = 180.0 / math.pi * (2.0 * math.atan(math.exp(lat * math.pi / 180.0)) - math.pi / 2.0)
    return lon, lat


def lnglat_to_meters(lon: float, lat: float) -> Tuple[float, float]:
    mx = lon * ORIGIN_SHIFT / 180.0
    my = math.log(math.tan((90.0 + lat) * math.pi / 360.0)) / (math.pi / 180.0)
    my = my * ORIGIN_SHIFT / 180.0
    return mx, my


def tile_bound(tx: int, ty: int, zoom: int) -> BoundingBox:
    """Return the WGS84 extent of tile ``(tx, ty)``.

    The top-left corner carries the larger latitude, so it supplies ``max_y``.
    """

    west, north = meters_to_lnglat(*pixels_to_meters(tx * TILE_SIZE, ty * TILE_SIZE, zoom))
    east, south = meters_to_lnglat(
        *pixels_to_meters((tx + 1) * TILE_SIZE, (ty + 1) * TILE_SIZE, zoom)
    )
    return BoundingBox(min_x=west, min_y=south, max_x=east, max_y=north)
