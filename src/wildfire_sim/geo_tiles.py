"""Web Mercator tile addressing (slippy-map scheme, origin top-left)."""

import math
from dataclasses import dataclass
from typing import List, Tuple

from .config import BoundingBox
from .constants import EARTH_RADIUS_KM, TILE_SERVER_URL, TILE_URL_TEMPLATE


@dataclass(frozen=True)
class TileCoordinate:
    x: int
    y: int
    zoom: int

    def url(self, server: str = TILE_SERVER_URL) -> str:
        return TILE_URL_TEMPLATE.format(server=server.rstrip("/"), z=self.zoom, x=self.x, y=self.y)


def lat_lon_to_tile(lat: float, lon: float, zoom: int) -> Tuple[int, int]:
    lat_rad = math.radians(lat)
    n = 2 ** zoom
    x = math.floor((lon + 180.0) / 360.0 * n)
    y = math.floor((1.0 - math.asinh(math.tan(lat_rad)) / math.pi) / 2.0 * n)
    return x, y


def tile_to_lat_lon(x: float, y: float, zoom: int) -> Tuple[float, float]:
    """Return the latitude/longitude of the tile's north-west corner."""
    n = 2 ** zoom
    lon = x / n * 360.0 - 180.0
    lat_rad = math.atan(math.sinh(math.pi * (1.0 - 2.0 * y / n)))
    return math.degrees(lat_rad), lon


def tiles_covering_bounds(bounds: BoundingBox, zoom: int) -> List[TileCoordinate]:
    """List every tile intersecting ``bounds``, row by row from the north-west tile."""
    west_x, north_y = lat_lon_to_tile(bounds.north, bounds.west, zoom)
    east_x, south_y = lat_lon_to_tile(bounds.south, bounds.east, zoom)

    return [
        TileCoordinate(x, y, zoom)
        for y in range(north_y, south_y + 1)
        for x in range(west_x, east_x + 1)
    ]


def great_circle_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance between two points in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
