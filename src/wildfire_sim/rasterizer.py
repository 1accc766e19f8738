"""Conversion of a selected map area into a classified terrain grid."""

import logging
import math
from collections import Counter
from typing import Dict, Optional

from .cell import BurnState, Cell
from .config import BoundingBox
from .constants import TILE_SAMPLE_RADIUS, TILE_ZOOM
from .exceptions import RasterizationError
from .geo_tiles import TileCoordinate, lat_lon_to_tile, tile_to_lat_lon, tiles_covering_bounds
from .grid import Grid, grid_dimensions
from .terrain import FALLBACK_TERRAIN, TerrainType, classify_terrain
from .tiles import TileFetcher, TileImage, TileSource

logger = logging.getLogger(__name__)


def wind_components(wind_speed: float, wind_direction: float) -> tuple[float, float]:
    """Split wind into (x, y) components; direction in degrees, 0 = East, counter-clockwise."""
    direction = math.radians(wind_direction)
    return wind_speed * math.cos(direction), wind_speed * math.sin(direction)


def sample_terrain(
    lat: float,
    lon: float,
    tiles: Dict[TileCoordinate, TileImage],
    zoom: int = TILE_ZOOM,
    radius: int = TILE_SAMPLE_RADIUS,
) -> TerrainType:
    """
    Classify the terrain at a geographic point from already fetched tiles.

    Args:
        lat, lon: Point to classify
        tiles: Fetched tile images keyed by coordinate
        zoom: Zoom level the tiles were fetched at
        radius: Half-size of the averaged pixel window

    Returns:
        Classified terrain, or the fallback terrain if the tile is missing
    """
    x, y = lat_lon_to_tile(lat, lon, zoom)
    image = tiles.get(TileCoordinate(x, y, zoom))
    if image is None:
        return FALLBACK_TERRAIN

    north, west = tile_to_lat_lon(x, y, zoom)
    south, east = tile_to_lat_lon(x + 1, y + 1, zoom)

    px = math.floor((lon - west) / (east - west) * image.width)
    py = math.floor((north - lat) / (north - south) * image.height)

    return classify_terrain(*image.average_rgb(px, py, radius))


def rasterize(
    bounds: BoundingBox,
    cell_size_km: float,
    wind_speed: float,
    wind_direction: float,
    temperature: float,
    humidity: float,
    tile_source: Optional[TileSource] = None,
    zoom: int = TILE_ZOOM,
) -> Grid:
    """
    Build an unburned grid for a bounding box from map imagery.

    Every call fetches its own tiles and builds its own grid, so an
    abandoned call leaves nothing behind for the next one.

    Args:
        bounds: Area to cover
        cell_size_km: Edge length of one cell in kilometres
        wind_speed, wind_direction: Ambient wind stored on every cell
        temperature, humidity: Ambient conditions stored on every cell
        tile_source: Where tiles come from (a default TileFetcher otherwise)
        zoom: Tile zoom level used for sampling

    Returns:
        A new Grid with every cell Unburned

    Raises:
        RasterizationError: If the tile source cannot be set up
    """
    width, height = grid_dimensions(bounds, cell_size_km)
    logger.info(f"Rasterizing {bounds} into {width}x{height} cells of {cell_size_km} km")

    if tile_source is None:
        try:
            tile_source = TileFetcher()
        except OSError as e:
            logger.error(f"Could not set up tile source: {e}")
            raise RasterizationError(f"Could not set up tile source: {e}") from e

    wind_x, wind_y = wind_components(wind_speed, wind_direction)
    lat_span = bounds.north - bounds.south
    lon_span = bounds.east - bounds.west

    # Row 0 is the northern edge
    centres = [
        [
            (bounds.north - (y + 0.5) / height * lat_span,
             bounds.west + (x + 0.5) / width * lon_span)
            for x in range(width)
        ]
        for y in range(height)
    ]

    # Only tiles under a cell centre are ever sampled
    sampled = {
        TileCoordinate(*lat_lon_to_tile(lat, lon, zoom), zoom)
        for row in centres
        for lat, lon in row
    }
    needed = [tile for tile in tiles_covering_bounds(bounds, zoom) if tile in sampled]
    logger.debug(f"Fetching {len(needed)} of the tiles covering {bounds}")
    tiles = tile_source.fetch_tiles(needed)

    rows = []
    for y, row_centres in enumerate(centres):
        row = []
        for x, (lat, lon) in enumerate(row_centres):
            row.append(Cell(
                terrain=sample_terrain(lat, lon, tiles, zoom),
                burn_state=BurnState.Unburned,
                x=x,
                y=y,
                wind_x=wind_x,
                wind_y=wind_y,
                humidity=humidity,
                temperature=temperature,
            ))
        rows.append(tuple(row))

    grid = Grid(cells=tuple(rows), bounds=bounds, cell_size_km=cell_size_km)

    composition = Counter(cell.terrain.name for cell in grid)
    logger.info(f"Terrain composition: {dict(composition)}")
    return grid
