"""Immutable simulation grid and its geographic framing."""

import math
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .cell import BurnState, Cell
from .config import BoundingBox
from .constants import KM_PER_DEGREE

CellRows = Tuple[Tuple[Cell, ...], ...]


def bounds_extent_km(bounds: BoundingBox) -> Tuple[float, float]:
    """
    Approximate the size of a bounding box in kilometres.

    Longitude degrees are shortened by the cosine of the mean latitude to
    account for meridians converging towards the poles.

    Returns:
        (east-west extent, north-south extent)
    """
    mean_lat = math.radians((bounds.north + bounds.south) / 2)
    lat_km = bounds.lat_span * KM_PER_DEGREE
    lon_km = bounds.lon_span * KM_PER_DEGREE * math.cos(mean_lat)
    return lon_km, lat_km


def grid_dimensions(bounds: BoundingBox, cell_size_km: float) -> Tuple[int, int]:
    """Number of (columns, rows) needed to cover ``bounds`` at ``cell_size_km``."""
    lon_km, lat_km = bounds_extent_km(bounds)
    width = max(1, math.ceil(lon_km / cell_size_km))
    height = max(1, math.ceil(lat_km / cell_size_km))
    return width, height


@dataclass(frozen=True)
class Grid:
    """
    Two-dimensional array of cells covering a bounding box.

    Rows are stored north to south, so ``cells[0]`` is the northern edge
    and ``cells[y][x]`` is column ``x`` of row ``y``. A Grid is a value:
    every state change produces a new Grid and leaves this one intact.
    """
    cells: CellRows = field(repr=False)
    bounds: BoundingBox
    cell_size_km: float

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def shape(self) -> Tuple[int, int]:
        """Keep in mind this is (rows, cols), as in numpy."""
        return self.height, self.width

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        return self.cells[y][x]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def with_cells(self, cells: CellRows) -> "Grid":
        return Grid(cells=cells, bounds=self.bounds, cell_size_km=self.cell_size_km)

    def cell_center(self, x: int, y: int) -> Tuple[float, float]:
        """Latitude/longitude of the centre of cell (x, y)."""
        lat = self.bounds.north - (y + 0.5) / self.height * self.bounds.lat_span
        lon = self.bounds.west + (x + 0.5) / self.width * self.bounds.lon_span
        return lat, lon

    def cell_at_location(self, lat: float, lon: float) -> Optional[Tuple[int, int]]:
        """
        Find the cell containing a geographic point.

        Returns:
            (x, y) of the cell, or None if the point lies outside the grid
        """
        if not self.bounds.contains(lat, lon):
            return None

        rel_x = (lon - self.bounds.west) / self.bounds.lon_span
        rel_y = (self.bounds.north - lat) / self.bounds.lat_span

        # Points on the east/south edge belong to the last column/row
        x = min(int(math.floor(rel_x * self.width)), self.width - 1)
        y = min(int(math.floor(rel_y * self.height)), self.height - 1)
        return x, y

    def count(self, state: BurnState) -> int:
        return sum(1 for cell in self if cell.burn_state == state)

    @property
    def is_burning(self) -> bool:
        return any(cell.burn_state == BurnState.Burning for cell in self)

    def burned_area_km2(self) -> float:
        """Nominal area of cells that are burning or burned out."""
        affected = sum(1 for cell in self if cell.burn_state != BurnState.Unburned)
        return affected * self.cell_size_km ** 2

    def state_array(self) -> NDArray[np.int8]:
        return np.array(
            [[cell.burn_state.value for cell in row] for row in self.cells],
            dtype=np.int8,
        )

    def terrain_array(self) -> NDArray[np.int8]:
        return np.array(
            [[cell.terrain.value for cell in row] for row in self.cells],
            dtype=np.int8,
        )

    def intensity_array(self) -> NDArray[np.float64]:
        return np.array(
            [[cell.burn_intensity for cell in row] for row in self.cells],
            dtype=np.float64,
        )

    def color_array(self) -> NDArray[np.uint8]:
        """RGB image of the grid with one pixel per cell, row 0 at the top."""
        return np.array(
            [[cell.color for cell in row] for row in self.cells],
            dtype=np.uint8,
        )


def reset(grid: Grid) -> Grid:
    """Return the grid with every cell unburned, terrain kept as is."""
    return grid.with_cells(tuple(tuple(cell.unburned() for cell in row) for row in grid.cells))
