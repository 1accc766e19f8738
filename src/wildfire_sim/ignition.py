"""Manual ignition of grid cells."""

import logging

from .constants import MANUAL_IGNITION_INTENSITY
from .grid import Grid

logger = logging.getLogger(__name__)


def ignite(grid: Grid, x: int, y: int) -> Grid:
    """
    Set a single cell on fire.

    Ignition outside the grid, on non-flammable terrain or on a cell that is
    already burning or burned is a no-op and returns ``grid`` itself.

    Args:
        grid: Current grid (left unchanged)
        x, y: Column and row of the cell to ignite

    Returns:
        The grid with the cell burning at full intensity
    """
    if not grid.in_bounds(x, y):
        logger.debug(f"Ignoring ignition outside the grid at ({x}, {y})")
        return grid

    cell = grid.cell(x, y)
    if not cell.is_burnable():
        logger.debug(f"Cannot ignite {cell}")
        return grid

    row = grid.cells[y]
    new_row = row[:x] + (cell.ignited(MANUAL_IGNITION_INTENSITY),) + row[x + 1:]
    logger.info(f"Ignited cell at position ({x}, {y})")
    return grid.with_cells(grid.cells[:y] + (new_row,) + grid.cells[y + 1:])


def ignite_at_location(grid: Grid, lat: float, lon: float) -> Grid:
    """Ignite the cell containing a geographic point; points off the grid are ignored."""
    position = grid.cell_at_location(lat, lon)
    if position is None:
        return grid
    return ignite(grid, *position)
