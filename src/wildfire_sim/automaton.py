"""Stochastic cellular-automaton rules for fire spread.

A tick reads every cell from the current grid and writes the result into a
freshly built grid, so no cell ever sees a neighbour that has already been
advanced in the same tick.
"""

import logging
import math
import random
from dataclasses import replace
from typing import Iterator, Optional

from .cell import BurnState, Cell
from .config import SimulationParameters
from .constants import (
    BASE_SPREAD_RATE,
    BURNOUT_BASE_TICKS,
    BURNOUT_FLAMMABILITY_TICKS,
    BURNOUT_INTENSITY,
    INTENSITY_DECAY,
    MAX_SPREAD_INTENSITY,
    MIN_SPREAD_INTENSITY,
)
from .grid import Grid
from .terrain import TerrainType, flammability

logger = logging.getLogger(__name__)

# Moore neighbourhood as (dy, dx), in the order neighbours are tried
NEIGHBOUR_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


def neighbours(grid: Grid, x: int, y: int) -> Iterator[Cell]:
    """Yield the Moore neighbours of (x, y) that lie inside the grid."""
    for dy, dx in NEIGHBOUR_OFFSETS:
        nx, ny = x + dx, y + dy
        if grid.in_bounds(nx, ny):
            yield grid.cell(nx, ny)


def wind_effect(from_x: int, from_y: int, to_x: int, to_y: int, wind_direction: float) -> float:
    """
    Wind factor for fire travelling from one cell to another.

    Grid rows grow southwards, so the row difference is negated to get a
    direction in the same convention as the wind (0 = East, 90 = North).

    Returns:
        1.0 with the wind, 0.3 across it and -0.4 straight against it
    """
    fire_direction = math.degrees(math.atan2(-(to_y - from_y), to_x - from_x)) % 360
    wind = wind_direction % 360

    angle_diff = abs(wind - fire_direction)
    effective_angle = min(angle_diff, 360 - angle_diff)

    return 0.3 + 0.7 * math.cos(math.radians(effective_angle))


def spread_probability(
    source: Cell,
    target_terrain: TerrainType,
    params: SimulationParameters,
    wind: float,
) -> float:
    """
    Probability that a burning cell sets a neighbour with ``target_terrain`` alight.

    Args:
        source: The burning neighbour
        target_terrain: Terrain of the cell that may ignite
        params: Current weather
        wind: Wind factor from :func:`wind_effect`

    Returns:
        Probability clamped to [0, 1]
    """
    temperature_effect = max(0.0, (params.temperature - 20) / 50)
    humidity_effect = max(0.0, (100 - params.humidity) / 100)
    rain_effect = max(0.0, (100 - params.rain_likelihood) / 100)

    probability = flammability(target_terrain)
    probability *= 0.5 + 0.5 * temperature_effect
    probability *= humidity_effect
    probability *= rain_effect
    probability *= 0.8 + 0.4 * wind
    probability *= 0.5 + 0.5 * source.burn_intensity

    return min(1.0, max(0.0, probability))


def burnout_duration(terrain: TerrainType) -> float:
    """Ticks a cell of this terrain can burn before it is exhausted (10-30)."""
    return flammability(terrain) * BURNOUT_FLAMMABILITY_TICKS + BURNOUT_BASE_TICKS


def _next_unburned(cell: Cell, grid: Grid, params: SimulationParameters, rng: random.Random) -> Cell:
    for neighbour in neighbours(grid, cell.x, cell.y):
        if neighbour.burn_state != BurnState.Burning:
            continue

        wind = wind_effect(neighbour.x, neighbour.y, cell.x, cell.y, params.wind_direction)
        probability = spread_probability(neighbour, cell.terrain, params, wind)

        if rng.random() < probability * BASE_SPREAD_RATE:
            intensity = rng.random() * (MAX_SPREAD_INTENSITY - MIN_SPREAD_INTENSITY) + MIN_SPREAD_INTENSITY
            return cell.ignited(intensity)

    return cell


def _next_burning(cell: Cell) -> Cell:
    duration = cell.burn_duration + 1
    intensity = max(0.0, cell.burn_intensity - INTENSITY_DECAY)

    burning = replace(cell, burn_intensity=intensity, burn_duration=duration)
    if duration >= burnout_duration(cell.terrain) or intensity <= BURNOUT_INTENSITY:
        return burning.extinguished()
    return burning


def next_cell_state(cell: Cell, grid: Grid, params: SimulationParameters, rng: random.Random) -> Cell:
    """
    Compute the state of one cell after a tick.

    Args:
        cell: The cell to advance, as found in ``grid``
        grid: The pre-tick grid; neighbours are read from here
        params: Current weather
        rng: Random source for ignition draws and new fire intensities

    Returns:
        The cell's post-tick state
    """
    if cell.burn_state == BurnState.Unburned:
        return _next_unburned(cell, grid, params, rng)
    if cell.burn_state == BurnState.Burning:
        return _next_burning(cell)
    # Burned cells stay burned
    return cell


def tick(grid: Grid, params: SimulationParameters, rng: Optional[random.Random] = None) -> Grid:
    """
    Advance the whole grid by one discrete step.

    Uses a two-phase update: every next state is computed from the
    untouched input grid, then assembled into a new Grid.

    Args:
        grid: Current grid (left unchanged)
        params: Weather for this tick, read fresh every call
        rng: Random source; pass a seeded ``random.Random`` for reproducible runs

    Returns:
        The grid after one tick
    """
    if rng is None:
        rng = random.Random()

    cells = tuple(
        tuple(next_cell_state(cell, grid, params, rng) for cell in row)
        for row in grid.cells
    )
    next_grid = grid.with_cells(cells)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"Tick: {next_grid.count(BurnState.Burning)} burning, "
            f"{next_grid.count(BurnState.Burned)} burned"
        )
    return next_grid
