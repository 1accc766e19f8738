import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    """Ensure `src/` is on sys.path so tests can import `wildfire_sim.*`.

    This repo uses the common `src/` layout but is not necessarily installed as a package
    in the active environment.
    """

    project_root = Path(__file__).resolve().parents[1]
    src_dir = project_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


class FixedRandom:
    """Random source returning the same value for every draw, counting draws."""

    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


@pytest.fixture
def make_grid():
    """Build a grid from rows of TerrainType values."""
    from wildfire_sim.cell import BurnState, Cell
    from wildfire_sim.config import BoundingBox
    from wildfire_sim.grid import Grid

    def _make_grid(terrain_rows, bounds=None, cell_size_km=1.0):
        rows = tuple(
            tuple(
                Cell(terrain=terrain, burn_state=BurnState.Unburned, x=x, y=y)
                for x, terrain in enumerate(row)
            )
            for y, row in enumerate(terrain_rows)
        )
        if bounds is None:
            bounds = BoundingBox(north=1.0, south=0.0, east=1.0, west=0.0)
        return Grid(cells=rows, bounds=bounds, cell_size_km=cell_size_km)

    return _make_grid


@pytest.fixture
def always_ignite():
    return FixedRandom(0.0)


@pytest.fixture
def never_ignite():
    return FixedRandom(0.999999)


@pytest.fixture
def with_cell():
    """Return a copy of a grid with one cell's fields changed."""
    from dataclasses import replace

    def _with_cell(grid, x, y, **changes):
        row = grid.cells[y]
        new_row = row[:x] + (replace(row[x], **changes),) + row[x + 1:]
        return grid.with_cells(grid.cells[:y] + (new_row,) + grid.cells[y + 1:])

    return _with_cell
