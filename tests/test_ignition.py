"""Unit tests for manual ignition."""

import pytest
from wildfire_sim.cell import BurnState
from wildfire_sim.ignition import ignite, ignite_at_location
from wildfire_sim.terrain import TerrainType

F, G, W = TerrainType.Forest, TerrainType.Grass, TerrainType.Water


class TestIgnite:
    """Test cases for ignite()."""

    @pytest.fixture
    def grid(self, make_grid):
        return make_grid([[F, G], [W, G]])

    def test_ignites_unburned_cell(self, grid):
        after = ignite(grid, 0, 0)
        cell = after.cell(0, 0)

        assert cell.burn_state == BurnState.Burning
        assert cell.burn_intensity == 1.0
        assert cell.burn_duration == 0

    def test_only_target_changes(self, grid):
        after = ignite(grid, 0, 0)
        changed = [(c.x, c.y) for c, o in zip(after, grid) if c != o]
        assert changed == [(0, 0)]

    def test_original_grid_untouched(self, grid):
        ignite(grid, 0, 0)
        assert grid.cell(0, 0).burn_state == BurnState.Unburned

    def test_water_is_noop(self, grid):
        assert ignite(grid, 0, 1) is grid
        assert ignite(grid, 0, 1) == grid

    def test_second_ignition_is_noop(self, grid):
        once = ignite(grid, 1, 0)
        twice = ignite(once, 1, 0)
        assert twice is once

    def test_burned_cell_is_noop(self, grid, with_cell):
        burned = with_cell(grid, 1, 1, burn_state=BurnState.Burned)
        assert ignite(burned, 1, 1) is burned

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (2, 0), (0, 2), (99, 99)])
    def test_out_of_bounds_is_noop(self, grid, x, y):
        assert ignite(grid, x, y) is grid


class TestIgniteAtLocation:
    """Test cases for geographic ignition."""

    def test_ignites_cell_under_point(self, make_grid):
        grid = make_grid([[F, G], [W, G]])
        after = ignite_at_location(grid, 0.9, 0.9)
        assert after.cell(1, 0).burn_state == BurnState.Burning

    def test_point_outside_is_noop(self, make_grid):
        grid = make_grid([[F, G], [W, G]])
        assert ignite_at_location(grid, 5.0, 5.0) is grid
