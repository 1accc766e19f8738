"""Fire spread model implementation."""

import logging
from typing import Optional

from mesa import DataCollector, Model

from .automaton import tick
from .cell import BurnState
from .config import BoundingBox, SimulationParameters
from .grid import Grid, reset
from .ignition import ignite, ignite_at_location
from .rasterizer import rasterize
from .tiles import TileSource

logger = logging.getLogger(__name__)


class FireModel(Model):
    """Drives one grid through successive ticks of the fire-spread automaton."""

    def __init__(
        self,
        grid: Grid,
        params: Optional[SimulationParameters] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the fire spread model.

        Args:
            grid: Rasterized starting grid
            params: Weather used for ticks; may be replaced between steps
            seed: Seed for the model's random source, for reproducible runs
        """
        super().__init__(seed=seed)
        self.params = params or SimulationParameters(cell_size_km=grid.cell_size_km)
        self.initial_grid = reset(grid)
        self.grid = grid
        self.tick_count = 0

        self.datacollector = DataCollector(
            model_reporters={
                "Unburned": lambda m: m.grid.count(BurnState.Unburned),
                "Burning": lambda m: m.grid.count(BurnState.Burning),
                "Burned": lambda m: m.grid.count(BurnState.Burned),
            }
        )
        self.datacollector.collect(self)

    @classmethod
    def from_bounds(
        cls,
        bounds: BoundingBox,
        params: Optional[SimulationParameters] = None,
        tile_source: Optional[TileSource] = None,
        seed: Optional[int] = None,
    ) -> "FireModel":
        """Rasterize ``bounds`` with the given parameters and wrap the result in a model."""
        params = params or SimulationParameters()
        grid = rasterize(
            bounds,
            params.cell_size_km,
            params.wind_speed,
            params.wind_direction,
            params.temperature,
            params.humidity,
            tile_source=tile_source,
        )
        return cls(grid, params, seed=seed)

    def step(self):
        """
        Execute one step of the simulation.

        Any ignitions requested since the last step are already part of
        the current grid, so they are applied before this tick.
        """
        self.grid = tick(self.grid, self.params, self.random)
        self.tick_count += 1
        self.datacollector.collect(self)

        if not self.grid.is_burning:
            self.running = False

    def ignite(self, x: int, y: int) -> bool:
        """
        Ignite cell (x, y) of the current grid.

        Returns:
            True if the cell caught fire
        """
        updated = ignite(self.grid, x, y)
        return self._accept_ignition(updated)

    def ignite_at_location(self, lat: float, lon: float) -> bool:
        updated = ignite_at_location(self.grid, lat, lon)
        return self._accept_ignition(updated)

    def _accept_ignition(self, updated: Grid) -> bool:
        if updated is self.grid:
            return False
        self.grid = updated
        self.running = True
        return True

    def reset(self) -> None:
        """Put every cell back to unburned, keeping the classified terrain."""
        self.grid = self.initial_grid
        self.tick_count = 0
        self.running = True
        logger.info("Simulation reset")

    def __str__(self):
        return (
            f"FireModel {self.grid.width}x{self.grid.height}, tick {self.tick_count}: "
            f"{self.grid.count(BurnState.Burning)} burning, "
            f"{self.grid.count(BurnState.Burned)} burned"
        )
