"""
Wildfire Spread Simulation using Cellular Automata.

Turns a selected map area into a classified terrain grid and advances it
through discrete ticks of a stochastic fire-spread automaton driven by
wind, temperature, humidity and rain.
"""

from .automaton import tick
from .cell import BurnState, Cell
from .config import BoundingBox, SimulationParameters
from .exceptions import RasterizationError
from .grid import Grid, reset
from .ignition import ignite, ignite_at_location
from .model import FireModel
from .rasterizer import rasterize
from .terrain import TerrainType, classify_terrain, flammability

__version__ = "0.1.0"

__all__ = [
    "BoundingBox",
    "BurnState",
    "Cell",
    "FireModel",
    "Grid",
    "RasterizationError",
    "SimulationParameters",
    "TerrainType",
    "classify_terrain",
    "flammability",
    "ignite",
    "ignite_at_location",
    "rasterize",
    "reset",
    "tick",
]
