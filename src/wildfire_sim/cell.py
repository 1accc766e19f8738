"""Grid cell implementation for fire spread simulation."""

from dataclasses import dataclass, replace
from enum import Enum

from .terrain import TERRAIN_COLORS, Color, TerrainType, flammability


class BurnState(Enum):
    """Possible burn states of a cell. Cells only ever move forward."""
    Unburned = 0
    Burning = 1
    Burned = 2


# Display colours for cells on fire; unburned cells show their terrain colour
BURN_STATE_COLORS = {
    BurnState.Burning: (255, 69, 0),               # orangered
    BurnState.Burned: (83, 57, 45),                # charred brown
}


@dataclass(frozen=True)
class Cell:
    """
    Immutable state of a single grid cell.

    Attributes:
        terrain: Classified terrain type
        burn_state: Current BurnState
        x, y: Column and row of the cell within its grid
        wind_x, wind_y: Wind vector captured when the grid was built
        humidity: Humidity captured when the grid was built
        temperature: Temperature captured when the grid was built
        burn_intensity: Current fire strength in [0, 1]
        burn_duration: Number of ticks spent burning
    """
    terrain: TerrainType
    burn_state: BurnState
    x: int
    y: int
    wind_x: float = 0.0
    wind_y: float = 0.0
    humidity: float = 0.0
    temperature: float = 0.0
    burn_intensity: float = 0.0
    burn_duration: int = 0

    @property
    def flammability(self) -> float:
        return flammability(self.terrain)

    @property
    def color(self) -> Color:
        return BURN_STATE_COLORS.get(self.burn_state, TERRAIN_COLORS[self.terrain])

    def is_burnable(self) -> bool:
        """
        Check if the cell can catch fire.

        Returns:
            True if the terrain burns at all and the cell has not caught fire yet
        """
        return self.burn_state == BurnState.Unburned and self.flammability > 0

    def ignited(self, intensity: float) -> "Cell":
        """Return a copy of this cell that has just started burning."""
        return replace(
            self,
            burn_state=BurnState.Burning,
            burn_intensity=intensity,
            burn_duration=0,
        )

    def extinguished(self) -> "Cell":
        """Return a copy of this cell that has burned out."""
        return replace(self, burn_state=BurnState.Burned, burn_intensity=0.0)

    def unburned(self) -> "Cell":
        """Return a fresh copy of this cell with all fire state cleared."""
        return replace(
            self,
            burn_state=BurnState.Unburned,
            burn_intensity=0.0,
            burn_duration=0,
        )

    def __str__(self) -> str:
        return f"Cell ({self.x}, {self.y}): {self.terrain.name}, {self.burn_state.name}"
