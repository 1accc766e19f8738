#!/usr/bin/env python3
"""Main script to run the wildfire spread simulation."""

import logging
import sys
from pathlib import Path

# Add the src directory to the Python path
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from PIL import Image
from wildfire_sim import BoundingBox, BurnState, FireModel, SimulationParameters, TerrainType
from wildfire_sim.tiles import TileFetcher

TERRAIN_SYMBOLS = {
    TerrainType.Forest: "🌲",
    TerrainType.Grass: "🌿",
    TerrainType.Farmland: "🌾",
    TerrainType.Urban: "🏠",
    TerrainType.Water: "🌊",
}


def print_grid(model: FireModel) -> None:
    """
    Print a simple representation of the grid to console.

    Args:
        model: The FireModel instance to visualize
    """
    grid_str = ""
    for row in model.grid.cells:
        for cell in row:
            if cell.burn_state == BurnState.Burning:
                grid_str += "🔥"
            elif cell.burn_state == BurnState.Burned:
                grid_str += "⬛"
            else:
                grid_str += TERRAIN_SYMBOLS[cell.terrain]
        grid_str += "\n"
    print(grid_str)


def save_burn_map(model: FireModel, path: Path, scale: int = 8) -> None:
    """Save the grid as a PNG, drawing each cell as a square of ``scale`` pixels."""
    image = Image.fromarray(model.grid.color_array())
    image = image.resize((model.grid.width * scale, model.grid.height * scale), Image.Resampling.NEAREST)
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path)
    print(f"Burn map saved to {path}")


def main():
    """Run the wildfire spread simulation."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    # Simulation parameters
    BOUNDS = BoundingBox(north=61.70, south=61.55, east=14.85, west=14.55)
    PARAMS = SimulationParameters(
        cell_size_km=1.0,
        wind_speed=15,
        wind_direction=90,
        temperature=30,
        humidity=25,
        rain_likelihood=5,
    )
    STEPS = 100
    CACHE_DIR = project_root / "data" / "tiles"

    print("--- RASTERIZING AREA ---")
    model = FireModel.from_bounds(
        BOUNDS,
        PARAMS,
        tile_source=TileFetcher(cache_dir=str(CACHE_DIR)),
        seed=42,
    )

    # Set starting fire point
    x_start, y_start = model.grid.width // 2, model.grid.height // 2
    if model.ignite(x_start, y_start):
        print(f"Ignited cell at position ({x_start}, {y_start})")
    else:
        print("Cannot ignite starting cell.")
        return

    print("--- INITIAL STATE (AFTER IGNITION) ---")
    print_grid(model)

    # Main simulation loop
    for i in range(STEPS):
        print(f"\n--- STEP {i + 1} ---")
        model.step()
        print_grid(model)

        if not model.running:
            print("\nFire has been extinguished.")
            break

    print(model)
    print(f"Burned area: {model.grid.burned_area_km2():.1f} km2")
    save_burn_map(model, project_root / "data" / "burn_map.png")


if __name__ == "__main__":
    main()
