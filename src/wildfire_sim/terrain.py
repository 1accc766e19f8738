"""Terrain classification of map imagery.

Map tiles are reduced to one of five terrain categories by looking at the
hue/saturation/value of an averaged pixel sample. The categories carry a
fixed flammability coefficient, which is the only terrain property the
fire-spread rules consume.
"""

import math
from enum import Enum
from typing import Dict, Optional, Tuple

Color = Tuple[int, int, int]


class TerrainType(Enum):
    """Land-cover categories recognised by the classifier."""
    Forest = 0
    Grass = 1
    Urban = 2
    Water = 3
    Farmland = 4


FLAMMABILITY: Dict[TerrainType, float] = {
    TerrainType.Forest: 0.8,
    TerrainType.Grass: 0.6,
    TerrainType.Farmland: 0.4,
    TerrainType.Urban: 0.2,
    TerrainType.Water: 0.0,
}

# Used for anything that is not a known TerrainType
DEFAULT_FLAMMABILITY: float = 0.3

# Display colours for renderers
TERRAIN_COLORS: Dict[TerrainType, Color] = {
    TerrainType.Forest: (0, 100, 0),                # darkgreen
    TerrainType.Grass: (144, 238, 144),             # lightgreen
    TerrainType.Urban: (150, 150, 150),             # lightgray
    TerrainType.Water: (0, 0, 255),                 # blue
    TerrainType.Farmland: (245, 228, 118),          # lightyellow
}

# Terrain assigned to cells whose imagery could not be sampled
FALLBACK_TERRAIN = TerrainType.Grass


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def rgb_to_hsv(r: int, g: int, b: int) -> Tuple[int, int, int]:
    """
    Convert an RGB colour to rounded HSV.

    Args:
        r, g, b: Channel values in 0-255

    Returns:
        (hue in degrees 0-359, saturation in percent, value in percent)
    """
    r_n, g_n, b_n = r / 255.0, g / 255.0, b / 255.0
    c_max = max(r_n, g_n, b_n)
    c_min = min(r_n, g_n, b_n)
    diff = c_max - c_min

    h = 0.0
    if diff != 0:
        if c_max == r_n:
            h = ((g_n - b_n) / diff) % 6
        elif c_max == g_n:
            h = (b_n - r_n) / diff + 2
        else:
            h = (r_n - g_n) / diff + 4
    hue = _round_half_up(60 * h) % 360

    saturation = 0 if c_max == 0 else _round_half_up(diff / c_max * 100)
    value = _round_half_up(c_max * 100)

    return hue, saturation, value


def classify_terrain(r: int, g: int, b: int) -> TerrainType:
    """
    Classify an averaged pixel colour into a terrain type.

    The hue bands overlap on purpose; rules are checked in a fixed order
    and the first match wins.

    Args:
        r, g, b: Channel values in 0-255

    Returns:
        The matching TerrainType, Grass when nothing matches
    """
    h, s, v = rgb_to_hsv(r, g, b)

    # Water: blue tones
    if 180 <= h <= 240 and s > 30 and v > 20:
        return TerrainType.Water

    # Forest: dark greens
    if 80 <= h <= 160 and s > 30 and v < 60:
        return TerrainType.Forest

    # Grass: light greens
    if 60 <= h <= 120 and s > 20 and v >= 40:
        return TerrainType.Grass

    # Urban: greys
    if s < 20 and 30 < v < 80:
        return TerrainType.Urban

    # Farmland: yellow/brown band
    if 0 <= h <= 60:
        return TerrainType.Farmland

    return TerrainType.Grass


def flammability(terrain: Optional[TerrainType]) -> float:
    """Flammability coefficient in [0, 1] for a terrain type."""
    return FLAMMABILITY.get(terrain, DEFAULT_FLAMMABILITY)
