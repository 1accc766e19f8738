"""Unit tests for colour-based terrain classification."""

import pytest
from wildfire_sim.terrain import (
    DEFAULT_FLAMMABILITY,
    FLAMMABILITY,
    TERRAIN_COLORS,
    TerrainType,
    classify_terrain,
    flammability,
    rgb_to_hsv,
)


class TestRgbToHsv:
    """Test cases for the HSV conversion."""

    @pytest.mark.parametrize(
        "rgb, hsv",
        [
            ((0, 0, 255), (240, 100, 100)),
            ((255, 0, 0), (0, 100, 100)),
            ((0, 255, 0), (120, 100, 100)),
            ((128, 128, 128), (0, 0, 50)),
            ((0, 0, 0), (0, 0, 0)),
            ((255, 0, 255), (300, 100, 100)),
            ((200, 150, 50), (40, 75, 78)),
        ],
    )
    def test_known_colours(self, rgb, hsv):
        assert rgb_to_hsv(*rgb) == hsv

    def test_hue_never_reaches_360(self):
        """Test that hues just below red wrap to 0."""
        h, _, _ = rgb_to_hsv(255, 0, 1)
        assert 0 <= h < 360


class TestClassifyTerrain:
    """Test cases for the ordered classification rules."""

    def test_pure_blue_is_water(self):
        assert classify_terrain(0, 0, 255) == TerrainType.Water

    def test_dark_green_is_forest(self):
        assert classify_terrain(0, 100, 0) == TerrainType.Forest

    def test_light_green_is_grass(self):
        assert classify_terrain(100, 200, 100) == TerrainType.Grass

    def test_grey_is_urban(self):
        assert classify_terrain(128, 128, 128) == TerrainType.Urban

    def test_brown_is_farmland(self):
        assert classify_terrain(200, 150, 50) == TerrainType.Farmland

    def test_unmatched_colour_falls_back_to_grass(self):
        """Test that a purple sample matches no rule and becomes grass."""
        assert classify_terrain(128, 0, 128) == TerrainType.Grass

    def test_forest_wins_over_grass_in_overlap(self):
        """Test that hue 80-120 at low value is forest even though grass's band also covers it."""
        h, s, v = rgb_to_hsv(40, 110, 40)
        assert 80 <= h <= 120 and s > 30 and v < 60
        assert classify_terrain(40, 110, 40) == TerrainType.Forest

    def test_water_wins_over_urban_band(self):
        """Test that saturated blue is water before any grey rule is tried."""
        assert classify_terrain(30, 60, 120) == TerrainType.Water

    def test_deterministic(self):
        """Test that the same colour always gets the same terrain."""
        results = {classify_terrain(90, 140, 60) for _ in range(20)}
        assert len(results) == 1


class TestFlammability:
    """Test cases for the flammability table."""

    def test_values(self):
        assert flammability(TerrainType.Forest) == 0.8
        assert flammability(TerrainType.Grass) == 0.6
        assert flammability(TerrainType.Farmland) == 0.4
        assert flammability(TerrainType.Urban) == 0.2
        assert flammability(TerrainType.Water) == 0.0

    def test_every_terrain_has_a_value(self):
        assert set(FLAMMABILITY) == set(TerrainType)

    def test_unknown_terrain_uses_default(self):
        assert flammability(None) == DEFAULT_FLAMMABILITY == 0.3


class TestTerrainColors:
    """Test cases for the display colour table."""

    def test_every_terrain_has_a_colour(self):
        assert set(TERRAIN_COLORS) == set(TerrainType)

    def test_colours_are_rgb_bytes(self):
        for color in TERRAIN_COLORS.values():
            assert len(color) == 3
            assert all(0 <= channel <= 255 for channel in color)

    @pytest.mark.parametrize("terrain", list(TerrainType))
    def test_display_colour_classifies_as_its_terrain(self, terrain):
        """Test that a tile painted in a terrain's colour reads back as that terrain."""
        assert classify_terrain(*TERRAIN_COLORS[terrain]) == terrain
