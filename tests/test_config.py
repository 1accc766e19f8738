"""Unit tests for parameters and configuration documents."""

import re
from datetime import datetime, timedelta, timezone

import pytest
from wildfire_sim.config import (
    BoundingBox,
    SimulationParameters,
    format_timestamp,
    from_document,
    to_document,
)


class TestBoundingBox:
    """Test cases for BoundingBox."""

    def test_from_corners_normalizes(self):
        box = BoundingBox.from_corners(10.0, 20.0, 5.0, 15.0)
        assert box == BoundingBox(north=10.0, south=5.0, east=20.0, west=15.0)

    def test_spans_and_center(self):
        box = BoundingBox(north=2.0, south=0.0, east=5.0, west=1.0)
        assert box.lat_span == 2.0
        assert box.lon_span == 4.0
        assert box.center == (1.0, 3.0)

    def test_contains(self):
        box = BoundingBox(north=2.0, south=0.0, east=5.0, west=1.0)
        assert box.contains(1.0, 3.0)
        assert box.contains(2.0, 5.0)
        assert not box.contains(3.0, 3.0)

    def test_dict_keys(self):
        box = BoundingBox(north=2.0, south=0.0, east=5.0, west=1.0)
        assert box.to_dict() == {"north": 2.0, "south": 0.0, "east": 5.0, "west": 1.0}
        assert BoundingBox.from_dict(box.to_dict()) == box


class TestSimulationParameters:
    """Test cases for SimulationParameters."""

    def test_defaults(self):
        params = SimulationParameters()
        assert params.cell_size_km == 5
        assert params.wind_speed == 15
        assert params.wind_direction == 90
        assert params.temperature == 25
        assert params.humidity == 30
        assert params.rain_likelihood == 10

    def test_document_keys(self):
        params = SimulationParameters(cell_size_km=2, rain_likelihood=40)
        assert params.to_dict() == {
            "gridCellSize": 2,
            "windSpeed": 15.0,
            "windDirection": 90.0,
            "temperature": 25.0,
            "humidity": 30.0,
            "rainLikelihood": 40,
        }

    def test_from_dict_partial_and_unknown_keys(self):
        params = SimulationParameters.from_dict({"windSpeed": 40, "colour": "red"})
        assert params.wind_speed == 40.0
        assert params.humidity == 30.0


class TestDocument:
    """Test cases for the saved configuration document."""

    def test_to_document(self):
        stamp = datetime(2024, 7, 1, 12, 0, tzinfo=timezone.utc)
        bounds = BoundingBox(north=2.0, south=0.0, east=5.0, west=1.0)

        doc = to_document(SimulationParameters(), bounds, timestamp=stamp)

        assert set(doc) == {"simulationParams", "selectedBounds", "timestamp"}
        assert doc["selectedBounds"] == bounds.to_dict()
        assert doc["timestamp"] == "2024-07-01T12:00:00.000Z"

    def test_to_document_without_selection(self):
        doc = to_document(SimulationParameters())
        assert doc["selectedBounds"] is None
        assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z", doc["timestamp"])

    def test_timestamp_truncates_to_milliseconds(self):
        stamp = datetime(2024, 7, 1, 12, 0, 5, 123987, tzinfo=timezone.utc)
        assert format_timestamp(stamp) == "2024-07-01T12:00:05.123Z"

    def test_timestamp_converted_to_utc(self):
        stamp = datetime(2024, 7, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(stamp) == "2024-07-01T12:30:00.000Z"

    def test_from_document(self):
        doc = {
            "simulationParams": {
                "gridCellSize": 1,
                "windSpeed": 20,
                "windDirection": 180,
                "temperature": 35,
                "humidity": 15,
                "rainLikelihood": 0,
            },
            "selectedBounds": {"north": 61.7, "south": 61.5, "east": 14.9, "west": 14.5},
            "timestamp": "2024-07-01T12:00:00.000Z",
        }

        params, bounds = from_document(doc)

        assert params == SimulationParameters(1, 20, 180, 35, 15, 0)
        assert bounds == BoundingBox(north=61.7, south=61.5, east=14.9, west=14.5)

    @pytest.mark.parametrize("doc", [{}, {"simulationParams": None, "selectedBounds": None}])
    def test_from_document_missing_sections(self, doc):
        assert from_document(doc) == (None, None)
