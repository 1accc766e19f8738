"""Simulation inputs and the saved-configuration document schema.

The configuration document exported by the map front-end looks like::

    {
        "simulationParams": {"gridCellSize": 5, "windSpeed": 15, ...},
        "selectedBounds": {"north": ..., "south": ..., "east": ..., "west": ...},
        "timestamp": "2024-07-01T12:00:00.000Z"
    }

Reading and writing the file itself is left to the caller; this module only
converts between the document and the core's parameter types.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundingBox:
    """Geographic rectangle in decimal degrees.

    Callers are expected to pass ``north > south`` and ``east > west``;
    use :meth:`from_corners` to normalize two arbitrary corners.
    """

    north: float
    south: float
    east: float
    west: float

    @classmethod
    def from_corners(cls, lat1: float, lon1: float, lat2: float, lon2: float) -> "BoundingBox":
        """Build a box from two opposite corners in any order."""
        return cls(
            north=max(lat1, lat2),
            south=min(lat1, lat2),
            east=max(lon1, lon2),
            west=min(lon1, lon2),
        )

    @property
    def lat_span(self) -> float:
        return self.north - self.south

    @property
    def lon_span(self) -> float:
        return self.east - self.west

    @property
    def center(self) -> Tuple[float, float]:
        return (self.north + self.south) / 2, (self.east + self.west) / 2

    def contains(self, lat: float, lon: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lon <= self.east

    def to_dict(self) -> Dict[str, float]:
        return {"north": self.north, "south": self.south, "east": self.east, "west": self.west}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoundingBox":
        return cls(
            north=float(data["north"]),
            south=float(data["south"]),
            east=float(data["east"]),
            west=float(data["west"]),
        )


@dataclass
class SimulationParameters:
    """Caller-supplied weather and grid settings.

    Attributes:
        cell_size_km: Edge length of one grid cell in kilometres.
        wind_speed: Wind speed (km/h).
        wind_direction: Direction the wind blows towards, in degrees,
            0 = East, counter-clockwise (standard math convention).
        temperature: Air temperature in degrees Celsius.
        humidity: Relative humidity in percent.
        rain_likelihood: Chance of rain in percent.
    """

    cell_size_km: float = 5.0
    wind_speed: float = 15.0
    wind_direction: float = 90.0
    temperature: float = 25.0
    humidity: float = 30.0
    rain_likelihood: float = 10.0

    # Document key -> attribute name
    DOCUMENT_KEYS = {
        "gridCellSize": "cell_size_km",
        "windSpeed": "wind_speed",
        "windDirection": "wind_direction",
        "temperature": "temperature",
        "humidity": "humidity",
        "rainLikelihood": "rain_likelihood",
    }

    def to_dict(self) -> Dict[str, float]:
        return {key: getattr(self, attr) for key, attr in self.DOCUMENT_KEYS.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationParameters":
        """Build parameters from a ``simulationParams`` section.

        Missing keys keep their defaults; unknown keys are ignored.
        """
        kwargs = {}
        for key, attr in cls.DOCUMENT_KEYS.items():
            if key in data and data[key] is not None:
                kwargs[attr] = float(data[key])
        unknown = set(data) - set(cls.DOCUMENT_KEYS)
        if unknown:
            logger.debug(f"Ignoring unknown simulation parameters: {sorted(unknown)}")
        return cls(**kwargs)


def format_timestamp(timestamp: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix, e.g. 2024-07-01T12:00:00.000Z.

    Naive datetimes are taken to be local time.
    """
    utc = timestamp.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S") + f".{utc.microsecond // 1000:03d}Z"


def to_document(
    params: SimulationParameters,
    bounds: Optional[BoundingBox] = None,
    timestamp: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Build a configuration document from the current parameters and selection."""
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    return {
        "simulationParams": params.to_dict(),
        "selectedBounds": bounds.to_dict() if bounds is not None else None,
        "timestamp": format_timestamp(timestamp),
    }


def from_document(
    document: Dict[str, Any],
) -> Tuple[Optional[SimulationParameters], Optional[BoundingBox]]:
    """Extract parameters and bounds from a configuration document.

    Either section may be absent (or null), in which case ``None`` is
    returned in its place.
    """
    params = None
    bounds = None

    if document.get("simulationParams"):
        params = SimulationParameters.from_dict(document["simulationParams"])
    if document.get("selectedBounds"):
        bounds = BoundingBox.from_dict(document["selectedBounds"])

    return params, bounds
