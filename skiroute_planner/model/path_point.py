"""PathPoint - The fundamental geometry atom for route planning.

A PathPoint represents a single GPS coordinate with optional elevation.
Segment geometries are ordered tuples of PathPoints: the first point is
the entry, the last point is the exit.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from skiroute_planner.core.geo_calculator import GeoCalculator


@dataclass(frozen=True)
class PathPoint:
    """A point on a segment with GPS coordinates and optional elevation.

    Attributes:
        lon: Longitude in decimal degrees (WGS84)
        lat: Latitude in decimal degrees (WGS84)
        elevation: Elevation in meters above sea level, None if the catalog has none

    Example:
        point = PathPoint(lon=7.7491, lat=45.9763, elevation=2222.0)
    """

    lon: float
    lat: float
    elevation: Optional[float] = None

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return (self.lat, self.lon)

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON order."""
        return (self.lon, self.lat)

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if np.isnan(self.lon) or np.isnan(self.lat):
            raise ValueError(f"PathPoint cannot have NaN coordinates: ({self.lon}, {self.lat})")
        if self.elevation is not None and np.isnan(self.elevation):
            raise ValueError(f"PathPoint cannot have NaN elevation at ({self.lon}, {self.lat})")

    def distance_to(self, other: "PathPoint") -> float:
        """Calculate haversine distance to another point in meters."""
        return GeoCalculator.haversine_distance_m(
            lat1=self.lat,
            lon1=self.lon,
            lat2=other.lat,
            lon2=other.lon,
        )

    @classmethod
    def from_coordinate(cls, coordinate: Sequence[float]) -> "PathPoint":
        """Create PathPoint from a GeoJSON position [lon, lat] or [lon, lat, elevation]."""
        if len(coordinate) < 2:
            raise ValueError(f"Coordinate needs at least [lon, lat], got {coordinate!r}")
        elevation = float(coordinate[2]) if len(coordinate) > 2 and coordinate[2] is not None else None
        return cls(lon=float(coordinate[0]), lat=float(coordinate[1]), elevation=elevation)

    def to_coordinate(self) -> list[float]:
        """GeoJSON position, elevation included when known."""
        if self.elevation is None:
            return [self.lon, self.lat]
        return [self.lon, self.lat, self.elevation]

    def __repr__(self) -> str:
        elev = "?" if self.elevation is None else f"{self.elevation:.1f}m"
        return f"PathPoint(lon={self.lon:.5f}, lat={self.lat:.5f}, elev={elev})"
