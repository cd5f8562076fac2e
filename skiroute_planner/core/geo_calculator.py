"""Geodesic calculations on Earth's surface.

Provides geographic helper functions for route planning:
- Distance calculation (Haversine formula)
- Polyline length
- Unit-sphere vectors and chord radii for the endpoint spatial index

All calculations use a spherical Earth approximation (R = 6,371 km).
"""

from math import atan2, cos, radians, sin, sqrt
from typing import Iterable

# Earth's radius in meters (spherical approximation)
EARTH_RADIUS_M = 6_371_000


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    All methods use a spherical Earth model (R = 6,371 km).
    Coordinates are in decimal degrees (WGS84).
    Distances are in meters.
    """

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lon1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lon2: Longitude of second point (decimal degrees)

        Returns:
            Distance in meters.
        """
        dlat = radians(lat2 - lat1)
        dlon = radians(lon2 - lon1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
        return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def polyline_length_m(lon_lats: Iterable[tuple[float, float]]) -> float:
        """Sum of haversine distances along a (lon, lat) polyline."""
        total = 0.0
        previous = None
        for lon, lat in lon_lats:
            if previous is not None:
                total += GeoCalculator.haversine_distance_m(lat1=previous[1], lon1=previous[0], lat2=lat, lon2=lon)
            previous = (lon, lat)
        return total

    @staticmethod
    def unit_vector(lon: float, lat: float) -> tuple[float, float, float]:
        """Cartesian coordinates of a point on the unit sphere.

        Straight-line (chord) distance between unit vectors grows monotonically
        with great-circle distance, so a KD-tree over these vectors can answer
        radius queries.
        """
        lat_rad = radians(lat)
        lon_rad = radians(lon)
        return (
            cos(lat_rad) * cos(lon_rad),
            cos(lat_rad) * sin(lon_rad),
            sin(lat_rad),
        )

    @staticmethod
    def chord_radius(distance_m: float) -> float:
        """Unit-sphere chord length matching a great-circle distance in meters."""
        return 2 * sin(distance_m / (2 * EARTH_RADIUS_M))
