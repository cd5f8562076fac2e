"""EndpointIndex - Radius queries over segment endpoints.

Wraps SciPy's cKDTree built on unit-sphere vectors. A query converts the
metric radius into a chord radius, collects candidates from the tree, then
re-checks every candidate with the haversine distance so results match
a plain linear scan exactly.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.spatial import cKDTree

from skiroute_planner.core.geo_calculator import GeoCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexedEndpoint:
    """A single endpoint stored in the index.

    Attributes:
        segment_id: Owning segment
        lon: Longitude in decimal degrees
        lat: Latitude in decimal degrees
        elevation: Elevation in meters, None if unknown
    """

    segment_id: str
    lon: float
    lat: float
    elevation: Optional[float]

    def distance_to(self, lon: float, lat: float) -> float:
        """Haversine distance to given coordinates in meters."""
        return GeoCalculator.haversine_distance_m(lat1=self.lat, lon1=self.lon, lat2=lat, lon2=lon)


class EndpointIndex:
    """Static spatial index over a fixed list of endpoints.

    Example:
        index = EndpointIndex(endpoints=[IndexedEndpoint("lift-1", 7.74, 45.99, 1620.0)])
        hits = index.within(lon=7.7401, lat=45.9901, radius_m=50.0)
    """

    def __init__(self, endpoints: list[IndexedEndpoint]) -> None:
        self.endpoints: tuple[IndexedEndpoint, ...] = tuple(endpoints)
        if self.endpoints:
            vectors = np.array([GeoCalculator.unit_vector(lon=e.lon, lat=e.lat) for e in self.endpoints])
            self._tree: Optional[cKDTree] = cKDTree(vectors)
        else:
            self._tree = None
        logger.debug(f"EndpointIndex built with {len(self.endpoints)} endpoints")

    def __len__(self) -> int:
        return len(self.endpoints)

    def within(self, lon: float, lat: float, radius_m: float) -> list[tuple[IndexedEndpoint, float]]:
        """Find all endpoints within radius of a coordinate.

        Args:
            lon: Query longitude in decimal degrees
            lat: Query latitude in decimal degrees
            radius_m: Search radius in meters (inclusive)

        Returns:
            List of (endpoint, distance_m) pairs in index order.
        """
        if self._tree is None:
            return []

        # Small slack on the chord so float rounding never drops a boundary hit
        chord = GeoCalculator.chord_radius(distance_m=radius_m) * (1 + 1e-9) + 1e-12
        query = GeoCalculator.unit_vector(lon=lon, lat=lat)
        candidates = sorted(self._tree.query_ball_point(query, r=chord))

        hits = []
        for i in candidates:
            endpoint = self.endpoints[i]
            dist = endpoint.distance_to(lon=lon, lat=lat)
            if dist <= radius_m:
                hits.append((endpoint, dist))
        return hits
