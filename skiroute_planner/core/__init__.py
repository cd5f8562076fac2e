"""Core foundation classes for geodesic calculations and spatial lookups.

This module provides the mathematical backbone for route planning:
- GeoCalculator: Geodesic calculations (haversine distance, unit-sphere vectors)
- EndpointIndex: KD-tree radius queries over segment endpoints
- CancellationToken: Cooperative abort for route searches
"""

from skiroute_planner.core.cancellation import CancellationToken
from skiroute_planner.core.geo_calculator import GeoCalculator
from skiroute_planner.core.spatial_index import EndpointIndex, IndexedEndpoint

__all__ = [
    # Geo calculator
    "GeoCalculator",
    # Spatial index
    "EndpointIndex",
    "IndexedEndpoint",
    # Cancellation
    "CancellationToken",
]
