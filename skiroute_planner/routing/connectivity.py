"""ConnectivityResolver - Which segments can be entered after leaving another.

Two sources of truth, in order:
1. Precomputed connectsTo lists stored with the catalog (fast path)
2. Geometry: entry points lying within the connection threshold of the
   segment's exit point(s)

The geometric mode answers radius queries through an EndpointIndex
(KD-tree) built once over every entry point in the catalog.
"""

import logging
from typing import Optional

from skiroute_planner.constants import ConnectionConfig
from skiroute_planner.core.spatial_index import EndpointIndex, IndexedEndpoint
from skiroute_planner.model.segment import Segment, SegmentKind
from skiroute_planner.model.segment_catalog import SegmentCatalog

logger = logging.getLogger(__name__)


class ConnectivityResolver:
    """Resolve outgoing connections of segments.

    Results are sets; ordering carries no meaning. Callers that need a
    stable order sort the ids.

    Example:
        resolver = ConnectivityResolver(catalog=catalog)
        next_ids = resolver.exit_connections(segment=catalog.get("lift-sunnegga"))
    """

    def __init__(
        self,
        catalog: SegmentCatalog,
        threshold_m: float = ConnectionConfig.THRESHOLD_M,
        use_precomputed: bool = True,
        uphill_tolerance_m: float = ConnectionConfig.UPHILL_TOLERANCE_M,
    ) -> None:
        """Build entry and exit indexes over the catalog.

        Args:
            catalog: Segment catalog (shared, read-only)
            threshold_m: Maximum endpoint gap counted as a connection
            use_precomputed: Trust stored connectsTo lists when present
            uphill_tolerance_m: Maximum climb allowed for slope-to-slope links
        """
        self.catalog = catalog
        self.threshold_m = threshold_m
        self.use_precomputed = use_precomputed
        self.uphill_tolerance_m = uphill_tolerance_m

        self._entry_index = EndpointIndex(
            endpoints=[
                IndexedEndpoint(segment_id=s.id, lon=p.lon, lat=p.lat, elevation=p.elevation)
                for s in catalog
                for p in s.entry_points
            ]
        )
        self._exit_index = EndpointIndex(
            endpoints=[
                IndexedEndpoint(segment_id=s.id, lon=p.lon, lat=p.lat, elevation=p.elevation)
                for s in catalog
                for p in s.exit_points
            ]
        )
        self._geometric_cache: dict[str, frozenset[str]] = {}

    # =========================================================================
    # Connections
    # =========================================================================

    def exit_connections(self, segment: Segment) -> frozenset[str]:
        """Ids of segments that can be entered after leaving this one."""
        if self.use_precomputed and segment.connects_to is not None:
            return segment.connects_to
        return self.geometric_connections(segment=segment)

    def geometric_connections(self, segment: Segment) -> frozenset[str]:
        """Connections computed from endpoint distances alone.

        Every exit point (both ends when bidirectional) is matched against
        all entry points: slope starts, the far end of bidirectional slopes,
        and lift boarding points. The segment never connects to itself.
        """
        cached = self._geometric_cache.get(segment.id)
        if cached is not None:
            return cached

        connections: set[str] = set()
        for exit_point in segment.exit_points:
            for endpoint, _ in self._entry_index.within(
                lon=exit_point.lon, lat=exit_point.lat, radius_m=self.threshold_m
            ):
                if endpoint.segment_id == segment.id:
                    continue
                if self._climbs_too_much(
                    segment=segment,
                    exit_elevation=exit_point.elevation,
                    endpoint=endpoint,
                ):
                    continue
                connections.add(endpoint.segment_id)

        result = frozenset(connections)
        self._geometric_cache[segment.id] = result
        logger.debug(f"Geometric connections for {segment.id}: {len(result)}")
        return result

    def _climbs_too_much(
        self,
        segment: Segment,
        exit_elevation: Optional[float],
        endpoint: IndexedEndpoint,
    ) -> bool:
        """Slope-to-slope links may not climb more than the tolerance."""
        if segment.kind is not SegmentKind.SLOPE:
            return False
        target = self.catalog.get(endpoint.segment_id)
        if target is None or target.kind is not SegmentKind.SLOPE:
            return False
        if exit_elevation is None or endpoint.elevation is None:
            return False
        return endpoint.elevation > exit_elevation + self.uphill_tolerance_m

    # =========================================================================
    # Geometry queries
    # =========================================================================

    def entries_near(self, lon: float, lat: float) -> list[str]:
        """Sorted ids of segments with an entry point within the threshold."""
        hits = self._entry_index.within(lon=lon, lat=lat, radius_m=self.threshold_m)
        return sorted({endpoint.segment_id for endpoint, _ in hits})

    def exits_near(self, lon: float, lat: float) -> list[str]:
        """Sorted ids of segments with an exit point within the threshold."""
        hits = self._exit_index.within(lon=lon, lat=lat, radius_m=self.threshold_m)
        return sorted({endpoint.segment_id for endpoint, _ in hits})

    def exit_to_entry_distance_m(self, previous: Segment, candidate: Segment) -> float:
        """Smallest gap between any exit of previous and any entry of candidate."""
        return min(
            exit_point.distance_to(other=entry_point)
            for exit_point in previous.exit_points
            for entry_point in candidate.entry_points
        )

    def is_geometrically_adjacent(self, previous: Segment, candidate: Segment) -> bool:
        """Whether candidate's entry lies within the threshold of previous's exit."""
        return self.exit_to_entry_distance_m(previous=previous, candidate=candidate) <= self.threshold_m

    def can_follow(self, previous: Segment, candidate: Segment) -> bool:
        """Route validity rule for one adjacent pair: listed connection or geometric fallback."""
        if candidate.id in self.exit_connections(segment=previous):
            return True
        return self.is_geometrically_adjacent(previous=previous, candidate=candidate)
