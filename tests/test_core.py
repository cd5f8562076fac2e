"""Tests for skiroute_planner core functionality.

Tests: GeoCalculator, EndpointIndex, CancellationToken
"""

from math import cos, radians

from resort_builders import METERS_PER_DEGREE
from skiroute_planner.core.cancellation import CancellationToken
from skiroute_planner.core.geo_calculator import GeoCalculator
from skiroute_planner.core.spatial_index import EndpointIndex, IndexedEndpoint


# =============================================================================
# TESTS FOR CORE CLASSES
# =============================================================================


class TestGeoCalculator:
    """GeoCalculator - geodesic calculations on Earth's surface."""

    def test_haversine_distance_one_degree_latitude(self) -> None:
        """1 degree latitude ≈ 111km."""
        dist = GeoCalculator.haversine_distance_m(lat1=46.0, lon1=7.7, lat2=47.0, lon2=7.7)
        assert 110_000 < dist < 112_000

    def test_haversine_distance_one_degree_longitude(self) -> None:
        """1 degree longitude at 46°N ≈ 77km."""
        dist = GeoCalculator.haversine_distance_m(lat1=46.0, lon1=7.0, lat2=46.0, lon2=8.0)
        expected = 111_000 * cos(radians(46))
        assert abs(dist - expected) < 2000

    def test_haversine_distance_same_point_is_zero(self) -> None:
        assert GeoCalculator.haversine_distance_m(lat1=45.97, lon1=7.75, lat2=45.97, lon2=7.75) == 0.0

    def test_polyline_length_sums_legs(self) -> None:
        """Two 100m legs near the equator sum to ~200m."""
        step = 100 / METERS_PER_DEGREE
        length = GeoCalculator.polyline_length_m(lon_lats=[(0.0, 0.0), (0.0, step), (step, step)])
        assert 198 < length < 201

    def test_polyline_length_single_point_is_zero(self) -> None:
        assert GeoCalculator.polyline_length_m(lon_lats=[(7.7, 46.0)]) == 0.0

    def test_unit_vector_has_unit_length(self) -> None:
        x, y, z = GeoCalculator.unit_vector(lon=7.75, lat=45.97)
        assert abs(x * x + y * y + z * z - 1.0) < 1e-12

    def test_chord_radius_matches_unit_vector_distance(self) -> None:
        """Chord of a 1000m arc equals the distance between the two unit vectors."""
        lat2 = 1000 / (GeoCalculator.EARTH_RADIUS_M * radians(1))
        a = GeoCalculator.unit_vector(lon=0.0, lat=0.0)
        b = GeoCalculator.unit_vector(lon=0.0, lat=lat2)
        chord = sum((p - q) ** 2 for p, q in zip(a, b)) ** 0.5
        assert abs(chord - GeoCalculator.chord_radius(distance_m=1000.0)) < 1e-12


class TestEndpointIndex:
    """EndpointIndex - KD-tree radius queries re-checked with haversine."""

    def _endpoint(self, segment_id: str, x_m: float, y_m: float) -> IndexedEndpoint:
        return IndexedEndpoint(
            segment_id=segment_id,
            lon=x_m / METERS_PER_DEGREE,
            lat=y_m / METERS_PER_DEGREE,
            elevation=None,
        )

    def test_within_finds_only_points_inside_radius(self) -> None:
        index = EndpointIndex(
            endpoints=[
                self._endpoint("near", 10, 0),
                self._endpoint("edge", 45, 0),
                self._endpoint("far", 200, 0),
            ]
        )
        hits = index.within(lon=0.0, lat=0.0, radius_m=50.0)
        assert [e.segment_id for e, _ in hits] == ["near", "edge"]
        assert all(dist <= 50.0 for _, dist in hits)

    def test_within_matches_linear_scan(self) -> None:
        """KD-tree results equal a brute-force haversine scan."""
        endpoints = [self._endpoint(f"p{i}", x_m=i * 7.0, y_m=(i % 5) * 11.0) for i in range(40)]
        index = EndpointIndex(endpoints=endpoints)
        expected = [e.segment_id for e in endpoints if e.distance_to(lon=0.0, lat=0.0) <= 75.0]
        assert [e.segment_id for e, _ in index.within(lon=0.0, lat=0.0, radius_m=75.0)] == expected

    def test_empty_index_returns_nothing(self) -> None:
        index = EndpointIndex(endpoints=[])
        assert len(index) == 0
        assert index.within(lon=0.0, lat=0.0, radius_m=1000.0) == []


class TestCancellationToken:
    """CancellationToken - cooperative abort for searches."""

    def test_new_token_is_not_cancelled(self) -> None:
        token = CancellationToken()
        assert token.is_cancelled is False
        assert token.timed_out is False

    def test_cancel_sets_flag(self) -> None:
        token = CancellationToken()
        token.cancel()
        assert token.is_cancelled is True
        assert token.timed_out is False

    def test_zero_time_budget_is_expired(self) -> None:
        token = CancellationToken(time_budget_s=0.0)
        assert token.is_cancelled is True
        assert token.timed_out is True

    def test_generous_time_budget_is_not_expired(self) -> None:
        token = CancellationToken(time_budget_s=3600.0)
        assert token.is_cancelled is False
