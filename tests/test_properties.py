"""Property-based tests for the routing engine.

Note: @given tests cannot use function-scoped pytest fixtures, so the test
resort and its components are built once at module level.
"""

from typing import Optional

from hypothesis import given, settings
from hypothesis import strategies as st

from resort_builders import build_test_resort
from skiroute_planner.model.difficulty import Difficulty
from skiroute_planner.model.message import RouteErrorKind
from skiroute_planner.model.route_point import EndpointPosition, RoutePoint
from skiroute_planner.routing.connectivity import ConnectivityResolver
from skiroute_planner.routing.path_finder import PathFinder
from skiroute_planner.routing.route_stats import RouteStatsCalculator
from skiroute_planner.routing.validator import RouteValidator

RESORT = build_test_resort()
RESOLVER = ConnectivityResolver(catalog=RESORT)
VALIDATOR = RouteValidator(catalog=RESORT, resolver=RESOLVER)
FINDER = PathFinder(catalog=RESORT, resolver=RESOLVER)
STATS = RouteStatsCalculator(catalog=RESORT)

segment_ids = st.sampled_from(sorted(RESORT.ids))
ceilings = st.one_of(st.none(), st.sampled_from(list(Difficulty)))
route_points = st.builds(RoutePoint, segment_id=segment_ids, position=st.sampled_from(list(EndpointPosition)))


class TestRouteBuildingProperties:
    """Routes assembled from suggestions always validate."""

    @given(first=segment_ids, choices=st.lists(st.integers(min_value=0, max_value=20), max_size=12))
    @settings(max_examples=30)
    def test_suggested_walk_is_valid(self, first: str, choices: list[int]) -> None:
        """Following valid_next_segments step by step never builds an invalid route."""
        route = [first]
        for choice in choices:
            options = VALIDATOR.valid_next_segments(route=route).all_ids
            if not options:
                break
            route.append(options[choice % len(options)])

        assert VALIDATOR.validate_route(route=route).valid
        for previous_id, next_id in zip(route, route[1:]):
            assert RESOLVER.can_follow(previous=RESORT.get(previous_id), candidate=RESORT.get(next_id))


class TestRouteStatsProperties:
    """Stats totals are consistent with the route."""

    @given(route=st.lists(st.one_of(segment_ids, st.just("piste-unknown")), max_size=15))
    @settings(max_examples=30)
    def test_counts_and_totals(self, route: list[str]) -> None:
        stats = STATS.calculate(route=route)

        assert stats.segment_count + len(stats.skipped_ids) == len(route)
        assert sum(stats.difficulty_breakdown.values()) == stats.slope_count
        assert set(stats.difficulty_breakdown) == set(Difficulty)

        known = [RESORT.get(i) for i in route if i in RESORT]
        expected_time = sum(s.travel_time_min for s in known)
        assert abs(stats.estimated_time_min - expected_time) < 1e-9
        assert stats.vertical_up_m >= 0
        assert stats.vertical_down_m >= 0


class TestPathFinderProperties:
    """Every route the search returns is valid, admissible and reproducible."""

    @given(start=route_points, end=route_points, ceiling=ceilings)
    @settings(max_examples=30)
    def test_found_routes_are_valid(self, start: RoutePoint, end: RoutePoint, ceiling: Optional[Difficulty]) -> None:
        result = FINDER.find_route(start=start, end=end, max_difficulty=ceiling)

        if not result.success:
            assert result.route == ()
            assert result.error_kind in (RouteErrorKind.NO_PATH_FOUND, RouteErrorKind.SEARCH_BUDGET_EXCEEDED)
            return

        assert VALIDATOR.validate_route(route=result.route).valid
        for segment in result.route:
            assert RESORT.get(segment.id).is_admissible(max_difficulty=ceiling)
        expected_time = sum(RESORT.get(i).travel_time_min for i in result.segment_ids)
        assert abs(result.total_time_min - expected_time) < 1e-9

    @given(start=route_points, end=route_points, ceiling=ceilings)
    @settings(max_examples=30)
    def test_search_is_deterministic(self, start: RoutePoint, end: RoutePoint, ceiling: Optional[Difficulty]) -> None:
        first = FINDER.find_route(start=start, end=end, max_difficulty=ceiling)
        second = FINDER.find_route(start=start, end=end, max_difficulty=ceiling)
        assert first == second

    @given(start=route_points, end=route_points)
    @settings(max_examples=30)
    def test_ceiling_never_creates_reachability(self, start: RoutePoint, end: RoutePoint) -> None:
        """Restricting difficulty only removes segments, so a proven dead end stays one."""
        unrestricted = FINDER.find_route(start=start, end=end)
        green = FINDER.find_route(start=start, end=end, max_difficulty=Difficulty.GREEN)
        if unrestricted.error_kind is RouteErrorKind.NO_PATH_FOUND:
            assert not green.success
