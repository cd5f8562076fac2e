"""PathFinder - A* search for the fastest route between two points.

Search graph:
- Nodes are segment ids; the cost of a node is its own travel time
  (lift ride duration, or slope length at the difficulty's average speed)
- Edges come from ConnectivityResolver.exit_connections
- Seeds are all admissible segments whose entry lies near the start point
- The goal is a set: any segment whose exit lies near the end point

Heuristic:
    h(segment) = max(0, haversine(segment exit, goal) - threshold) / speed_bound, in minutes

speed_bound is the fastest straight-line progress any single hop of the
network makes: for every edge a -> b, the largest exit-to-exit distance
divided by b's travel time. No route can close the remaining distance
faster, and the last threshold meters are free (goal test), so h never
overestimates and it is consistent along edges. The first goal segment
popped therefore ends a fastest route.

Passing an explicit heuristic_speed_kmh replaces speed_bound. A speed below
the network's bound makes h overestimate, and the returned route may then
be slower than the fastest one. Nodes are re-opened whenever a strictly
cheaper arrival time is found, which keeps an inconsistent heuristic from
locking in a slower path through an already expanded segment.

The open list is a binary heap keyed by (f, g, insertion order). Seeds and
neighbours are pushed in sorted id order, which makes the result
deterministic for a given catalog and query.
"""

import heapq
import logging
from itertools import count
from math import inf
from typing import Optional, Union

from skiroute_planner.constants import SearchConfig
from skiroute_planner.core.cancellation import CancellationToken
from skiroute_planner.model.difficulty import Difficulty
from skiroute_planner.model.message import (
    InvalidDifficultyMessage,
    InvalidEndpointMessage,
    NoPathFoundMessage,
    SearchBudgetExceededMessage,
    SearchCancelledMessage,
)
from skiroute_planner.model.path_point import PathPoint
from skiroute_planner.model.result import RouteSearchResult
from skiroute_planner.model.route_point import EndpointPosition, RoutePoint, RouteSegment
from skiroute_planner.model.segment import Segment
from skiroute_planner.model.segment_catalog import SegmentCatalog
from skiroute_planner.routing.connectivity import ConnectivityResolver

logger = logging.getLogger(__name__)


class PathFinder:
    """Minimal-time route search under a difficulty ceiling.

    Example:
        finder = PathFinder(catalog=catalog, resolver=resolver)
        result = finder.find_route(
            start=RoutePoint.start_of("lift-sunnegga"),
            end=RoutePoint.end_of("piste-12-3"),
            max_difficulty=Difficulty.BLUE,
        )
    """

    def __init__(
        self,
        catalog: SegmentCatalog,
        resolver: ConnectivityResolver,
        max_iterations: int = SearchConfig.MAX_ITERATIONS,
        heuristic_speed_kmh: Optional[float] = None,
    ) -> None:
        """Set up the search.

        Args:
            catalog: Segment catalog (shared, read-only)
            resolver: Connection source for edges, seeds and goals
            max_iterations: Expansion cap before giving up
            heuristic_speed_kmh: Speed for the remaining-distance estimate;
                None derives the network's speed bound, which keeps routes optimal
        """
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be positive, got {max_iterations}")
        if heuristic_speed_kmh is not None and heuristic_speed_kmh <= 0:
            raise ValueError(f"heuristic_speed_kmh must be positive, got {heuristic_speed_kmh}")
        self.catalog = catalog
        self.resolver = resolver
        self.max_iterations = max_iterations
        if heuristic_speed_kmh is None:
            heuristic_speed_kmh = self.network_speed_bound_kmh()
            logger.debug(f"Heuristic speed bound derived from network: {heuristic_speed_kmh:.1f} km/h")
        self.heuristic_speed_kmh = heuristic_speed_kmh

    def network_speed_bound_kmh(self) -> float:
        """Fastest straight-line progress of any hop a -> b, in km/h.

        Progress is measured between the exits of a and b (covering the gap
        to b's entry plus b itself) and divided by b's travel time. Returns
        inf when a hop makes progress in zero time or the network has no hops,
        which reduces the heuristic to zero.
        """
        best = 0.0
        for segment in self.catalog:
            for next_id in self.resolver.exit_connections(segment=segment):
                next_segment = self.catalog.get(next_id)
                if next_segment is None:
                    continue
                reach_m = max(
                    exit_point.distance_to(other=next_exit)
                    for exit_point in segment.exit_points
                    for next_exit in next_segment.exit_points
                )
                minutes = next_segment.travel_time_min
                if minutes <= 0:
                    if reach_m > 0:
                        return inf
                    continue
                best = max(best, reach_m / 1000 / (minutes / 60))
        return best if best > 0 else inf

    def find_route(
        self,
        start: RoutePoint,
        end: RoutePoint,
        max_difficulty: Union[Difficulty, str, None] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> RouteSearchResult:
        """Find the fastest route from start to end.

        Args:
            start: Anchor the skier is at
            end: Anchor the skier wants to reach
            max_difficulty: Hardest slope allowed (None = no limit)
            cancel_token: Polled between expansions to abort the search

        Returns:
            RouteSearchResult with the route in traversal order, or a failure
            message (InvalidDifficulty, InvalidEndpoint, NoPathFound,
            SearchBudgetExceeded, SearchCancelled).
        """
        try:
            ceiling = Difficulty.parse_optional(max_difficulty)
        except ValueError:
            return self._fail(RouteSearchResult.failure(InvalidDifficultyMessage(value=str(max_difficulty))))

        start_segment = self.catalog.get(start.segment_id)
        if start_segment is None:
            error = InvalidEndpointMessage(role="start", segment_id=start.segment_id)
            return self._fail(RouteSearchResult.failure(error))
        end_segment = self.catalog.get(end.segment_id)
        if end_segment is None:
            error = InvalidEndpointMessage(role="end", segment_id=end.segment_id)
            return self._fail(RouteSearchResult.failure(error))

        if start == end:
            logger.info(f"Route search {start} -> {end}: already at destination")
            return RouteSearchResult(success=True)

        if start.segment_id == end.segment_id and start_segment.is_admissible(max_difficulty=ceiling):
            forward = start.position is EndpointPosition.START and end.position is EndpointPosition.END
            if forward or start_segment.bidirectional:
                logger.info(f"Route search {start} -> {end}: single segment")
                return RouteSearchResult(
                    success=True,
                    route=(RouteSegment.from_segment(segment=start_segment),),
                    total_time_min=start_segment.travel_time_min,
                    expansions=0,
                )

        start_point = start.resolve(segment=start_segment)
        goal_point = end.resolve(segment=end_segment)
        if start_point.distance_to(other=goal_point) <= self.resolver.threshold_m:
            logger.info(f"Route search {start} -> {end}: endpoints within connection threshold")
            return RouteSearchResult(success=True)

        return self._search(
            start_point=start_point,
            goal_point=goal_point,
            ceiling=ceiling,
            cancel_token=cancel_token,
            start_name=start_segment.name,
            end_name=end_segment.name,
        )

    def _search(
        self,
        start_point: PathPoint,
        goal_point: PathPoint,
        ceiling: Optional[Difficulty],
        cancel_token: Optional[CancellationToken],
        start_name: str,
        end_name: str,
    ) -> RouteSearchResult:
        """Run A* between two coordinates."""
        goal_ids = set(self.resolver.exits_near(lon=goal_point.lon, lat=goal_point.lat))

        best_g: dict[str, float] = {}
        came_from: dict[str, Optional[str]] = {}
        closed: set[str] = set()
        open_heap: list[tuple[float, float, int, str]] = []
        sequence = count()

        for segment_id in self.resolver.entries_near(lon=start_point.lon, lat=start_point.lat):
            segment = self.catalog.get(segment_id)
            if segment is None or not segment.is_admissible(max_difficulty=ceiling):
                continue
            g = segment.travel_time_min
            if g < best_g.get(segment_id, inf):
                best_g[segment_id] = g
                came_from[segment_id] = None
                f = g + self.heuristic_min(segment=segment, goal=goal_point)
                heapq.heappush(open_heap, (f, g, next(sequence), segment_id))

        expansions = 0
        while open_heap:
            if cancel_token is not None and cancel_token.is_cancelled:
                return self._fail(
                    RouteSearchResult.failure(
                        SearchCancelledMessage(expansions=expansions, timed_out=cancel_token.timed_out),
                        expansions=expansions,
                    )
                )

            _, g, _, segment_id = heapq.heappop(open_heap)
            if segment_id in closed or g > best_g[segment_id]:
                continue  # stale entry

            if expansions >= self.max_iterations:
                return self._fail(
                    RouteSearchResult.failure(
                        SearchBudgetExceededMessage(max_iterations=self.max_iterations),
                        expansions=expansions,
                    )
                )
            expansions += 1

            if segment_id in goal_ids:
                route = self._reconstruct(came_from=came_from, last_id=segment_id)
                logger.info(
                    f"Route found: {start_name} -> {end_name}, {len(route)} segments, "
                    f"{g:.1f} min, {expansions} expansions"
                )
                return RouteSearchResult(success=True, route=route, total_time_min=g, expansions=expansions)

            closed.add(segment_id)
            segment = self.catalog.get(segment_id)
            for next_id in sorted(self.resolver.exit_connections(segment=segment)):
                next_segment = self.catalog.get(next_id)
                if next_segment is None or not next_segment.is_admissible(max_difficulty=ceiling):
                    continue
                next_g = g + next_segment.travel_time_min
                if next_g < best_g.get(next_id, inf):
                    best_g[next_id] = next_g
                    came_from[next_id] = segment_id
                    closed.discard(next_id)
                    f = next_g + self.heuristic_min(segment=next_segment, goal=goal_point)
                    heapq.heappush(open_heap, (f, next_g, next(sequence), next_id))

        return self._fail(
            RouteSearchResult.failure(
                NoPathFoundMessage(
                    start_name=start_name,
                    end_name=end_name,
                    max_difficulty=ceiling.value if ceiling else None,
                    expansions=expansions,
                ),
                expansions=expansions,
            )
        )

    def heuristic_min(self, segment: Segment, goal: PathPoint) -> float:
        """Straight-line minutes from the segment's nearest exit to the goal radius."""
        distance_m = min(exit_point.distance_to(other=goal) for exit_point in segment.exit_points)
        remaining_m = max(0.0, distance_m - self.resolver.threshold_m)
        return remaining_m / 1000 / self.heuristic_speed_kmh * 60

    def _reconstruct(self, came_from: dict[str, Optional[str]], last_id: str) -> tuple[RouteSegment, ...]:
        ids = []
        current: Optional[str] = last_id
        while current is not None:
            ids.append(current)
            current = came_from[current]
        ids.reverse()
        return tuple(RouteSegment.from_segment(segment=self.catalog.get(i)) for i in ids)

    @staticmethod
    def _fail(result: RouteSearchResult) -> RouteSearchResult:
        if result.error is not None:
            result.error.log()
        return result
