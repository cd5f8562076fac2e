"""RouteValidator - Incremental validity checks while a route is built.

Validators return result objects, never raise, for expected failures:
- ValidationResult.ok() if the append is allowed
- ValidationResult.fail(message) otherwise (caller displays it and keeps
  the previous route untouched)
"""

import logging
from typing import Optional, Sequence, Union

from skiroute_planner.model.message import InvalidConnectionMessage, SegmentNotFoundMessage
from skiroute_planner.model.result import NextSegments, ValidationResult
from skiroute_planner.model.route_point import RouteSegment
from skiroute_planner.model.segment import Segment, SegmentKind
from skiroute_planner.model.segment_catalog import SegmentCatalog
from skiroute_planner.routing.connectivity import ConnectivityResolver

logger = logging.getLogger(__name__)

RouteItem = Union[RouteSegment, Segment, str]


def _item_id(item: RouteItem) -> str:
    return item if isinstance(item, str) else item.id


class RouteValidator:
    """Decide whether a segment may be appended to the route being built.

    Example:
        validator = RouteValidator(catalog=catalog, resolver=resolver)
        result = validator.validate_append(current_route=route, candidate=clicked)
        if not result.valid:
            show(result.reason)
    """

    def __init__(self, catalog: SegmentCatalog, resolver: ConnectivityResolver) -> None:
        self.catalog = catalog
        self.resolver = resolver

    def validate_append(self, current_route: Sequence[RouteItem], candidate: RouteItem) -> ValidationResult:
        """Check one append against the last segment of the route.

        Args:
            current_route: Segments built so far, in order
            candidate: Segment the user wants to add next

        Returns:
            ValidationResult, with an InvalidConnectionMessage naming both
            segments when the candidate does not connect.
        """
        if not current_route:
            return ValidationResult.ok()

        previous = self.catalog.lookup(segment_id=_item_id(current_route[-1]))
        if isinstance(previous, SegmentNotFoundMessage):
            return ValidationResult.fail(error=previous)
        nxt = self.catalog.lookup(segment_id=_item_id(candidate))
        if isinstance(nxt, SegmentNotFoundMessage):
            return ValidationResult.fail(error=nxt)

        if self.resolver.can_follow(previous=previous, candidate=nxt):
            return ValidationResult.ok()

        error = InvalidConnectionMessage(
            previous_id=previous.id,
            previous_name=previous.name,
            candidate_id=nxt.id,
            candidate_name=nxt.name,
            gap_m=self.resolver.exit_to_entry_distance_m(previous=previous, candidate=nxt),
            direction_hint=self._direction_hint(previous=previous, candidate=nxt),
        )
        error.log(level=logging.DEBUG)
        return ValidationResult.fail(error=error)

    def _direction_hint(self, previous: Segment, candidate: Segment) -> Optional[str]:
        """Hint when the candidate's end, not its start, is near the previous exit.

        Slopes and lifts only run from start to end unless marked bidirectional.
        """
        if candidate.bidirectional:
            return None
        end_gap = min(exit_point.distance_to(other=candidate.end) for exit_point in previous.exit_points)
        if end_gap > self.resolver.threshold_m:
            return None
        if candidate.kind is SegmentKind.LIFT:
            return "would require riding the lift backwards"
        return "would require traveling uphill"

    def validate_route(self, route: Sequence[RouteItem]) -> ValidationResult:
        """Check every adjacent pair of a complete route; first failure wins."""
        for i, item in enumerate(route):
            if i == 0:
                first = self.catalog.lookup(segment_id=_item_id(item))
                if isinstance(first, SegmentNotFoundMessage):
                    return ValidationResult.fail(error=first)
                continue
            result = self.validate_append(current_route=route[:i], candidate=item)
            if not result.valid:
                return result
        return ValidationResult.ok()

    def valid_next_segments(self, route: Sequence[RouteItem]) -> NextSegments:
        """Segments that may be appended next, split into lifts and slopes.

        An empty route may start anywhere. Otherwise the listed connections of
        the last segment are returned; unknown last segments yield nothing.
        """
        if not route:
            return NextSegments(
                lift_ids=tuple(sorted(s.id for s in self.catalog.lifts)),
                slope_ids=tuple(sorted(s.id for s in self.catalog.slopes)),
            )

        last = self.catalog.get(_item_id(route[-1]))
        if last is None:
            return NextSegments(lift_ids=(), slope_ids=())

        lift_ids = []
        slope_ids = []
        for segment_id in sorted(self.resolver.exit_connections(segment=last)):
            segment = self.catalog.get(segment_id)
            if segment is None:
                continue
            if segment.kind is SegmentKind.LIFT:
                lift_ids.append(segment_id)
            else:
                slope_ids.append(segment_id)
        return NextSegments(lift_ids=tuple(lift_ids), slope_ids=tuple(slope_ids))
