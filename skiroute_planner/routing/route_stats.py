"""RouteStatsCalculator - Aggregate statistics over an ordered route.

Pure fold: every resolvable segment contributes its vertical, time and
counts; unknown ids are skipped and listed in skipped_ids.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence, Union

from skiroute_planner.model.difficulty import Difficulty
from skiroute_planner.model.route_point import RouteSegment
from skiroute_planner.model.segment import Lift, Segment, Slope
from skiroute_planner.model.segment_catalog import SegmentCatalog

logger = logging.getLogger(__name__)


def _empty_breakdown() -> dict[Difficulty, int]:
    return {difficulty: 0 for difficulty in Difficulty}


@dataclass(frozen=True)
class RouteStats:
    """Totals for a route.

    Attributes:
        vertical_up_m: Sum of lift rises
        vertical_down_m: Sum of slope drops
        estimated_time_min: Sum of lift durations and slope skiing times (unrounded)
        lift_count: Number of resolvable lifts
        slope_count: Number of resolvable slopes
        difficulty_breakdown: Slope count per difficulty (all four keys present)
        skipped_ids: Route ids missing from the catalog
    """

    vertical_up_m: float = 0.0
    vertical_down_m: float = 0.0
    estimated_time_min: float = 0.0
    lift_count: int = 0
    slope_count: int = 0
    difficulty_breakdown: dict[Difficulty, int] = field(default_factory=_empty_breakdown)
    skipped_ids: tuple[str, ...] = ()

    @property
    def rounded_time_min(self) -> int:
        return int(round(self.estimated_time_min))

    @property
    def segment_count(self) -> int:
        return self.lift_count + self.slope_count

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the key names the route builder UI uses."""
        return {
            "totalVerticalUp": self.vertical_up_m,
            "totalVerticalDown": self.vertical_down_m,
            "estimatedTime": self.rounded_time_min,
            "liftCount": self.lift_count,
            "slopeCount": self.slope_count,
            "difficultyBreakdown": {d.value: n for d, n in self.difficulty_breakdown.items()},
        }


class RouteStatsCalculator:
    """Compute RouteStats against a catalog.

    Example:
        stats = RouteStatsCalculator(catalog=catalog).calculate(route=route)
        print(format_time(stats.estimated_time_min))
    """

    def __init__(self, catalog: SegmentCatalog) -> None:
        self.catalog = catalog

    def calculate(self, route: Sequence[Union[RouteSegment, Segment, str]]) -> RouteStats:
        vertical_up = 0.0
        vertical_down = 0.0
        minutes = 0.0
        lift_count = 0
        slope_count = 0
        breakdown = _empty_breakdown()
        skipped = []

        for item in route:
            segment_id = item if isinstance(item, str) else item.id
            segment = self.catalog.get(segment_id)
            if isinstance(segment, Lift):
                vertical_up += segment.vertical_rise_m
                minutes += segment.travel_time_min
                lift_count += 1
            elif isinstance(segment, Slope):
                vertical_down += segment.vertical_drop_m
                minutes += segment.travel_time_min
                slope_count += 1
                breakdown[segment.difficulty] += 1
            else:
                logger.debug(f"Route stats: skipping unknown segment {segment_id}")
                skipped.append(segment_id)

        return RouteStats(
            vertical_up_m=vertical_up,
            vertical_down_m=vertical_down,
            estimated_time_min=minutes,
            lift_count=lift_count,
            slope_count=slope_count,
            difficulty_breakdown=breakdown,
            skipped_ids=tuple(skipped),
        )


def format_time(minutes: float) -> str:
    """Format minutes as "45m" or "1h 5m"."""
    total = int(round(minutes))
    hours, mins = divmod(total, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"
