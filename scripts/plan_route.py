"""Find the fastest route between two catalog segments and print it.

Developer utility for checking a freshly built catalog from the command line.

Usage:
    python scripts/plan_route.py lift-sunnegga:start piste-12-3:end
    python scripts/plan_route.py lift-sunnegga:start piste-12-3:end --max-difficulty blue --data-dir data
"""

import argparse
import logging
from pathlib import Path

from skiroute_planner.constants import CatalogConfig, SearchConfig
from skiroute_planner.core.cancellation import CancellationToken
from skiroute_planner.model.route_point import EndpointPosition, RoutePoint
from skiroute_planner.model.segment_catalog import SegmentCatalog
from skiroute_planner.routing import ConnectivityResolver, PathFinder, RouteStatsCalculator, format_time

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def parse_route_point(text: str) -> RoutePoint:
    """Parse "segment-id[:start|:end]" (default start)."""
    segment_id, _, position = text.rpartition(":")
    if not segment_id or position not in ("start", "end"):
        return RoutePoint(segment_id=text, position=EndpointPosition.START)
    return RoutePoint(segment_id=segment_id, position=EndpointPosition(position))


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("start", type=parse_route_point, help="segment-id[:start|:end]")
    parser.add_argument("end", type=parse_route_point, help="segment-id[:start|:end]")
    parser.add_argument("--max-difficulty", choices=["green", "blue", "red", "black"], default=None)
    parser.add_argument("--data-dir", type=Path, default=CatalogConfig.DATA_DIR)
    parser.add_argument("--max-iterations", type=int, default=SearchConfig.MAX_ITERATIONS)
    parser.add_argument("--time-budget", type=float, default=None, help="seconds before giving up")
    args = parser.parse_args()

    catalog = SegmentCatalog.from_data_dir(data_dir=args.data_dir)
    resolver = ConnectivityResolver(catalog=catalog)
    finder = PathFinder(catalog=catalog, resolver=resolver, max_iterations=args.max_iterations)

    result = finder.find_route(
        start=args.start,
        end=args.end,
        max_difficulty=args.max_difficulty,
        cancel_token=CancellationToken(time_budget_s=args.time_budget),
    )
    if not result.success:
        print(f"Failed: {result.message}")
        return 1

    stats = RouteStatsCalculator(catalog=catalog).calculate(route=result.route)
    for i, segment in enumerate(result.route, start=1):
        print(f"{i:3d}. [{segment.kind.value:5s}] {segment.name} ({segment.id})")
    print(
        f"\n{stats.lift_count} lifts, {stats.slope_count} slopes | "
        f"+{stats.vertical_up_m:.0f}m / -{stats.vertical_down_m:.0f}m | "
        f"{format_time(stats.estimated_time_min)}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
