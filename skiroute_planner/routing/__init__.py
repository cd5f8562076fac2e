"""Routing engine over the segment catalog.

- ConnectivityResolver: Outgoing connections of a segment
- RouteValidator: Incremental append checks while building a route
- PathFinder: A* minimal-time search under a difficulty ceiling
- RouteStatsCalculator: Vertical, time and difficulty totals
"""

from skiroute_planner.routing.connectivity import ConnectivityResolver
from skiroute_planner.routing.path_finder import PathFinder
from skiroute_planner.routing.route_stats import RouteStats, RouteStatsCalculator, format_time
from skiroute_planner.routing.validator import RouteValidator

__all__ = [
    "ConnectivityResolver",
    "RouteValidator",
    "PathFinder",
    "RouteStats",
    "RouteStatsCalculator",
    "format_time",
]
