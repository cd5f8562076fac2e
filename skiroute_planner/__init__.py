"""Ski Route Planner - Build and search routes across a ski resort.

Routing core for an interactive resort map:
- Immutable catalog of lifts and slopes loaded once at start-up
- Connectivity between segments (precomputed or geometric)
- Incremental validation while a route is built click by click
- A* search for the fastest route under a difficulty ceiling
- Route statistics (vertical, time, difficulty breakdown)

Modules:
    core: Foundation classes (geo calculations, endpoint index, cancellation)
    model: Data structures (PathPoint, Lift, Slope, RoutePoint, SegmentCatalog)
    routing: Resolver, validator, path finder, statistics

Example:
    from skiroute_planner.model import SegmentCatalog, RoutePoint
    from skiroute_planner.routing import ConnectivityResolver, PathFinder
"""
