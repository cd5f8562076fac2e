"""Data model classes for the resort segment network.

- PathPoint: Geometry atom (lon, lat, optional elevation)
- Difficulty: Ordered slope difficulty ladder
- Segment, Lift, Slope: Tagged union of network edges
- RoutePoint, RouteSegment: Search anchors and route elements
- RouteMessage and subclasses: Structured failures
- ValidationResult, RouteSearchResult, NextSegments: Result types
- SavedRoute: Record handed to route persistence
- SegmentCatalog: Immutable index of all segments
"""

from skiroute_planner.model.difficulty import Difficulty
from skiroute_planner.model.message import (
    InvalidConnectionMessage,
    InvalidDifficultyMessage,
    InvalidEndpointMessage,
    NoPathFoundMessage,
    RouteErrorKind,
    RouteMessage,
    SearchBudgetExceededMessage,
    SearchCancelledMessage,
    SegmentNotFoundMessage,
)
from skiroute_planner.model.path_point import PathPoint
from skiroute_planner.model.result import NextSegments, RouteSearchResult, ValidationResult
from skiroute_planner.model.route_point import EndpointPosition, RoutePoint, RouteSegment
from skiroute_planner.model.saved_route import SavedRoute
from skiroute_planner.model.segment import Lift, Segment, SegmentKind, Slope
from skiroute_planner.model.segment_catalog import SegmentCatalog

__all__ = [
    "PathPoint",
    "Difficulty",
    "SegmentKind",
    "Segment",
    "Lift",
    "Slope",
    "EndpointPosition",
    "RoutePoint",
    "RouteSegment",
    "RouteErrorKind",
    "RouteMessage",
    "SegmentNotFoundMessage",
    "InvalidConnectionMessage",
    "InvalidDifficultyMessage",
    "InvalidEndpointMessage",
    "NoPathFoundMessage",
    "SearchBudgetExceededMessage",
    "SearchCancelledMessage",
    "ValidationResult",
    "RouteSearchResult",
    "NextSegments",
    "SavedRoute",
    "SegmentCatalog",
]
