"""Result types returned across the routing core boundary."""

from dataclasses import dataclass, field
from typing import Optional

from skiroute_planner.model.message import RouteErrorKind, RouteMessage
from skiroute_planner.model.route_point import RouteSegment


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking a route append.

    Attributes:
        valid: Whether the candidate may be appended
        error: Why not, when invalid
    """

    valid: bool
    error: Optional[RouteMessage] = None

    @property
    def reason(self) -> Optional[str]:
        return self.error.message if self.error else None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, error: RouteMessage) -> "ValidationResult":
        return cls(valid=False, error=error)


@dataclass(frozen=True)
class RouteSearchResult:
    """Outcome of a PathFinder search.

    Attributes:
        success: Whether a route was found
        route: Segments in traversal order (empty on failure)
        error: Failure description when success is False
        total_time_min: Sum of segment travel times along the route
        expansions: Nodes expanded by the search
    """

    success: bool
    route: tuple[RouteSegment, ...] = field(default_factory=tuple)
    error: Optional[RouteMessage] = None
    total_time_min: float = 0.0
    expansions: int = 0

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None

    @property
    def error_kind(self) -> Optional[RouteErrorKind]:
        return self.error.kind if self.error else None

    @property
    def segment_ids(self) -> list[str]:
        return [s.id for s in self.route]

    @classmethod
    def failure(cls, error: RouteMessage, expansions: int = 0) -> "RouteSearchResult":
        return cls(success=False, error=error, expansions=expansions)


@dataclass(frozen=True)
class NextSegments:
    """Segments that may follow the current route, split by kind (sorted ids)."""

    lift_ids: tuple[str, ...]
    slope_ids: tuple[str, ...]

    @property
    def all_ids(self) -> tuple[str, ...]:
        return self.lift_ids + self.slope_ids

    def __contains__(self, segment_id: object) -> bool:
        return segment_id in self.lift_ids or segment_id in self.slope_ids
