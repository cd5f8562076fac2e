"""SavedRoute - The record a named route is persisted as.

The routing core does not store routes. It builds the record and hands it
to whatever key-value store the application uses; the keys in to_dict()
are the ones that store expects.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional, Sequence

from skiroute_planner.model.route_point import RouteSegment

if TYPE_CHECKING:
    from skiroute_planner.routing.route_stats import RouteStats


@dataclass(frozen=True)
class SavedRoute:
    """A named, finished route with its headline statistics.

    Attributes:
        id: Generated identifier (millisecond timestamp)
        name: User-given name
        segments: Route in traversal order
        vertical_up_m: Total lift rise
        vertical_down_m: Total slope drop
        estimated_time_min: Rounded total time in minutes
        created_at: ISO 8601 creation time (UTC)
    """

    id: str
    name: str
    segments: tuple[RouteSegment, ...]
    vertical_up_m: float
    vertical_down_m: float
    estimated_time_min: int
    created_at: str

    @classmethod
    def create(
        cls,
        name: str,
        segments: Sequence[RouteSegment],
        stats: "RouteStats",
        now: Optional[datetime] = None,
    ) -> "SavedRoute":
        """Build a record for a route the user just named."""
        now = now or datetime.now(timezone.utc)
        return cls(
            id=str(int(now.timestamp() * 1000)),
            name=name,
            segments=tuple(segments),
            vertical_up_m=stats.vertical_up_m,
            vertical_down_m=stats.vertical_down_m,
            estimated_time_min=stats.rounded_time_min,
            created_at=now.isoformat(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the key-value store's record format."""
        return {
            "id": self.id,
            "name": self.name,
            "segments": [s.to_dict() for s in self.segments],
            "totalVerticalUp": self.vertical_up_m,
            "totalVerticalDown": self.vertical_down_m,
            "estimatedTime": self.estimated_time_min,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SavedRoute":
        """Create SavedRoute from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            segments=tuple(RouteSegment.from_dict(data=s) for s in data["segments"]),
            vertical_up_m=data["totalVerticalUp"],
            vertical_down_m=data["totalVerticalDown"],
            estimated_time_min=data["estimatedTime"],
            created_at=data["createdAt"],
        )

    def __repr__(self) -> str:
        return f"SavedRoute({self.id}, {self.name!r}, {len(self.segments)} segments)"
