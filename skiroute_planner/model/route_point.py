"""RoutePoint and RouteSegment - Anchors and elements of a route.

RoutePoint names a segment end (start or end) used as a search anchor.
RouteSegment is the lightweight element of a route as the caller holds it:
kind, id and display name, nothing else.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from skiroute_planner.model.segment import SegmentKind

if TYPE_CHECKING:
    from skiroute_planner.model.path_point import PathPoint
    from skiroute_planner.model.segment import Segment


class EndpointPosition(Enum):
    """Which end of a segment a RoutePoint refers to."""

    START = "start"
    END = "end"


@dataclass(frozen=True)
class RoutePoint:
    """A (segment, endpoint) pair used as a search anchor.

    Attributes:
        segment_id: Catalog id of the anchoring segment
        position: START resolves to the first geometry point, END to the last

    Example:
        start = RoutePoint(segment_id="lift-sunnegga", position=EndpointPosition.START)
    """

    segment_id: str
    position: EndpointPosition = EndpointPosition.START

    def resolve(self, segment: "Segment") -> "PathPoint":
        """Coordinate of this anchor on the given segment."""
        if segment.id != self.segment_id:
            raise ValueError(f"RoutePoint for {self.segment_id} resolved against {segment.id}")
        return segment.start if self.position is EndpointPosition.START else segment.end

    @classmethod
    def start_of(cls, segment_id: str) -> "RoutePoint":
        return cls(segment_id=segment_id, position=EndpointPosition.START)

    @classmethod
    def end_of(cls, segment_id: str) -> "RoutePoint":
        return cls(segment_id=segment_id, position=EndpointPosition.END)

    def __repr__(self) -> str:
        return f"RoutePoint({self.segment_id}.{self.position.value})"


@dataclass(frozen=True)
class RouteSegment:
    """One element of an ordered route.

    Attributes:
        kind: LIFT or SLOPE
        id: Catalog id
        name: Display name at the time the route was built
    """

    kind: SegmentKind
    id: str
    name: str

    @classmethod
    def from_segment(cls, segment: "Segment") -> "RouteSegment":
        return cls(kind=segment.kind, id=segment.id, name=segment.name)

    def to_dict(self) -> dict[str, str]:
        return {"type": self.kind.value, "id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RouteSegment":
        """Create RouteSegment from dictionary."""
        return cls(
            kind=SegmentKind(data["type"]),
            id=data["id"],
            name=data["name"],
        )
