"""Segment - Lift rides and slope edges of the resort network.

Segment is a tagged union with two variants:
- Lift: uphill transport, fixed ride duration, always passable
- Slope: downhill edge with a difficulty, time derived from length and speed

The variant is chosen once, when a catalog record is decoded, from the
collection the record came from. Nothing downstream inspects record fields
to guess what a segment is.

Geometry runs from entry (first point) to exit (last point). A bidirectional
slope can be entered and left at either end.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional

from skiroute_planner.core.geo_calculator import GeoCalculator
from skiroute_planner.model.difficulty import Difficulty
from skiroute_planner.model.path_point import PathPoint

logger = logging.getLogger(__name__)


class SegmentKind(Enum):
    """Discriminant of the Segment union (values match RouteSegment.type)."""

    LIFT = "lift"
    SLOPE = "slope"


def _split_feature(data: dict[str, Any]) -> tuple[dict[str, Any], list[Any]]:
    """Return (properties, coordinates) for a GeoJSON feature or a flat record."""
    if "properties" in data:
        return data["properties"], data["geometry"]["coordinates"]
    return data, data["coordinates"]


def _parse_points(coordinates: list[Any], segment_id: str) -> tuple[PathPoint, ...]:
    points = tuple(PathPoint.from_coordinate(coordinate=c) for c in coordinates)
    if len(points) < 2:
        raise ValueError(f"Segment {segment_id} needs at least 2 coordinates, got {len(points)}")
    return points


def _parse_connects_to(properties: dict[str, Any]) -> Optional[frozenset[str]]:
    raw = properties.get("connectsTo")
    if raw is None:
        return None
    return frozenset(str(i) for i in raw)


@dataclass(frozen=True, kw_only=True)
class Segment(ABC):
    """Common part of every lift and slope.

    Attributes:
        id: Unique identifier, namespaced by kind ("lift-*" / "piste-*")
        name: Display name
        points: Ordered geometry, entry first and exit last
        connects_to: Precomputed ids reachable from the exit, None if not precomputed
        bidirectional: Whether either end may serve as entry or exit
    """

    kind: ClassVar[SegmentKind]

    id: str
    name: str
    points: tuple[PathPoint, ...]
    connects_to: Optional[frozenset[str]] = None
    bidirectional: bool = False

    @property
    def start(self) -> PathPoint:
        return self.points[0]

    @property
    def end(self) -> PathPoint:
        return self.points[-1]

    @property
    def entry_points(self) -> tuple[PathPoint, ...]:
        """Points where a skier can board this segment."""
        if self.bidirectional:
            return (self.start, self.end)
        return (self.start,)

    @property
    def exit_points(self) -> tuple[PathPoint, ...]:
        """Points where a skier leaves this segment."""
        if self.bidirectional:
            return (self.end, self.start)
        return (self.end,)

    @property
    @abstractmethod
    def travel_time_min(self) -> float:
        """Minutes needed to ride or ski the whole segment."""
        raise NotImplementedError

    @abstractmethod
    def is_admissible(self, max_difficulty: Optional[Difficulty]) -> bool:
        """Whether a skier capped at max_difficulty may use this segment."""
        raise NotImplementedError


@dataclass(frozen=True, kw_only=True)
class Lift(Segment):
    """A lift ride.

    Attributes:
        lift_type: Lift type (chairlift, gondola, ...)
        vertical_rise_m: Height gained in meters
        duration_min: Ride duration in minutes

    Example:
        lift = Lift(
            id="lift-sunnegga",
            name="Sunnegga Express",
            points=(PathPoint(7.75, 46.02, 1620.0), PathPoint(7.77, 46.00, 2288.0)),
            lift_type="funicular",
            vertical_rise_m=668.0,
            duration_min=3.0,
        )
    """

    kind: ClassVar[SegmentKind] = SegmentKind.LIFT

    lift_type: str = "chairlift"
    vertical_rise_m: float = 0.0
    duration_min: float = 0.0

    @property
    def travel_time_min(self) -> float:
        return self.duration_min

    def is_admissible(self, max_difficulty: Optional[Difficulty]) -> bool:
        return True

    @classmethod
    def from_feature(cls, data: dict[str, Any]) -> "Lift":
        """Create Lift from a GeoJSON feature or flat catalog record."""
        props, coordinates = _split_feature(data=data)
        segment_id = str(props["id"])
        points = _parse_points(coordinates=coordinates, segment_id=segment_id)

        if "verticalRise" in props:
            vertical_rise = float(props["verticalRise"])
        elif "topElevation" in props and "bottomElevation" in props:
            vertical_rise = float(props["topElevation"]) - float(props["bottomElevation"])
        elif points[0].elevation is not None and points[-1].elevation is not None:
            vertical_rise = points[-1].elevation - points[0].elevation
        else:
            vertical_rise = 0.0

        if props.get("bidirectional"):
            logger.warning(f"Lift {segment_id} marked bidirectional; lifts only run one way, ignoring")

        return cls(
            id=segment_id,
            name=str(props.get("name") or segment_id),
            points=points,
            connects_to=_parse_connects_to(properties=props),
            bidirectional=False,
            lift_type=str(props.get("type", props.get("liftType", "chairlift"))),
            vertical_rise_m=vertical_rise,
            duration_min=float(props["duration"]),
        )

    def __repr__(self) -> str:
        return f"Lift({self.id}, {self.lift_type}, +{self.vertical_rise_m:.0f}m, {self.duration_min:.1f}min)"


@dataclass(frozen=True, kw_only=True)
class Slope(Segment):
    """A slope edge.

    Attributes:
        difficulty: Position on the difficulty ladder
        vertical_drop_m: Height lost in meters
        length_m: Length along the geometry in meters
    """

    kind: ClassVar[SegmentKind] = SegmentKind.SLOPE

    difficulty: Difficulty = Difficulty.BLUE
    vertical_drop_m: float = 0.0
    length_m: float = 0.0

    @property
    def speed_kmh(self) -> float:
        return self.difficulty.speed_kmh

    @property
    def travel_time_min(self) -> float:
        """Estimated skiing time: length / speed(difficulty), in minutes."""
        return self.length_m / 1000 / self.speed_kmh * 60

    def is_admissible(self, max_difficulty: Optional[Difficulty]) -> bool:
        return max_difficulty is None or self.difficulty <= max_difficulty

    @classmethod
    def from_feature(cls, data: dict[str, Any]) -> "Slope":
        """Create Slope from a GeoJSON feature or flat catalog record."""
        props, coordinates = _split_feature(data=data)
        segment_id = str(props["id"])
        points = _parse_points(coordinates=coordinates, segment_id=segment_id)

        if props.get("length") is not None:
            length = float(props["length"])
        else:
            length = GeoCalculator.polyline_length_m(lon_lats=(p.lon_lat for p in points))

        if props.get("verticalDrop") is not None:
            vertical_drop = float(props["verticalDrop"])
        elif points[0].elevation is not None and points[-1].elevation is not None:
            vertical_drop = max(0.0, points[0].elevation - points[-1].elevation)
        else:
            vertical_drop = 0.0

        return cls(
            id=segment_id,
            name=str(props.get("name") or segment_id),
            points=points,
            connects_to=_parse_connects_to(properties=props),
            bidirectional=bool(props.get("bidirectional", False)),
            difficulty=Difficulty.parse(props["difficulty"]),
            vertical_drop_m=vertical_drop,
            length_m=length,
        )

    def __repr__(self) -> str:
        return f"Slope({self.id}, {self.difficulty.value}, {self.length_m:.0f}m, -{self.vertical_drop_m:.0f}m)"
