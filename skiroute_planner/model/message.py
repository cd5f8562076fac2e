"""Message - Structured failure descriptions returned by the routing core.

Design Principles:
- No exceptions for expected failures: validators and searches return
  a message object the caller can show or log
- Each message stores its raw data and formats its own text
- RouteErrorKind lets callers branch without parsing text
  (e.g. "proven unreachable" vs "gave up")
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class RouteErrorKind(Enum):
    """Machine-readable failure category."""

    SEGMENT_NOT_FOUND = "segment_not_found"
    INVALID_CONNECTION = "invalid_connection"
    INVALID_ENDPOINT = "invalid_endpoint"
    INVALID_DIFFICULTY = "invalid_difficulty"
    NO_PATH_FOUND = "no_path_found"
    SEARCH_BUDGET_EXCEEDED = "search_budget_exceeded"
    SEARCH_CANCELLED = "search_cancelled"


@dataclass(frozen=True)
class RouteMessage(ABC):
    """Abstract base class for routing failures.

    Subclasses store specific parameters and compute message as property.
    """

    @property
    @abstractmethod
    def kind(self) -> RouteErrorKind:
        """Failure category."""
        raise NotImplementedError

    @property
    @abstractmethod
    def icon(self) -> str:
        """Icon prefix for display."""
        raise NotImplementedError

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable failure description."""
        raise NotImplementedError

    def log(self, level: int = logging.INFO) -> None:
        """Write this message to the routing log."""
        logger.log(level, f"[{self.kind.value}] {self.icon} {self.message}")

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class SegmentNotFoundMessage(RouteMessage):
    """Catalog lookup miss."""

    segment_id: str

    @property
    def kind(self) -> RouteErrorKind:
        return RouteErrorKind.SEGMENT_NOT_FOUND

    @property
    def icon(self) -> str:
        return "❓"

    @property
    def message(self) -> str:
        return f"Unknown segment \"{self.segment_id}\" is not in the resort catalog."


@dataclass(frozen=True)
class InvalidConnectionMessage(RouteMessage):
    """Candidate segment cannot follow the last segment of the route."""

    previous_id: str
    previous_name: str
    candidate_id: str
    candidate_name: str
    gap_m: Optional[float] = None
    direction_hint: Optional[str] = None

    @property
    def kind(self) -> RouteErrorKind:
        return RouteErrorKind.INVALID_CONNECTION

    @property
    def icon(self) -> str:
        return "⛔"

    @property
    def message(self) -> str:
        text = (
            f"\"{self.candidate_name}\" ({self.candidate_id}) doesn't connect to "
            f"\"{self.previous_name}\" ({self.previous_id}). These segments are not adjacent"
        )
        if self.gap_m is not None:
            text += f" ({self.gap_m:.0f}m apart)"
        text += "."
        if self.direction_hint:
            text += f" Its end is near here, but using it {self.direction_hint}."
        return text


@dataclass(frozen=True)
class InvalidEndpointMessage(RouteMessage):
    """Start or end of a search cannot be resolved to a coordinate."""

    role: str  # "start" or "end"
    segment_id: str

    @property
    def kind(self) -> RouteErrorKind:
        return RouteErrorKind.INVALID_ENDPOINT

    @property
    def icon(self) -> str:
        return "📍"

    @property
    def message(self) -> str:
        return f"Invalid {self.role} point: segment \"{self.segment_id}\" does not exist."


@dataclass(frozen=True)
class InvalidDifficultyMessage(RouteMessage):
    """Difficulty ceiling is not on the ladder."""

    value: str

    @property
    def kind(self) -> RouteErrorKind:
        return RouteErrorKind.INVALID_DIFFICULTY

    @property
    def icon(self) -> str:
        return "🎿"

    @property
    def message(self) -> str:
        return f"Unknown difficulty limit \"{self.value}\". Choose green, blue, red or black."


@dataclass(frozen=True)
class NoPathFoundMessage(RouteMessage):
    """Search space exhausted without reaching the goal."""

    start_name: str
    end_name: str
    max_difficulty: Optional[str] = None
    expansions: int = 0

    @property
    def kind(self) -> RouteErrorKind:
        return RouteErrorKind.NO_PATH_FOUND

    @property
    def icon(self) -> str:
        return "🚫"

    @property
    def message(self) -> str:
        text = f"No route found from \"{self.start_name}\" to \"{self.end_name}\""
        if self.max_difficulty:
            text += f" using slopes up to {self.max_difficulty}"
        return text + "."


@dataclass(frozen=True)
class SearchBudgetExceededMessage(RouteMessage):
    """Iteration cap reached before the goal; the route may still exist."""

    max_iterations: int

    @property
    def kind(self) -> RouteErrorKind:
        return RouteErrorKind.SEARCH_BUDGET_EXCEEDED

    @property
    def icon(self) -> str:
        return "⏳"

    @property
    def message(self) -> str:
        return f"Route search gave up after {self.max_iterations:,} steps. Try closer start and end points."


@dataclass(frozen=True)
class SearchCancelledMessage(RouteMessage):
    """Caller cancelled the search or its time budget ran out."""

    expansions: int
    timed_out: bool = False

    @property
    def kind(self) -> RouteErrorKind:
        return RouteErrorKind.SEARCH_CANCELLED

    @property
    def icon(self) -> str:
        return "✋"

    @property
    def message(self) -> str:
        reason = "time budget exhausted" if self.timed_out else "cancelled"
        return f"Route search {reason} after {self.expansions:,} steps."
