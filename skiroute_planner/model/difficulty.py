"""Difficulty - The slope difficulty ladder.

green < blue < red < black. Lifts carry no difficulty and are always
passable; only slopes are bounded by a maximum difficulty.
"""

from enum import Enum
from typing import Optional, Union

from skiroute_planner.constants import SlopeConfig, SpeedConfig


class Difficulty(Enum):
    """Totally ordered slope difficulty."""

    GREEN = "green"
    BLUE = "blue"
    RED = "red"
    BLACK = "black"

    @property
    def rank(self) -> int:
        """Position on the ladder, 0 = easiest."""
        return SlopeConfig.DIFFICULTIES.index(self.value)

    @property
    def speed_kmh(self) -> float:
        """Average skiing speed for this difficulty."""
        return SpeedConfig.AVERAGE_SPEEDS_KMH[self.value]

    def __lt__(self, other: "Difficulty") -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: "Difficulty") -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: "Difficulty") -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: "Difficulty") -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: Union[str, "Difficulty"]) -> "Difficulty":
        """Parse a difficulty name (case-insensitive).

        Raises:
            ValueError: If the name is not on the ladder.
        """
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown difficulty {value!r}, expected one of {SlopeConfig.DIFFICULTIES}") from None

    @classmethod
    def parse_optional(cls, value: Union[str, "Difficulty", None]) -> Optional["Difficulty"]:
        """Parse a difficulty ceiling where None means "no limit"."""
        if value is None:
            return None
        return cls.parse(value)


assert [d.value for d in Difficulty] == SlopeConfig.DIFFICULTIES
