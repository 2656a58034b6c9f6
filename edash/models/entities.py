"""
Data structures (entities) for EDASH.

Uses dataclasses for clean, typed data structures.
Named 'entities' instead of 'dataclasses' to avoid stdlib import confusion.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Day(str, Enum):
    """Day of week, Monday first. Value is the display label."""
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

    @property
    def position(self) -> int:
        """Position in the week, 0=Monday, 6=Sunday."""
        return DAYS.index(self)

    @property
    def is_weekend(self) -> bool:
        return self in (Day.SAT, Day.SUN)

    @classmethod
    def from_index(cls, index: int) -> "Day":
        """Day for a 0-based index. Raises ValueError outside 0..6."""
        if not 0 <= index < len(DAYS):
            raise ValueError(f"day index must be in 0..6, got {index}")
        return DAYS[index]

    @classmethod
    def parse(cls, label) -> Optional["Day"]:
        """Day for a label such as 'Mon', or None if it is not a day."""
        if isinstance(label, cls):
            return label
        if not isinstance(label, str):
            return None
        try:
            return cls(label)
        except ValueError:
            return None


DAYS: Tuple[Day, ...] = tuple(Day)
HOURS: Tuple[int, ...] = tuple(range(24))


@dataclass(frozen=True)
class GridCell:
    """One (day, hour) consumption record."""
    day: Day
    hour: int  # 0-23
    value: float  # kWh
    intensity: Optional[float] = None  # set by the normalization pass

    def as_dict(self) -> dict:
        return {
            "day": self.day.value,
            "hour": self.hour,
            "value": self.value,
            "intensity": self.intensity,
        }


@dataclass(frozen=True)
class Insights:
    """Aggregate averages over the grid."""
    weekday_average: float
    weekend_average: float
    peak_hours_average: float

    @property
    def weekend_delta_pct(self) -> float:
        """Weekend average relative to weekday average, as a percentage."""
        if self.weekday_average == 0:
            return 0.0
        return (self.weekend_average / self.weekday_average - 1) * 100

    @property
    def weekend_direction(self) -> str:
        return "higher" if self.weekend_average > self.weekday_average else "lower"

    def as_dict(self) -> dict:
        return {
            "weekday_average": self.weekday_average,
            "weekend_average": self.weekend_average,
            "peak_hours_average": self.peak_hours_average,
            "weekend_delta_pct": self.weekend_delta_pct,
            "weekend_direction": self.weekend_direction,
        }


@dataclass(frozen=True)
class BoundingBox:
    """Screen-space rectangle of a rendered cell."""
    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class OverlayState:
    """Tooltip overlay for the hovered cell."""
    day: Optional[Day] = None
    hour: int = 0
    value: float = 0.0
    x: float = 0.0
    y: float = 0.0
    visible: bool = False

    def as_dict(self) -> dict:
        return {
            "day": self.day.value if self.day else None,
            "hour": self.hour,
            "value": self.value,
            "x": self.x,
            "y": self.y,
            "visible": self.visible,
        }
