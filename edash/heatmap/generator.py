"""
Deterministic consumption surface for the weekly heatmap.

Builds the 7 x 24 grid of hourly consumption values from a base load,
a weekend multiplier, an hour-of-day band multiplier and a seeded
perturbation. The same parameters always give the same grid.

Seeded hash: seeded_random(seed) = frac(sin(seed) * 10000), where
frac(x) = x - floor(x). Cell seeds are day_index * 24 + hour + seed_offset.
"""

import math
from typing import NamedTuple, Tuple

from edash.models.entities import Day, DAYS, HOURS, GridCell

DEFAULT_SEED_OFFSET = 12345
DEFAULT_BASE_LOAD = 200.0
DEFAULT_FLOOR = 50.0
DEFAULT_AMPLITUDE = 100.0  # perturbation spans [-amplitude/2, +amplitude/2]

WEEKEND_MULTIPLIER = 0.7


class HourBand(NamedTuple):
    name: str
    start: int  # inclusive
    end: int  # inclusive
    weekday: float
    weekend: float


HOUR_BANDS: Tuple[HourBand, ...] = (
    HourBand("morning_peak", 6, 8, 1.8, 1.2),
    HourBand("business_hours", 9, 17, 1.5, 0.8),
    HourBand("evening_peak", 18, 21, 1.6, 1.4),
    HourBand("night", 22, 23, 0.6, 0.6),
    HourBand("night", 0, 5, 0.6, 0.6),
)


def _check_day_index(day_index: int) -> None:
    if isinstance(day_index, bool) or not isinstance(day_index, int):
        raise TypeError(f"day index must be an int, got {day_index!r}")
    if not 0 <= day_index < len(DAYS):
        raise ValueError(f"day index must be in 0..6, got {day_index}")


def _check_hour(hour: int) -> None:
    if isinstance(hour, bool) or not isinstance(hour, int):
        raise TypeError(f"hour must be an int, got {hour!r}")
    if not 0 <= hour < len(HOURS):
        raise ValueError(f"hour must be in 0..23, got {hour}")


def seeded_random(seed: int) -> float:
    """Map an integer seed to a reproducible value in [0, 1)."""
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def hour_band(hour: int) -> HourBand:
    """Return the band covering an hour of day (first match wins)."""
    _check_hour(hour)
    for band in HOUR_BANDS:
        if band.start <= hour <= band.end:
            return band
    raise AssertionError(f"no band covers hour {hour}")


def cell_seed(day_index: int, hour: int, seed_offset: int = DEFAULT_SEED_OFFSET) -> int:
    """Seed for the perturbation of one cell."""
    _check_day_index(day_index)
    _check_hour(hour)
    return day_index * 24 + hour + seed_offset


def base_load(day_index: int, hour: int, base: float = DEFAULT_BASE_LOAD) -> float:
    """
    Pre-perturbation consumption for a cell.

    Args:
        day_index: 0=Monday .. 6=Sunday
        hour: 0-23
        base: Base load before multipliers
    """
    _check_day_index(day_index)
    band = hour_band(hour)

    is_weekend = Day.from_index(day_index).is_weekend
    load = base * (WEEKEND_MULTIPLIER if is_weekend else 1.0)
    return load * (band.weekend if is_weekend else band.weekday)


def generate_value(
    day_index: int,
    hour: int,
    seed_offset: int = DEFAULT_SEED_OFFSET,
    base: float = DEFAULT_BASE_LOAD,
    floor: float = DEFAULT_FLOOR,
    amplitude: float = DEFAULT_AMPLITUDE,
) -> float:
    """Consumption for one cell: base load plus seeded perturbation, floored."""
    perturbation = (seeded_random(cell_seed(day_index, hour, seed_offset)) - 0.5) * amplitude
    return max(floor, base_load(day_index, hour, base) + perturbation)


def generate(
    seed_offset: int = DEFAULT_SEED_OFFSET,
    base: float = DEFAULT_BASE_LOAD,
    floor: float = DEFAULT_FLOOR,
    amplitude: float = DEFAULT_AMPLITUDE,
) -> Tuple[GridCell, ...]:
    """
    Generate the full 168-cell grid, day-major and hour-minor.

    Cells carry no intensity; see aggregation.normalize().
    """
    return tuple(
        GridCell(
            day=day,
            hour=hour,
            value=generate_value(day_index, hour, seed_offset, base, floor, amplitude),
        )
        for day_index, day in enumerate(DAYS)
        for hour in HOURS
    )
