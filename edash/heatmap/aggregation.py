"""
Normalization and insight aggregation over a heatmap grid.

All functions are pure: they read a grid and return new values.
"""

import dataclasses
import logging
from typing import Callable, Optional, Sequence, Tuple

from edash.models.entities import GridCell, Insights

logger = logging.getLogger(__name__)

DEGENERATE_INTENSITY = 0.5
PEAK_HOURS = (9, 17)  # inclusive

ACCENT_RGB = (255, 107, 0)
EMPTY_CELL_COLOR = "#2A2A2A"
MIN_OPACITY = 0.1
LEGEND_STOPS = (0.1, 0.3, 0.5, 0.7, 0.9)


def value_range(grid: Sequence[GridCell]) -> Tuple[float, float]:
    """Return (min, max) of cell values. Raises ValueError on an empty grid."""
    if not grid:
        raise ValueError("value_range() of an empty grid")
    values = [cell.value for cell in grid]
    return min(values), max(values)


def normalize(grid: Sequence[GridCell]) -> Tuple[GridCell, ...]:
    """
    Return a copy of the grid with min-max intensity on every cell.

    When every value is identical the range is zero and each cell gets
    DEGENERATE_INTENSITY instead.
    """
    if not grid:
        return ()

    min_value, max_value = value_range(grid)
    spread = max_value - min_value

    if spread == 0:
        logger.debug("Zero value range across %d cells, using mid-scale intensity", len(grid))
        return tuple(dataclasses.replace(cell, intensity=DEGENERATE_INTENSITY) for cell in grid)

    return tuple(
        dataclasses.replace(cell, intensity=(cell.value - min_value) / spread)
        for cell in grid
    )


def is_weekday(cell: GridCell) -> bool:
    return not cell.day.is_weekend


def is_weekend(cell: GridCell) -> bool:
    return cell.day.is_weekend


def is_peak_hour(cell: GridCell) -> bool:
    start, end = PEAK_HOURS
    return start <= cell.hour <= end


def mean_value(grid: Sequence[GridCell], predicate: Callable[[GridCell], bool]) -> float:
    """Arithmetic mean of the values of matching cells, 0.0 if none match."""
    values = [cell.value for cell in grid if predicate(cell)]
    if not values:
        return 0.0
    return sum(values) / len(values)


def aggregate(grid: Sequence[GridCell]) -> Insights:
    """Compute weekday, weekend and peak-hours averages."""
    return Insights(
        weekday_average=mean_value(grid, is_weekday),
        weekend_average=mean_value(grid, is_weekend),
        peak_hours_average=mean_value(grid, is_peak_hour),
    )


def usage_pattern(insights: Insights) -> str:
    """Narrative line comparing weekend to weekday consumption."""
    start, end = PEAK_HOURS
    return (
        f"Weekend: {insights.weekend_delta_pct:.0f}% {insights.weekend_direction}"
        f" • Peak hours: {start}-{end}h"
    )


def intensity_color(intensity: Optional[float]) -> str:
    """CSS colour for a cell intensity; None gives the empty-cell colour."""
    if intensity is None:
        return EMPTY_CELL_COLOR
    r, g, b = ACCENT_RGB
    opacity = max(MIN_OPACITY, intensity)
    return f"rgba({r}, {g}, {b}, {opacity:g})"
