"""
Heatmap engine: owns one generated grid and its derived views.

The raw grid is generated once per engine (or per regenerate() call).
The normalized grid, the value index and the insights are computed on
first access and cached until the grid changes.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from edash.config.loader import get_heatmap_params
from edash.heatmap import aggregation, generator
from edash.models.entities import Day, GridCell, Insights

logger = logging.getLogger(__name__)

DayLike = Union[Day, str]


def _is_hour(hour: Any) -> bool:
    return isinstance(hour, int) and not isinstance(hour, bool) and 0 <= hour <= 23


def lookup(grid: Sequence[GridCell], day: DayLike, hour: int) -> Optional[GridCell]:
    """
    Find the cell for an exact (day, hour) pair by linear scan.

    Returns None for any pair not in the grid, including unknown day
    labels and out-of-range hours. Never raises.
    """
    parsed = Day.parse(day)
    if parsed is None or not _is_hour(hour):
        return None
    for cell in grid:
        if cell.day is parsed and cell.hour == hour:
            return cell
    return None


class HeatmapEngine:
    """Deterministic weekly consumption heatmap with cached insights."""

    def __init__(
        self,
        seed_offset: int = generator.DEFAULT_SEED_OFFSET,
        base_load: float = generator.DEFAULT_BASE_LOAD,
        floor: float = generator.DEFAULT_FLOOR,
        amplitude: float = generator.DEFAULT_AMPLITUDE,
    ):
        self.base_load = base_load
        self.floor = floor
        self.amplitude = amplitude
        self.seed_offset = seed_offset
        self._grid: Tuple[GridCell, ...] = ()
        self._reset_caches()
        self._generate()

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "HeatmapEngine":
        """Build an engine from the 'heatmap' config section."""
        params = get_heatmap_params(config)
        return cls(
            seed_offset=params["seed_offset"],
            base_load=params["base_load"],
            floor=params["floor"],
            amplitude=params["amplitude"],
        )

    def _reset_caches(self) -> None:
        self._cells: Optional[Tuple[GridCell, ...]] = None
        self._index: Optional[Dict[Tuple[Day, int], GridCell]] = None
        self._insights: Optional[Insights] = None

    def _generate(self) -> None:
        self._grid = generator.generate(
            seed_offset=self.seed_offset,
            base=self.base_load,
            floor=self.floor,
            amplitude=self.amplitude,
        )
        logger.info("Generated heatmap grid: %d cells, seed offset %d",
                    len(self._grid), self.seed_offset)

    def regenerate(self, seed_offset: int) -> None:
        """Replace the grid with one built from a new seed offset."""
        self.seed_offset = seed_offset
        self._reset_caches()
        self._generate()

    @property
    def grid(self) -> Tuple[GridCell, ...]:
        """Raw generated cells, without intensity."""
        return self._grid

    @property
    def cells(self) -> Tuple[GridCell, ...]:
        """Cells with intensity populated."""
        if self._cells is None:
            self._cells = aggregation.normalize(self._grid)
        return self._cells

    @property
    def insights(self) -> Insights:
        if self._insights is None:
            self._insights = aggregation.aggregate(self._grid)
        return self._insights

    @property
    def pattern(self) -> str:
        """Weekend-vs-weekday narrative, derived from the current insights."""
        return aggregation.usage_pattern(self.insights)

    @property
    def value_range(self) -> Tuple[float, float]:
        return aggregation.value_range(self._grid)

    def lookup(self, day: DayLike, hour: int) -> Optional[GridCell]:
        """Indexed lookup of a normalized cell; None when absent."""
        if self._index is None:
            self._index = {(cell.day, cell.hour): cell for cell in self.cells}
        parsed = Day.parse(day)
        if parsed is None or not _is_hour(hour):
            return None
        return self._index.get((parsed, hour))

    def to_dict(self) -> Dict[str, Any]:
        """Full payload: cells, insights, narrative and value range."""
        min_value, max_value = self.value_range
        return {
            "cells": [cell.as_dict() for cell in self.cells],
            "insights": self.insights.as_dict(),
            "pattern": self.pattern,
            "min_value": min_value,
            "max_value": max_value,
            "seed_offset": self.seed_offset,
        }
