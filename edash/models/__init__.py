"""Models package - heatmap entities."""

from .entities import (
    Day,
    DAYS,
    HOURS,
    GridCell,
    Insights,
    BoundingBox,
    OverlayState,
)

__all__ = [
    "Day",
    "DAYS",
    "HOURS",
    "GridCell",
    "Insights",
    "BoundingBox",
    "OverlayState",
]
