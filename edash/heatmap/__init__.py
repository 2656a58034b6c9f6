"""Heatmap package - surface generator, aggregation, engine and overlay."""

from .engine import HeatmapEngine, lookup
from .overlay import OverlayPublisher, overlay_anchor, format_tooltip

__all__ = [
    "HeatmapEngine",
    "lookup",
    "OverlayPublisher",
    "overlay_anchor",
    "format_tooltip",
]
