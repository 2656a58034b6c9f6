"""
Tooltip overlay for the heatmap.

A single-slot publish/subscribe cell: the presentation layer publishes on
pointer enter/leave and subscribers receive every new state. Only one
overlay record exists at a time.
"""

import dataclasses
import logging
from typing import Callable, List, Tuple

from edash.models.entities import BoundingBox, GridCell, OverlayState

logger = logging.getLogger(__name__)

ANCHOR_OFFSET = 10.0  # pixels above the cell's top edge

OverlayCallback = Callable[[OverlayState], None]


def overlay_anchor(box: BoundingBox) -> Tuple[float, float]:
    """Anchor point at the horizontal center, just above the box."""
    return box.left + box.width / 2, box.top - ANCHOR_OFFSET


def format_tooltip(state: OverlayState, unit: str = "kWh") -> str:
    """Two-line tooltip text, e.g. 'Mon 07:00' / '412 kWh'."""
    day = state.day.value if state.day else ""
    return f"{day} {state.hour:02d}:00\n{state.value:.0f} {unit}"


class OverlayPublisher:
    """Holds the current overlay and notifies subscribers on change."""

    def __init__(self):
        self._state = OverlayState()
        self._subscribers: List[OverlayCallback] = []

    @property
    def state(self) -> OverlayState:
        return self._state

    def subscribe(self, callback: OverlayCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: OverlayCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def enter(self, cell: GridCell, box: BoundingBox) -> OverlayState:
        """Show the overlay for a hovered cell, replacing any previous one."""
        x, y = overlay_anchor(box)
        self._publish(OverlayState(
            day=cell.day,
            hour=cell.hour,
            value=cell.value,
            x=x,
            y=y,
            visible=True,
        ))
        return self._state

    def leave(self) -> OverlayState:
        """Hide the overlay; content and coordinates are kept."""
        self._publish(dataclasses.replace(self._state, visible=False))
        return self._state

    def _publish(self, state: OverlayState) -> None:
        self._state = state
        for callback in list(self._subscribers):
            callback(state)
