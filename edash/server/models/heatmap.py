"""Pydantic models for heatmap API."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from edash.models.entities import Day


class HeatmapCell(BaseModel):
    day: Day
    hour: int = Field(ge=0, le=23)
    value: float
    intensity: Optional[float] = Field(None, ge=0, le=1)


class CellDetail(HeatmapCell):
    color: str


class InsightsResponse(BaseModel):
    weekday_average: float
    weekend_average: float
    peak_hours_average: float
    weekend_delta_pct: float
    weekend_direction: str
    pattern: Optional[str] = None


class HeatmapResponse(BaseModel):
    cells: List[HeatmapCell]
    insights: InsightsResponse
    pattern: str
    min_value: float
    max_value: float
    seed_offset: int


class BoundingBoxModel(BaseModel):
    left: float
    top: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)


class OverlayEnterRequest(BaseModel):
    day: Day
    hour: int = Field(ge=0, le=23)
    box: BoundingBoxModel


class OverlayResponse(BaseModel):
    day: Optional[Day] = None
    hour: int
    value: float
    x: float
    y: float
    visible: bool
    tooltip: Optional[str] = None


class RegenerateRequest(BaseModel):
    seed_offset: int
    persist: bool = False


class OverlayMessage(BaseModel):
    """Overlay update pushed to websocket display clients."""
    type: Literal["overlay"] = "overlay"
    day: Optional[Day] = None
    hour: int = 0
    value: float = 0.0
    x: float = 0.0
    y: float = 0.0
    visible: bool = False
