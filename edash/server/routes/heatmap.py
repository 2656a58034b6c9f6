"""Heatmap API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query

from edash.config.loader import save_config
from edash.heatmap.aggregation import intensity_color
from edash.heatmap.engine import HeatmapEngine
from edash.heatmap.overlay import OverlayPublisher, format_tooltip
from edash.models.entities import BoundingBox, Day, OverlayState
from edash.server.dependencies import get_config, get_engine, get_overlay, get_ws_manager
from edash.server.models.heatmap import (
    CellDetail,
    HeatmapResponse,
    InsightsResponse,
    OverlayEnterRequest,
    OverlayResponse,
    RegenerateRequest,
)
from edash.server.websocket import ConnectionManager

router = APIRouter(prefix="/api", tags=["heatmap"])


def _overlay_response(state: OverlayState, config: dict) -> OverlayResponse:
    return OverlayResponse(
        **state.as_dict(),
        tooltip=format_tooltip(state, config["display"]["unit"]) if state.day else None,
    )


@router.get("/heatmap", response_model=HeatmapResponse)
async def heatmap(engine: HeatmapEngine = Depends(get_engine)):
    """Get the full weekly grid with intensities and insights."""
    return HeatmapResponse(**engine.to_dict())


@router.get("/heatmap/insights", response_model=InsightsResponse)
async def heatmap_insights(engine: HeatmapEngine = Depends(get_engine)):
    """Get weekday, weekend and peak-hours averages."""
    return InsightsResponse(**engine.insights.as_dict(), pattern=engine.pattern)


@router.get("/heatmap/cell", response_model=CellDetail)
async def heatmap_cell(
    day: Day,
    hour: int = Query(..., ge=0, le=23),
    engine: HeatmapEngine = Depends(get_engine),
):
    """Get a single cell with its display colour."""
    cell = engine.lookup(day, hour)
    if cell is None:
        raise HTTPException(status_code=404, detail=f"No data for {day.value} {hour:02d}:00")
    return CellDetail(**cell.as_dict(), color=intensity_color(cell.intensity))


@router.get("/heatmap/overlay", response_model=OverlayResponse)
async def overlay_state(
    overlay: OverlayPublisher = Depends(get_overlay),
    config: dict = Depends(get_config),
):
    """Get the current tooltip overlay."""
    return _overlay_response(overlay.state, config)


@router.post("/heatmap/overlay/enter", response_model=OverlayResponse)
async def overlay_enter(
    body: OverlayEnterRequest,
    engine: HeatmapEngine = Depends(get_engine),
    overlay: OverlayPublisher = Depends(get_overlay),
    manager: ConnectionManager = Depends(get_ws_manager),
    config: dict = Depends(get_config),
):
    """Show the overlay for a hovered cell."""
    cell = engine.lookup(body.day, body.hour)
    if cell is None:
        raise HTTPException(status_code=404, detail=f"No data for {body.day.value} {body.hour:02d}:00")

    box = BoundingBox(**body.box.model_dump())
    state = overlay.enter(cell, box)
    await manager.publish_overlay(state)
    return _overlay_response(state, config)


@router.post("/heatmap/overlay/leave", response_model=OverlayResponse)
async def overlay_leave(
    overlay: OverlayPublisher = Depends(get_overlay),
    manager: ConnectionManager = Depends(get_ws_manager),
    config: dict = Depends(get_config),
):
    """Hide the overlay, keeping its last content."""
    state = overlay.leave()
    await manager.publish_overlay(state)
    return _overlay_response(state, config)


@router.post("/heatmap/regenerate", response_model=HeatmapResponse)
async def regenerate(
    body: RegenerateRequest,
    engine: HeatmapEngine = Depends(get_engine),
    config: dict = Depends(get_config),
):
    """Rebuild the grid from a new seed offset, optionally saving it as the default."""
    engine.regenerate(body.seed_offset)
    if body.persist:
        config["heatmap"]["seed_offset"] = body.seed_offset
        save_config(config)
    return HeatmapResponse(**engine.to_dict())
