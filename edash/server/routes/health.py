"""Health check endpoint."""

import time
from fastapi import APIRouter, Depends

from edash.heatmap.engine import HeatmapEngine
from edash.models.entities import DAYS, HOURS
from edash.server.dependencies import get_engine
from edash.server.models.common import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])

_start_time = time.time()

VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check(engine: HeatmapEngine = Depends(get_engine)):
    """Health check: returns status, uptime, engine health."""
    uptime = int(time.time() - _start_time)

    engine_status = "ok" if len(engine.grid) == len(DAYS) * len(HOURS) else "error"

    return HealthResponse(
        status="ok",
        uptime_seconds=uptime,
        engine=engine_status,
        version=VERSION,
    )
