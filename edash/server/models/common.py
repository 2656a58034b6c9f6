"""Common Pydantic models for API responses."""

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    uptime_seconds: int
    engine: str
    version: str
