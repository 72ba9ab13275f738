from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    timestamp: float
    platform: str
    python: str


class StatusResponse(BaseModel):
    """
    Detector status optimized for dashboard polling.
    """
    status: str = Field(..., description="running|degraded|offline")
    warnings: list[str] = Field(default_factory=list, description="Active warnings")
    alert_active: bool = Field(False, description="True while fire and smoke streaks are both satisfied")
    fire_streak: int = 0
    smoke_streak: int = 0
    fire_area: int = Field(0, description="Fire-candidate pixels in the latest frame")
    smoke_region_count: int = Field(0, description="Significant smoke regions in the latest frame")
    frame_index: Optional[int] = None
    fps: float = 0.0
    last_frame_age_s: Optional[float] = Field(None, description="Seconds since last frame")
    uptime_seconds: Optional[int] = None
    timestamp: float
