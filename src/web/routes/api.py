from __future__ import annotations

import platform
import time
from typing import List, Optional, Tuple

import cv2
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from ..api_models import HealthResponse, StatusResponse
from ..state import state

router = APIRouter()


def _derive_status(last_frame_age: Optional[float], alert_active: bool) -> Tuple[str, List[str]]:
    """
    Lightweight status classifier used by /api/status.
    Thresholds: >10s last frame => offline; >2s => degraded.
    """
    level = "running"
    warnings: List[str] = []
    if last_frame_age is None or last_frame_age > 10:
        level = "offline"
        warnings.append("camera_offline")
    elif last_frame_age > 2:
        level = "degraded"
        warnings.append("camera_stale")

    if alert_active:
        warnings.append("fire_alert")

    return level, warnings


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        status="ok",
        timestamp=time.time(),
        platform=platform.platform(),
        python=platform.python_version(),
    )


@router.get("/status", response_model=StatusResponse)
def status():
    """
    Latest detection status plus camera freshness.
    """
    now = time.time()
    sys_stats = state.get_system_stats_copy()
    detection = state.get_detection_copy()

    last_frame_ts = sys_stats.get("last_frame_ts")
    last_frame_age = now - last_frame_ts if last_frame_ts else None
    start_time = sys_stats.get("start_time")
    alert_active = bool(detection.get("active", False))

    level, warnings = _derive_status(last_frame_age, alert_active)

    return StatusResponse(
        status=level,
        warnings=warnings,
        alert_active=alert_active,
        fire_streak=detection.get("fire_streak", 0),
        smoke_streak=detection.get("smoke_streak", 0),
        fire_area=detection.get("fire_area", 0),
        smoke_region_count=detection.get("smoke_region_count", 0),
        frame_index=detection.get("frame_index"),
        fps=sys_stats.get("fps", 0.0),
        last_frame_age_s=last_frame_age,
        uptime_seconds=int(now - start_time) if start_time else None,
        timestamp=now,
    )


@router.get("/frame.jpg")
def latest_frame():
    """Latest annotated frame as JPEG."""
    frame = state.get_frame()
    if frame is None:
        raise HTTPException(status_code=404, detail="No frame available")
    ok, buf = cv2.imencode(".jpg", frame)
    if not ok:
        raise HTTPException(status_code=500, detail="Frame encoding failed")
    return Response(content=buf.tobytes(), media_type="image/jpeg")
