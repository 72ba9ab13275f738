"""
Frame annotation for detection results.
"""

from __future__ import annotations

import cv2
import numpy as np

from models.result import FrameResult

# Colors (BGR)
COLOR_SMOKE = (0, 255, 0)  # Green
COLOR_ALERT = (0, 0, 255)  # Red

ALERT_TEXT = "FIRE ALERT!"


def render_overlay(frame: np.ndarray, result: FrameResult, fire_alpha: float = 0.3) -> np.ndarray:
    """
    Draw smoke boundaries, the alert banner and a translucent fire mask.

    The input frame is not modified.
    """
    annotated = frame.copy()
    if annotated.size == 0:
        return annotated

    contours = [region.contour for region in result.smoke_regions]
    if contours:
        cv2.drawContours(annotated, contours, -1, COLOR_SMOKE, 2)

    if result.active:
        cv2.putText(annotated, ALERT_TEXT, (10, 50), cv2.FONT_HERSHEY_SIMPLEX, 1, COLOR_ALERT, 2)

    if result.fire_mask.shape[:2] == annotated.shape[:2]:
        fire_visualization = cv2.cvtColor(result.fire_mask, cv2.COLOR_GRAY2BGR)
        annotated = cv2.addWeighted(annotated, 1.0 - fire_alpha, fire_visualization, fire_alpha, 0)

    return annotated
