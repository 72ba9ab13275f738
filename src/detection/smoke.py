"""
Smoke-candidate pixel detection from motion and color.

Smoke shows up as grayish, low-saturation, mid-brightness pixels that
change between consecutive frames. Motion is measured against the previous
frame only; there is no background model.
"""

from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np

from models.config import SmokeConfig
from .base import MaskDetector, clean_mask, empty_mask, hsv_range_mask, is_blank, structuring_element


class FrameMismatch(ValueError):
    """Current and previous frames do not share the same dimensions."""


class SmokeMaskDetector(MaskDetector):
    """
    Mark pixels that moved since the previous frame and look like smoke.

    Missing or mismatched previous frames are not errors: detection degrades
    to an all-zero mask and resumes once a compatible previous frame exists.
    """

    def __init__(self, config: Optional[SmokeConfig] = None) -> None:
        self.config = config or SmokeConfig()
        self.kernel = structuring_element(self.config.kernel_size)

    def motion_mask(self, frame: np.ndarray, previous: np.ndarray) -> np.ndarray:
        """
        Threshold the absolute grayscale difference between two frames.

        Raises:
            FrameMismatch: If the two frames differ in shape.
        """
        if frame.shape != previous.shape:
            raise FrameMismatch(f"frame shape {frame.shape} != previous shape {previous.shape}")

        gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
        prev_gray = cv2.cvtColor(previous, cv2.COLOR_BGR2GRAY)
        diff = cv2.absdiff(gray, prev_gray)
        _, mask = cv2.threshold(diff, self.config.motion_threshold, 255, cv2.THRESH_BINARY)
        return mask

    def color_mask(self, frame: np.ndarray) -> np.ndarray:
        return hsv_range_mask(frame, self.config.hsv_lower, self.config.hsv_upper)

    def detect(self, frame: np.ndarray, previous: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Detect smoke-candidate pixels.

        Args:
            frame: Current BGR frame.
            previous: Previous BGR frame, or None on the first call.

        Returns:
            uint8 mask (0/255) with the current frame's height and width.
        """
        if is_blank(frame) or is_blank(previous):
            return empty_mask(frame)

        try:
            motion = self.motion_mask(frame, previous)
        except FrameMismatch as e:
            logging.warning(f"Smoke detection skipped for this frame: {e}")
            return empty_mask(frame)

        combined = cv2.bitwise_and(motion, self.color_mask(frame))
        return clean_mask(combined, self.kernel)
