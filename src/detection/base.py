"""
Mask detector interfaces and shared mask helpers.

Detectors here classify pixels rather than objects: each returns a binary
uint8 mask (0 / 255) with the same height and width as its input frame.
"""

from __future__ import annotations

from typing import Optional, Tuple

import cv2
import numpy as np


def empty_mask(frame: Optional[np.ndarray]) -> np.ndarray:
    """All-zero mask matching the frame's (height, width)."""
    if frame is None:
        return np.zeros((0, 0), dtype=np.uint8)
    return np.zeros(frame.shape[:2], dtype=np.uint8)


def is_blank(frame: Optional[np.ndarray]) -> bool:
    return frame is None or frame.size == 0


def structuring_element(size: int) -> np.ndarray:
    """Elliptical structuring element of size x size."""
    return cv2.getStructuringElement(cv2.MORPH_ELLIPSE, (size, size))


def clean_mask(mask: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Opening followed by closing.

    Opening drops speckles smaller than the kernel, closing fills small gaps.
    """
    opened = cv2.morphologyEx(mask, cv2.MORPH_OPEN, kernel)
    return cv2.morphologyEx(opened, cv2.MORPH_CLOSE, kernel)


def hsv_range_mask(
    frame: np.ndarray,
    lower: Tuple[int, int, int],
    upper: Tuple[int, int, int],
) -> np.ndarray:
    hsv = cv2.cvtColor(frame, cv2.COLOR_BGR2HSV)
    return cv2.inRange(hsv, np.array(lower, dtype=np.uint8), np.array(upper, dtype=np.uint8))


class MaskDetector:
    """Detector interface returning a per-pixel candidate mask."""

    def detect(self, frame: np.ndarray) -> np.ndarray:
        raise NotImplementedError
