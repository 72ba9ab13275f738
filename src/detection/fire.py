"""
Fire-candidate pixel detection from color and brightness.
"""

from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np

from models.config import FireConfig
from .base import MaskDetector, clean_mask, empty_mask, hsv_range_mask, is_blank, structuring_element


class FireMaskDetector(MaskDetector):
    """
    Mark pixels that are both fire-colored and bright.

    A pixel is a candidate when its HSV value falls in the warm, saturated,
    bright range AND its grayscale intensity exceeds the intensity threshold.
    The combined mask is opened then closed to remove speckle noise.
    Stateless: the same frame always yields the same mask.
    """

    def __init__(self, config: Optional[FireConfig] = None) -> None:
        self.config = config or FireConfig()
        self.kernel = structuring_element(self.config.kernel_size)
        logging.debug(
            f"Fire detector initialized: hsv={self.config.hsv_lower}..{self.config.hsv_upper}, "
            f"intensity>{self.config.intensity_threshold}, kernel={self.config.kernel_size}"
        )

    def color_mask(self, frame: np.ndarray) -> np.ndarray:
        return hsv_range_mask(frame, self.config.hsv_lower, self.config.hsv_upper)

    def intensity_mask(self, frame: np.ndarray) -> np.ndarray:
        gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
        _, mask = cv2.threshold(gray, self.config.intensity_threshold, 255, cv2.THRESH_BINARY)
        return mask

    def detect(self, frame: np.ndarray) -> np.ndarray:
        """
        Detect fire-candidate pixels.

        Args:
            frame: BGR frame.

        Returns:
            uint8 mask (0/255) with the frame's height and width.
        """
        if is_blank(frame):
            return empty_mask(frame)

        combined = cv2.bitwise_and(self.color_mask(frame), self.intensity_mask(frame))
        return clean_mask(combined, self.kernel)
