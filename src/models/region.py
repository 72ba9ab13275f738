"""
Connected mask region with its outer boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import cv2
import numpy as np


@dataclass(frozen=True)
class Region:
    """
    An external connected region of a binary mask.

    contour is the OpenCV point array (N x 1 x 2) describing the outer
    boundary; area is the polygon area enclosed by it.
    """

    contour: np.ndarray
    area: float

    @classmethod
    def from_contour(cls, contour: np.ndarray) -> "Region":
        return cls(contour=contour, area=float(cv2.contourArea(contour)))

    @property
    def bbox(self) -> Tuple[int, int, int, int]:
        """Bounding box as (x1, y1, x2, y2)."""
        x, y, w, h = cv2.boundingRect(self.contour)
        return (x, y, x + w, y + h)

    @property
    def point_count(self) -> int:
        return int(len(self.contour))
