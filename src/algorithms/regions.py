from __future__ import annotations

from typing import List, Optional

import cv2
import numpy as np

from models.region import Region


class RegionFilter:
    """
    Extract outer connected regions from a mask and keep the large ones.

    Only external boundaries are reported; holes and nested contours are
    ignored. A region is significant when its area exceeds min_area.
    """

    def __init__(self, min_area: float = 1000) -> None:
        self.min_area = min_area

    def find_regions(self, mask: Optional[np.ndarray]) -> List[Region]:
        """All external regions of the mask, regardless of size."""
        if mask is None or mask.size == 0:
            return []
        contours, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
        return [Region.from_contour(c) for c in contours]

    def significant(self, mask: Optional[np.ndarray]) -> List[Region]:
        """External regions whose area exceeds min_area."""
        return [r for r in self.find_regions(mask) if r.area > self.min_area]
