"""
Fire growth analysis over the history window.

Growth is measured as the difference between the current fire area and the
area of the oldest mask still held in the window, not the previous frame
and not a window average.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .history import HistoryWindow


def mask_area(mask: Optional[np.ndarray]) -> int:
    """Number of set pixels in a mask (0 for None or empty masks)."""
    if mask is None or mask.size == 0:
        return 0
    return int(np.count_nonzero(mask))


@dataclass(frozen=True)
class GrowthResult:
    current_area: int
    reference_area: int
    significant: bool

    @property
    def delta(self) -> int:
        return self.current_area - self.reference_area


class GrowthAnalyzer:
    """Flags significant fire growth relative to the oldest mask in the window."""

    def __init__(self, growth_threshold: int = 50) -> None:
        self.growth_threshold = growth_threshold

    def evaluate(self, current_mask: np.ndarray, window: HistoryWindow) -> GrowthResult:
        """
        Compare the current mask's area with the window's oldest mask.

        The reference area is 0 until the window holds more than one mask.
        Callers push the current mask before evaluating.
        """
        current_area = mask_area(current_mask)
        reference_area = mask_area(window.oldest()) if len(window) > 1 else 0
        significant = (current_area - reference_area) > self.growth_threshold
        return GrowthResult(
            current_area=current_area,
            reference_area=reference_area,
            significant=significant,
        )
