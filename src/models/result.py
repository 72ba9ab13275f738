"""
Per-frame output of the detection pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np

from .alert import AlertState
from .region import Region


@dataclass(frozen=True)
class FrameResult:
    """
    Everything a presenter needs to render or report one processed frame.

    Attributes:
        frame_index: Sequential index of the processed frame.
        fire_mask: Binary fire-candidate mask (0/255).
        smoke_mask: Binary smoke-candidate mask (0/255).
        fire_area: Number of fire-candidate pixels in this frame.
        reference_area: Fire area of the oldest mask in the history window.
        significant_growth: Whether fire area grew beyond the growth threshold.
        smoke_regions: Smoke regions whose area exceeds the smoke threshold.
        alert: Alert state after this frame.
        alert_raised: Alert went from inactive to active on this frame.
        alert_cleared: Alert went from active to inactive on this frame.
    """

    frame_index: int
    fire_mask: np.ndarray
    smoke_mask: np.ndarray
    fire_area: int
    reference_area: int
    significant_growth: bool
    smoke_regions: List[Region] = field(default_factory=list)
    alert: AlertState = field(default_factory=AlertState)
    alert_raised: bool = False
    alert_cleared: bool = False

    @property
    def active(self) -> bool:
        return self.alert.active

    @property
    def significant_smoke(self) -> bool:
        return len(self.smoke_regions) > 0

    def summary(self) -> Dict[str, Any]:
        """Compact, JSON-friendly view (no mask payloads)."""
        return {
            "frame_index": self.frame_index,
            "fire_area": self.fire_area,
            "reference_area": self.reference_area,
            "significant_growth": self.significant_growth,
            "smoke_region_count": len(self.smoke_regions),
            "smoke_area": sum(r.area for r in self.smoke_regions),
            **self.alert.to_dict(),
        }
