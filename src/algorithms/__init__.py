"""
Temporal analysis for fire & smoke detection.

- HistoryWindow: bounded FIFO of recent fire masks
- GrowthAnalyzer: fire area growth against the oldest mask in the window
- RegionFilter: significant connected smoke regions
- AlertStateMachine: streak-based hysteresis producing the alert flag
"""

from .history import HistoryWindow
from .growth import GrowthAnalyzer, GrowthResult, mask_area
from .regions import RegionFilter
from .alert import AlertStateMachine

__all__ = [
    "HistoryWindow",
    "GrowthAnalyzer",
    "GrowthResult",
    "mask_area",
    "RegionFilter",
    "AlertStateMachine",
]
