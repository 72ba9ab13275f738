"""
Decide stage: temporal analysis of the masks and the alert transition.

This stage:
- Pushes the fire mask onto the history window
- Evaluates fire growth against the oldest mask in the window
- Filters smoke regions by area
- Advances the alert state machine exactly once per frame
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from algorithms.alert import AlertStateMachine
from algorithms.growth import GrowthAnalyzer, GrowthResult
from algorithms.history import HistoryWindow
from algorithms.regions import RegionFilter
from models.alert import AlertState
from models.config import AlertConfig, FireConfig, SmokeConfig
from models.region import Region


@dataclass(frozen=True)
class Decision:
    growth: GrowthResult
    smoke_regions: List[Region]
    previous_state: AlertState
    state: AlertState


class DecideStage:
    """Single writer of the history window and alert state."""

    def __init__(self, fire: FireConfig, smoke: SmokeConfig, alert: AlertConfig):
        self.history = HistoryWindow(alert.history_window_size)
        self.growth = GrowthAnalyzer(fire.growth_threshold)
        self.regions = RegionFilter(smoke.detection_threshold)
        self.machine = AlertStateMachine(alert, fire_detection_threshold=fire.detection_threshold)

    def process(self, fire_mask: np.ndarray, smoke_mask: np.ndarray) -> Decision:
        self.history.push(fire_mask)
        growth = self.growth.evaluate(fire_mask, self.history)
        smoke_regions = self.regions.significant(smoke_mask)

        previous_state = self.machine.state
        state = self.machine.update(growth.current_area, growth.significant, bool(smoke_regions))
        return Decision(
            growth=growth,
            smoke_regions=smoke_regions,
            previous_state=previous_state,
            state=state,
        )

    def reset(self) -> None:
        self.history.clear()
        self.machine.reset()
