"""
Hysteresis state machine that turns per-frame fire/smoke signals into an alert.

Each signal keeps a streak of consecutive qualifying frames. A single
non-qualifying frame resets its streak to zero. The alert is active only
while both streaks meet their required length, so it can drop back to
inactive on any frame.
"""

from __future__ import annotations

import logging
from typing import Optional

from models.alert import AlertState
from models.config import AlertConfig


class AlertStateMachine:
    """
    Streak counters for "fire growing" and "smoke significant".

    Example:
        machine = AlertStateMachine(AlertConfig(), fire_detection_threshold=100)

        # Each frame:
        state = machine.update(fire_area, significant_growth, significant_smoke)
        if state.active:
            ...
    """

    def __init__(
        self,
        config: Optional[AlertConfig] = None,
        fire_detection_threshold: int = 100,
    ) -> None:
        self.config = config or AlertConfig()
        self.fire_detection_threshold = fire_detection_threshold
        self._state = AlertState()

    @property
    def state(self) -> AlertState:
        return self._state

    def transition(
        self,
        state: AlertState,
        fire_area: int,
        significant_growth: bool,
        significant_smoke: bool,
    ) -> AlertState:
        """Compute the next state from `state` without touching the machine."""
        fire_qualifies = fire_area > self.fire_detection_threshold and significant_growth
        fire_streak = state.fire_streak + 1 if fire_qualifies else 0
        smoke_streak = state.smoke_streak + 1 if significant_smoke else 0
        active = (
            fire_streak >= self.config.fire_streak_required
            and smoke_streak >= self.config.smoke_streak_required
        )
        return AlertState(fire_streak=fire_streak, smoke_streak=smoke_streak, active=active)

    def update(self, fire_area: int, significant_growth: bool, significant_smoke: bool) -> AlertState:
        """Advance the machine by one frame and return the new state."""
        previous = self._state
        self._state = self.transition(previous, fire_area, significant_growth, significant_smoke)

        if self._state.active and not previous.active:
            logging.warning(
                f"Alert: Fire and smoke detected! (fire_streak={self._state.fire_streak}, "
                f"smoke_streak={self._state.smoke_streak})"
            )
        elif previous.active and not self._state.active:
            logging.info("Alert cleared")

        return self._state

    def reset(self) -> None:
        self._state = AlertState()
