from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AlertState:
    """Snapshot of the fire/smoke streak counters and the derived alert flag."""

    fire_streak: int = 0
    smoke_streak: int = 0
    active: bool = False

    def to_dict(self) -> dict:
        return {
            "fire_streak": self.fire_streak,
            "smoke_streak": self.smoke_streak,
            "active": self.active,
        }
