"""
Pipeline stages for the fire & smoke monitor.

Each stage handles a specific part of the per-frame processing:
- detect: fire and smoke candidate masks
- decide: history, growth, region filtering and the alert transition
"""

from .detect import DetectStage, DetectStageConfig
from .decide import DecideStage, Decision

__all__ = ["DetectStage", "DetectStageConfig", "DecideStage", "Decision"]
