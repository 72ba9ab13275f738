"""
Pipeline module for the fire & smoke monitor.

The pipeline orchestrates the full processing flow:
- Frame acquisition from observation sources
- Fire and smoke mask detection (DetectStage)
- History, growth, region filtering and alert state (DecideStage)
- Hand-off to presenters (display, recording, web status)
"""

from .engine import PipelineEngine, PipelineConfig, PipelineStats, create_engine_from_config
from .processor import FrameProcessor
from .stages import DetectStage, DetectStageConfig, DecideStage, Decision

__all__ = [
    "PipelineEngine",
    "PipelineConfig",
    "PipelineStats",
    "create_engine_from_config",
    "FrameProcessor",
    "DetectStage",
    "DetectStageConfig",
    "DecideStage",
    "Decision",
]
