"""
Typed models for the fire & smoke monitor.

Frames, masks and per-frame results flow through the pipeline as these
value types; configuration arrives as frozen dataclasses.
"""

from .frame import FrameData
from .region import Region
from .alert import AlertState
from .result import FrameResult
from .config import (
    Config,
    CameraConfig,
    FireConfig,
    SmokeConfig,
    AlertConfig,
    PipelineSettings,
    WebConfig,
)

__all__ = [
    # Frame
    "FrameData",
    # Detection output
    "Region",
    "AlertState",
    "FrameResult",
    # Config
    "Config",
    "CameraConfig",
    "FireConfig",
    "SmokeConfig",
    "AlertConfig",
    "PipelineSettings",
    "WebConfig",
]
