"""
Typed configuration models matching the YAML config structure.

All sections are frozen: components receive their section at construction
and never see thresholds change underneath them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

HSVTriple = Tuple[int, int, int]


def _triple(value: Any, default: HSVTriple) -> HSVTriple:
    if value is None:
        return default
    return tuple(int(v) for v in value)  # type: ignore[return-value]


@dataclass(frozen=True)
class CameraConfig:
    """Camera / frame source configuration."""
    device_id: Union[int, str] = 0
    max_device_index: int = 10
    max_retries: int = 3
    resolution: Optional[Tuple[int, int]] = None
    fps: Optional[int] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CameraConfig":
        """Adapter: Create from config dictionary."""
        resolution = d.get("resolution")
        return cls(
            device_id=d.get("device_id", 0),
            max_device_index=d.get("max_device_index", 10),
            max_retries=d.get("max_retries", 3),
            resolution=tuple(resolution) if resolution else None,
            fps=d.get("fps"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "device_id": self.device_id,
            "max_device_index": self.max_device_index,
            "max_retries": self.max_retries,
            "resolution": list(self.resolution) if self.resolution else None,
            "fps": self.fps,
        }


@dataclass(frozen=True)
class FireConfig:
    """
    Fire mask and fire area thresholds.

    detection_threshold is the minimum fire-candidate pixel count,
    growth_threshold the minimum area increase over the history window.
    """
    hsv_lower: HSVTriple = (0, 50, 200)
    hsv_upper: HSVTriple = (25, 255, 255)
    intensity_threshold: int = 200
    kernel_size: int = 5
    detection_threshold: int = 100
    growth_threshold: int = 50

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "FireConfig":
        return cls(
            hsv_lower=_triple(d.get("hsv_lower"), (0, 50, 200)),
            hsv_upper=_triple(d.get("hsv_upper"), (25, 255, 255)),
            intensity_threshold=d.get("intensity_threshold", 200),
            kernel_size=d.get("kernel_size", 5),
            detection_threshold=d.get("detection_threshold", 100),
            growth_threshold=d.get("growth_threshold", 50),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hsv_lower": list(self.hsv_lower),
            "hsv_upper": list(self.hsv_upper),
            "intensity_threshold": self.intensity_threshold,
            "kernel_size": self.kernel_size,
            "detection_threshold": self.detection_threshold,
            "growth_threshold": self.growth_threshold,
        }


@dataclass(frozen=True)
class SmokeConfig:
    """Smoke mask thresholds; detection_threshold is the minimum region area."""
    hsv_lower: HSVTriple = (0, 0, 100)
    hsv_upper: HSVTriple = (179, 30, 200)
    motion_threshold: int = 15
    kernel_size: int = 10
    detection_threshold: int = 1000

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SmokeConfig":
        return cls(
            hsv_lower=_triple(d.get("hsv_lower"), (0, 0, 100)),
            hsv_upper=_triple(d.get("hsv_upper"), (179, 30, 200)),
            motion_threshold=d.get("motion_threshold", 15),
            kernel_size=d.get("kernel_size", 10),
            detection_threshold=d.get("detection_threshold", 1000),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hsv_lower": list(self.hsv_lower),
            "hsv_upper": list(self.hsv_upper),
            "motion_threshold": self.motion_threshold,
            "kernel_size": self.kernel_size,
            "detection_threshold": self.detection_threshold,
        }


@dataclass(frozen=True)
class AlertConfig:
    """Temporal window and streak lengths for the alert state machine."""
    history_window_size: int = 10
    fire_streak_required: int = 3
    smoke_streak_required: int = 3

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AlertConfig":
        return cls(
            history_window_size=d.get("history_window_size", 10),
            fire_streak_required=d.get("fire_streak_required", 3),
            smoke_streak_required=d.get("smoke_streak_required", 3),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "history_window_size": self.history_window_size,
            "fire_streak_required": self.fire_streak_required,
            "smoke_streak_required": self.smoke_streak_required,
        }


@dataclass(frozen=True)
class PipelineSettings:
    """Processing loop options."""
    parallel_detectors: bool = False
    stats_log_interval: float = 60.0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PipelineSettings":
        return cls(
            parallel_detectors=d.get("parallel_detectors", False),
            stats_log_interval=d.get("stats_log_interval", 60.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parallel_detectors": self.parallel_detectors,
            "stats_log_interval": self.stats_log_interval,
        }


@dataclass(frozen=True)
class WebConfig:
    """Status web server configuration."""
    enabled: bool = False
    host: str = "0.0.0.0"
    port: int = 5000

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "WebConfig":
        return cls(
            enabled=d.get("enabled", False),
            host=d.get("host", "0.0.0.0"),
            port=d.get("port", 5000),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"enabled": self.enabled, "host": self.host, "port": self.port}


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    This is a typed representation of the YAML config structure.
    """
    camera: CameraConfig = field(default_factory=CameraConfig)
    fire: FireConfig = field(default_factory=FireConfig)
    smoke: SmokeConfig = field(default_factory=SmokeConfig)
    alert: AlertConfig = field(default_factory=AlertConfig)
    pipeline: PipelineSettings = field(default_factory=PipelineSettings)
    web: WebConfig = field(default_factory=WebConfig)
    log_path: str = "logs/fire_monitor.log"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create Config from raw dictionary (e.g., from load_config)."""
        return cls(
            camera=CameraConfig.from_dict(d.get("camera") or {}),
            fire=FireConfig.from_dict(d.get("fire") or {}),
            smoke=SmokeConfig.from_dict(d.get("smoke") or {}),
            alert=AlertConfig.from_dict(d.get("alert") or {}),
            pipeline=PipelineSettings.from_dict(d.get("pipeline") or {}),
            web=WebConfig.from_dict(d.get("web") or {}),
            log_path=d.get("log_path", "logs/fire_monitor.log"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary (for saving or logging)."""
        return {
            "camera": self.camera.to_dict(),
            "fire": self.fire.to_dict(),
            "smoke": self.smoke.to_dict(),
            "alert": self.alert.to_dict(),
            "pipeline": self.pipeline.to_dict(),
            "web": self.web.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
