"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import cv2
import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

FRAME_SHAPE = (120, 160, 3)

# BGR colors chosen to land inside the default HSV ranges
WARM_BRIGHT = (180, 230, 255)  # H=20, S=75, V=255, gray~232 -> fire
SMOKE_GRAY = (128, 128, 128)   # S=0, V=128 -> smoke color


def black_frame(shape=FRAME_SHAPE):
    return np.zeros(shape, dtype=np.uint8)


def with_disk(frame, center, radius, color=WARM_BRIGHT):
    out = frame.copy()
    cv2.circle(out, center, radius, color, -1)
    return out


def with_patch(frame, x, y, w, h, color=SMOKE_GRAY):
    out = frame.copy()
    out[y:y + h, x:x + w] = color
    return out


def mask_with_count(count, shape=(20, 20)):
    """Binary mask with exactly `count` set pixels."""
    mask = np.zeros(shape[0] * shape[1], dtype=np.uint8)
    mask[:count] = 255
    return mask.reshape(shape)


@pytest.fixture
def scenario_frames():
    """
    Three-frame fire/smoke sequence:
    1. all black
    2. warm bright disk (~150 px)
    3. disk grown (~250 px) plus a 40x30 gray patch (1200 px)
    """
    frame1 = black_frame()
    frame2 = with_disk(frame1, (40, 60), 7)
    frame3 = with_patch(with_disk(frame1, (40, 60), 9), x=100, y=60, w=40, h=30)
    return [frame1, frame2, frame3]


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
camera:
  device_id: 0
  max_device_index: 10

fire:
  detection_threshold: 100
  growth_threshold: 50

smoke:
  detection_threshold: 1000

alert:
  history_window_size: 10
  fire_streak_required: 3
  smoke_streak_required: 3

log_path: "logs/test.log"
log_level: "INFO"
""")

    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "camera": {
            "device_id": 0,
            "max_device_index": 10,
            "resolution": [640, 480],
            "fps": 30,
        },
        "fire": {
            "hsv_lower": [0, 50, 200],
            "hsv_upper": [25, 255, 255],
            "intensity_threshold": 200,
            "kernel_size": 5,
            "detection_threshold": 100,
            "growth_threshold": 50,
        },
        "smoke": {
            "hsv_lower": [0, 0, 100],
            "hsv_upper": [179, 30, 200],
            "motion_threshold": 15,
            "kernel_size": 10,
            "detection_threshold": 1000,
        },
        "alert": {
            "history_window_size": 10,
            "fire_streak_required": 3,
            "smoke_streak_required": 3,
        },
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }
