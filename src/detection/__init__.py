"""
Fire & Smoke Monitor - Detection Module

Per-pixel fire and smoke candidate detection for video frames.
"""

from .base import MaskDetector
from .fire import FireMaskDetector
from .smoke import SmokeMaskDetector, FrameMismatch

__all__ = ['MaskDetector', 'FireMaskDetector', 'SmokeMaskDetector', 'FrameMismatch']
