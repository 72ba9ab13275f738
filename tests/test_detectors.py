"""
Tests for the fire and smoke mask detectors.
"""

import numpy as np
import pytest

from detection.fire import FireMaskDetector
from detection.smoke import SmokeMaskDetector, FrameMismatch
from models.config import FireConfig, SmokeConfig

from conftest import SMOKE_GRAY, black_frame, with_disk, with_patch


class TestFireMaskDetector:
    def test_warm_bright_disk_detected(self):
        """A bright warm disk survives color, intensity and morphology."""
        frame = with_disk(black_frame(), (40, 60), 9)
        mask = FireMaskDetector().detect(frame)

        assert mask.shape == frame.shape[:2]
        assert mask.dtype == np.uint8
        area = np.count_nonzero(mask)
        assert 200 < area < 330
        assert mask[60, 40] == 255
        assert mask[5, 5] == 0

    def test_mask_is_binary(self):
        frame = with_disk(black_frame(), (40, 60), 9)
        mask = FireMaskDetector().detect(frame)
        assert set(np.unique(mask)) <= {0, 255}

    def test_black_frame_has_no_fire(self):
        mask = FireMaskDetector().detect(black_frame())
        assert np.count_nonzero(mask) == 0

    def test_gray_patch_is_not_fire(self):
        frame = with_patch(black_frame(), 10, 10, 40, 30, SMOKE_GRAY)
        assert np.count_nonzero(FireMaskDetector().detect(frame)) == 0

    def test_white_patch_rejected_by_saturation(self):
        """Bright but unsaturated pixels pass intensity yet fail the color range."""
        frame = with_patch(black_frame(), 10, 10, 40, 30, (255, 255, 255))
        assert np.count_nonzero(FireMaskDetector().detect(frame)) == 0

    def test_dark_warm_patch_rejected_by_intensity(self):
        """Warm hue with low brightness fails the value and intensity thresholds."""
        frame = with_patch(black_frame(), 10, 10, 40, 30, (0, 60, 120))
        assert np.count_nonzero(FireMaskDetector().detect(frame)) == 0

    def test_isolated_speckle_removed(self):
        frame = black_frame()
        frame[50, 50] = (180, 230, 255)
        frame[51, 51] = (180, 230, 255)
        assert np.count_nonzero(FireMaskDetector().detect(frame)) == 0

    def test_empty_frame_yields_empty_mask(self):
        frame = np.zeros((0, 0, 3), dtype=np.uint8)
        mask = FireMaskDetector().detect(frame)
        assert mask.size == 0

    def test_deterministic(self):
        rng = np.random.default_rng(7)
        frame = rng.integers(0, 256, size=(120, 160, 3), dtype=np.uint8)
        frame = with_disk(frame, (80, 60), 12)
        detector = FireMaskDetector()

        first = detector.detect(frame)
        second = detector.detect(frame)
        third = FireMaskDetector(FireConfig()).detect(frame.copy())

        assert np.array_equal(first, second)
        assert np.array_equal(first, third)

    def test_custom_intensity_threshold(self):
        """Raising the intensity threshold above the disk's gray level removes it."""
        frame = with_disk(black_frame(), (40, 60), 9)
        detector = FireMaskDetector(FireConfig(intensity_threshold=250))
        assert np.count_nonzero(detector.detect(frame)) == 0


class TestSmokeMaskDetector:
    def test_no_previous_frame_returns_zero_mask(self):
        frame = with_patch(black_frame(), 100, 60, 40, 30)
        mask = SmokeMaskDetector().detect(frame, None)

        assert mask.shape == frame.shape[:2]
        assert np.count_nonzero(mask) == 0

    def test_empty_previous_frame_returns_zero_mask(self):
        frame = black_frame()
        mask = SmokeMaskDetector().detect(frame, np.zeros((0, 0, 3), dtype=np.uint8))
        assert mask.shape == frame.shape[:2]
        assert np.count_nonzero(mask) == 0

    def test_moving_gray_patch_detected(self):
        previous = black_frame()
        frame = with_patch(previous, 100, 60, 40, 30)
        mask = SmokeMaskDetector().detect(frame, previous)

        area = np.count_nonzero(mask)
        assert 1000 < area <= 1300
        assert mask[75, 120] == 255

    def test_static_gray_patch_ignored(self):
        """No motion, no smoke, even when the color matches."""
        frame = with_patch(black_frame(), 100, 60, 40, 30)
        mask = SmokeMaskDetector().detect(frame, frame.copy())
        assert np.count_nonzero(mask) == 0

    def test_moving_fire_colored_region_ignored(self):
        """Motion alone is not enough: saturated warm pixels fail the smoke color range."""
        previous = black_frame()
        frame = with_disk(previous, (40, 60), 15)
        mask = SmokeMaskDetector().detect(frame, previous)
        assert np.count_nonzero(mask) == 0

    def test_small_motion_below_threshold_ignored(self):
        previous = with_patch(black_frame(), 100, 60, 40, 30, (120, 120, 120))
        frame = with_patch(black_frame(), 100, 60, 40, 30, (130, 130, 130))
        mask = SmokeMaskDetector().detect(frame, previous)
        assert np.count_nonzero(mask) == 0

    def test_mismatched_frames_degrade_to_zero_mask(self):
        previous = np.zeros((60, 80, 3), dtype=np.uint8)
        frame = with_patch(black_frame(), 100, 60, 40, 30)
        mask = SmokeMaskDetector().detect(frame, previous)

        assert mask.shape == frame.shape[:2]
        assert np.count_nonzero(mask) == 0

    def test_motion_mask_raises_on_mismatch(self):
        with pytest.raises(FrameMismatch):
            SmokeMaskDetector().motion_mask(black_frame(), np.zeros((60, 80, 3), dtype=np.uint8))

    def test_deterministic(self):
        rng = np.random.default_rng(3)
        previous = rng.integers(0, 256, size=(120, 160, 3), dtype=np.uint8)
        frame = with_patch(previous, 100, 60, 40, 30)
        detector = SmokeMaskDetector(SmokeConfig())

        assert np.array_equal(detector.detect(frame, previous), detector.detect(frame, previous))
