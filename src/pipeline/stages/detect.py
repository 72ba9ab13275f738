"""
Detect stage: fire and smoke masks for one frame.

The two detectors share no state and only read the frame, so they can run
concurrently. The stage owns the previous frame used for smoke motion and
replaces it once per processed frame.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from detection.fire import FireMaskDetector
from detection.smoke import SmokeMaskDetector


@dataclass
class DetectStageConfig:
    """
    Configuration for the detect stage.

    Attributes:
        parallel: Run fire and smoke detection on a two-worker thread pool.
    """
    parallel: bool = False


class DetectStage:
    """
    Pipeline stage producing (fire_mask, smoke_mask) per frame.

    Example:
        stage = DetectStage(FireMaskDetector(fire_cfg), SmokeMaskDetector(smoke_cfg))

        # Each frame:
        fire_mask, smoke_mask = stage.process(frame)
    """

    def __init__(
        self,
        fire_detector: FireMaskDetector,
        smoke_detector: SmokeMaskDetector,
        config: Optional[DetectStageConfig] = None,
    ):
        self._fire = fire_detector
        self._smoke = smoke_detector
        self._config = config or DetectStageConfig()
        self._previous: Optional[np.ndarray] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        if self._config.parallel:
            self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="detect")
            logging.info("DetectStage running fire/smoke detectors in parallel")

    @property
    def previous_frame(self) -> Optional[np.ndarray]:
        return self._previous

    def process(self, frame: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Run both detectors on the frame, then retain it as the previous frame.

        Returns:
            (fire_mask, smoke_mask)
        """
        previous = self._previous

        if self._executor is not None:
            fire_future = self._executor.submit(self._fire.detect, frame)
            smoke_future = self._executor.submit(self._smoke.detect, frame, previous)
            fire_mask = fire_future.result()
            smoke_mask = smoke_future.result()
        else:
            fire_mask = self._fire.detect(frame)
            smoke_mask = self._smoke.detect(frame, previous)

        self._previous = frame
        return fire_mask, smoke_mask

    def reset(self) -> None:
        self._previous = None

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
