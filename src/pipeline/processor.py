"""
Per-frame fire & smoke processing.

FrameProcessor runs one frame through both stages and packages the outcome
as a FrameResult. It holds all mutable detection state (previous frame,
history window, alert state) and is driven by exactly one caller.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from detection.fire import FireMaskDetector
from detection.smoke import SmokeMaskDetector
from models.config import Config
from models.frame import FrameData
from models.result import FrameResult
from .stages.decide import DecideStage
from .stages.detect import DetectStage, DetectStageConfig


class FrameProcessor:
    """
    Detection core: frame in, FrameResult out.

    Example:
        processor = FrameProcessor(Config())
        for frame_data in source:
            result = processor.process(frame_data)
            if result.active:
                ...
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self._detect = DetectStage(
            FireMaskDetector(self.config.fire),
            SmokeMaskDetector(self.config.smoke),
            DetectStageConfig(parallel=self.config.pipeline.parallel_detectors),
        )
        self._decide = DecideStage(self.config.fire, self.config.smoke, self.config.alert)
        self._frame_count = 0

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def state(self):
        return self._decide.machine.state

    @property
    def history(self):
        return self._decide.history

    def process(self, frame: Union[FrameData, np.ndarray]) -> FrameResult:
        """
        Process a single frame through detection and temporal analysis.

        FrameData keeps the index its source assigned; bare arrays are
        numbered by the processor starting at 1.
        """
        if isinstance(frame, FrameData):
            image = frame.frame
            frame_index = frame.frame_index
        else:
            image = frame
            frame_index = self._frame_count + 1
        self._frame_count += 1

        fire_mask, smoke_mask = self._detect.process(image)
        decision = self._decide.process(fire_mask, smoke_mask)

        return FrameResult(
            frame_index=frame_index,
            fire_mask=fire_mask,
            smoke_mask=smoke_mask,
            fire_area=decision.growth.current_area,
            reference_area=decision.growth.reference_area,
            significant_growth=decision.growth.significant,
            smoke_regions=decision.smoke_regions,
            alert=decision.state,
            alert_raised=decision.state.active and not decision.previous_state.active,
            alert_cleared=decision.previous_state.active and not decision.state.active,
        )

    def reset(self) -> None:
        """Forget the previous frame, history and streaks."""
        self._detect.reset()
        self._decide.reset()
        self._frame_count = 0

    def close(self) -> None:
        self._detect.close()
