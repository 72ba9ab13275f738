"""
Pipeline engine for the fire & smoke monitor.

This module drives the frame loop: pull a frame from the observation
source, run it through the FrameProcessor, hand the result to presenters,
repeat. Each frame is fully processed before the next one is requested,
and the stop flag is checked only between frames.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from models.config import Config
from models.frame import FrameData
from models.result import FrameResult
from observation import ObservationSource, create_source_from_config
from presentation.presenters import Presenter
from .processor import FrameProcessor


@dataclass
class PipelineConfig:
    """
    Configuration for the pipeline engine.

    Attributes:
        stats_log_interval: Seconds between status log messages.
    """
    stats_log_interval: float = 60.0


@dataclass
class PipelineStats:
    """Runtime statistics for the pipeline."""
    frame_count: int = 0
    alert_count: int = 0
    alert_frames: int = 0
    start_time: float = field(default_factory=time.time)
    last_stats_log_time: float = field(default_factory=time.time)

    @property
    def fps(self) -> float:
        elapsed = time.time() - self.start_time
        return self.frame_count / elapsed if elapsed > 0 else 0.0


class PipelineEngine:
    """
    Main processing engine using ObservationSource for frame input.

    This engine:
    - Reads frames from any ObservationSource
    - Runs fire/smoke detection and the alert state machine (FrameProcessor)
    - Passes each frame and its FrameResult to the registered presenters
    - Stops at end of stream, on stop(), or when a presenter asks to quit

    Example:
        source = OpenCVSource(OpenCVSourceConfig(device_id=0))
        engine = PipelineEngine(source, FrameProcessor(config), PipelineConfig())
        engine.add_presenter(DisplayPresenter())
        engine.run()
    """

    def __init__(
        self,
        source: ObservationSource,
        processor: FrameProcessor,
        config: Optional[PipelineConfig] = None,
        presenters: Optional[Iterable[Presenter]] = None,
    ):
        self.source = source
        self.processor = processor
        self.config = config or PipelineConfig()
        self.stats = PipelineStats()
        self._running = False
        self._presenters: List[Presenter] = list(presenters or [])
        self.last_result: Optional[FrameResult] = None

    @property
    def is_running(self) -> bool:
        return self._running

    def add_presenter(self, presenter: Presenter) -> None:
        """Register a presenter called after each processed frame."""
        self._presenters.append(presenter)

    def run(self) -> None:
        """
        Run the main processing loop.

        Opens the observation source, processes frames until stopped or
        exhausted, then closes resources.

        Raises:
            DeviceUnavailable: If the source cannot be opened; the loop
                does not start.
        """
        self.stats = PipelineStats()
        self.source.open()
        self._running = True
        logging.info(f"Pipeline started: source={self.source.source_id}")

        try:
            while self._running:
                frame_data = self.source.read()

                if frame_data is None or frame_data.is_empty:
                    logging.info("End of video stream")
                    break

                result = self.process_frame(frame_data)

                if not self._present(frame_data, result):
                    logging.info("Stop requested by presenter")
                    break

                self._handle_periodic_tasks()

        except KeyboardInterrupt:
            logging.info("Pipeline interrupted by user")
        except Exception:
            logging.exception("Pipeline error")
            raise
        finally:
            self._cleanup()

    def stop(self) -> None:
        """Signal the pipeline to stop after the current frame."""
        self._running = False

    def process_frame(self, frame_data: FrameData) -> FrameResult:
        """Process a single frame and update statistics."""
        result = self.processor.process(frame_data)
        self.stats.frame_count += 1
        if result.active:
            self.stats.alert_frames += 1
        if result.alert_raised:
            self.stats.alert_count += 1
        self.last_result = result

        if self.stats.frame_count % 30 == 0:
            logging.debug(
                f"[DETECT] frame={result.frame_index} fire_area={result.fire_area} "
                f"growth={result.significant_growth} smoke_regions={len(result.smoke_regions)} "
                f"streaks=({result.alert.fire_streak},{result.alert.smoke_streak})"
            )
        return result

    def _present(self, frame_data: FrameData, result: FrameResult) -> bool:
        keep_running = True
        for presenter in self._presenters:
            try:
                if presenter.present(frame_data, result) is False:
                    keep_running = False
            except Exception as e:
                logging.warning(f"Presenter error ({type(presenter).__name__}): {e}")
        return keep_running

    def _handle_periodic_tasks(self) -> None:
        now = time.time()
        if now - self.stats.last_stats_log_time >= self.config.stats_log_interval:
            logging.info(
                f"Pipeline stats: frames={self.stats.frame_count}, "
                f"fps={self.stats.fps:.1f}, alerts={self.stats.alert_count}, "
                f"alert_frames={self.stats.alert_frames}"
            )
            self.stats.last_stats_log_time = now

    def _cleanup(self) -> None:
        """Clean up resources."""
        self._running = False

        try:
            self.source.close()
        except Exception as e:
            logging.warning(f"Error closing source: {e}")

        for presenter in self._presenters:
            try:
                presenter.close()
            except Exception as e:
                logging.warning(f"Error closing presenter {type(presenter).__name__}: {e}")

        self.processor.close()
        logging.info(
            f"Pipeline stopped: frames={self.stats.frame_count}, alerts={self.stats.alert_count}"
        )


def create_engine_from_config(
    config: Config,
    presenters: Optional[Iterable[Presenter]] = None,
    source: Optional[ObservationSource] = None,
) -> PipelineEngine:
    """
    Factory function to create a PipelineEngine from the typed config.

    Args:
        config: Full application config.
        presenters: Presenters receiving every processed frame.
        source: Frame source; defaults to an OpenCVSource for config.camera.
    """
    if source is None:
        source = create_source_from_config(config.camera, source_id="main-camera")

    pipeline_config = PipelineConfig(stats_log_interval=config.pipeline.stats_log_interval)
    return PipelineEngine(source, FrameProcessor(config), pipeline_config, presenters)
