"""
Presenters receive every processed frame together with its FrameResult.

A presenter returns False from present() to ask the engine to stop after
the current frame.
"""

from __future__ import annotations

import logging
import os
import time
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Tuple

import cv2

from models.frame import FrameData
from models.result import FrameResult
from .overlay import render_overlay


class Presenter(ABC):
    """Consumer of processed frames (display, recording, status publishing)."""

    @abstractmethod
    def present(self, frame_data: FrameData, result: FrameResult) -> bool:
        pass

    def close(self) -> None:
        pass


class DisplayPresenter(Presenter):
    """Show annotated frames in a cv2 window; the quit key stops the pipeline."""

    def __init__(self, window_name: str = "Fire and Smoke Detection", quit_key: str = "q", wait_ms: int = 1):
        self.window_name = window_name
        self.quit_key = quit_key
        self.wait_ms = wait_ms

    def present(self, frame_data: FrameData, result: FrameResult) -> bool:
        cv2.imshow(self.window_name, render_overlay(frame_data.frame, result))
        key = cv2.waitKey(self.wait_ms) & 0xFF
        return key != ord(self.quit_key)

    def close(self) -> None:
        cv2.destroyAllWindows()


class RecordingPresenter(Presenter):
    """
    Write annotated frames to XVID .avi files under output_dir.

    A writer only accepts frames of the size it was opened with, so a
    resolution change closes the current file and starts a new one.
    """

    def __init__(self, output_dir: str = "output/video", fps: float = 30.0):
        self.output_dir = output_dir
        self.fps = fps
        self.output_path: Optional[str] = None
        self._writer: Optional[cv2.VideoWriter] = None
        self._size: Optional[Tuple[int, int]] = None

    def _open_writer(self, width: int, height: int) -> None:
        os.makedirs(self.output_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.output_path = os.path.join(self.output_dir, f"fire_{timestamp}_{width}x{height}.avi")
        fourcc = cv2.VideoWriter_fourcc(*'XVID')
        self._writer = cv2.VideoWriter(self.output_path, fourcc, self.fps, (width, height), True)
        self._size = (width, height)
        logging.info(f"Video recording started: {self.output_path}")

    def present(self, frame_data: FrameData, result: FrameResult) -> bool:
        if self._writer is not None and self._size != frame_data.size:
            logging.info(f"Frame size changed to {frame_data.width}x{frame_data.height}, starting new recording")
            self.close()
        if self._writer is None:
            self._open_writer(frame_data.width, frame_data.height)
        self._writer.write(render_overlay(frame_data.frame, result))
        return True

    def close(self) -> None:
        if self._writer is not None:
            self._writer.release()
            self._writer = None
            self._size = None
            logging.info(f"Video saved: {self.output_path}")


class WebStatePresenter(Presenter):
    """Publish the annotated frame and detection status to the web shared state."""

    def __init__(self, state):
        self._state = state
        self._start = time.time()
        self._frames = 0

    def present(self, frame_data: FrameData, result: FrameResult) -> bool:
        self._frames += 1
        elapsed = time.time() - self._start
        self._state.set_frame(render_overlay(frame_data.frame, result))
        self._state.update_detection(result.summary())
        self._state.update_system_stats({"fps": self._frames / elapsed if elapsed > 0 else 0.0})
        return True
