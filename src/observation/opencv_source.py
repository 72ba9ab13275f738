"""
OpenCV-based observation source.

Supports:
- USB webcams (device_id as int, e.g., 0)
- RTSP/HTTP cameras (device_id as str URL)
- Video files (device_id as file path)

When an integer camera index cannot be opened, the following indices are
scanned up to max_device_index before giving up.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import cv2

from models.config import CameraConfig
from models.frame import FrameData
from .base import DeviceUnavailable, ObservationSource, ObservationConfig
from .rtsp_utils import is_stream_url, sanitize_url


@dataclass
class OpenCVSourceConfig(ObservationConfig):
    """
    Configuration for OpenCV-based observation sources.

    Attributes:
        device_id: Camera index (int), stream URL (str), or file path (str).
        max_device_index: Upper bound (exclusive) for camera index scanning.
        max_retries: Open attempts per device before moving on.
        retry_delay: Base delay in seconds for exponential backoff between attempts.
        buffer_size: OpenCV capture buffer size (reduces latency for live feeds).
        max_read_failures: Reconnect attempts on live sources before reporting end of stream.
    """
    device_id: Union[int, str] = 0
    max_device_index: int = 10
    max_retries: int = 3
    retry_delay: float = 1.0
    buffer_size: int = 1
    max_read_failures: int = 3

    @classmethod
    def from_camera_config(cls, camera_cfg: CameraConfig, source_id: str = "camera") -> "OpenCVSourceConfig":
        """
        Adapter: Create OpenCVSourceConfig from the typed camera config.

        Args:
            camera_cfg: Camera section of the application config.
            source_id: Identifier for this source.
        """
        return cls(
            source_id=source_id,
            resolution=camera_cfg.resolution,
            fps=camera_cfg.fps,
            device_id=camera_cfg.device_id,
            max_device_index=camera_cfg.max_device_index,
            max_retries=camera_cfg.max_retries,
        )


class OpenCVSource(ObservationSource):
    """
    OpenCV-based observation source for cameras and video files.

    Wraps cv2.VideoCapture to provide frames as FrameData objects.

    Example:
        config = OpenCVSourceConfig(device_id=0)
        with OpenCVSource(config) as source:
            for frame_data in source:
                process(frame_data.frame)
    """

    def __init__(self, config: OpenCVSourceConfig):
        super().__init__(config)
        self._opencv_config = config
        self._cap: Optional[cv2.VideoCapture] = None
        self._active_device: Union[int, str] = config.device_id
        self._consecutive_failures = 0

    @property
    def device_id(self) -> Union[int, str]:
        """Device actually in use (may differ from the configured index after scanning)."""
        return self._active_device

    @property
    def is_stream(self) -> bool:
        return is_stream_url(self.device_id)

    @property
    def is_file(self) -> bool:
        """Check if this is a video file."""
        return (
            isinstance(self.device_id, str) and
            not self.is_stream and
            os.path.exists(self.device_id)
        )

    def open(self) -> None:
        """
        Open the video source.

        Raises:
            DeviceUnavailable: If neither the configured device nor any
                scanned fallback index can be opened.
        """
        if self._is_open:
            return

        for candidate in self._candidate_devices():
            cap = self._try_open(candidate)
            if cap is not None:
                self._cap = cap
                self._active_device = candidate
                break
        else:
            raise DeviceUnavailable(
                f"Could not open video source {sanitize_url(self._opencv_config.device_id)}"
            )

        self._configure_capture()
        self._is_open = True
        self._frame_index = 0
        self._consecutive_failures = 0

        if self._active_device != self._opencv_config.device_id:
            logging.warning(
                f"Device {self._opencv_config.device_id} unavailable, using camera index {self._active_device}"
            )
        info = self.get_video_info()
        logging.info(
            f"OpenCVSource opened: source_id={self.source_id}, device={sanitize_url(self.device_id)}, "
            f"size={info.get('width')}x{info.get('height')}, fps={info.get('fps')}"
        )

    def _candidate_devices(self):
        device_id = self._opencv_config.device_id
        yield device_id
        if isinstance(device_id, int):
            for index in range(device_id + 1, self._opencv_config.max_device_index):
                yield index

    def _try_open(self, device: Union[int, str]) -> Optional[cv2.VideoCapture]:
        """Open one device with exponential backoff; None if every attempt fails."""
        attempts = max(1, self._opencv_config.max_retries)
        for attempt in range(attempts):
            if attempt > 0:
                wait_time = min(self._opencv_config.retry_delay * 2 ** (attempt - 1), 10)
                logging.info(
                    f"Retrying {sanitize_url(device)} (attempt {attempt + 1}/{attempts}) after {wait_time}s"
                )
                time.sleep(wait_time)

            cap = cv2.VideoCapture(device)
            if cap.isOpened():
                return cap
            cap.release()

        logging.debug(f"Failed to open device {sanitize_url(device)} after {attempts} attempts")
        return None

    def _configure_capture(self) -> None:
        """Apply resolution/fps for USB cameras (not streams/files)."""
        if not isinstance(self.device_id, int) or not self._opencv_config.resolution:
            return

        w, h = self._opencv_config.resolution
        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, w)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, h)
        if self._opencv_config.fps:
            self._cap.set(cv2.CAP_PROP_FPS, self._opencv_config.fps)
        self._cap.set(cv2.CAP_PROP_BUFFERSIZE, self._opencv_config.buffer_size)

        actual_w = self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)
        actual_h = self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)
        actual_fps = self._cap.get(cv2.CAP_PROP_FPS)
        logging.info(
            f"Camera actual settings - Resolution: ({actual_w}x{actual_h}), FPS: {actual_fps}"
        )

    def read(self) -> Optional[FrameData]:
        """Read the next frame; None signals end of stream."""
        if not self._is_open or self._cap is None:
            return None

        ret, frame = self._cap.read()

        while not ret or frame is None or frame.size == 0:
            self._consecutive_failures += 1

            # For files, end of video is expected
            if self.is_file:
                logging.info("End of video file reached")
                return None

            if self._consecutive_failures > self._opencv_config.max_read_failures:
                logging.error("Too many consecutive read failures")
                return None

            logging.warning(
                f"Failed to read frame (failures: {self._consecutive_failures}), reconnecting..."
            )
            self._cap.release()
            self._cap = self._try_open(self.device_id)
            if self._cap is None:
                logging.error("Reconnect failed")
                return None
            self._configure_capture()
            ret, frame = self._cap.read()

        self._consecutive_failures = 0
        self._frame_index += 1

        return FrameData.from_numpy(
            frame,
            timestamp=time.time(),
            frame_index=self._frame_index,
            source=self.source_id,
        )

    def close(self) -> None:
        """Close the video source and release resources."""
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        self._is_open = False
        logging.info(f"OpenCVSource closed: source_id={self.source_id}")

    def get_video_info(self) -> Dict[str, Any]:
        """Size and fps reported by the open capture; empty when closed."""
        if self._cap is None or not self._cap.isOpened():
            return {}

        return {
            "width": int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            "height": int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
            "fps": self._cap.get(cv2.CAP_PROP_FPS),
            "frame_count": int(self._cap.get(cv2.CAP_PROP_FRAME_COUNT)) if self.is_file else None,
        }


def create_source_from_config(camera_cfg: CameraConfig, source_id: str = "main-camera") -> OpenCVSource:
    """Build an OpenCVSource from the camera section of the config."""
    return OpenCVSource(OpenCVSourceConfig.from_camera_config(camera_cfg, source_id=source_id))
