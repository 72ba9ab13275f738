"""
Frame source contract for the detection pipeline.

A source hands out BGR frames as FrameData, one at a time, in capture
order. The pipeline only knows this interface; cameras, streams and video
files are all OpenCVSource underneath.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from models.frame import FrameData


class DeviceUnavailable(RuntimeError):
    """The frame source could not be opened."""


@dataclass
class ObservationConfig:
    """
    Settings common to every frame source.

    Attributes:
        source_id: Name used in logs and on FrameData.source.
        resolution: Requested (width, height); None keeps the device default.
        fps: Requested frame rate; None keeps the device default.
        metadata: Free-form per-source extras.
    """
    source_id: str = "default"
    resolution: Optional[tuple[int, int]] = None
    fps: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class ObservationSource(ABC):
    """
    Base class for frame sources.

    read() returning None, or a frame with no pixels, ends the stream. The
    engine never retries a read, so reconnecting is up to the source.

        with OpenCVSource(config) as source:
            for frame_data in source:
                processor.process(frame_data)
    """

    def __init__(self, config: ObservationConfig):
        self._config = config
        self._is_open = False
        self._frame_index = 0

    @property
    def source_id(self) -> str:
        return self._config.source_id

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def frame_index(self) -> int:
        """Frames delivered since the last open()."""
        return self._frame_index

    @abstractmethod
    def open(self) -> None:
        """
        Acquire the device.

        Raises:
            DeviceUnavailable: No usable device was found.
        """

    @abstractmethod
    def read(self) -> Optional[FrameData]:
        """Next frame, or None once the stream has ended."""

    @abstractmethod
    def close(self) -> None:
        """Release the device. Calling it twice is harmless."""

    def __enter__(self) -> "ObservationSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[FrameData]:
        """Yield frames until read() returns None or an empty frame."""
        if not self._is_open:
            raise RuntimeError("Source must be open before iterating")

        while True:
            frame_data = self.read()
            if frame_data is None or frame_data.is_empty:
                break
            yield frame_data
