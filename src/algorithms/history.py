"""
Bounded recency buffer of fire masks.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Optional

import numpy as np


class HistoryWindow:
    """
    FIFO window holding the last `capacity` masks.

    Pushing onto a full window evicts the oldest mask, so the length never
    exceeds capacity.
    """

    def __init__(self, capacity: int = 10) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._masks: Deque[np.ndarray] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._masks.maxlen  # type: ignore[return-value]

    def push(self, mask: np.ndarray) -> None:
        self._masks.append(mask)

    def oldest(self) -> Optional[np.ndarray]:
        return self._masks[0] if self._masks else None

    def newest(self) -> Optional[np.ndarray]:
        return self._masks[-1] if self._masks else None

    def clear(self) -> None:
        self._masks.clear()

    def __len__(self) -> int:
        return len(self._masks)

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self._masks)
