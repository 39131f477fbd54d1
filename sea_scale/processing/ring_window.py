"""Fixed-capacity time-indexed ring buffer of scalar samples."""
from __future__ import annotations

import math
from typing import List, Tuple

import numpy as np

from ..utils.statistics import rms


class RingWindow:
    """Circular buffer of (value, timestamp) pairs.

    Once full, ``push`` overwrites the oldest entry. Time windows are measured
    back from the newest stored timestamp, not from wall-clock time, so a
    buffer that stops receiving data keeps reporting the same RMS.
    """

    def __init__(self, capacity: int):
        """
        Initialize ring buffer.

        Args:
            capacity: Maximum number of stored samples (>= 1)
        """
        self.capacity = max(1, int(capacity))
        self._values = np.zeros(self.capacity, dtype=float)
        self._timestamps = np.zeros(self.capacity, dtype=float)
        self._write_index = 0
        self._count = 0

    @classmethod
    def for_duration(cls, window_seconds: float, max_rate_hz: float) -> "RingWindow":
        """Size a buffer to hold ``window_seconds`` at up to ``max_rate_hz``."""
        return cls(math.ceil(max_rate_hz * window_seconds))

    def resized(self, capacity: int) -> "RingWindow":
        """Copy into a buffer of ``capacity``, keeping the newest samples."""
        window = RingWindow(capacity)
        for value, timestamp in self.samples()[-window.capacity:]:
            window.push(value, timestamp)
        return window

    def push(self, value: float, timestamp: float) -> None:
        """Add a sample (overwrites the oldest when full)."""
        self._values[self._write_index] = value
        self._timestamps[self._write_index] = timestamp
        self._write_index = (self._write_index + 1) % self.capacity
        if self._count < self.capacity:
            self._count += 1

    def _order(self) -> np.ndarray:
        if self._count < self.capacity:
            return np.arange(self._count)
        return (np.arange(self.capacity) + self._write_index) % self.capacity

    def samples(self) -> List[Tuple[float, float]]:
        """All stored (value, timestamp) pairs in chronological order."""
        idx = self._order()
        return list(zip(self._values[idx].tolist(), self._timestamps[idx].tolist()))

    def values(self) -> List[float]:
        return self._values[self._order()].tolist()

    def latest(self) -> float:
        """Most recent value, 0.0 when empty."""
        if self._count == 0:
            return 0.0
        return float(self._values[(self._write_index - 1) % self.capacity])

    def values_in_window(self, duration_ms: float) -> List[float]:
        """Values with timestamp >= newest timestamp - ``duration_ms``."""
        if self._count == 0:
            return []
        idx = self._order()
        timestamps = self._timestamps[idx]
        cutoff = timestamps[-1] - duration_ms
        return self._values[idx][timestamps >= cutoff].tolist()

    def rms_in_window(self, duration_ms: float) -> float:
        """RMS over the trailing window; 0.0 when empty."""
        return rms(self.values_in_window(duration_ms))

    def rms_all(self) -> float:
        return rms(self.values())

    def clear(self) -> None:
        self._write_index = 0
        self._count = 0

    def __len__(self) -> int:
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count == self.capacity
