# sea_scale/utils/statistics.py
"""
Robust summary statistics over plain sequences of floats.

Every function returns 0.0 for an empty input instead of NaN or raising, so
aggregators can always build a structurally valid result.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np


def _as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=float)


def mean(values: Sequence[float]) -> float:
    arr = _as_array(values)
    if arr.size == 0:
        return 0.0
    return float(np.mean(arr))


def median(values: Sequence[float]) -> float:
    arr = _as_array(values)
    if arr.size == 0:
        return 0.0
    return float(np.median(arr))


def rms(values: Sequence[float]) -> float:
    """Root mean square."""
    arr = _as_array(values)
    if arr.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(arr * arr)))


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation (divides by n)."""
    arr = _as_array(values)
    if arr.size == 0:
        return 0.0
    return float(np.std(arr))


def sample_std_dev(values: Sequence[float]) -> float:
    """Sample standard deviation (divides by n - 1); 0.0 below two values."""
    arr = _as_array(values)
    if arr.size < 2:
        return 0.0
    return float(np.std(arr, ddof=1))


def trim_sorted(values: Sequence[float], trim_fraction: float = 0.10) -> np.ndarray:
    """
    Sort and drop ``floor(trim_fraction * n)`` values from each end.

    With fewer than 3 values nothing is dropped.
    """
    arr = np.sort(_as_array(values))
    if arr.size <= 2:
        return arr
    drop = int(np.floor(arr.size * trim_fraction))
    return arr[drop:arr.size - drop]


def trimmed_mean(values: Sequence[float], trim_fraction: float = 0.10) -> float:
    """
    Mean after trimming both tails.

    Falls back to the plain mean for one or two values, and to the median
    if trimming would leave nothing.
    """
    arr = _as_array(values)
    if arr.size == 0:
        return 0.0
    if arr.size <= 2:
        return float(np.mean(arr))
    kept = trim_sorted(arr, trim_fraction)
    if kept.size == 0:
        return median(arr)
    return float(np.mean(kept))
