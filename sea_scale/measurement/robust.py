"""Robust central estimate shared by the continuous and manual aggregators."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..config.constants import ComputationalConstants, PhysicalConstants
from ..utils.statistics import median, trim_sorted

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CentralEstimate:
    """Statistics over the trimmed set and the selected fixed value."""

    trimmed: np.ndarray
    median: float
    trimmed_mean: float
    fixed_value: float
    used_median_fallback: bool

    @property
    def n_trim(self) -> int:
        return int(self.trimmed.size)


def is_plausible_reading(value: float) -> bool:
    """Strictly inside (0, 100000) grams and not NaN."""
    return (
        not np.isnan(value)
        and PhysicalConstants.MIN_PLAUSIBLE_READING_G < value < PhysicalConstants.MAX_PLAUSIBLE_READING_G
    )


def central_estimate(
    values: Sequence[float],
    trim_fraction: float = ComputationalConstants.DEFAULT_TRIM_FRACTION,
) -> CentralEstimate:
    """
    Trimmed mean when at least 3 values survive the trim, else the median.

    The trimmed mean is replaced by the median when the two disagree by more
    than 10% of the median (outlier cluster still inside the trim window).
    """
    trimmed = trim_sorted(values, trim_fraction)
    if trimmed.size == 0:
        return CentralEstimate(trimmed, 0.0, 0.0, 0.0, False)

    trimmed_mean_value = float(np.mean(trimmed))
    median_value = median(trimmed)
    fixed_value = trimmed_mean_value if trimmed.size >= ComputationalConstants.MIN_SAMPLES_FOR_TRIMMED_MEAN else median_value

    fallback = False
    if (
        trimmed.size >= ComputationalConstants.MIN_SAMPLES_FOR_TRIMMED_MEAN
        and abs(trimmed_mean_value - median_value) > abs(median_value) * ComputationalConstants.MEDIAN_FALLBACK_REL_DIFF
    ):
        logger.info(
            "Trimmed mean %.3f deviates from median %.3f by more than %.0f%%, using median",
            trimmed_mean_value, median_value, ComputationalConstants.MEDIAN_FALLBACK_REL_DIFF * 100,
        )
        fixed_value = median_value
        fallback = True

    return CentralEstimate(
        trimmed=trimmed,
        median=median_value,
        trimmed_mean=trimmed_mean_value,
        fixed_value=fixed_value,
        used_median_fallback=fallback,
    )
