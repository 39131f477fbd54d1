"""Session result (base or final) from manual measurements.

The uncertainty combines the standard error of the trimmed readings with the
tare uncertainty locked at session start; the 95% band uses the interpolated
Student-t factor k(n) since manual sessions are small-n.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from ..config.constants import ComputationalConstants
from ..domain.measurements import ManualMeasurement, SessionKind, SessionResult
from ..utils.kfactor import k_from_n
from ..utils.statistics import mean, sample_std_dev
from .robust import central_estimate, is_plausible_reading

logger = logging.getLogger(__name__)


def confidence_from_count(n_trim: int) -> float:
    """Step function of the trimmed count."""
    if n_trim >= 10:
        return 0.95
    if n_trim >= 6:
        return 0.85
    if n_trim >= 3:
        return 0.7
    if n_trim == 2:
        return 0.5
    return 0.3


class SessionCalculator:
    """Aggregates the measurements of one manual session."""

    def __init__(self, trim_fraction: float = ComputationalConstants.DEFAULT_TRIM_FRACTION):
        self.trim_fraction = trim_fraction

    def compute(
        self,
        measurements: Sequence[ManualMeasurement],
        kind: Optional[SessionKind] = None,
    ) -> SessionResult:
        if kind is None:
            kind = measurements[0].kind if measurements else SessionKind.BASE
        if not measurements:
            return self._empty(kind)

        values = [m.corrected_value for m in measurements if is_plausible_reading(m.corrected_value)]
        if not values:
            return self._empty(kind)

        estimate = central_estimate(values, self.trim_fraction)
        n_total = len(values)
        n_trim = estimate.n_trim
        if n_trim == 0:
            return self._empty(kind)

        std_dev = sample_std_dev(estimate.trimmed) if n_trim >= 2 else 0.0
        std_error = std_dev / math.sqrt(n_trim) if n_trim >= 2 else 0.0

        tare_uncertainty95 = measurements[0].tare_uncertainty95
        tare_sigma = tare_uncertainty95 / 2.0
        total_1sigma = math.sqrt(std_error * std_error + tare_sigma * tare_sigma)

        k95 = k_from_n(n_trim)
        error_band95 = k95 * total_1sigma
        fixed_value = estimate.fixed_value
        relative_error95 = (error_band95 / abs(fixed_value)) * 100.0 if fixed_value != 0 else 0.0

        confidence = confidence_from_count(n_trim)
        quality_scores = [
            m.quality.quality_score
            for m in measurements
            if m.quality is not None and m.quality.quality_score is not None
        ]
        if quality_scores:
            confidence *= 0.5 + 0.5 * mean(quality_scores)

        notes: List[str] = []
        if n_total == 1:
            notes.append("Single measurement - no statistical variation")
        if n_trim < 3:
            notes.append(f"Low sample count ({n_trim}) - using median instead of trimmed mean")
        if estimate.used_median_fallback:
            notes.append("Trimmed mean disagreed with median - using median")
        if tare_uncertainty95 == 0:
            notes.append("No tare uncertainty specified")
        if n_trim == 1:
            notes.append("Warning: n=1, k-factor fallback used")

        logger.info(
            "%s session: %.3f g +/- %.3f (n_trim=%s, k95=%.3f)",
            kind.value, fixed_value, error_band95, n_trim, k95,
        )
        return SessionResult(
            kind=kind,
            measurements=list(measurements),
            n_total=n_total,
            n_trim=n_trim,
            trim_fraction=self.trim_fraction,
            bias=measurements[0].bias,
            tare_uncertainty95=tare_uncertainty95,
            tare_sigma=tare_sigma,
            mean=estimate.trimmed_mean,
            median=estimate.median,
            trimmed_mean=estimate.trimmed_mean,
            fixed_value=fixed_value,
            std_dev=std_dev,
            std_error=std_error,
            total_uncertainty_1sigma=total_1sigma,
            error_band95=error_band95,
            relative_error95=relative_error95,
            confidence=confidence,
            k95=k95,
            notes=notes,
        )

    def _empty(self, kind: SessionKind) -> SessionResult:
        return SessionResult(
            kind=kind,
            trim_fraction=self.trim_fraction,
            k95=ComputationalConstants.FIXED_K95,
            notes=["No measurements available"],
        )
