"""Fixed measurement from a continuous session.

Pipeline:
  1. keep plausible scale readings, subtract bias
  2. optional motion correction  s * g / (g + a_z), non-positive results dropped
  3. prefer instantaneous-gated ("good") samples when at least 3 exist
  4. trimmed mean / median selection
  5. motion and scale-noise uncertainty, 95% band = 2 * sigma_total
  6. blended confidence score and reliability verdict

The fixed 2.0 multiplier differs from the manual mode, which uses k(n).
"""
from __future__ import annotations

import logging
import math
from typing import List, Tuple

from ..config import ScaleConfig, DEFAULT_CONFIG
from ..config.constants import ComputationalConstants as C
from ..domain.measurements import MeasurementDiagnostics, MeasurementResult
from ..domain.samples import SessionData
from ..utils.statistics import sample_std_dev
from .robust import central_estimate, is_plausible_reading

logger = logging.getLogger(__name__)


def motion_corrected(reading: float, a_z: float, g: float) -> float:
    """Single-pole correction for vertical acceleration; uncorrected when g + a_z == 0."""
    denominator = g + a_z
    if denominator == 0:
        return reading
    return reading * g / denominator


class ResultAggregator:
    """Turns a stopped continuous session into a MeasurementResult."""

    def __init__(self, config: ScaleConfig = DEFAULT_CONFIG,
                 trim_fraction: float = C.DEFAULT_TRIM_FRACTION):
        self.config = config
        self.trim_fraction = trim_fraction

    def update_config(self, **overrides: float) -> None:
        self.config = self.config.updated(**overrides)

    def _corrected_readings(
        self, session: SessionData, bias: float, motion_correction: bool
    ) -> List[Tuple[float, bool]]:
        g = self.config.g_standard
        pairs: List[Tuple[float, bool]] = []
        for sample in session.samples:
            if not is_plausible_reading(sample.scale_reading):
                continue
            value = sample.scale_reading - bias
            if motion_correction:
                value = motion_corrected(value, sample.a_z, g)
                if value <= 0:
                    continue
            if math.isfinite(value):
                pairs.append((value, sample.is_good))
        return pairs

    def compute(
        self,
        session: SessionData,
        bias: float = 0.0,
        motion_correction: bool = True,
    ) -> MeasurementResult:
        if not session.samples:
            return MeasurementResult(notes=["No samples collected"])

        pairs = self._corrected_readings(session, bias, motion_correction)
        if not pairs:
            return MeasurementResult(notes=["No valid scale readings"])

        cfg = self.config
        notes: List[str] = []
        all_values = [v for v, _ in pairs]
        good_values = [v for v, good in pairs if good]
        n_total = len(all_values)
        n_good = len(good_values)

        if n_good >= C.MIN_GOOD_SAMPLES:
            used = good_values
        else:
            used = all_values
            notes.append(f"Only {n_good} good samples - using all {n_total} samples")
            logger.info("Falling back to all samples (%s good of %s)", n_good, n_total)

        estimate = central_estimate(used, self.trim_fraction)
        fixed = estimate.fixed_value
        if estimate.used_median_fallback:
            notes.append("Trimmed mean disagreed with median - using median")

        percent_good = (n_good / n_total) * 100.0
        sigma_scale = sample_std_dev(used)

        if len(used) >= C.MIN_SAMPLES_FOR_TRIMMED_MEAN:
            cv = sigma_scale / fixed if fixed > 0 else math.inf
            quality_score = min(1.0, percent_good / C.FULL_QUALITY_PERCENT_GOOD)
            consistency_score = min(1.0, max(0.0, 1.0 - cv * C.CV_PENALTY))
            count_score = min(1.0, len(used) / C.FULL_SAMPLE_COUNT)
            confidence = (
                quality_score * C.QUALITY_WEIGHT
                + consistency_score * C.CONSISTENCY_WEIGHT
                + count_score * C.SAMPLE_COUNT_WEIGHT
            )
            confidence = min(1.0, max(0.0, confidence))
        else:
            confidence = len(used) / 10.0
            notes.append(f"Insufficient samples ({len(used)}) - using median")

        # k * rms(a_z) is a worst-case excursion, scaled to a relative error
        rel_motion = (cfg.uncertainty_k * session.rms_az) / cfg.g_standard
        sigma_motion = fixed * rel_motion
        sigma_total = math.sqrt(sigma_motion * sigma_motion + sigma_scale * sigma_scale)
        error_band = C.FIXED_K95 * sigma_total
        relative_error = (error_band / fixed) * 100.0 if fixed > 0 else 0.0

        is_reliable = (
            confidence > C.MIN_RELIABLE_CONFIDENCE
            and n_good >= C.MIN_GOOD_SAMPLES
            and error_band < fixed * C.MAX_RELIABLE_REL_BAND
            and session.rms_az < cfg.t_az_rms * C.MAX_RELIABLE_AZ_RMS_FACTOR
        )
        if not is_reliable:
            notes.append("Result flagged unreliable")

        logger.info(
            "Continuous result: %.3f g +/- %.3f (confidence %.2f, reliable=%s)",
            fixed, error_band, confidence, is_reliable,
        )
        return MeasurementResult(
            fixed_measurement=fixed,
            confidence=confidence,
            error_band=error_band,
            relative_error=relative_error,
            is_reliable=is_reliable,
            n_trim=estimate.n_trim,
            diagnostics=MeasurementDiagnostics(
                n_total=n_total,
                n_good=n_good,
                percent_good=percent_good,
                session_rms_az=session.rms_az,
                session_rms_roll=session.rms_roll,
                session_rms_pitch=session.rms_pitch,
                sigma_motion=sigma_motion,
                sigma_scale=sigma_scale,
                sigma_total=sigma_total,
            ),
            notes=notes,
        )
