# sea_scale/config/constants.py
"""Physical and computational constants for motion-aware weighing."""

from __future__ import annotations


class PhysicalConstants:
    """Physical constants for scale and inertial calculations."""

    # Standard gravity (m/s^2)
    G_STANDARD: float = 9.80665

    # Physically plausible scale reading range, exclusive on both ends (g)
    MIN_PLAUSIBLE_READING_G: float = 0.0
    MAX_PLAUSIBLE_READING_G: float = 100000.0

    # Recommended range for the gravity low-pass coefficient
    MIN_GRAVITY_FILTER_ALPHA: float = 0.90
    MAX_GRAVITY_FILTER_ALPHA: float = 0.98


class ComputationalConstants:
    """Computational constants and defaults."""

    # Fraction dropped from each end before averaging
    DEFAULT_TRIM_FRACTION: float = 0.10

    # Trimmed mean falls back to the median beyond this relative disagreement
    MEDIAN_FALLBACK_REL_DIFF: float = 0.10

    # Minimum number of values for trimmed-mean estimation and good-sample use
    MIN_SAMPLES_FOR_TRIMMED_MEAN: int = 3
    MIN_GOOD_SAMPLES: int = 3

    # Fixed 95% multiplier used by the continuous mode and k(n) fallback
    FIXED_K95: float = 2.0

    # Number of inter-sample intervals averaged for the sampling-rate estimate
    SAMPLE_INTERVAL_HISTORY: int = 100

    # Sample-rate ceiling used to size the live RMS windows (Hz)
    ASSUMED_MAX_SAMPLE_RATE_HZ: float = 200.0

    # Continuous-mode confidence shaping
    FULL_QUALITY_PERCENT_GOOD: float = 80.0
    CV_PENALTY: float = 10.0
    FULL_SAMPLE_COUNT: int = 20
    QUALITY_WEIGHT: float = 0.4
    CONSISTENCY_WEIGHT: float = 0.4
    SAMPLE_COUNT_WEIGHT: float = 0.2

    # Reliability verdict
    MIN_RELIABLE_CONFIDENCE: float = 0.3
    MAX_RELIABLE_REL_BAND: float = 0.10
    MAX_RELIABLE_AZ_RMS_FACTOR: float = 2.0


class ValidationMessages:
    """Standard validation and error messages."""

    INVALID_TARE_READING = "Invalid tare reading: must be a non-negative number"
    INVALID_SCALE_READING = "Invalid scale reading: must be a positive number"
    SESSION_NOT_ACTIVE = "Session {kind} not active. Call start_session() first."
    UNKNOWN_CONFIG_OPTION = "Unknown configuration option(s): {names}"
