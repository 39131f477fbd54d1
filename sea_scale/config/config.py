# sea_scale/config/config.py
"""
Configuration for the motion-aware weighing engine.

A single immutable snapshot carries every threshold and filter coefficient.
Components receive it in their constructor; a partial update produces a new
snapshot instead of mutating the shared one.

Example:
    >>> from sea_scale.config import ScaleConfig
    >>>
    >>> cfg = ScaleConfig()
    >>> cfg.t_az_rms
    0.35
    >>>
    >>> # Stricter live gate, everything else unchanged
    >>> strict = cfg.updated(t_az_rms=0.2, t_roll_rms=1.5)
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import List

from .constants import PhysicalConstants, ValidationMessages


@dataclass(frozen=True)
class ScaleConfig:
    """
    Thresholds and coefficients shared by estimator, sessions and aggregators.
    """

    # RMS stability thresholds for the live "ready to measure" gate
    t_az_rms: float = 0.35      # m/s^2
    t_roll_rms: float = 2.5     # degrees
    t_pitch_rms: float = 2.5    # degrees

    # Per-sample gate applied to session samples ("good" flag).
    # Independent from the RMS thresholds above.
    t_az_instant: float = 0.8   # m/s^2
    t_roll_instant: float = 6.0  # degrees
    t_pitch_instant: float = 6.0  # degrees

    # Exponential gravity filter: g_est <- alpha * g_est + (1 - alpha) * a
    gravity_filter_alpha: float = 0.92

    sample_mass_default: float = 150.0  # grams
    scale_sample_rate: float = 5.0      # Hz, scale polling cadence
    live_window_duration: float = 5.0   # seconds, live RMS window

    # Worst-case excursion factor for the motion error term
    uncertainty_k: float = 2.0
    g_standard: float = PhysicalConstants.G_STANDARD  # m/s^2

    @property
    def live_window_ms(self) -> float:
        return self.live_window_duration * 1000.0

    @property
    def scale_sample_interval_ms(self) -> float:
        return 1000.0 / self.scale_sample_rate if self.scale_sample_rate > 0 else 0.0

    def updated(self, **overrides: float) -> "ScaleConfig":
        """Return a copy with the given options replaced."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(ValidationMessages.UNKNOWN_CONFIG_OPTION.format(names=", ".join(unknown)))
        return replace(self, **overrides)

    def validate(self) -> List[str]:
        """Advisory warnings; out-of-range values degrade results but never fail."""
        warnings: List[str] = []
        lo = PhysicalConstants.MIN_GRAVITY_FILTER_ALPHA
        hi = PhysicalConstants.MAX_GRAVITY_FILTER_ALPHA
        if not lo <= self.gravity_filter_alpha <= hi:
            warnings.append(
                f"gravity_filter_alpha={self.gravity_filter_alpha} outside recommended range [{lo}, {hi}]"
            )
        for name in (
            "t_az_rms", "t_roll_rms", "t_pitch_rms",
            "t_az_instant", "t_roll_instant", "t_pitch_instant",
        ):
            if getattr(self, name) <= 0:
                warnings.append(f"{name} must be > 0 (got {getattr(self, name)})")
        if self.scale_sample_rate <= 0:
            warnings.append(f"scale_sample_rate must be > 0 (got {self.scale_sample_rate})")
        if self.live_window_duration <= 0:
            warnings.append(f"live_window_duration must be > 0 (got {self.live_window_duration})")
        if self.g_standard <= 0:
            warnings.append(f"g_standard must be > 0 (got {self.g_standard})")
        return warnings


DEFAULT_CONFIG = ScaleConfig()
