"""Gravity, vertical acceleration and tilt from raw accelerometer samples.

Gravity is tracked with a fixed-coefficient exponential low-pass filter on
the acceleration-including-gravity vector. Roll and pitch come from the unit
gravity vector only (no gyroscope or magnetometer input), which assumes a
static or slowly accelerating platform.
"""
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from ..config import ScaleConfig, DEFAULT_CONFIG
from ..config.constants import ComputationalConstants
from ..domain.samples import LiveMetrics, ProcessedSample, RawInertialSample
from ..domain.vectors import ZERO, Vector3, dot, normalize, rad_to_deg
from .ring_window import RingWindow

logger = logging.getLogger(__name__)


class ImuListener(ABC):
    """Receives every emission of an OrientationEstimator, in order."""

    @abstractmethod
    def on_processed(self, sample: ProcessedSample) -> None:
        """Called once per accepted sample."""
        raise NotImplementedError

    @abstractmethod
    def on_metrics(self, metrics: LiveMetrics) -> None:
        """Called right after ``on_processed`` with the refreshed metrics."""
        raise NotImplementedError


@dataclass(frozen=True)
class ImuUpdate:
    """Pair emitted for one processed raw sample."""

    processed: ProcessedSample
    metrics: LiveMetrics


def tilt_from_unit_gravity(g_unit: Vector3) -> tuple[float, float]:
    """Return (roll, pitch) in degrees."""
    pitch = math.atan2(-g_unit.x, math.hypot(g_unit.y, g_unit.z))
    roll = math.atan2(g_unit.y, g_unit.z)
    return rad_to_deg(roll), rad_to_deg(pitch)


def channel_confidence(rms_value: float, threshold: float) -> float:
    """Soft per-channel score: 1 at rest, 0 at twice the threshold."""
    if threshold <= 0:
        return 0.0
    return min(1.0, max(0.0, 1.0 - rms_value / (2.0 * threshold)))


class OrientationEstimator:
    """Turns raw inertial samples into processed samples and live metrics.

    Usage:
        estimator = OrientationEstimator(config)
        update = estimator.process(raw)
        if update is not None:
            session.add_sample(update.processed)
    """

    def __init__(self, config: ScaleConfig = DEFAULT_CONFIG,
                 max_rate_hz: float = ComputationalConstants.ASSUMED_MAX_SAMPLE_RATE_HZ):
        self.config = config
        self.max_rate_hz = max_rate_hz
        self.g_est: Vector3 = ZERO
        self.initialized = False

        self._az_window = RingWindow.for_duration(config.live_window_duration, max_rate_hz)
        self._roll_window = RingWindow.for_duration(config.live_window_duration, max_rate_hz)
        self._pitch_window = RingWindow.for_duration(config.live_window_duration, max_rate_hz)

        self._last_timestamp: Optional[float] = None
        self._intervals: Deque[float] = deque(maxlen=ComputationalConstants.SAMPLE_INTERVAL_HISTORY)
        self._listeners: List[ImuListener] = []

    def register_listener(self, listener: ImuListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unregister_listener(self, listener: ImuListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def process(self, raw: RawInertialSample) -> Optional[ImuUpdate]:
        """
        Consume one raw sample.

        Returns None when the sample carries no acceleration or only seeds the
        gravity estimate; otherwise the processed sample and live metrics,
        which are also forwarded to registered listeners.
        """
        accel = raw.acceleration
        if accel is None:
            return None

        timestamp = raw.timestamp
        if not self.initialized:
            self.g_est = accel
            self.initialized = True
            self._last_timestamp = timestamp
            logger.debug("Gravity estimate seeded at t=%.1f ms: %s", timestamp, accel)
            return None

        alpha = self.config.gravity_filter_alpha
        self.g_est = self.g_est.scaled(alpha) + accel.scaled(1.0 - alpha)

        a_lin = accel - self.g_est
        g_unit = normalize(self.g_est)
        a_z = dot(a_lin, g_unit)
        roll, pitch = tilt_from_unit_gravity(g_unit)

        self._az_window.push(a_z, timestamp)
        self._roll_window.push(roll, timestamp)
        self._pitch_window.push(pitch, timestamp)

        if self._last_timestamp is not None:
            self._intervals.append(timestamp - self._last_timestamp)
        self._last_timestamp = timestamp

        processed = ProcessedSample(
            a_z=a_z,
            roll=roll,
            pitch=pitch,
            g_est=self.g_est,
            g_unit=g_unit,
            a_lin=a_lin,
            timestamp=timestamp,
        )
        metrics = self._compute_metrics()

        for listener in list(self._listeners):
            listener.on_processed(processed)
            listener.on_metrics(metrics)
        return ImuUpdate(processed=processed, metrics=metrics)

    @property
    def sampling_rate(self) -> float:
        """Average rate over the recent intervals (Hz), 0 while undefined."""
        if not self._intervals:
            return 0.0
        avg_interval = sum(self._intervals) / len(self._intervals)
        return 1000.0 / avg_interval if avg_interval > 0 else 0.0

    def _compute_metrics(self) -> LiveMetrics:
        cfg = self.config
        window_ms = cfg.live_window_ms
        rms_az = self._az_window.rms_in_window(window_ms)
        rms_roll = self._roll_window.rms_in_window(window_ms)
        rms_pitch = self._pitch_window.rms_in_window(window_ms)

        is_stable = (
            rms_az < cfg.t_az_rms
            and rms_roll < cfg.t_roll_rms
            and rms_pitch < cfg.t_pitch_rms
        )
        confidence = (
            channel_confidence(rms_az, cfg.t_az_rms)
            + channel_confidence(rms_roll, cfg.t_roll_rms)
            + channel_confidence(rms_pitch, cfg.t_pitch_rms)
        ) / 3.0

        return LiveMetrics(
            a_z=self._az_window.latest(),
            roll=self._roll_window.latest(),
            pitch=self._pitch_window.latest(),
            rms_az=rms_az,
            rms_roll=rms_roll,
            rms_pitch=rms_pitch,
            sampling_rate=self.sampling_rate,
            is_stable=is_stable,
            confidence=min(1.0, max(0.0, confidence)),
        )

    def update_config(self, **overrides: float) -> None:
        """Apply a partial configuration change to subsequent samples."""
        self.config = self.config.updated(**overrides)
        for warning in self.config.validate():
            logger.warning("Config: %s", warning)
        if "live_window_duration" in overrides:
            self._resize_windows()
        logger.info("Orientation estimator config updated: %s", sorted(overrides))

    def _resize_windows(self) -> None:
        capacity = math.ceil(self.max_rate_hz * self.config.live_window_duration)
        self._az_window = self._az_window.resized(capacity)
        self._roll_window = self._roll_window.resized(capacity)
        self._pitch_window = self._pitch_window.resized(capacity)
        logger.debug("Live windows resized to %s samples", capacity)

    def reset(self) -> None:
        """Clear all windows and re-arm first-sample seeding."""
        self.initialized = False
        self.g_est = ZERO
        self._az_window.clear()
        self._roll_window.clear()
        self._pitch_window.clear()
        self._intervals.clear()
        self._last_timestamp = None
