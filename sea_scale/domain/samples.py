"""Data structures flowing from the inertial sensor into a session.

The classes carry only data and minimal helpers; the estimator and session
classes implement the behaviour.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .vectors import Vector3


@dataclass(frozen=True)
class RawInertialSample:
    """One sensor event as delivered by the sensor collaborator."""

    # None when the sensor delivered no acceleration for this event
    acceleration: Optional[Vector3]
    timestamp: float  # monotonic milliseconds
    rotation_rate: Optional[Vector3] = None
    interval_ms: Optional[float] = None


@dataclass(frozen=True)
class ProcessedSample:
    """Orientation-derived quantities for one accepted raw sample."""

    a_z: float      # vertical acceleration along gravity (m/s^2)
    roll: float     # degrees
    pitch: float    # degrees
    g_est: Vector3
    g_unit: Vector3
    a_lin: Vector3
    timestamp: float


@dataclass(frozen=True)
class LiveMetrics:
    """Snapshot of the live stability state after one processed sample."""

    a_z: float
    roll: float
    pitch: float
    rms_az: float
    rms_roll: float
    rms_pitch: float
    sampling_rate: float  # Hz, 0 while undefined
    is_stable: bool
    confidence: float     # 0..1


@dataclass(frozen=True)
class SessionSample:
    """One entry of a continuous session."""

    timestamp: float
    a_z: float
    roll: float
    pitch: float
    scale_reading: float
    is_good: bool


@dataclass(frozen=True)
class SessionData:
    """Immutable snapshot returned when a continuous session stops."""

    samples: List[SessionSample] = field(default_factory=list)
    start_time: float = 0.0
    end_time: float = 0.0
    duration: float = 0.0  # seconds
    rms_az: float = 0.0
    rms_roll: float = 0.0
    rms_pitch: float = 0.0
    percent_good: float = 0.0

    @property
    def good_count(self) -> int:
        return sum(1 for s in self.samples if s.is_good)


@dataclass(frozen=True)
class SessionProgress:
    """Running counters of an active continuous session."""

    elapsed_s: float = 0.0
    sample_count: int = 0
    good_count: int = 0
