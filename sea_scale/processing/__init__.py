"""Inertial signal processing: ring windows and orientation estimation."""

from .ring_window import RingWindow
from .orientation import OrientationEstimator, ImuListener, ImuUpdate, tilt_from_unit_gravity

__all__ = [
    "RingWindow",
    "OrientationEstimator",
    "ImuListener",
    "ImuUpdate",
    "tilt_from_unit_gravity",
]
