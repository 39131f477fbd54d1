"""Session collection: continuous stream, manual readings and tare."""

from .continuous import ContinuousSession, is_good_sample
from .manual import ManualSession, quality_from_metrics
from .tare import TareEstimator

__all__ = [
    "ContinuousSession",
    "is_good_sample",
    "ManualSession",
    "quality_from_metrics",
    "TareEstimator",
]
