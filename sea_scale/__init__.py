# sea_scale/__init__.py
"""
Motion-aware weighing engine.

Contains:
- Gravity / orientation estimation and live stability gating
- Continuous and manual session collection with tare estimation
- Robust aggregation with 95% uncertainty bands
- Base/final percent-change with propagated uncertainty
"""

from .config import ScaleConfig, DEFAULT_CONFIG
from .errors import InvalidInputError
from .domain import (
    Vector3,
    RawInertialSample,
    ProcessedSample,
    LiveMetrics,
    SessionSample,
    SessionData,
    SessionKind,
    TareEstimate,
    ManualMeasurement,
    MeasurementResult,
    SessionResult,
    RatioResult,
)
from .processing import OrientationEstimator, RingWindow, ImuListener
from .session import ContinuousSession, ManualSession, TareEstimator
from .measurement import ResultAggregator, SessionCalculator, RatioAggregator
from .utils import k_from_n

__all__ = [
    "ScaleConfig",
    "DEFAULT_CONFIG",
    "InvalidInputError",
    "Vector3",
    "RawInertialSample",
    "ProcessedSample",
    "LiveMetrics",
    "SessionSample",
    "SessionData",
    "SessionKind",
    "TareEstimate",
    "ManualMeasurement",
    "MeasurementResult",
    "SessionResult",
    "RatioResult",
    "OrientationEstimator",
    "RingWindow",
    "ImuListener",
    "ContinuousSession",
    "ManualSession",
    "TareEstimator",
    "ResultAggregator",
    "SessionCalculator",
    "RatioAggregator",
    "k_from_n",
]
