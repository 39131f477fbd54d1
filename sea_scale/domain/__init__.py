"""Domain models for inertial samples, sessions and weighing results."""

from .vectors import Vector3, dot, magnitude, normalize, rad_to_deg, deg_to_rad
from .samples import (
    RawInertialSample,
    ProcessedSample,
    LiveMetrics,
    SessionSample,
    SessionData,
    SessionProgress,
)
from .measurements import (
    SessionKind,
    TareMethod,
    TareSample,
    TareEstimate,
    QualitySnapshot,
    ManualMeasurement,
    MeasurementDiagnostics,
    MeasurementResult,
    SessionResult,
    RatioResult,
)

__all__ = [
    "Vector3",
    "dot",
    "magnitude",
    "normalize",
    "rad_to_deg",
    "deg_to_rad",
    "RawInertialSample",
    "ProcessedSample",
    "LiveMetrics",
    "SessionSample",
    "SessionData",
    "SessionProgress",
    "SessionKind",
    "TareMethod",
    "TareSample",
    "TareEstimate",
    "QualitySnapshot",
    "ManualMeasurement",
    "MeasurementDiagnostics",
    "MeasurementResult",
    "SessionResult",
    "RatioResult",
]
