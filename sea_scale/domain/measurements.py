"""Discrete readings, tare estimates and aggregated results.

Result objects are constructed once and never mutated; ``to_dict`` gives the
flat representation handed to the history collaborator.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class SessionKind(Enum):
    """Role of a manual session in the base/final ratio workflow."""

    BASE = "base"
    FINAL = "final"


class TareMethod(Enum):
    """Provenance of a tare estimate."""

    HALF_RANGE = "halfRange"
    USER_ENTERED = "userEntered"


@dataclass(frozen=True)
class TareSample:
    timestamp: float
    tare_reading: float  # grams


@dataclass(frozen=True)
class TareEstimate:
    count: int
    bias_median: float
    tare_uncertainty95: float
    tare_sigma: float
    method: TareMethod = TareMethod.HALF_RANGE


@dataclass(frozen=True)
class QualitySnapshot:
    """Live stability figures captured next to a manual reading."""

    quality_score: Optional[float] = None
    az_rms: Optional[float] = None
    roll_rms: Optional[float] = None
    pitch_rms: Optional[float] = None


@dataclass(frozen=True)
class ManualMeasurement:
    timestamp: float
    kind: SessionKind
    scale_reading: float
    bias: float               # locked at session start
    tare_uncertainty95: float  # locked at session start
    corrected_value: float
    quality: Optional[QualitySnapshot] = None


@dataclass(frozen=True)
class MeasurementDiagnostics:
    n_total: int = 0
    n_good: int = 0
    percent_good: float = 0.0
    session_rms_az: float = 0.0
    session_rms_roll: float = 0.0
    session_rms_pitch: float = 0.0
    sigma_motion: float = 0.0
    sigma_scale: float = 0.0
    sigma_total: float = 0.0


@dataclass(frozen=True)
class MeasurementResult:
    """Result of a continuous session."""

    fixed_measurement: float = 0.0  # grams
    confidence: float = 0.0
    error_band: float = 0.0         # +/- grams, 95%
    relative_error: float = 0.0     # +/- percent
    is_reliable: bool = False
    n_trim: int = 0
    diagnostics: MeasurementDiagnostics = field(default_factory=MeasurementDiagnostics)
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SessionResult:
    """Result of a manual (base or final) session."""

    kind: SessionKind
    measurements: List[ManualMeasurement] = field(default_factory=list)
    n_total: int = 0
    n_trim: int = 0
    trim_fraction: float = 0.10
    bias: float = 0.0
    tare_uncertainty95: float = 0.0
    tare_sigma: float = 0.0
    mean: float = 0.0         # over the trimmed set
    median: float = 0.0
    trimmed_mean: float = 0.0
    fixed_value: float = 0.0
    std_dev: float = 0.0
    std_error: float = 0.0
    total_uncertainty_1sigma: float = 0.0
    error_band95: float = 0.0
    relative_error95: float = 0.0
    confidence: float = 0.0
    k95: float = 2.0
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        data.pop("measurements")
        return data


@dataclass(frozen=True)
class RatioResult:
    """Percent change between a base and a final session."""

    w_base: SessionResult
    w_final: SessionResult
    ratio: float = 0.0
    percent: float = 0.0
    sigma_ratio_1sigma: float = 0.0
    error_band95_ratio: float = 0.0
    error_band95_percent: float = 0.0
    relative_error_percent95: float = 0.0
    k95: float = 2.0
    n_eff: int = 0
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = {k: v for k, v in asdict(self).items() if k not in ("w_base", "w_final")}
        data["w_base"] = self.w_base.fixed_value
        data["w_final"] = self.w_final.fixed_value
        return data
