"""Manual session: discrete readings under a locked tare."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..config.constants import ValidationMessages
from ..domain.measurements import ManualMeasurement, QualitySnapshot, SessionKind
from ..domain.samples import LiveMetrics
from ..errors import InvalidInputError, as_reading
from ..utils.timing import now_ms

logger = logging.getLogger(__name__)


def quality_from_metrics(metrics: LiveMetrics) -> QualitySnapshot:
    """Capture the live stability state next to a manual reading."""
    return QualitySnapshot(
        quality_score=metrics.confidence,
        az_rms=metrics.rms_az,
        roll_rms=metrics.rms_roll,
        pitch_rms=metrics.rms_pitch,
    )


class ManualSession:
    """Idle -> Active (tare locked) -> Idle.

    Bias and tare uncertainty are frozen by ``start_session``; changing the
    tare afterwards never touches measurements already collected.
    """

    def __init__(self, kind: SessionKind = SessionKind.BASE, clock: Callable[[], float] = now_ms):
        self.kind = kind
        self._clock = clock
        self._active = False
        self._measurements: List[ManualMeasurement] = []
        self._locked_bias = 0.0
        self._locked_tare_uncertainty95 = 0.0

    def start_session(self, bias: float, tare_uncertainty95: float) -> None:
        self._active = True
        self._measurements = []
        self._locked_bias = float(bias)
        self._locked_tare_uncertainty95 = float(tare_uncertainty95)
        logger.info(
            "Manual %s session started (bias=%.3f, T95=%.3f)",
            self.kind.value, self._locked_bias, self._locked_tare_uncertainty95,
        )

    def add_measurement(self, reading: float, quality: Optional[QualitySnapshot] = None) -> ManualMeasurement:
        if not self._active:
            raise InvalidInputError(ValidationMessages.SESSION_NOT_ACTIVE.format(kind=self.kind.value))
        value = as_reading(reading, ValidationMessages.INVALID_SCALE_READING)
        if value <= 0:
            raise InvalidInputError(ValidationMessages.INVALID_SCALE_READING)

        measurement = ManualMeasurement(
            timestamp=self._clock(),
            kind=self.kind,
            scale_reading=value,
            bias=self._locked_bias,
            tare_uncertainty95=self._locked_tare_uncertainty95,
            corrected_value=value - self._locked_bias,
            quality=quality,
        )
        self._measurements.append(measurement)
        return measurement

    def remove_measurement(self, index: int) -> None:
        if 0 <= index < len(self._measurements):
            del self._measurements[index]

    def stop_session(self) -> List[ManualMeasurement]:
        self._active = False
        logger.info("Manual %s session stopped with %s measurements", self.kind.value, len(self._measurements))
        return list(self._measurements)

    def clear(self) -> None:
        """Drop measurements, keeping the session (and its lock) active."""
        self._measurements = []

    @property
    def measurements(self) -> List[ManualMeasurement]:
        return list(self._measurements)

    @property
    def count(self) -> int:
        return len(self._measurements)

    @property
    def active(self) -> bool:
        return self._active

    @property
    def bias(self) -> float:
        return self._locked_bias

    @property
    def tare_uncertainty95(self) -> float:
        return self._locked_tare_uncertainty95

    def can_calculate(self) -> bool:
        return len(self._measurements) >= 1
