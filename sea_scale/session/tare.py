"""Tare (zero-load) collection and bias estimation."""
from __future__ import annotations

import logging
from typing import Callable, List

from ..config.constants import ValidationMessages
from ..domain.measurements import TareEstimate, TareMethod, TareSample
from ..errors import InvalidInputError, as_reading
from ..utils.statistics import median
from ..utils.timing import now_ms

logger = logging.getLogger(__name__)


class TareEstimator:
    """Collects tare readings and estimates bias with a half-range bound.

    The half-range (max - min) / 2 is used as the 95% tare uncertainty: it is
    distribution-free and conservative for the handful of readings typically
    taken.
    """

    def __init__(self, clock: Callable[[], float] = now_ms):
        self._clock = clock
        self._samples: List[TareSample] = []

    def add_tare_sample(self, value: float) -> None:
        reading = as_reading(value, ValidationMessages.INVALID_TARE_READING)
        if reading < 0:
            raise InvalidInputError(ValidationMessages.INVALID_TARE_READING)
        self._samples.append(TareSample(timestamp=self._clock(), tare_reading=reading))

    def remove_tare_sample(self, index: int) -> None:
        if 0 <= index < len(self._samples):
            del self._samples[index]

    def clear(self) -> None:
        self._samples = []

    @property
    def samples(self) -> List[TareSample]:
        return list(self._samples)

    @property
    def count(self) -> int:
        return len(self._samples)

    def estimate(self) -> TareEstimate:
        count = len(self._samples)
        if count == 0:
            return TareEstimate(count=0, bias_median=0.0, tare_uncertainty95=0.0, tare_sigma=0.0)
        if count == 1:
            # a single point cannot bound a range
            return TareEstimate(
                count=1,
                bias_median=self._samples[0].tare_reading,
                tare_uncertainty95=0.0,
                tare_sigma=0.0,
            )

        readings = [s.tare_reading for s in self._samples]
        unc95 = (max(readings) - min(readings)) / 2.0
        estimate = TareEstimate(
            count=count,
            bias_median=median(readings),
            tare_uncertainty95=unc95,
            tare_sigma=unc95 / 2.0,
        )
        logger.debug("Tare estimate from %s readings: bias=%.3f T95=%.3f", count, estimate.bias_median, unc95)
        return estimate

    @staticmethod
    def manual_estimate(bias: float, tare_uncertainty95: float) -> TareEstimate:
        """Estimate typed in by the user instead of derived from readings."""
        return TareEstimate(
            count=0,
            bias_median=bias,
            tare_uncertainty95=tare_uncertainty95,
            tare_sigma=tare_uncertainty95 / 2.0,
            method=TareMethod.USER_ENTERED,
        )
