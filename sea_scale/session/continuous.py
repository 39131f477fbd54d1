"""Continuous measurement session: processed IMU stream plus polled scale."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..config import ScaleConfig, DEFAULT_CONFIG
from ..domain.samples import ProcessedSample, SessionData, SessionProgress, SessionSample
from ..utils.statistics import rms
from ..utils.timing import now_ms

logger = logging.getLogger(__name__)

ScaleReader = Callable[[], float]


def is_good_sample(sample: ProcessedSample, config: ScaleConfig) -> bool:
    """Instantaneous gate (looser than the live RMS gate)."""
    return (
        abs(sample.a_z) < config.t_az_instant
        and abs(sample.roll) < config.t_roll_instant
        and abs(sample.pitch) < config.t_pitch_instant
    )


class ContinuousSession:
    """One-shot Idle -> Active -> Idle collection window.

    The scale reading is pulled from ``read_scale`` at the configured cadence,
    measured on the processed sample timestamps; in between the last polled
    value is held. The configuration in force at ``start()`` is used for the
    whole session, later ``update_config`` calls only affect the next one.
    """

    def __init__(
        self,
        read_scale: ScaleReader,
        config: ScaleConfig = DEFAULT_CONFIG,
        clock: Callable[[], float] = now_ms,
    ):
        self.config = config
        self._read_scale = read_scale
        self._clock = clock
        self._session_config = config
        self._active = False
        self._samples: List[SessionSample] = []
        self._start_time = 0.0
        self._last_scale_time: Optional[float] = None
        self._last_scale_value = 0.0

    @property
    def active(self) -> bool:
        return self._active

    @property
    def samples(self) -> List[SessionSample]:
        return list(self._samples)

    def start(self) -> None:
        """Begin collecting; ignored when already active."""
        if self._active:
            logger.debug("start() ignored: session already active")
            return
        self._active = True
        self._session_config = self.config
        self._samples = []
        self._start_time = self._clock()
        self._last_scale_time = None
        self._last_scale_value = 0.0
        logger.info("Continuous session started (scale polled at %.1f Hz)", self._session_config.scale_sample_rate)

    def add_sample(self, sample: ProcessedSample) -> None:
        """Append one processed sample; ignored while idle."""
        if not self._active:
            return
        cfg = self._session_config
        due = (
            self._last_scale_time is None
            or sample.timestamp - self._last_scale_time >= cfg.scale_sample_interval_ms
        )
        if due:
            self._last_scale_value = float(self._read_scale())
            self._last_scale_time = sample.timestamp

        self._samples.append(
            SessionSample(
                timestamp=sample.timestamp,
                a_z=sample.a_z,
                roll=sample.roll,
                pitch=sample.pitch,
                scale_reading=self._last_scale_value,
                is_good=is_good_sample(sample, cfg),
            )
        )

    def stop(self) -> SessionData:
        """End the session and summarise it; an all-zero snapshot while idle."""
        if not self._active:
            return SessionData()
        self._active = False
        end_time = self._clock()
        samples = list(self._samples)
        good = sum(1 for s in samples if s.is_good)
        data = SessionData(
            samples=samples,
            start_time=self._start_time,
            end_time=end_time,
            duration=(end_time - self._start_time) / 1000.0,
            rms_az=rms([s.a_z for s in samples]),
            rms_roll=rms([s.roll for s in samples]),
            rms_pitch=rms([s.pitch for s in samples]),
            percent_good=(good / len(samples)) * 100.0 if samples else 0.0,
        )
        logger.info(
            "Continuous session stopped: %s samples, %.1f%% good, rms_az=%.3f",
            len(samples), data.percent_good, data.rms_az,
        )
        return data

    def progress(self) -> SessionProgress:
        if not self._active:
            return SessionProgress()
        return SessionProgress(
            elapsed_s=(self._clock() - self._start_time) / 1000.0,
            sample_count=len(self._samples),
            good_count=sum(1 for s in self._samples if s.is_good),
        )

    def reset(self) -> None:
        """Drop collected samples without changing the active state."""
        self._samples = []
        self._start_time = self._clock() if self._active else 0.0
        self._last_scale_time = None
        self._last_scale_value = 0.0

    def update_config(self, **overrides: float) -> None:
        self.config = self.config.updated(**overrides)
        if self._active:
            logger.info("Config change deferred to next session: %s", sorted(overrides))
