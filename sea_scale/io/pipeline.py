# sea_scale/io/pipeline.py
"""Replay of a recorded inertial stream through a continuous session.

Wires OrientationEstimator -> ContinuousSession -> ResultAggregator and uses
the recording's ``scale_g`` column as the live scale field.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import pandas as pd

from ..config import ScaleConfig, DEFAULT_CONFIG
from ..domain.measurements import MeasurementResult
from ..domain.samples import SessionData
from ..measurement.continuous import ResultAggregator
from ..processing.orientation import OrientationEstimator
from ..session.continuous import ContinuousSession
from .io import SCALE_COLUMN, samples_from_frame
from .observers import SessionObserver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplayResult:
    session: SessionData
    result: MeasurementResult


class ReplayPipeline:
    """Orchestrates a replayed continuous measurement with observer support.

    Example:
        >>> pipeline = ReplayPipeline(ScaleConfig())
        >>> pipeline.register_observer(ConsoleReporter())
        >>> replay = pipeline.run(read_recording("rec.tsv"), bias=1.5)
    """

    def __init__(self, config: ScaleConfig = DEFAULT_CONFIG):
        self.config = config
        self._observers: List[SessionObserver] = []

    def register_observer(self, observer: SessionObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unregister_observer(self, observer: SessionObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def run(
        self,
        recording: pd.DataFrame,
        bias: float = 0.0,
        motion_correction: bool = True,
        scale_reading: Optional[float] = None,
    ) -> ReplayResult:
        """
        Replay all rows and aggregate the session.

        Args:
            recording: Frame as returned by ``read_recording``
            bias: Tare bias subtracted from scale readings (g)
            motion_correction: Apply the vertical-acceleration correction
            scale_reading: Constant scale value used when the recording has
                no ``scale_g`` column
        """
        if SCALE_COLUMN not in recording.columns and scale_reading is None:
            raise ValueError(f"Recording has no '{SCALE_COLUMN}' column and no scale_reading was given.")

        raw_samples = samples_from_frame(recording)
        if SCALE_COLUMN in recording.columns:
            scale_values = recording[SCALE_COLUMN].astype(float).ffill().fillna(0.0).tolist()
        else:
            scale_values = [float(scale_reading)] * len(raw_samples)

        cursor = {"row": 0}
        clock_ms = {"t": raw_samples[0].timestamp if raw_samples else 0.0}

        estimator = OrientationEstimator(self.config)
        session = ContinuousSession(
            read_scale=lambda: scale_values[cursor["row"]],
            config=self.config,
            clock=lambda: clock_ms["t"],
        )

        for observer in self._observers:
            observer.on_session_start(self.config)
        session.start()
        for row, raw in enumerate(raw_samples):
            cursor["row"] = row
            clock_ms["t"] = raw.timestamp
            update = estimator.process(raw)
            if update is not None:
                session.add_sample(update.processed)
        session_data = session.stop()
        for observer in self._observers:
            observer.on_session_complete(session_data)

        result = ResultAggregator(self.config).compute(session_data, bias=bias, motion_correction=motion_correction)
        for observer in self._observers:
            observer.on_result(result)
        logger.info("Replayed %s raw samples into %s session samples", len(raw_samples), len(session_data.samples))
        return ReplayResult(session=session_data, result=result)
