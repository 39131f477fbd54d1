# sea_scale/io/observers.py
"""
Observer Pattern for session lifecycle reporting.

Decouples the replay pipeline from console output and history persistence.

Example:
    >>> from sea_scale.io import ReplayPipeline, ConsoleReporter, HistoryLogger
    >>>
    >>> pipeline = ReplayPipeline(config)
    >>> pipeline.register_observer(ConsoleReporter())
    >>> pipeline.register_observer(HistoryLogger("history/results.csv"))
    >>> result = pipeline.run(recording_df)
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from ..config import ScaleConfig
from ..domain.measurements import MeasurementResult
from ..domain.samples import SessionData
from .io import append_history


class SessionObserver(ABC):
    """
    Abstract base class for session observers.

    Observers are notified when a session starts, when it stops and when
    its result has been computed.
    """

    @abstractmethod
    def on_session_start(self, config: ScaleConfig):
        pass

    @abstractmethod
    def on_session_complete(self, session: SessionData):
        pass

    @abstractmethod
    def on_result(self, result: MeasurementResult):
        pass


class ConsoleReporter(SessionObserver):
    """
    Reports session progress and results to console.

    Example:
        >>> pipeline.register_observer(ConsoleReporter(verbose=True))
    """

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def on_session_start(self, config: ScaleConfig):
        print(f"\n{'='*70}")
        print("Starting continuous session")
        if self.verbose:
            print(f"   RMS gate: a_z<{config.t_az_rms} roll<{config.t_roll_rms} pitch<{config.t_pitch_rms}")
            print(f"   Instant gate: a_z<{config.t_az_instant} roll<{config.t_roll_instant} pitch<{config.t_pitch_instant}")
            print(f"   Gravity alpha: {config.gravity_filter_alpha}, scale rate: {config.scale_sample_rate} Hz")
        print(f"{'='*70}\n")

    def on_session_complete(self, session: SessionData):
        print(f"Session: {len(session.samples)} samples over {session.duration:.1f} s, "
              f"{session.percent_good:.1f}% good")
        if self.verbose:
            print(f"   RMS a_z={session.rms_az:.3f} m/s^2, roll={session.rms_roll:.2f} deg, "
                  f"pitch={session.rms_pitch:.2f} deg")

    def on_result(self, result: MeasurementResult):
        print(f"\n{'='*70}")
        print(f"Fixed measurement: {result.fixed_measurement:.2f} g "
              f"+/- {result.error_band:.2f} g ({result.relative_error:.2f}%)")
        print(f"   Confidence: {result.confidence:.2f}   Reliable: {result.is_reliable}")
        if self.verbose:
            for note in result.notes:
                print(f"   - {note}")
        print(f"{'='*70}\n")


class HistoryLogger(SessionObserver):
    """
    Appends every result to a CSV history file.

    Example:
        >>> pipeline.register_observer(HistoryLogger("history/results.csv"))
    """

    def __init__(self, log_file: str):
        self.log_file = log_file

    def on_session_start(self, config: ScaleConfig):
        pass

    def on_session_complete(self, session: SessionData):
        pass

    def on_result(self, result: MeasurementResult):
        append_history(result, self.log_file)
