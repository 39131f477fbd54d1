"""Recording I/O, observers and replay pipeline."""

from .io import (
    read_tsv,
    write_tsv,
    read_recording,
    samples_from_frame,
    session_to_frame,
    write_session_samples,
    results_to_frame,
    append_history,
)
from .observers import SessionObserver, ConsoleReporter, HistoryLogger
from .pipeline import ReplayPipeline, ReplayResult

__all__ = [
    "read_tsv",
    "write_tsv",
    "read_recording",
    "samples_from_frame",
    "session_to_frame",
    "write_session_samples",
    "results_to_frame",
    "append_history",
    "SessionObserver",
    "ConsoleReporter",
    "HistoryLogger",
    "ReplayPipeline",
    "ReplayResult",
]
