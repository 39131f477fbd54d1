# sea_scale/io/io.py
"""Tabular I/O for inertial recordings, session samples and result history."""
from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Sequence, Union

import pandas as pd

from ..domain.measurements import MeasurementResult, RatioResult, SessionResult
from ..domain.samples import RawInertialSample, SessionData
from ..domain.vectors import Vector3

logger = logging.getLogger(__name__)

ACCEL_COLUMNS = ("ax", "ay", "az")
GYRO_COLUMNS = ("gx", "gy", "gz")
TIME_COLUMN = "time_ms"
SCALE_COLUMN = "scale_g"

AnyResult = Union[MeasurementResult, SessionResult, RatioResult]


def read_tsv(path: str, decimal: str = ".") -> pd.DataFrame:
    """TSV file with tab separator."""
    return pd.read_csv(path, sep="\t", decimal=decimal, low_memory=False)


def write_tsv(df: pd.DataFrame, path: str, decimal: str = ".") -> None:
    df.to_csv(path, sep="\t", index=False, decimal=decimal)


def read_recording(path: str, decimal: str = ".") -> pd.DataFrame:
    """
    Read a raw inertial recording.

    Required columns: time_ms, ax, ay, az (m/s^2, including gravity).
    Optional: gx, gy, gz, interval_ms, scale_g. A row with any blank
    acceleration cell is a "sensor silent" event.
    """
    df = read_tsv(path, decimal=decimal)
    missing = [c for c in (TIME_COLUMN, *ACCEL_COLUMNS) if c not in df.columns]
    if missing:
        raise ValueError(f"Recording must contain columns: {', '.join(missing)}")
    logger.info("Read %s rows from %s", len(df), path)
    return df


def _optional_vector(row: pd.Series, columns: Sequence[str]) -> Vector3 | None:
    if not all(c in row.index for c in columns):
        return None
    values = [row[c] for c in columns]
    if any(pd.isna(v) for v in values):
        return None
    return Vector3(*(float(v) for v in values))


def samples_from_frame(df: pd.DataFrame) -> List[RawInertialSample]:
    """Convert recording rows into raw sensor samples, in row order."""
    samples: List[RawInertialSample] = []
    for _, row in df.iterrows():
        interval = row.get("interval_ms")
        samples.append(
            RawInertialSample(
                acceleration=_optional_vector(row, ACCEL_COLUMNS),
                timestamp=float(row[TIME_COLUMN]),
                rotation_rate=_optional_vector(row, GYRO_COLUMNS),
                interval_ms=None if interval is None or pd.isna(interval) else float(interval),
            )
        )
    return samples


def session_to_frame(session: SessionData) -> pd.DataFrame:
    columns = ["timestamp", "a_z", "roll", "pitch", "scale_reading", "is_good"]
    return pd.DataFrame([asdict(s) for s in session.samples], columns=columns)


def write_session_samples(session: SessionData, path: str) -> None:
    write_tsv(session_to_frame(session), path)
    logger.info("Wrote %s session samples to %s", len(session.samples), path)


def _flatten(result: AnyResult) -> dict:
    data = result.to_dict()
    flat = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                flat[f"{key}.{sub_key}"] = sub_value
        elif isinstance(value, list):
            flat[key] = "; ".join(str(v) for v in value)
        else:
            flat[key] = value
    return flat


def results_to_frame(results: Iterable[AnyResult]) -> pd.DataFrame:
    """One row per result, nested diagnostics flattened to dotted columns."""
    rows = []
    for result in results:
        row = {"type": type(result).__name__}
        row.update(_flatten(result))
        rows.append(row)
    return pd.DataFrame(rows)


def append_history(result: AnyResult, path: str) -> None:
    """Append one timestamped result row to a CSV history file."""
    row = results_to_frame([result])
    row.insert(0, "saved_at", datetime.now().isoformat())
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    row.to_csv(target, mode="a", header=not target.exists(), index=False)
