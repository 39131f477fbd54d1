from typing import List

import pandas as pd
import pytest

from sea_scale.config import ScaleConfig
from sea_scale.domain.samples import ProcessedSample, RawInertialSample, SessionSample
from sea_scale.domain.vectors import Vector3

G = 9.80665


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def make_raw(t_ms: float, x: float = 0.0, y: float = 0.0, z: float = G) -> RawInertialSample:
    return RawInertialSample(acceleration=Vector3(x, y, z), timestamp=t_ms)


def make_processed(t_ms: float, a_z: float = 0.0, roll: float = 0.0, pitch: float = 0.0) -> ProcessedSample:
    return ProcessedSample(
        a_z=a_z,
        roll=roll,
        pitch=pitch,
        g_est=Vector3(0.0, 0.0, G),
        g_unit=Vector3(0.0, 0.0, 1.0),
        a_lin=Vector3(0.0, 0.0, a_z),
        timestamp=t_ms,
    )


def make_session_samples(readings, a_z=0.0, good=True) -> List[SessionSample]:
    samples = []
    for i, reading in enumerate(readings):
        samples.append(
            SessionSample(
                timestamp=i * 10.0,
                a_z=a_z[i] if isinstance(a_z, (list, tuple)) else a_z,
                roll=0.0,
                pitch=0.0,
                scale_reading=reading,
                is_good=good[i] if isinstance(good, (list, tuple)) else good,
            )
        )
    return samples


@pytest.fixture
def config() -> ScaleConfig:
    return ScaleConfig()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(start=1000.0)


@pytest.fixture
def static_recording() -> pd.DataFrame:
    """2 s at 100 Hz, device at rest, 150 g on the scale, one silent event."""
    rows = []
    for i in range(200):
        rows.append({"time_ms": i * 10.0, "ax": 0.0, "ay": 0.0, "az": G, "scale_g": 150.0})
    rows[3]["ax"] = float("nan")
    rows[3]["ay"] = float("nan")
    rows[3]["az"] = float("nan")
    return pd.DataFrame(rows)
