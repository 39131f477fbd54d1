# sea_scale/plotting.py
"""Session plots (requires the ``plot`` extra)."""
from __future__ import annotations

from typing import Optional

import numpy as np

from .domain.measurements import MeasurementResult
from .domain.samples import SessionData


def plot_session(session: SessionData, result: Optional[MeasurementResult] = None, title: Optional[str] = None):
    """
    Plot vertical acceleration and scale readings over session time.

    Good samples are shaded; when a result is given its fixed value and
    95% band are drawn on the scale axis. Returns the matplotlib figure.
    """
    import matplotlib.pyplot as plt

    if not session.samples:
        raise ValueError("Session has no samples to plot.")

    t0 = session.samples[0].timestamp
    t = np.array([(s.timestamp - t0) / 1000.0 for s in session.samples])
    a_z = np.array([s.a_z for s in session.samples])
    scale = np.array([s.scale_reading for s in session.samples])
    good = np.array([s.is_good for s in session.samples])

    fig, (ax_acc, ax_scale) = plt.subplots(2, 1, sharex=True, figsize=(12, 6))

    ax_acc.plot(t, a_z, linewidth=0.8, label="a_z")
    ax_acc.fill_between(t, a_z.min(), a_z.max(), where=good, alpha=0.15, step="mid", label="good")
    ax_acc.set_ylabel("a_z [m/s²]")
    ax_acc.legend(loc="upper right")
    ax_acc.grid(True, alpha=0.3)

    ax_scale.step(t, scale, where="post", linewidth=0.8, label="scale reading")
    if result is not None and result.fixed_measurement > 0:
        ax_scale.axhline(result.fixed_measurement, color="tab:red", label="fixed")
        ax_scale.axhspan(
            result.fixed_measurement - result.error_band,
            result.fixed_measurement + result.error_band,
            color="tab:red", alpha=0.15, label="95% band",
        )
    ax_scale.set_xlabel("Time [s]")
    ax_scale.set_ylabel("Scale [g]")
    ax_scale.legend(loc="upper right")
    ax_scale.grid(True, alpha=0.3)

    fig.suptitle(title or "Continuous session")
    fig.tight_layout()
    return fig
