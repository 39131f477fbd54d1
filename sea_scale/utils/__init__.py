"""Statistics, k-factor and timing helpers."""

from .statistics import mean, median, rms, std_dev, sample_std_dev, trim_sorted, trimmed_mean
from .kfactor import k_from_n, effective_n, T_TABLE
from .timing import now_ms

__all__ = [
    "mean",
    "median",
    "rms",
    "std_dev",
    "sample_std_dev",
    "trim_sorted",
    "trimmed_mean",
    "k_from_n",
    "effective_n",
    "T_TABLE",
    "now_ms",
]
