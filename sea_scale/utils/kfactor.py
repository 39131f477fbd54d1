# sea_scale/utils/kfactor.py
"""
Sample-count dependent 95% multiplier (k-factor).

Two-sided 95% Student-t quantiles are tabulated for a fixed set of degrees
of freedom and linearly interpolated in between. For df >= 30 the value
approaches the normal quantile 1.960, reached exactly at df = 100.
"""
from __future__ import annotations

import logging
import math
from typing import List, Tuple

import numpy as np

from ..config.constants import ComputationalConstants

logger = logging.getLogger(__name__)

# (df, t) for df = n - 1, two-sided 95%
T_TABLE: List[Tuple[float, float]] = [
    (1, 12.706),
    (2, 4.303),
    (3, 3.182),
    (4, 2.776),
    (5, 2.571),
    (6, 2.447),
    (7, 2.365),
    (8, 2.306),
    (9, 2.262),
    (10, 2.228),
    (12, 2.179),
    (15, 2.131),
    (20, 2.086),
    (25, 2.060),
    (30, 2.042),
    (math.inf, 1.960),
]

_T30 = 2.042
_T_INF = 1.960
_DF_ASYMPTOTIC = 100

_FINITE_DF = np.array([df for df, _ in T_TABLE[:-1]], dtype=float)
_FINITE_T = np.array([t for _, t in T_TABLE[:-1]], dtype=float)


def k_from_n(n: int) -> float:
    """
    95% k-factor for ``n`` values.

    n <= 1 has no degrees of freedom; the fixed fallback 2.0 is returned and
    should be treated as a low-confidence value.
    """
    if n <= 1:
        logger.debug("k_from_n(%s): no degrees of freedom, fallback %.1f", n, ComputationalConstants.FIXED_K95)
        return ComputationalConstants.FIXED_K95

    df = n - 1
    if df >= _DF_ASYMPTOTIC:
        return _T_INF
    if df >= 30:
        slope = (_T30 - _T_INF) / (_DF_ASYMPTOTIC - 30)
        return max(_T_INF, _T30 - (df - 30) * slope)
    return float(np.interp(df, _FINITE_DF, _FINITE_T))


def effective_n(n_base: int, n_final: int) -> int:
    """The weaker of two sessions bounds the achievable confidence."""
    return min(n_base, n_final)
