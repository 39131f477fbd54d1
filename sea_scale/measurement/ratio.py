"""Percent change between a base and a final session with propagated uncertainty."""
from __future__ import annotations

import logging
import math
from typing import List

from ..config.constants import ComputationalConstants
from ..domain.measurements import RatioResult, SessionResult
from ..utils.kfactor import effective_n, k_from_n

logger = logging.getLogger(__name__)


class RatioAggregator:
    """ratio = (W_base - W_final) / W_base.

    First-order propagation with the two sessions treated as independent:
        d ratio / d W_base  =  W_final / W_base^2
        d ratio / d W_final = -1 / W_base
    """

    def compute(self, w_base: SessionResult, w_final: SessionResult) -> RatioResult:
        wb = w_base.fixed_value
        wf = w_final.fixed_value

        if wb <= 0:
            logger.info("Ratio not computed: W_base=%s", wb)
            return RatioResult(
                w_base=w_base,
                w_final=w_final,
                k95=ComputationalConstants.FIXED_K95,
                notes=["Error: W_base must be > 0 (cannot divide by zero)"],
            )

        ratio = (wb - wf) / wb
        percent = 100.0 * ratio

        d_wb = wf / (wb * wb)
        d_wf = -1.0 / wb
        sigma_ratio = math.sqrt(
            (d_wb * w_base.total_uncertainty_1sigma) ** 2
            + (d_wf * w_final.total_uncertainty_1sigma) ** 2
        )

        n_eff = effective_n(w_base.n_trim, w_final.n_trim)
        k95 = k_from_n(n_eff)
        band_ratio = k95 * sigma_ratio
        band_percent = 100.0 * band_ratio
        relative_percent = (band_percent / abs(percent)) * 100.0 if abs(percent) > 0 else 0.0

        notes: List[str] = []
        if w_base.n_trim < 3:
            notes.append(f"Low base sample count ({w_base.n_trim})")
        if w_final.n_trim < 3:
            notes.append(f"Low final sample count ({w_final.n_trim})")
        if n_eff < 3:
            notes.append(f"Low effective sample count ({n_eff}) for k-factor")
        if w_base.tare_uncertainty95 == 0 and w_final.tare_uncertainty95 == 0:
            notes.append("No tare uncertainty specified for either session")

        return RatioResult(
            w_base=w_base,
            w_final=w_final,
            ratio=ratio,
            percent=percent,
            sigma_ratio_1sigma=sigma_ratio,
            error_band95_ratio=band_ratio,
            error_band95_percent=band_percent,
            relative_error_percent95=relative_percent,
            k95=k95,
            n_eff=n_eff,
            notes=notes,
        )
