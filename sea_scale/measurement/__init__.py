"""Result aggregation for continuous and manual sessions and base/final ratios."""

from .robust import CentralEstimate, central_estimate, is_plausible_reading
from .continuous import ResultAggregator, motion_corrected
from .manual import SessionCalculator, confidence_from_count
from .ratio import RatioAggregator

__all__ = [
    "CentralEstimate",
    "central_estimate",
    "is_plausible_reading",
    "ResultAggregator",
    "motion_corrected",
    "SessionCalculator",
    "confidence_from_count",
    "RatioAggregator",
]
