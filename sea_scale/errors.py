"""Exceptions raised by the weighing engine."""
from __future__ import annotations

import math


class InvalidInputError(ValueError):
    """A discrete add-operation received a value it cannot accept."""


def as_reading(value: object, message: str) -> float:
    """Coerce a user-entered value to float, rejecting non-numbers and NaN."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InvalidInputError(message) from None
    if math.isnan(number):
        raise InvalidInputError(message)
    return number
