from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

logger = logging.getLogger(__name__)


def round_half_up(value: float, places: int = 2) -> float:
    """Round to ``places`` decimals, halves away from zero (0.125 -> 0.13)."""
    try:
        quantum = Decimal(1).scaleb(-places)
        return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError):
        # nan / inf have no decimal representation to quantize
        return float(value)


def to_number(value: Any, *, default: float = 0.0) -> float:
    """Coerce a rate/amount coming from storage (int, float, numeric string)."""
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Cannot read %r as a number, using %s", value, default)
        return default
