"""Lenient numeric coercion shared by the input models."""

from __future__ import annotations

import math
from typing import Any

__all__ = ["coerce_amount"]


def coerce_amount(value: Any) -> float:
    """Return ``value`` as a finite, non-negative float (0 when unusable)."""

    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number
