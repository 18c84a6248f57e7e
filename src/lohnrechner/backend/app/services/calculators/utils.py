"""Utility helpers for calculator modules."""

from __future__ import annotations

from datetime import date, timedelta


def format_percentage(value: float) -> str:
    """Return a human-readable label for a percentage such as ``9.3``."""

    if float(int(value)) == value:
        return f"{int(value)}%"
    return f"{value:.2f}%"


def percent_of(amount: float, rate: float) -> float:
    """Return ``rate`` percent of ``amount``."""

    return amount * rate / 100


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0 when the denominator is not positive."""

    if denominator <= 0:
        return 0.0
    return numerator / denominator


def inclusive_days(start: date, end: date) -> int:
    """Count calendar days from ``start`` to ``end`` including both ends."""

    if end < start:
        return 0
    return (end - start).days + 1


def add_weeks(start: date, weeks: int) -> date:
    return start + timedelta(weeks=weeks)


def add_months(start: date, months: int) -> date:
    """Shift ``start`` by whole months, clamping to the last day of the month."""

    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = start.day
    while day > 28:
        try:
            return date(year, month, day)
        except ValueError:
            day -= 1
    return date(year, month, day)


def round_currency(value: float) -> float:
    """Round monetary amounts to two decimals."""

    return round(value, 2)


def round_rate(value: float) -> float:
    """Round rate values to four decimals."""

    return round(value, 4)


__all__ = [
    "add_months",
    "add_weeks",
    "format_percentage",
    "inclusive_days",
    "percent_of",
    "round_currency",
    "round_rate",
    "safe_divide",
]
