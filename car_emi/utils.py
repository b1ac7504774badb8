"""Utility functions for the car loan calculator.

This module provides helpers for keeping numbers safe for display (no NaN or
infinity ever reaches a caller), for rounding currency the way a spreadsheet
does, and for month arithmetic on ``datetime.date`` values.
"""

from __future__ import annotations

import calendar
import math
from datetime import date


def finite_or_zero(value: float) -> float:
    """Return ``value`` as a float, or ``0.0`` if it is NaN or infinite."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def all_finite(*values: float) -> bool:
    return all(isinstance(v, (int, float)) and math.isfinite(v) for v in values)


def round_currency(value: float) -> float:
    """Round to the nearest whole unit, halves away from zero (2.5 -> 3.0).

    Unlike the built-in ``round``, which rounds halves to even.
    """
    value = finite_or_zero(value)
    if value < 0:
        return -float(math.floor(-value + 0.5))
    return float(math.floor(value + 0.5))


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def last_emi_date(start: date, tenure_months: int) -> date:
    """Date of the final installment when the first one is due a month after ``start``."""
    return add_months(start, max(0, tenure_months))


def parse_number(value: str) -> float:
    """Convert a numeric string into a ``float``.

    Commas (thousands or lakh separators) and a leading rupee sign are
    ignored. Raises ``ValueError`` if conversion fails.
    """
    try:
        cleaned = value.replace(",", "").replace("₹", "").strip()
        return float(cleaned)
    except Exception as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
