"""Utility functions for the amortization engine.

This module provides helpers for parsing user input into Python data types and
for handling dates, including adding calendar months and normalizing the
different start-date spellings callers send to ``datetime.date`` instances.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from .errors import InvalidStartDate

WHOLE_UNIT = Decimal("1")

DateLike = Union[date, datetime, str]


def round_whole(value: Decimal) -> Decimal:
    """Round ``value`` to the nearest whole currency unit (half away from zero).

    Results that round to zero are returned as unsigned ``0``, never ``-0``.
    """
    result = value.quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP)
    if result.is_zero():
        return Decimal("0")
    return result


def parse_start_date(value: DateLike) -> date:
    """Return ``value`` as a ``date``.

    Accepts ``date`` and ``datetime`` objects (the time part is dropped) as well
    as ISO strings in the form ``"YYYY-MM-DD"`` or ``"YYYY-MM"``; the latter is
    normalized to the first day of the month.

    Raises
    ------
    InvalidStartDate
        If the value is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidStartDate(f"Invalid start date: {value!r}")
    text = value.strip()
    try:
        parts = text.split("-")
        if len(parts) == 2:
            return date(int(parts[0]), int(parts[1]), 1)
        return date.fromisoformat(text)
    except ValueError as exc:
        raise InvalidStartDate(f"Invalid start date: {value!r}") from exc


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and surrounding whitespace and raises
    ``ValueError`` if conversion fails or the result is not finite.
    """
    try:
        cleaned = value.replace(",", "").strip()
        result = Decimal(cleaned)
    except (InvalidOperation, AttributeError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return result
