"""Data models for the amortization engine.

This module defines the value types passed in and out of the engine: the loan
terms a borrower requests, one row of a repayment schedule and the bundled
result of a full amortization run. All of them are frozen dataclasses; they are
built fresh for every calculation and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from numbers import Integral
from typing import Tuple, Union

from .errors import InvalidLoanTerms

Number = Union[Decimal, int, float, str]


def coerce_decimal(value: Number, field: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidLoanTerms(f"{field} must be a number, got {value!r}", field=field)
    try:
        # floats go through str() so 0.1 stays 0.1 instead of its binary expansion
        result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidLoanTerms(f"{field} must be a number, got {value!r}", field=field) from exc
    if not result.is_finite():
        raise InvalidLoanTerms(f"{field} must be finite, got {value!r}", field=field)
    return result


def coerce_term(value: Number) -> int:
    if isinstance(value, bool):
        raise InvalidLoanTerms(f"term_months must be an integer, got {value!r}", field="term_months")
    if isinstance(value, Integral):
        return int(value)
    term = coerce_decimal(value, "term_months")
    if term != term.to_integral_value():
        raise InvalidLoanTerms(f"term_months must be a whole number of months, got {value!r}", field="term_months")
    return int(term)


@dataclass(frozen=True)
class LoanTerms:
    """A fixed-rate, fixed-term loan as requested by a borrower.

    Attributes
    ----------
    principal: Decimal
        Amount borrowed, in whole or fractional currency units. Must be positive.
    annual_rate_percent: Decimal
        Nominal yearly rate in percent, e.g. ``Decimal("15")`` for 15 %/year.
        Zero is allowed (interest-free loan).
    term_months: int
        Number of monthly installments, at least one.

    Values of other numeric types (``int``, ``float``, numeric strings) are
    converted on construction; anything outside the ranges above raises
    :class:`~amortization.errors.InvalidLoanTerms`.
    """

    principal: Decimal
    annual_rate_percent: Decimal
    term_months: int

    def __post_init__(self) -> None:
        principal = coerce_decimal(self.principal, "principal")
        rate = coerce_decimal(self.annual_rate_percent, "annual_rate_percent")
        term = coerce_term(self.term_months)
        if principal <= 0:
            raise InvalidLoanTerms(f"principal must be positive, got {principal}", field="principal")
        if rate < 0:
            raise InvalidLoanTerms(
                f"annual_rate_percent must not be negative, got {rate}", field="annual_rate_percent"
            )
        if term < 1:
            raise InvalidLoanTerms(f"term_months must be at least 1, got {term}", field="term_months")
        object.__setattr__(self, "principal", principal)
        object.__setattr__(self, "annual_rate_percent", rate)
        object.__setattr__(self, "term_months", term)

    @property
    def monthly_rate(self) -> Decimal:
        """Monthly interest rate as a fraction (``annual_rate_percent / 100 / 12``)."""
        return self.annual_rate_percent / Decimal(100) / Decimal(12)


@dataclass(frozen=True)
class ScheduleEntry:
    """One month of a repayment schedule, amounts in whole currency units."""

    month_index: int
    payment_amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance: Decimal
    due_date: date


@dataclass(frozen=True)
class AmortizationResult:
    monthly_payment: Decimal
    total_interest: Decimal
    schedule: Tuple[ScheduleEntry, ...]

    @property
    def total_paid(self) -> Decimal:
        """Sum of every scheduled payment."""
        return sum((e.payment_amount for e in self.schedule), Decimal("0"))

    @property
    def final_due_date(self) -> date:
        return self.schedule[-1].due_date
