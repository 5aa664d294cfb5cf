"""Exceptions raised by the amortization engine.

All errors derive from ``ValueError`` so callers that already guard numeric
parsing with ``except ValueError`` keep working.
"""

from __future__ import annotations

from typing import Optional


class AmortizationError(ValueError):
    """Base class for every error raised by the ``amortization`` package."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidLoanTerms(AmortizationError):
    """Principal, rate or term outside the range the engine accepts."""


class InvalidStartDate(AmortizationError):
    """The schedule start date could not be interpreted as a calendar date."""

    def __init__(self, message: str) -> None:
        super().__init__(message, field="start_date")


class LoanRequestRejected(AmortizationError):
    """A loan request falls outside the platform's lending limits."""
