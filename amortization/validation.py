"""Lending limits applied to a loan request before it reaches the engine."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Tuple

from .config import Settings
from .data_models import Number, coerce_decimal, coerce_term
from .errors import InvalidLoanTerms, LoanRequestRejected

INCOME_MULTIPLE = 6  # a request may not exceed six months of income


def check_term_limit(term_months: int, settings: Settings, field: str = "term_months") -> int:
    """Reject a loan duration outside ``[1, settings.max_term]`` months."""
    if term_months < 1:
        raise LoanRequestRejected("Minimum loan duration is 1 month", field=field)
    if term_months > settings.max_term:
        raise LoanRequestRejected(f"Maximum loan duration is {settings.max_term} months", field=field)
    return term_months


def validate_loan_request(
    amount: Number,
    term_months: Number,
    settings: Settings,
    monthly_income: Optional[Number] = None,
    term_field: str = "term_months",
) -> Tuple[Decimal, int]:
    """Check a borrower's requested amount and duration against the limits.

    Returns the amount and term converted to ``Decimal`` and ``int``. Errors
    about the duration carry ``term_field`` so callers can report the name
    their client used for it.

    Raises
    ------
    LoanRequestRejected
        If the request breaks one of the platform's lending limits.
    """
    try:
        value = coerce_decimal(amount, "amount")
        term = coerce_term(term_months)
        income = None if monthly_income is None else coerce_decimal(monthly_income, "monthly_income")
    except InvalidLoanTerms as exc:
        field = term_field if exc.field == "term_months" else exc.field
        raise LoanRequestRejected(str(exc), field=field) from exc

    if value != value.to_integral_value():
        raise LoanRequestRejected("Loan amount must be a whole number", field="amount")
    if value < settings.min_amount:
        raise LoanRequestRejected(
            f"Minimum loan amount is {settings.min_amount:,} {settings.currency}", field="amount"
        )
    if value > settings.max_amount:
        raise LoanRequestRejected(
            f"Maximum loan amount is {settings.max_amount:,} {settings.currency}", field="amount"
        )
    check_term_limit(term, settings, field=term_field)
    if income is not None and income > 0:
        if value > income * INCOME_MULTIPLE:
            raise LoanRequestRejected(
                f"Loan amount cannot exceed {INCOME_MULTIPLE} months of your income",
                field="amount",
            )
    return value, term
