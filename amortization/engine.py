"""Core calculation engine for loan amortization.

This module implements the financial logic behind the lending platform's
payment estimates and repayment schedules for fixed-rate, fixed-term loans
repaid in level monthly installments. Every amount the engine returns is
rounded to whole currency units, matching the platform's currencies.

The functions are pure: they take plain numbers and a start date, return new
values and keep no state between calls.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, Overflow, localcontext
from typing import List, Tuple

from .data_models import AmortizationResult, LoanTerms, Number, ScheduleEntry
from .errors import InvalidLoanTerms
from .utils import DateLike, add_months, parse_start_date, round_whole

logger = logging.getLogger(__name__)

PRECISION = 28  # significant digits for intermediate financial calculations


def _level_payment(principal: Decimal, rate_per_month: Decimal, term: int) -> Decimal:
    """Return the unrounded annuity (equal installment) monthly payment.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, or too
    small to register at the working precision, the payment simplifies to
    ``P / n``. A term so long that ``(1 + i)^n`` leaves the decimal exponent
    range is rejected, since its payment would only ever cover interest.
    """
    if rate_per_month == 0:
        return principal / Decimal(term)
    try:
        factor = (1 + rate_per_month) ** term
    except Overflow as exc:
        raise InvalidLoanTerms(f"term_months {term} is too long to amortize", field="term_months") from exc
    if factor == 1:
        return principal / Decimal(term)
    return principal * (rate_per_month * factor) / (factor - 1)


def _monthly_payment(terms: LoanTerms) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = PRECISION
        payment = round_whole(_level_payment(terms.principal, terms.monthly_rate, terms.term_months))
        first_interest = terms.principal * terms.monthly_rate
    if payment == 0 or payment <= first_interest:
        raise InvalidLoanTerms(
            f"principal {terms.principal} is too small: a level payment of {payment} "
            f"does not repay any principal over {terms.term_months} months",
            field="principal",
        )
    return payment


def compute_monthly_payment(principal: Number, annual_rate_percent: Number, term_months: Number) -> Decimal:
    """Return the level monthly payment, rounded to whole currency units.

    Raises
    ------
    InvalidLoanTerms
        If ``principal <= 0``, ``term_months < 1`` or ``annual_rate_percent < 0``,
        or if the rounded payment would not repay any principal.
    """
    return _monthly_payment(LoanTerms(principal, annual_rate_percent, term_months))


def _total_interest(terms: LoanTerms, payment: Decimal) -> Decimal:
    total = round_whole(payment * terms.term_months) - terms.principal
    if total < 0:
        # A level payment rounded down can repay slightly less than borrowed.
        logger.debug("Clamping total interest %s to zero for %s", total, terms)
        return Decimal("0")
    return total


def compute_total_interest(principal: Number, annual_rate_percent: Number, term_months: Number) -> Decimal:
    """Return the interest billed across the whole payment stream.

    Interest is derived from the rounded monthly payment multiplied by the
    number of installments, minus the principal, which is what the borrower
    is actually billed. The result is never negative.
    """
    terms = LoanTerms(principal, annual_rate_percent, term_months)
    return _total_interest(terms, _monthly_payment(terms))


def _build_schedule(terms: LoanTerms, start: date, payment: Decimal) -> Tuple[ScheduleEntry, ...]:
    rate_per_month = terms.monthly_rate
    balance = terms.principal
    entries: List[ScheduleEntry] = []

    with localcontext() as ctx:
        ctx.prec = PRECISION
        for month in range(1, terms.term_months + 1):
            interest = balance * rate_per_month
            if month == terms.term_months or payment - interest > balance:
                # Settle the outstanding balance: the final installment absorbs the
                # rounding residual and a level payment rounded up never overpays.
                principal_portion = balance
                amount_due = balance + interest
            else:
                principal_portion = payment - interest
                amount_due = payment
            balance -= principal_portion

            entries.append(
                ScheduleEntry(
                    month_index=month,
                    payment_amount=round_whole(amount_due),
                    principal_portion=round_whole(principal_portion),
                    interest_portion=round_whole(interest),
                    remaining_balance=round_whole(max(Decimal("0"), balance)),
                    due_date=add_months(start, month),
                )
            )

    return tuple(entries)


def compute_schedule(
    principal: Number,
    annual_rate_percent: Number,
    term_months: Number,
    start_date: DateLike,
) -> Tuple[ScheduleEntry, ...]:
    """Compute the month-by-month repayment schedule for a loan.

    Parameters
    ----------
    principal, annual_rate_percent, term_months:
        Loan terms; see :class:`~amortization.data_models.LoanTerms`.
    start_date:
        Reference date; installment ``k`` is due ``k`` calendar months later.
        Accepts ``date``/``datetime`` objects or ``"YYYY-MM-DD"``/``"YYYY-MM"``
        strings.

    Returns
    -------
    tuple of ScheduleEntry
        Exactly ``term_months`` entries ordered by ``month_index``. The running
        balance is carried unrounded between months; only the reported values
        are rounded. The last entry always shows a zero remaining balance.

    Raises
    ------
    InvalidLoanTerms
        If the loan terms are out of range.
    InvalidStartDate
        If ``start_date`` is not a valid calendar date.
    """
    terms = LoanTerms(principal, annual_rate_percent, term_months)
    start = parse_start_date(start_date)
    return _build_schedule(terms, start, _monthly_payment(terms))


def amortize(terms: LoanTerms, start_date: DateLike) -> AmortizationResult:
    """Run the full amortization for already validated ``terms``."""
    start = parse_start_date(start_date)
    payment = _monthly_payment(terms)
    schedule = _build_schedule(terms, start, payment)
    result = AmortizationResult(
        monthly_payment=payment,
        total_interest=_total_interest(terms, payment),
        schedule=schedule,
    )
    logger.debug(
        "Amortized %s over %d months at %s%%: payment=%s total_interest=%s",
        terms.principal,
        terms.term_months,
        terms.annual_rate_percent,
        result.monthly_payment,
        result.total_interest,
    )
    return result
