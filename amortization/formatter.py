"""Output helpers for the amortization engine.

This module renders amounts, repayment schedules and summaries as plain text
for the terminal. Amounts are shown in whole currency units with the symbol
used by the lending platform for each supported currency.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable

from .data_models import AmortizationResult, ScheduleEntry
from .utils import round_whole

CURRENCY_SYMBOLS: Dict[str, str] = {
    "UGX": "UGX",
    "KES": "KSh",
    "NGN": "₦",
    "USD": "$",
    "EUR": "€",
}


def format_currency(amount: Decimal, currency: str = "UGX") -> str:
    """Format ``amount`` in whole units, e.g. ``format_currency(1500, "KES") -> "KSh 1,500"``.

    Unknown currency codes are shown as the code itself.
    """
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), currency.upper())
    return f"{symbol} {round_whole(Decimal(amount)):,}"


def print_summary(result: AmortizationResult, currency: str = "UGX") -> None:
    """Print a summary of loan metrics in a human‑readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Monthly payment    : {format_currency(result.monthly_payment, currency)}")
    print(f"Total interest     : {format_currency(result.total_interest, currency)}")
    print(f"Total paid         : {format_currency(result.total_paid, currency)}")
    print(f"Installments       : {len(result.schedule)}")
    print(f"First due date     : {result.schedule[0].due_date.isoformat()}")
    print(f"Final due date     : {result.final_due_date.isoformat()}")
    print("-" * 72)


def print_schedule(schedule: Iterable[ScheduleEntry], currency: str = "UGX") -> None:
    """Print the repayment schedule as a simple tab-separated table."""
    headers = ["Month", "Due", "Payment", "Principal", "Interest", "Balance"]
    print("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.month_index),
            entry.due_date.isoformat(),
            format_currency(entry.payment_amount, currency),
            format_currency(entry.principal_portion, currency),
            format_currency(entry.interest_portion, currency),
            format_currency(entry.remaining_balance, currency),
        ]
        print("\t".join(row))


def print_comparison(r1: AmortizationResult, r2: AmortizationResult, currency: str = "UGX") -> None:
    """Print a comparison of two loans side by side.

    The difference column is scenario2 - scenario1, so a negative difference
    means the second scenario is cheaper or shorter.
    """
    print("Comparison")
    print("=" * 72)
    rows = [
        ("monthly_payment", r1.monthly_payment, r2.monthly_payment),
        ("total_interest", r1.total_interest, r2.total_interest),
        ("total_paid", r1.total_paid, r2.total_paid),
        ("installments", Decimal(len(r1.schedule)), Decimal(len(r2.schedule))),
    ]
    print(f"{'Metric':20s} {'Scenario1':>15s} {'Scenario2':>15s} {'Difference':>15s}")
    for key, v1, v2 in rows:
        print(f"{key:20s} {v1:>15,} {v2:>15,} {v2 - v1:>15,}")
    print(f"{'currency':20s} {currency.upper():>15s}")
    print("=" * 72)
