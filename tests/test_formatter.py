from decimal import Decimal

import pytest

from amortization.data_models import LoanTerms
from amortization.engine import amortize
from amortization.formatter import format_currency, print_comparison, print_schedule, print_summary


@pytest.mark.parametrize(
    "amount,currency,expected",
    [
        (Decimal("1500"), "KES", "KSh 1,500"),
        (Decimal("10662"), "UGX", "UGX 10,662"),
        (Decimal("1234.5"), "usd", "$ 1,235"),
        (Decimal("2500000"), "NGN", "₦ 2,500,000"),
        (Decimal("0"), "EUR", "€ 0"),
        (10, "xyz", "XYZ 10"),
        (Decimal("-0.3"), "UGX", "UGX 0"),
    ],
)
def test_format_currency(amount, currency, expected):
    assert format_currency(amount, currency) == expected


def test_print_summary(capsys, canonical_terms, start_date):
    print_summary(amortize(canonical_terms, start_date), "UGX")
    out = capsys.readouterr().out
    assert "Monthly payment    : UGX 10,662" in out
    assert "Total interest     : UGX 7,944" in out
    assert "Installments       : 12" in out
    assert "Final due date     : 2025-01-15" in out


def test_print_schedule(capsys, canonical_terms, start_date):
    print_schedule(amortize(canonical_terms, start_date).schedule[:2], "KES")
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split("\t") == ["Month", "Due", "Payment", "Principal", "Interest", "Balance"]
    assert lines[1].split("\t") == ["1", "2024-02-15", "KSh 10,662", "KSh 9,462", "KSh 1,200", "KSh 110,538"]
    assert len(lines) == 3


def test_print_comparison(capsys, canonical_terms, start_date):
    cheaper = amortize(canonical_terms, start_date)
    pricier = amortize(LoanTerms(120000, 24, 12), start_date)
    print_comparison(cheaper, pricier)
    out = capsys.readouterr().out
    assert out.startswith("Comparison")
    assert "monthly_payment" in out
    assert "installments" in out
