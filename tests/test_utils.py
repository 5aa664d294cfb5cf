from datetime import date, datetime
from decimal import Decimal

import pytest

from amortization.errors import InvalidStartDate
from amortization.utils import add_months, decimal_from_str, parse_start_date, round_whole


class TestAddMonths:
    def test_within_year(self):
        assert add_months(date(2024, 3, 10), 2) == date(2024, 5, 10)

    def test_crosses_year_end(self):
        assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)

    def test_clamps_to_last_day(self):
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_zero_months(self):
        assert add_months(date(2024, 6, 30), 0) == date(2024, 6, 30)


class TestParseStartDate:
    def test_date_passthrough(self):
        assert parse_start_date(date(2024, 1, 15)) == date(2024, 1, 15)

    def test_datetime_drops_time(self):
        assert parse_start_date(datetime(2024, 1, 15, 23, 59)) == date(2024, 1, 15)

    def test_iso_strings(self):
        assert parse_start_date("2024-01-15") == date(2024, 1, 15)
        assert parse_start_date(" 2024-07 ") == date(2024, 7, 1)

    @pytest.mark.parametrize("bad", ["2024-00", "2024-02-30", "15/01/2024", "x-y", 3.5])
    def test_invalid(self, bad):
        with pytest.raises(InvalidStartDate) as exc_info:
            parse_start_date(bad)
        assert exc_info.value.field == "start_date"


def test_round_whole_half_up():
    assert round_whole(Decimal("2.5")) == Decimal("3")
    assert round_whole(Decimal("2.49")) == Decimal("2")
    assert round_whole(Decimal("10661.85")) == Decimal("10662")


def test_round_whole_never_returns_negative_zero():
    result = round_whole(Decimal("-0.2"))
    assert str(result) == "0"
    assert not result.is_signed()


def test_decimal_from_str():
    assert decimal_from_str("1,250,000") == Decimal("1250000")
    assert decimal_from_str(" 12.5 ") == Decimal("12.5")
    with pytest.raises(ValueError):
        decimal_from_str("twelve")
    with pytest.raises(ValueError):
        decimal_from_str("NaN")
