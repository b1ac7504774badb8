"""Tests for display formatting and the small numeric helpers behind it."""
import math
from datetime import date

import pytest

from car_emi.formatter import format_compact, format_currency, format_percentage, format_tenure, group_indian
from car_emi.utils import add_months, finite_or_zero, last_emi_date, parse_number, round_currency


@pytest.mark.parametrize(
    "number, expected",
    [(0, "0"), (999, "999"), (1_000, "1,000"), (100_000, "1,00,000"), (1_234_567, "12,34,567"), (-1_234, "-1,234")],
)
def test_group_indian(number, expected):
    assert group_indian(number) == expected


def test_format_currency():
    assert format_currency(1_234_567.5) == "₹12,34,568"
    assert format_currency(30_082.9) == "₹30,083"
    assert format_currency(-500) == "-₹500"
    assert format_currency(math.nan) == "₹0"
    assert format_currency(math.inf) == "₹0"


@pytest.mark.parametrize(
    "amount, expected",
    [(120_000, "₹1.2L"), (15_000_000, "₹1.5Cr"), (45_000, "₹45.0K"), (999, "₹999"), (math.nan, "₹0")],
)
def test_format_compact(amount, expected):
    assert format_compact(amount) == expected


@pytest.mark.parametrize(
    "months, expected",
    [(0, "0 months"), (1, "1 month"), (8, "8 months"), (12, "1 year"), (13, "1 year 1 month"), (27, "2 years 3 months")],
)
def test_format_tenure(months, expected):
    assert format_tenure(months) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(math.nan, "0.0"), (math.inf, "0.0"), (0, "0.0"), (0.5, "< 1"), (150, "> 100"), (12.345, "12.3")],
)
def test_format_percentage(value, expected):
    assert format_percentage(value) == expected


def test_round_currency_rounds_halves_up():
    assert round_currency(2.5) == 3.0
    assert round_currency(-2.5) == -3.0
    assert round_currency(2.4) == 2.0
    assert round_currency(math.nan) == 0.0


def test_finite_or_zero():
    assert finite_or_zero(4.2) == 4.2
    assert finite_or_zero(math.nan) == 0.0
    assert finite_or_zero(-math.inf) == 0.0
    assert finite_or_zero(None) == 0.0


def test_month_arithmetic():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)
    assert last_emi_date(date(2024, 1, 15), 36) == date(2027, 1, 15)


def test_parse_number():
    assert parse_number("12,34,567") == 1_234_567
    assert parse_number("₹ 5000") == 5_000
    with pytest.raises(ValueError):
        parse_number("abc")
