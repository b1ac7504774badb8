"""Tests for running costs and the cost-of-ownership breakdown."""
import pytest

from car_emi.costs import loan_breakdown, monthly_fuel_cost, ownership_costs
from car_emi.data_models import CarProfile, LoanInputs
from car_emi.engine import emi


def _make_profile(**overrides) -> CarProfile:
    defaults = dict(
        car_price=1_200_000,
        down_payment=240_000,
        interest_rate=8,
        tenure_years=3,
        km_per_month=1_500,
        fuel_cost_per_liter=100,
        parking_per_month=2_000,
        insurance_per_year=30_000,
    )
    defaults.update(overrides)
    return CarProfile(**defaults)


def test_fuel_from_distance():
    assert monthly_fuel_cost(1_500, 100) == pytest.approx(10_000)
    assert monthly_fuel_cost(1_500, 100, km_per_liter=20) == pytest.approx(7_500)


def test_explicit_fuel_expense_wins():
    assert monthly_fuel_cost(1_500, 100, monthly_fuel_expense=4_000) == 4_000


@pytest.mark.parametrize("km, price", [(0, 100), (1_500, 0), (-5, 100)])
def test_fuel_needs_distance_and_price(km, price):
    assert monthly_fuel_cost(km, price) == 0


def test_first_year_breakdown():
    inputs = LoanInputs(principal=960_000, annual_rate_percent=8, tenure_years=3)
    monthly = emi(960_000, 8, 3)
    year = loan_breakdown(inputs, one_year=True)
    assert year.total_emi == pytest.approx(monthly * 12)
    assert year.principal + year.interest == pytest.approx(year.total_emi)
    assert 0 < year.principal < 960_000
    assert year.interest > 0


def test_full_tenure_breakdown():
    inputs = LoanInputs(principal=960_000, annual_rate_percent=8, tenure_years=3)
    monthly = emi(960_000, 8, 3)
    full = loan_breakdown(inputs)
    assert full.principal == 960_000
    assert full.interest == pytest.approx(monthly * 36 - 960_000)


def test_breakdown_of_empty_loan():
    empty = loan_breakdown(LoanInputs(principal=0, annual_rate_percent=8, tenure_years=3))
    assert empty.total_emi == 0


def test_ownership_costs_shares_sum_to_100():
    items = ownership_costs(_make_profile())
    names = [item.name for item in items]
    assert names == ["EMI x 36", "Fuel x 36", "Parking x 36", "Insurance x 3"]
    assert sum(item.percentage for item in items) == pytest.approx(100)
    fuel = items[1]
    assert fuel.value == pytest.approx(10_000 * 36)


def test_ownership_costs_one_year():
    items = ownership_costs(_make_profile(), one_year=True)
    by_name = {item.name: item.value for item in items}
    assert by_name["EMI x 12"] == pytest.approx(emi(960_000, 8, 3) * 12)
    assert by_name["Insurance x 1"] == 30_000


def test_ownership_costs_skip_empty_items():
    profile = CarProfile(car_price=0, down_payment=0, interest_rate=8, tenure_years=3)
    assert ownership_costs(profile) == []


def test_ownership_costs_one_year_of_short_loan():
    """A six-month loan charges six EMIs in its first year."""
    profile = _make_profile(tenure_years=0.5)
    items = ownership_costs(profile, one_year=True)
    by_name = {item.name: item.value for item in items}
    assert by_name["EMI x 6"] == pytest.approx(emi(960_000, 8, 0.5) * 6)
    assert by_name["Fuel x 12"] == pytest.approx(10_000 * 12)
