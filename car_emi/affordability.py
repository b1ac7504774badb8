"""The 20/4/10 affordability rule.

A car is considered affordable when the buyer puts down at least 20 % of
the price, borrows for at most 4 years, and spends no more than 10 % of
monthly income on the EMI and running costs. The expense check passes when
income is not known yet, so an incomplete form never shows "over budget".
"""

from __future__ import annotations

import logging

from .config import DOWN_PAYMENT_MIN_PERCENT, EXPENSE_MAX_PERCENT, MAX_TENURE_YEARS
from .costs import monthly_fuel_cost
from .data_models import AffordabilityVerdict, CarProfile
from .engine import emi as calculate_emi
from .utils import finite_or_zero

logger = logging.getLogger(__name__)


def check_affordability(
    car_price: float,
    down_payment: float,
    tenure_years: float,
    emi: float,
    monthly_fuel_cost: float,
    include_fuel: bool,
    monthly_income: float,
    monthly_insurance: float = 0.0,
) -> AffordabilityVerdict:
    """Apply the 20/4/10 rule.

    Parameters
    ----------
    car_price, down_payment: float
        On-road price and the amount paid upfront.
    tenure_years: float
        Loan tenure in years.
    emi: float
        Monthly installment for the financed amount.
    monthly_fuel_cost: float
        Estimated fuel spend; counted only when ``include_fuel`` is set.
    monthly_income: float
        Take-home income. Zero or negative means "not entered".
    monthly_insurance: float
        Insurance and upkeep, spread per month.
    """
    car_price = finite_or_zero(car_price)
    if car_price > 0:
        down_payment_percentage = finite_or_zero(finite_or_zero(down_payment) / car_price * 100)
    else:
        down_payment_percentage = 0.0
    down_payment_ok = car_price > 0 and down_payment_percentage >= DOWN_PAYMENT_MIN_PERCENT

    tenure_years = finite_or_zero(tenure_years)
    tenure_ok = 0 < tenure_years <= MAX_TENURE_YEARS

    total_monthly_cost = finite_or_zero(emi) + finite_or_zero(monthly_insurance)
    if include_fuel:
        total_monthly_cost += finite_or_zero(monthly_fuel_cost)

    monthly_income = finite_or_zero(monthly_income)
    if monthly_income > 0:
        expense_percentage = finite_or_zero(total_monthly_cost / monthly_income * 100)
        expense_ratio_ok = expense_percentage <= EXPENSE_MAX_PERCENT
    else:
        expense_percentage = 0.0
        expense_ratio_ok = True

    return AffordabilityVerdict(
        down_payment_ok=down_payment_ok,
        tenure_ok=tenure_ok,
        expense_ratio_ok=expense_ratio_ok,
        overall=down_payment_ok and tenure_ok and expense_ratio_ok,
        expense_percentage=expense_percentage,
        down_payment_percentage=down_payment_percentage,
        total_monthly_cost=total_monthly_cost,
    )


def assess_profile(profile: CarProfile) -> AffordabilityVerdict:
    """Derive EMI and fuel spend from ``profile`` and apply the 20/4/10 rule."""
    monthly_emi = calculate_emi(profile.loan_amount, profile.interest_rate, profile.tenure_years)
    fuel = monthly_fuel_cost(
        profile.km_per_month,
        profile.fuel_cost_per_liter,
        monthly_fuel_expense=profile.monthly_fuel_expense,
    )
    verdict = check_affordability(
        car_price=profile.car_price,
        down_payment=profile.down_payment,
        tenure_years=profile.tenure_years,
        emi=monthly_emi,
        monthly_fuel_cost=fuel,
        include_fuel=profile.include_fuel_in_affordability,
        monthly_income=profile.monthly_income,
        monthly_insurance=finite_or_zero(profile.insurance_per_year) / 12,
    )
    logger.debug("Affordability for %s: %s", profile, verdict)
    return verdict
