"""Total cost of owning the car.

Breaks the money spent over the loan tenure (or over the first year) into
EMI, fuel, parking, insurance and maintenance, the slices shown on the cost
distribution chart.
"""

from __future__ import annotations

import math
from typing import List

from .config import DEFAULT_KM_PER_LITER
from .data_models import CarProfile, CostItem, LoanBreakdown, LoanInputs
from .engine import emi
from .utils import finite_or_zero


def monthly_fuel_cost(
    km_per_month: float,
    fuel_cost_per_liter: float,
    monthly_fuel_expense: float = 0.0,
    km_per_liter: float = DEFAULT_KM_PER_LITER,
) -> float:
    """Estimate monthly fuel spend.

    An explicit ``monthly_fuel_expense`` wins; otherwise the spend is derived
    from distance driven, fuel price and mileage.
    """
    explicit = finite_or_zero(monthly_fuel_expense)
    if explicit > 0:
        return explicit
    km_per_month = finite_or_zero(km_per_month)
    fuel_cost_per_liter = finite_or_zero(fuel_cost_per_liter)
    if km_per_month <= 0 or fuel_cost_per_liter <= 0 or km_per_liter <= 0:
        return 0.0
    return finite_or_zero(km_per_month / km_per_liter * fuel_cost_per_liter)


def loan_breakdown(inputs: LoanInputs, one_year: bool = False) -> LoanBreakdown:
    """Principal and interest repaid over the whole tenure, or over months 1-12."""
    monthly_emi = emi(inputs.principal, inputs.annual_rate_percent, inputs.tenure_years)
    if monthly_emi <= 0:
        return LoanBreakdown(principal=0.0, interest=0.0, total_emi=0.0)

    if not one_year:
        total = monthly_emi * inputs.tenure_years * 12
        return LoanBreakdown(
            principal=float(inputs.principal),
            interest=total - inputs.principal,
            total_emi=total,
        )

    balance = float(inputs.principal)
    principal_paid = 0.0
    interest_paid = 0.0
    for _ in range(12):
        interest = balance * inputs.monthly_rate
        principal = min(monthly_emi - interest, balance)
        principal_paid += principal
        interest_paid += interest
        balance -= principal
    return LoanBreakdown(
        principal=principal_paid,
        interest=interest_paid,
        total_emi=principal_paid + interest_paid,
    )


def ownership_costs(profile: CarProfile, one_year: bool = False) -> List[CostItem]:
    """Return the cost slices for ``profile`` with their share of the total.

    Zero and non-finite slices are left out, so an empty list means there is
    nothing to chart yet.
    """
    tenure = finite_or_zero(profile.tenure_years)
    years = 1.0 if one_year else tenure
    months = int(round(years * 12))
    monthly_emi = emi(profile.loan_amount, profile.interest_rate, tenure)
    # a loan shorter than a year stops charging EMI once it is repaid
    emi_months = min(12, profile.loan_inputs().nominal_months) if one_year else months
    emi_total = monthly_emi * emi_months if one_year else monthly_emi * 12 * years
    fuel = monthly_fuel_cost(
        profile.km_per_month,
        profile.fuel_cost_per_liter,
        monthly_fuel_expense=profile.monthly_fuel_expense,
    )
    period = "per year" if one_year else f"over {tenure:g} years"

    candidates = [
        (f"EMI x {emi_months}", emi_total, f"EMI payments {period}"),
        (f"Fuel x {months}", fuel * 12 * years, f"Fuel expenses {period}"),
        (f"Parking x {months}", finite_or_zero(profile.parking_per_month) * 12 * years, f"Parking fees {period}"),
        (f"Insurance x {years:g}", finite_or_zero(profile.insurance_per_year) * years, f"Insurance {period}"),
        (f"Maintenance x {years:g}", finite_or_zero(profile.maintenance_per_year) * years, f"Maintenance {period}"),
    ]
    kept = [(name, value, desc) for name, value, desc in candidates if math.isfinite(value) and value > 0]
    total = sum(value for _, value, _ in kept)
    return [
        CostItem(name=name, value=value, percentage=value / total * 100 if total > 0 else 0.0, description=desc)
        for name, value, desc in kept
    ]
