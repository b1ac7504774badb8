"""Fast-payoff alternatives to a regular loan.

Two levers besides prepayment shorten a loan: paying more than the EMI every
month (step-up) or re-amortizing over fewer months. Both are evaluated in
closed form, with the number of payments given by the NPER formula:

    n = ln(A / (A - r * P)) / ln(1 + r)

for payment ``A``, monthly rate ``r`` and balance ``P``.
"""

from __future__ import annotations

import math
from typing import Optional

from .config import STEP_UP_FACTOR, STEP_UP_ROUNDING, SUGGESTED_PREPAYMENT_SHARE
from .data_models import LoanInputs, ShorterTenureResult, StepUpResult
from .engine import annuity_payment, emi
from .utils import all_finite, finite_or_zero, round_currency


def months_to_payoff(balance: float, payment: float, monthly_rate: float) -> Optional[int]:
    """Return the number of payments of ``payment`` needed to clear ``balance``.

    Returns ``None`` when the payment never clears the balance (it does not
    even cover the first month's interest).
    """
    if not all_finite(balance, payment, monthly_rate):
        return None
    if not balance > 0:
        return 0
    if not payment > 0:
        return None
    if monthly_rate <= 0:
        return math.ceil(round(balance / payment, 6))
    interest = balance * monthly_rate
    if payment <= interest:
        return None
    n = math.log(payment / (payment - interest)) / math.log(1 + monthly_rate)
    if not math.isfinite(n):
        return None
    return math.ceil(round(n, 6))


def total_interest(balance: float, payment: float, monthly_rate: float, months: int) -> float:
    """Interest paid when ``balance`` is repaid by ``months`` payments of ``payment``.

    The last payment is trimmed to whatever is left, so this is exact rather
    than ``payment * months - balance``.
    """
    if months <= 0 or not balance > 0:
        return 0.0
    growth = (1 + monthly_rate) ** (months - 1)
    if monthly_rate:
        outstanding = balance * growth - payment * (growth - 1) / monthly_rate
    else:
        outstanding = balance - payment * (months - 1)
    last_payment = max(0.0, outstanding) * (1 + monthly_rate)
    return finite_or_zero(payment * (months - 1) + last_payment - balance)


def step_up_emi(inputs: LoanInputs, new_emi: float) -> StepUpResult:
    """Evaluate paying ``new_emi`` every month instead of the required EMI."""
    current = emi(inputs.principal, inputs.annual_rate_percent, inputs.tenure_years)
    nominal = inputs.nominal_months
    new_emi = finite_or_zero(new_emi)
    if current <= 0 or not new_emi > current:
        return StepUpResult(new_tenure_months=nominal, months_reduced=0, interest_saved=0.0, additional_emi=0.0)

    rate = inputs.monthly_rate
    new_months = months_to_payoff(inputs.principal, new_emi, rate)
    if new_months is None:
        return StepUpResult(new_tenure_months=nominal, months_reduced=0, interest_saved=0.0, additional_emi=0.0)

    original_interest = total_interest(inputs.principal, current, rate, nominal)
    new_interest = total_interest(inputs.principal, new_emi, rate, new_months)
    return StepUpResult(
        new_tenure_months=new_months,
        months_reduced=max(0, nominal - new_months),
        interest_saved=round_currency(max(0.0, original_interest - new_interest)),
        additional_emi=round_currency(new_emi - current),
    )


def shorter_tenure(inputs: LoanInputs, new_months: int) -> ShorterTenureResult:
    """Evaluate re-amortizing the loan over ``new_months`` instead of the nominal tenure."""
    current = emi(inputs.principal, inputs.annual_rate_percent, inputs.tenure_years)
    nominal = inputs.nominal_months
    if current <= 0 or new_months <= 0 or new_months >= nominal:
        return ShorterTenureResult(new_emi=round_currency(current), emi_increase=0.0, interest_saved=0.0)

    rate = inputs.monthly_rate
    new_emi = annuity_payment(inputs.principal, rate, new_months)
    original_interest = total_interest(inputs.principal, current, rate, nominal)
    new_interest = total_interest(inputs.principal, new_emi, rate, new_months)
    return ShorterTenureResult(
        new_emi=round_currency(new_emi),
        emi_increase=round_currency(new_emi - current),
        interest_saved=round_currency(max(0.0, original_interest - new_interest)),
    )


def suggested_step_up(current_emi: float) -> float:
    """A starting point for the step-up slider: 20 % more, rounded up to the next 1000."""
    current_emi = finite_or_zero(current_emi)
    if current_emi <= 0:
        return 0.0
    return float(math.ceil(current_emi * STEP_UP_FACTOR / STEP_UP_ROUNDING) * STEP_UP_ROUNDING)


def suggested_shorter_tenure(nominal_months: int) -> int:
    # one year shorter, never below six months
    return max(6, nominal_months - 12)


def suggested_prepayment(principal: float) -> float:
    return round_currency(max(0.0, finite_or_zero(principal)) * SUGGESTED_PREPAYMENT_SHARE)
