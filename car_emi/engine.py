"""Core calculation engine for the car loan calculator.

This module implements the financial logic behind the calculator: the EMI
formula, a month-by-month amortization that can inject periodic or lump-sum
prepayments, and the comparison of a prepayment plan against the plain
loan. Prepayments are applied at the start of the month, before that
month's interest accrues, which is how lenders book part-prepayments.

Nothing in here raises on bad numbers. Empty or degenerate inputs (a zero
principal, rate or tenure) produce zero results so an interactive form can
call the engine on every keystroke.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from .config import BALANCE_EPSILON, MAX_PENALTY_RATE_PERCENT, SAFETY_MARGIN_MONTHS
from .data_models import (
    AmortizationStep,
    LoanInputs,
    PrepaymentPlan,
    SimulationResult,
    Strategy,
)
from .utils import all_finite, finite_or_zero, round_currency

logger = logging.getLogger(__name__)


def annuity_payment(principal: float, rate_per_month: float, months: float) -> float:
    """Return the equal monthly installment for a loan.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, the
    payment simplifies to ``P / n``.
    """
    if months <= 0:
        return 0.0
    if rate_per_month == 0:
        return finite_or_zero(principal / months)
    try:
        factor = (1 + rate_per_month) ** months
    except OverflowError:
        return 0.0
    if factor == 1:
        return finite_or_zero(principal / months)
    return finite_or_zero(principal * rate_per_month * factor / (factor - 1))


def emi(principal: float, annual_rate_percent: float, years: float) -> float:
    """Return the EMI for a loan, or 0 when the inputs are not yet usable.

    Parameters
    ----------
    principal: float
        Amount financed.
    annual_rate_percent: float
        Annual interest rate in percent.
    years: float
        Tenure in years.
    """
    if not all_finite(principal, annual_rate_percent, years):
        return 0.0
    if principal <= 0 or annual_rate_percent <= 0 or years <= 0:
        return 0.0
    return annuity_payment(principal, annual_rate_percent / 1200, years * 12)


def prepayment_penalty(total_prepayment: float, penalty_rate_percent: float) -> float:
    """Foreclosure charge on ``total_prepayment``; the rate is clamped to 0-10 %."""
    rate = min(max(finite_or_zero(penalty_rate_percent), 0.0), MAX_PENALTY_RATE_PERCENT)
    return max(0.0, finite_or_zero(total_prepayment) * rate / 100)


def _summarize(
    inputs: LoanInputs,
    plan: Optional[PrepaymentPlan],
    steps: List[AmortizationStep],
    initial_emi: float,
    final_emi: float,
    capped: bool,
) -> SimulationResult:
    total_emi = sum(s.emi_paid for s in steps)
    total_interest = sum(s.interest_portion for s in steps)
    total_prepayment = sum(s.prepayment_applied for s in steps)
    penalty = prepayment_penalty(total_prepayment, plan.penalty_rate_percent) if plan else 0.0
    final_months = len(steps)
    months_saved = max(0, inputs.nominal_months - final_months) if steps else 0
    return SimulationResult(
        final_tenure_months=final_months,
        total_interest_paid=total_interest,
        total_amount_paid=total_emi + total_prepayment + penalty,
        penalty_amount=penalty,
        interest_saved=0.0,
        months_saved=months_saved,
        emi=initial_emi,
        final_emi=final_emi,
        total_emi_paid=total_emi,
        total_prepayment=total_prepayment,
        capped=capped,
    )


def simulate(
    inputs: LoanInputs, plan: Optional[PrepaymentPlan] = None
) -> Tuple[SimulationResult, List[AmortizationStep]]:
    """Amortize a loan month by month.

    Parameters
    ----------
    inputs: LoanInputs
        Principal, rate and tenure.
    plan: PrepaymentPlan, optional
        Extra payments toward principal. Under ``Strategy.REDUCE_TENURE`` the
        EMI stays fixed and the loan ends early; under ``Strategy.REDUCE_EMI``
        the EMI is recomputed after each prepayment over the months left in
        the nominal tenure.

    Returns
    -------
    result: SimulationResult
        Unrounded totals. ``interest_saved`` is left at zero since no
        baseline is run here; see :func:`evaluate`.
    steps: List[AmortizationStep]
        One entry per month until the balance is paid off.
    """
    monthly_emi = emi(inputs.principal, inputs.annual_rate_percent, inputs.tenure_years)
    if monthly_emi <= 0:
        logger.debug("Nothing to amortize for %s", inputs)
        return _summarize(inputs, plan, [], 0.0, 0.0, capped=False), []

    rate_per_month = inputs.monthly_rate
    nominal_months = inputs.nominal_months
    max_months = nominal_months + SAFETY_MARGIN_MONTHS
    reduce_emi = plan is not None and plan.strategy == Strategy.REDUCE_EMI

    balance = float(inputs.principal)
    current_emi = monthly_emi
    steps: List[AmortizationStep] = []
    month = 0
    while balance > BALANCE_EPSILON and month < max_months:
        month += 1

        # Prepayment comes off the balance before this month's interest.
        prepayment = 0.0
        if plan is not None and plan.is_due(month):
            prepayment = min(plan.amount, balance)
            balance -= prepayment
            if balance <= BALANCE_EPSILON:
                steps.append(AmortizationStep(month, 0.0, 0.0, 0.0, prepayment, balance))
                break
            if reduce_emi:
                remaining_months = nominal_months - month + 1
                if remaining_months > 0:
                    current_emi = annuity_payment(balance, rate_per_month, remaining_months)

        interest = balance * rate_per_month
        principal_part = min(current_emi - interest, balance)
        if principal_part <= 0:
            logger.warning(
                "EMI %.2f does not cover interest %.2f in month %d; stopping early",
                current_emi,
                interest,
                month,
            )
            if prepayment > 0:
                steps.append(AmortizationStep(month, 0.0, 0.0, 0.0, prepayment, balance))
            break

        emi_paid = current_emi
        if balance <= principal_part:
            # Final month: pay exactly what is left.
            emi_paid = balance + interest
            principal_part = balance

        balance -= principal_part
        steps.append(
            AmortizationStep(
                month=month,
                emi_paid=emi_paid,
                interest_portion=interest,
                principal_portion=principal_part,
                prepayment_applied=prepayment,
                remaining_balance=balance,
            )
        )

    capped = balance > BALANCE_EPSILON and month >= max_months
    if capped:
        logger.warning(
            "Amortization stopped at the %d-month cap with %.2f outstanding",
            max_months,
            balance,
        )
    return _summarize(inputs, plan, steps, monthly_emi, current_emi, capped), steps


def evaluate(inputs: LoanInputs, plan: PrepaymentPlan) -> SimulationResult:
    """Compare a prepayment plan with the same loan without prepayments.

    Currency figures in the returned result are rounded to whole units;
    month counts are exact.
    """
    baseline, _ = simulate(inputs)
    result, _ = simulate(inputs, plan)

    interest_saved = max(0.0, baseline.total_interest_paid - result.total_interest_paid)
    net_savings = max(0.0, interest_saved - result.penalty_amount)
    logger.debug(
        "Plan %s saves %.2f interest and %d months", plan, interest_saved, result.months_saved
    )
    return replace(
        result,
        total_interest_paid=round_currency(result.total_interest_paid),
        total_amount_paid=round_currency(result.total_amount_paid),
        penalty_amount=round_currency(result.penalty_amount),
        interest_saved=round_currency(interest_saved),
        emi=round_currency(result.emi),
        final_emi=round_currency(result.final_emi),
        total_emi_paid=round_currency(result.total_emi_paid),
        total_prepayment=round_currency(result.total_prepayment),
        net_savings=round_currency(net_savings),
        original_interest=round_currency(baseline.total_interest_paid),
        original_total_amount=round_currency(baseline.total_amount_paid),
    )


def compare_strategies(
    inputs: LoanInputs,
    amount: float,
    frequency_months: int = 12,
    penalty_rate_percent: float = 0.0,
) -> Dict[Strategy, SimulationResult]:
    """Evaluate the same prepayment under each strategy."""
    return {
        strategy: evaluate(
            inputs,
            PrepaymentPlan(
                amount=amount,
                frequency_months=frequency_months,
                strategy=strategy,
                penalty_rate_percent=penalty_rate_percent,
            ),
        )
        for strategy in Strategy
    }
