"""Data models for the car loan calculator.

This module defines dataclasses representing the entities the calculator
works with: the loan inputs, a prepayment plan, individual amortization
steps and the aggregate results derived from them. Inputs are frozen so a
new calculation is run whenever any field changes.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


LUMP_SUM = 0  # frequency sentinel: apply the prepayment once, in month 1


class Strategy(str, Enum):
    """What a prepayment buys.

    ``REDUCE_TENURE`` keeps the EMI fixed and shortens the payoff.
    ``REDUCE_EMI`` keeps the nominal tenure and re-amortizes the remaining
    balance, lowering the monthly payment.
    """

    REDUCE_TENURE = "reduce_tenure"
    REDUCE_EMI = "reduce_emi"


@dataclass(frozen=True)
class LoanInputs:
    """Loan terms for a single calculation.

    Attributes
    ----------
    principal: float
        Amount financed, i.e. car price less down payment.
    annual_rate_percent: float
        Nominal annual interest rate in percent (``8.5`` means 8.5 %).
    tenure_years: float
        Loan duration in years. Fractional years are allowed.
    """

    principal: float
    annual_rate_percent: float
    tenure_years: float

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate_percent / 1200

    @property
    def nominal_months(self) -> int:
        """Number of installments; a part month counts as a whole one."""
        months = self.tenure_years * 12
        if not math.isfinite(months) or months <= 0:
            return 0
        return math.ceil(round(months, 6))


@dataclass(frozen=True)
class PrepaymentPlan:
    """A recurring or one-off extra payment toward principal.

    Attributes
    ----------
    amount: float
        Amount prepaid each time the plan is due.
    frequency_months: int
        1 for monthly, 3 for quarterly, 12 for yearly, or ``LUMP_SUM`` to
        prepay once in the first month.
    strategy: Strategy
        Whether the prepayment shortens the loan or lowers the EMI.
    penalty_rate_percent: float
        Foreclosure charge levied on every prepaid unit, in percent.
    """

    amount: float
    frequency_months: int = 12
    strategy: Strategy = Strategy.REDUCE_TENURE
    penalty_rate_percent: float = 0.0

    def is_due(self, month: int) -> bool:
        """Return True if a prepayment falls in the 1-based ``month``."""
        if not self.amount > 0:
            return False
        if self.frequency_months == LUMP_SUM:
            return month == 1
        if self.frequency_months < 0:
            return False
        return month % self.frequency_months == 0


@dataclass(frozen=True)
class AmortizationStep:
    """One simulated month.

    ``principal_portion + interest_portion == emi_paid`` for every regular
    month. A month in which a prepayment alone clears the loan carries a
    zero EMI.
    """

    month: int
    emi_paid: float
    interest_portion: float
    principal_portion: float
    prepayment_applied: float
    remaining_balance: float


@dataclass(frozen=True)
class SimulationResult:
    """Aggregate figures derived from a step sequence."""

    final_tenure_months: int
    total_interest_paid: float
    total_amount_paid: float  # EMIs + prepayments + penalty
    penalty_amount: float
    interest_saved: float
    months_saved: int
    emi: float = 0.0
    final_emi: float = 0.0
    total_emi_paid: float = 0.0
    total_prepayment: float = 0.0
    net_savings: float = 0.0
    original_interest: float = 0.0
    original_total_amount: float = 0.0
    capped: bool = False  # the loop stopped at its iteration cap


@dataclass(frozen=True)
class AffordabilityVerdict:
    """Outcome of the 20/4/10 rule."""

    down_payment_ok: bool
    tenure_ok: bool
    expense_ratio_ok: bool
    overall: bool
    expense_percentage: float
    down_payment_percentage: float = 0.0
    total_monthly_cost: float = 0.0


@dataclass(frozen=True)
class CarProfile:
    """Everything a buyer enters about the car, the loan and their budget.

    Yearly figures (insurance, maintenance) and monthly figures (fuel,
    parking, income) are kept in the unit the buyer thinks in.
    """

    car_price: float
    down_payment: float
    interest_rate: float
    tenure_years: float
    processing_fee: float = 0.0
    km_per_month: float = 0.0
    fuel_cost_per_liter: float = 0.0
    monthly_fuel_expense: float = 0.0
    monthly_income: float = 0.0
    insurance_per_year: float = 0.0
    maintenance_per_year: float = 0.0
    parking_per_month: float = 0.0
    include_fuel_in_affordability: bool = False

    @property
    def loan_amount(self) -> float:
        return max(0.0, self.car_price - self.down_payment)

    def loan_inputs(self) -> LoanInputs:
        return LoanInputs(
            principal=self.loan_amount,
            annual_rate_percent=self.interest_rate,
            tenure_years=self.tenure_years,
        )


@dataclass(frozen=True)
class StepUpResult:
    """Effect of paying a higher EMI than required."""

    new_tenure_months: int
    months_reduced: int
    interest_saved: float
    additional_emi: float


@dataclass(frozen=True)
class ShorterTenureResult:
    """Effect of re-amortizing the loan over fewer months."""

    new_emi: float
    emi_increase: float
    interest_saved: float


@dataclass(frozen=True)
class LoanBreakdown:
    """Principal and interest repaid over a window of the loan."""

    principal: float
    interest: float
    total_emi: float


@dataclass(frozen=True)
class CostItem:
    """One slice of the total cost of owning the car."""

    name: str
    value: float
    percentage: float = 0.0
    description: Optional[str] = None
