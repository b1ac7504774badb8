"""Output helpers for the car loan calculator.

This module turns the engine's plain numbers into display strings (rupees
with Indian digit grouping, compact lakh/crore amounts, tenures in years and
months) and renders summaries and schedules as text tables. Every formatter
accepts NaN or infinity and shows a neutral value instead.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List

from .data_models import AffordabilityVerdict, AmortizationStep, CostItem, SimulationResult, Strategy
from .utils import finite_or_zero, round_currency

RUPEE = "₹"
LAKH = 100_000
CRORE = 10_000_000


def group_indian(number: int) -> str:
    """Group digits the Indian way: 1234567 -> "12,34,567"."""
    digits = str(abs(number))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups: List[str] = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"-{digits}" if number < 0 else digits


def format_currency(amount: float) -> str:
    value = int(round_currency(amount))
    if value < 0:
        return f"-{RUPEE}{group_indian(-value)}"
    return f"{RUPEE}{group_indian(value)}"


def format_compact(amount: float) -> str:
    """Short form for chart labels and sliders: "₹1.2L", "₹1.5Cr", "₹45.0K"."""
    value = finite_or_zero(amount)
    sign = "-" if value < 0 else ""
    value = abs(value)
    if value >= CRORE:
        return f"{sign}{RUPEE}{value / CRORE:.1f}Cr"
    if value >= LAKH:
        return f"{sign}{RUPEE}{value / LAKH:.1f}L"
    if value >= 1000:
        return f"{sign}{RUPEE}{value / 1000:.1f}K"
    return f"{sign}{RUPEE}{int(round_currency(value))}"


def format_tenure(months: int) -> str:
    """Render a month count as "8 months", "1 year" or "2 years 3 months"."""
    months = int(max(0, finite_or_zero(months)))
    if months < 12:
        return f"{months} month{'' if months == 1 else 's'}"
    years, rest = divmod(months, 12)
    text = f"{years} year{'' if years == 1 else 's'}"
    if rest:
        text += f" {rest} month{'' if rest == 1 else 's'}"
    return text


def format_percentage(value: float) -> str:
    if not math.isfinite(value):
        return "0.0"
    if 0 < value < 1:
        return "< 1"
    if value > 100:
        return "> 100"
    return f"{value:.1f}"


def print_summary(result: SimulationResult, nominal_months: int) -> None:
    """Print loan metrics in a human-readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Monthly EMI        : {format_currency(result.emi)}")
    if result.final_emi and round_currency(result.final_emi) != round_currency(result.emi):
        print(f"EMI after prepay   : {format_currency(result.final_emi)}")
    print(f"Total interest     : {format_currency(result.total_interest_paid)}")
    if result.total_prepayment:
        print(f"Total prepayment   : {format_currency(result.total_prepayment)}")
    if result.penalty_amount:
        print(f"Prepayment penalty : {format_currency(result.penalty_amount)}")
    print(f"Total amount paid  : {format_currency(result.total_amount_paid)}")
    print(f"Nominal tenure     : {format_tenure(nominal_months)}")
    print(f"Actual tenure      : {format_tenure(result.final_tenure_months)}")
    if result.original_interest:
        print(f"Baseline interest  : {format_currency(result.original_interest)}")
        print(f"Interest saved     : {format_currency(result.interest_saved)}")
        print(f"Net savings        : {format_currency(result.net_savings)}")
    if result.months_saved:
        print(f"Tenure reduction   : {format_tenure(result.months_saved)}")
    if result.capped:
        print("Warning            : schedule stopped before the loan was repaid")
    print("-" * 72)


def print_schedule(schedule: Iterable[AmortizationStep]) -> None:
    """Print the amortization schedule as a simple table."""
    headers = ["Month", "EMI", "Principal", "Interest", "Prepay", "Balance"]
    print("\t".join(headers))
    for step in schedule:
        row = [
            str(step.month),
            f"{step.emi_paid:.2f}",
            f"{step.principal_portion:.2f}",
            f"{step.interest_portion:.2f}",
            f"{step.prepayment_applied:.2f}",
            f"{step.remaining_balance:.2f}",
        ]
        print("\t".join(row))


def print_comparison(results: Dict[Strategy, SimulationResult]) -> None:
    """Print prepayment strategies side by side.

    The last column is the difference (reduce EMI minus reduce tenure); a
    negative value means reducing the EMI is cheaper or shorter.
    """
    tenure = results[Strategy.REDUCE_TENURE]
    lower_emi = results[Strategy.REDUCE_EMI]
    print("Comparison")
    print("=" * 72)
    keys = [
        "final_emi",
        "total_interest_paid",
        "total_amount_paid",
        "interest_saved",
        "net_savings",
        "final_tenure_months",
    ]
    print(f"{'Metric':20s} {'ReduceTenure':>15s} {'ReduceEMI':>15s} {'Difference':>15s}")
    for key in keys:
        v1 = getattr(tenure, key)
        v2 = getattr(lower_emi, key)
        diff = v2 - v1
        print(f"{key:20s} {v1:15.2f} {v2:15.2f} {diff:15.2f}")
    print("=" * 72)


def print_affordability(verdict: AffordabilityVerdict) -> None:
    def mark(ok: bool) -> str:
        return "OK" if ok else "FAIL"

    print("20/4/10 check")
    print("-" * 72)
    print(f"Down payment >= 20%   : {format_percentage(verdict.down_payment_percentage)}% {mark(verdict.down_payment_ok)}")
    print(f"Tenure <= 4 years     : {mark(verdict.tenure_ok)}")
    print(f"Car costs <= 10%      : {format_percentage(verdict.expense_percentage)}% {mark(verdict.expense_ratio_ok)}")
    print(f"Monthly car cost      : {format_currency(verdict.total_monthly_cost)}")
    print(f"Affordable            : {'Yes' if verdict.overall else 'No'}")
    print("-" * 72)


def print_costs(items: List[CostItem]) -> None:
    if not items:
        print("No costs to show")
        return
    print(f"{'Item':20s} {'Amount':>15s} {'Share':>8s}")
    for item in items:
        print(f"{item.name:20s} {format_compact(item.value):>15s} {format_percentage(item.percentage):>7s}%")
    total = sum(item.value for item in items)
    print(f"{'Total':20s} {format_currency(total):>15s}")
