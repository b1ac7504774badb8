"""Command-line interface for the car loan calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can compute an EMI, print a full amortization schedule,
evaluate or compare prepayment plans, check the 20/4/10 affordability rule,
break down the cost of ownership and explore fast-payoff options. Schedules
can be exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from .affordability import assess_profile
from .costs import ownership_costs
from .data_models import LUMP_SUM, AmortizationStep, CarProfile, LoanInputs, PrepaymentPlan, Strategy
from .engine import compare_strategies, emi, evaluate, simulate
from .formatter import (
    format_currency,
    format_tenure,
    print_affordability,
    print_comparison,
    print_costs,
    print_schedule,
    print_summary,
)
from .payoff import (
    shorter_tenure,
    step_up_emi,
    suggested_prepayment,
    suggested_shorter_tenure,
    suggested_step_up,
)
from .utils import last_emi_date, parse_number

FREQUENCIES = {"monthly": 1, "quarterly": 3, "yearly": 12, "once": LUMP_SUM}

_SUFFIXES = (
    ("cr", 10_000_000.0),
    ("lakh", 100_000.0),
    ("l", 100_000.0),
    ("k", 1_000.0),
    ("m", 1_000_000.0),
)


def parse_amount(value: str) -> float:
    """Parse a numeric string with optional suffixes.

    Accepts plain numbers ("850000") and shorthand with ``k``, ``L``/``lakh``,
    ``Cr`` or ``m`` suffixes (e.g. "8.5L" meaning 850_000). Returns a float.
    """
    text = value.strip().lower()
    factor = 1.0
    for suffix, multiplier in _SUFFIXES:
        if text.endswith(suffix):
            factor = multiplier
            text = text[: -len(suffix)]
            break
    try:
        return parse_number(text) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")


def _amount(ctx, param, value: Optional[str]) -> float:
    if value is None or value == "":
        return 0.0
    return parse_amount(value)


def _loan_options(func):
    """Options shared by every command that describes a loan."""
    options = [
        click.option("--price", "-p", "price", required=True, callback=_amount, help="Car price (e.g. 12L)"),
        click.option("--down-payment", "-d", "down_payment", default="0", callback=_amount, help="Down payment amount"),
        click.option("--rate", "-r", "rate", required=True, type=float, help="Annual interest rate (percent)"),
        click.option("--tenure", "-t", "tenure", required=True, type=float, help="Loan tenure in years"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _prepayment_options(func):
    options = [
        click.option("--prepayment", "prepayment", default="0", callback=_amount, help="Amount prepaid each time"),
        click.option(
            "--frequency",
            "frequency",
            type=click.Choice(list(FREQUENCIES)),
            default="yearly",
            help="How often to prepay; 'once' prepays in the first month",
        ),
        click.option(
            "--strategy",
            "strategy",
            type=click.Choice([s.value for s in Strategy]),
            default=Strategy.REDUCE_TENURE.value,
            help="Shorten the loan or lower the EMI",
        ),
        click.option("--penalty", "penalty", type=float, default=0.0, help="Prepayment penalty rate (percent)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_inputs(price: float, down_payment: float, rate: float, tenure: float) -> LoanInputs:
    return LoanInputs(
        principal=max(0.0, price - down_payment),
        annual_rate_percent=rate,
        tenure_years=tenure,
    )


def build_plan(prepayment: float, frequency: str, strategy: str, penalty: float) -> Optional[PrepaymentPlan]:
    if prepayment <= 0:
        return None
    if penalty < 0:
        raise click.BadParameter("Penalty rate cannot be negative")
    return PrepaymentPlan(
        amount=prepayment,
        frequency_months=FREQUENCIES[frequency],
        strategy=Strategy(strategy),
        penalty_rate_percent=penalty,
    )


def _serialize_schedule(schedule: List[AmortizationStep]) -> List[Dict[str, Any]]:
    return [asdict(step) for step in schedule]


def export_to_json(path: Path, schedule: List[AmortizationStep], summary: Dict[str, Any]) -> None:
    """Export schedule and summary to a JSON file."""
    data = {"summary": summary, "schedule": _serialize_schedule(schedule)}
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule: List[AmortizationStep]) -> None:
    """Export schedule to a CSV file."""
    header = ["Month", "EMI", "Principal", "Interest", "Prepayment", "Balance"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for step in schedule:
            writer.writerow(
                [
                    step.month,
                    round(step.emi_paid, 2),
                    round(step.principal_portion, 2),
                    round(step.interest_portion, 2),
                    round(step.prepayment_applied, 2),
                    round(step.remaining_balance, 2),
                ]
            )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log calculation details")
def cli(verbose: bool) -> None:
    """Car loan EMI, prepayment and affordability calculator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command("emi")
@_loan_options
def emi_command(price: float, down_payment: float, rate: float, tenure: float) -> None:
    """Print the monthly installment and the cost of the loan."""
    inputs = build_inputs(price, down_payment, rate, tenure)
    monthly = emi(inputs.principal, rate, tenure)
    if monthly <= 0:
        click.echo("EMI                : --")
        return
    total = monthly * tenure * 12
    click.echo(f"Loan amount        : {format_currency(inputs.principal)}")
    click.echo(f"EMI                : {format_currency(monthly)}")
    click.echo(f"Total interest     : {format_currency(total - inputs.principal)}")
    click.echo(f"Total payment      : {format_currency(total)}")
    click.echo(f"Tenure             : {format_tenure(inputs.nominal_months)}")
    click.echo(f"Last EMI           : {last_emi_date(date.today(), inputs.nominal_months):%b %Y}")


@cli.command()
@_loan_options
@_prepayment_options
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(
    price: float,
    down_payment: float,
    rate: float,
    tenure: float,
    prepayment: float,
    frequency: str,
    strategy: str,
    penalty: float,
    output: Optional[str],
) -> None:
    """Compute and print the full amortization schedule."""
    inputs = build_inputs(price, down_payment, rate, tenure)
    plan = build_plan(prepayment, frequency, strategy, penalty)
    result, steps = simulate(inputs, plan)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, steps, asdict(result))
            click.echo(f"Schedule exported to {path}")
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, steps)
            click.echo(f"Schedule exported to {path}")
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
    else:
        print_summary(result, inputs.nominal_months)
        print_schedule(steps)


@cli.command()
@_loan_options
@_prepayment_options
def prepay(
    price: float,
    down_payment: float,
    rate: float,
    tenure: float,
    prepayment: float,
    frequency: str,
    strategy: str,
    penalty: float,
) -> None:
    """Show what a prepayment plan saves compared with the plain loan."""
    inputs = build_inputs(price, down_payment, rate, tenure)
    if prepayment <= 0:
        prepayment = suggested_prepayment(inputs.principal)
        click.echo(f"No prepayment given; using {format_currency(prepayment)}")
    plan = build_plan(prepayment, frequency, strategy, penalty)
    if plan is None:
        click.echo("Nothing to prepay")
        return
    print_summary(evaluate(inputs, plan), inputs.nominal_months)


@cli.command()
@_loan_options
@click.option("--prepayment", "prepayment", required=True, callback=_amount, help="Amount prepaid each time")
@click.option("--frequency", "frequency", type=click.Choice(list(FREQUENCIES)), default="yearly")
@click.option("--penalty", "penalty", type=float, default=0.0, help="Prepayment penalty rate (percent)")
def compare(
    price: float,
    down_payment: float,
    rate: float,
    tenure: float,
    prepayment: float,
    frequency: str,
    penalty: float,
) -> None:
    """Compare reducing the tenure with reducing the EMI for one prepayment plan."""
    inputs = build_inputs(price, down_payment, rate, tenure)
    print_comparison(compare_strategies(inputs, prepayment, FREQUENCIES[frequency], penalty))


@cli.command()
@_loan_options
@click.option("--income", "income", default="0", callback=_amount, help="Monthly take-home income")
@click.option("--fuel-expense", "fuel_expense", default="0", callback=_amount, help="Monthly fuel spend")
@click.option("--km-per-month", "km_per_month", type=float, default=0.0, help="Distance driven per month")
@click.option("--fuel-price", "fuel_price", type=float, default=0.0, help="Fuel price per litre")
@click.option("--include-fuel", "include_fuel", is_flag=True, help="Count fuel toward the 10% budget")
@click.option("--insurance", "insurance", default="0", callback=_amount, help="Insurance per year")
def afford(
    price: float,
    down_payment: float,
    rate: float,
    tenure: float,
    income: float,
    fuel_expense: float,
    km_per_month: float,
    fuel_price: float,
    include_fuel: bool,
    insurance: float,
) -> None:
    """Check the purchase against the 20/4/10 rule."""
    profile = CarProfile(
        car_price=price,
        down_payment=down_payment,
        interest_rate=rate,
        tenure_years=tenure,
        km_per_month=km_per_month,
        fuel_cost_per_liter=fuel_price,
        monthly_fuel_expense=fuel_expense,
        monthly_income=income,
        insurance_per_year=insurance,
        include_fuel_in_affordability=include_fuel,
    )
    print_affordability(assess_profile(profile))


@cli.command()
@_loan_options
@click.option("--fuel-expense", "fuel_expense", default="0", callback=_amount, help="Monthly fuel spend")
@click.option("--km-per-month", "km_per_month", type=float, default=0.0, help="Distance driven per month")
@click.option("--fuel-price", "fuel_price", type=float, default=0.0, help="Fuel price per litre")
@click.option("--insurance", "insurance", default="0", callback=_amount, help="Insurance per year")
@click.option("--maintenance", "maintenance", default="0", callback=_amount, help="Maintenance per year")
@click.option("--parking", "parking", default="0", callback=_amount, help="Parking per month")
@click.option("--one-year", "one_year", is_flag=True, help="Show the first year instead of the whole tenure")
def costs(
    price: float,
    down_payment: float,
    rate: float,
    tenure: float,
    fuel_expense: float,
    km_per_month: float,
    fuel_price: float,
    insurance: float,
    maintenance: float,
    parking: float,
    one_year: bool,
) -> None:
    """Break down the cost of owning the car."""
    profile = CarProfile(
        car_price=price,
        down_payment=down_payment,
        interest_rate=rate,
        tenure_years=tenure,
        km_per_month=km_per_month,
        fuel_cost_per_liter=fuel_price,
        monthly_fuel_expense=fuel_expense,
        insurance_per_year=insurance,
        maintenance_per_year=maintenance,
        parking_per_month=parking,
    )
    print_costs(ownership_costs(profile, one_year=one_year))


@cli.command()
@_loan_options
@click.option("--new-emi", "new_emi", default=None, callback=_amount, help="Monthly payment you could afford")
@click.option("--new-tenure", "new_tenure", type=int, default=None, help="Shorter tenure in months")
def payoff(
    price: float,
    down_payment: float,
    rate: float,
    tenure: float,
    new_emi: float,
    new_tenure: Optional[int],
) -> None:
    """Explore paying a higher EMI or choosing a shorter tenure."""
    inputs = build_inputs(price, down_payment, rate, tenure)
    current = emi(inputs.principal, rate, tenure)
    if current <= 0:
        click.echo("EMI                : --")
        return
    if new_emi <= 0:
        new_emi = suggested_step_up(current)
    if new_tenure is None:
        new_tenure = suggested_shorter_tenure(inputs.nominal_months)

    step_up = step_up_emi(inputs, new_emi)
    shorter = shorter_tenure(inputs, new_tenure)
    click.echo(f"Current EMI        : {format_currency(current)}")
    click.echo(f"Step up to         : {format_currency(new_emi)} (+{format_currency(step_up.additional_emi)})")
    click.echo(f"  paid off in      : {format_tenure(step_up.new_tenure_months)}")
    click.echo(f"  interest saved   : {format_currency(step_up.interest_saved)}")
    click.echo(f"Shorter tenure     : {format_tenure(new_tenure)}")
    click.echo(f"  new EMI          : {format_currency(shorter.new_emi)} (+{format_currency(shorter.emi_increase)})")
    click.echo(f"  interest saved   : {format_currency(shorter.interest_saved)}")


if __name__ == "__main__":
    cli()
