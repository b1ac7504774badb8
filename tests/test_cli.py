"""Tests for the car-emi command-line interface."""
import csv
import json

import click
import pytest
from click.testing import CliRunner

from car_emi.main import cli, parse_amount

_LOAN = ["-p", "12L", "-d", "2.4L", "-r", "8", "-t", "3"]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.mark.parametrize(
    "text, expected",
    [("850000", 850_000), ("8.5L", 850_000), ("8.5 lakh", 850_000), ("1.2Cr", 12_000_000), ("10k", 10_000), ("2m", 2_000_000), ("12,00,000", 1_200_000)],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == pytest.approx(expected)


def test_parse_amount_rejects_garbage():
    with pytest.raises(click.BadParameter):
        parse_amount("lots")


def test_emi_command(runner):
    result = runner.invoke(cli, ["emi", *_LOAN])
    assert result.exit_code == 0, result.output
    assert "₹30,083" in result.output
    assert "₹9,60,000" in result.output
    assert "3 years" in result.output


def test_emi_command_without_loan(runner):
    result = runner.invoke(cli, ["emi", "-p", "5L", "-d", "5L", "-r", "8", "-t", "3"])
    assert result.exit_code == 0
    assert "--" in result.output


def test_schedule_prints_rows(runner):
    result = runner.invoke(cli, ["schedule", *_LOAN])
    assert result.exit_code == 0, result.output
    assert "Summary" in result.output
    lines = [line for line in result.output.splitlines() if line.startswith("36\t")]
    assert len(lines) == 1


def test_schedule_json_export(runner, tmp_path):
    path = tmp_path / "schedule.json"
    result = runner.invoke(cli, ["schedule", *_LOAN, "--prepayment", "50k", "--frequency", "yearly", "--output", str(path)])
    assert result.exit_code == 0, result.output
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["summary"]["final_tenure_months"] == len(data["schedule"])
    assert data["summary"]["final_tenure_months"] < 36
    assert data["schedule"][11]["prepayment_applied"] == 50_000


def test_schedule_csv_export(runner, tmp_path):
    path = tmp_path / "schedule.csv"
    result = runner.invoke(cli, ["schedule", *_LOAN, "--output", str(path)])
    assert result.exit_code == 0, result.output
    with path.open(encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["Month", "EMI", "Principal", "Interest", "Prepayment", "Balance"]
    assert len(rows) == 37


def test_schedule_rejects_unknown_format(runner, tmp_path):
    result = runner.invoke(cli, ["schedule", *_LOAN, "--output", str(tmp_path / "schedule.xlsx")])
    assert result.exit_code != 0


def test_prepay_command(runner):
    result = runner.invoke(cli, ["prepay", *_LOAN, "--prepayment", "1L", "--frequency", "once", "--penalty", "2"])
    assert result.exit_code == 0, result.output
    assert "Interest saved" in result.output
    assert "Prepayment penalty : ₹2,000" in result.output


def test_prepay_command_suggests_amount(runner):
    result = runner.invoke(cli, ["prepay", *_LOAN])
    assert result.exit_code == 0, result.output
    assert "using ₹19,200" in result.output


def test_compare_command(runner):
    result = runner.invoke(cli, ["compare", *_LOAN, "--prepayment", "50k"])
    assert result.exit_code == 0, result.output
    assert "ReduceTenure" in result.output
    assert "final_tenure_months" in result.output


def test_afford_command(runner):
    result = runner.invoke(cli, ["afford", *_LOAN, "--income", "4L"])
    assert result.exit_code == 0, result.output
    assert "Affordable            : Yes" in result.output


def test_afford_command_counts_insurance(runner):
    result = runner.invoke(cli, ["afford", *_LOAN, "--income", "4L", "--insurance", "1.2L"])
    assert result.exit_code == 0, result.output
    assert "Affordable            : No" in result.output


def test_afford_command_fails_long_tenure(runner):
    result = runner.invoke(cli, ["afford", "-p", "12L", "-d", "2.4L", "-r", "8", "-t", "7", "--income", "4L"])
    assert result.exit_code == 0, result.output
    assert "Affordable            : No" in result.output


def test_costs_command(runner):
    result = runner.invoke(cli, ["costs", *_LOAN, "--km-per-month", "1500", "--fuel-price", "100", "--insurance", "30k"])
    assert result.exit_code == 0, result.output
    assert "EMI x 36" in result.output
    assert "Insurance x 3" in result.output


def test_payoff_command(runner):
    result = runner.invoke(cli, ["payoff", *_LOAN])
    assert result.exit_code == 0, result.output
    assert "Step up to         : ₹37,000" in result.output
    assert "Shorter tenure     : 2 years" in result.output


def test_verbose_flag(runner):
    result = runner.invoke(cli, ["--verbose", "emi", *_LOAN])
    assert result.exit_code == 0, result.output
