import sys
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from payroll_engine.core.deductions import compute_deductions, withholding_tax
from payroll_engine.core.rules import PayrollRules

RULES = PayrollRules()


def test_middle_bracket_taxes_the_excess():
    assert withholding_tax(Decimal("25000"), RULES) == Decimal("833.40")


def test_bracket_boundaries_belong_to_the_lower_tier():
    assert withholding_tax(Decimal("20833"), RULES) == 0
    assert withholding_tax(Decimal("20834"), RULES) == Decimal("0.20")
    assert withholding_tax(Decimal("33333"), RULES) == Decimal("2500.00")


def test_top_bracket_taxes_the_whole_gross():
    assert withholding_tax(Decimal("33334"), RULES) == Decimal("8333.50")
    assert withholding_tax(Decimal("40000"), RULES) == Decimal("10000")


def test_withholding_tax_never_decreases_with_income():
    incomes = [Decimal(value) for value in range(0, 60001, 250)]
    taxes = [withholding_tax(income, RULES) for income in incomes]
    assert taxes == sorted(taxes)


def test_contributions_are_flat_rates_of_gross():
    deductions = compute_deductions(Decimal("10000"), RULES)
    assert deductions.sss == Decimal("450")
    assert deductions.philhealth == Decimal("275")
    assert deductions.pagibig == Decimal("200")
    assert deductions.withholding_tax == 0
    assert deductions.total == Decimal("925")


@pytest.mark.parametrize("gross", [Decimal("0"), Decimal("-150.75")])
def test_zero_or_negative_gross_has_no_deductions(gross):
    deductions = compute_deductions(gross, RULES)
    assert deductions.total == 0


def test_rates_follow_the_configured_rules():
    rules = PayrollRules(sss_rate=Decimal("0.05"), tax_top_rate=Decimal("0.30"))
    deductions = compute_deductions(Decimal("40000"), rules)
    assert deductions.sss == Decimal("2000")
    assert deductions.withholding_tax == Decimal("12000")
