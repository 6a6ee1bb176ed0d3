import logging
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from payroll_engine.core.payslip import assemble_payslip, resolve_hourly_rate
from payroll_engine.core.periods import month_period
from payroll_engine.core.rules import PayrollRules, load_rules
from payroll_engine.core.schema import BenefitSet, DailyHoursResult, EmployeeProfile, Position

RULES = PayrollRules()
PERIOD = month_period("2024-03")


def _days(count, hours="8"):
    start = date(2024, 3, 1)
    return [DailyHoursResult(date=start + timedelta(days=offset), worked_hours=Decimal(hours)) for offset in range(count)]


def test_hourly_rate_is_derived_from_monthly_salary():
    employee = EmployeeProfile(employee_id=1, rank_classification="RANK_AND_FILE", monthly_basic_salary=Decimal("35200"))
    assert employee.hourly_rate is None
    assert resolve_hourly_rate(employee, RULES) == Decimal("200.00")
    assert RULES.daily_rate(Decimal("200.00")) == Decimal("1600.00")

    explicit = EmployeeProfile(
        employee_id=2,
        rank_classification="RANK_AND_FILE",
        monthly_basic_salary=Decimal("35200"),
        hourly_rate=Decimal("150"),
    )
    assert resolve_hourly_rate(explicit, RULES) == Decimal("150")


def test_derived_hourly_rate_rounds_half_up():
    employee = EmployeeProfile(employee_id=3, rank_classification="RANK_AND_FILE", monthly_basic_salary=Decimal("22"))
    assert resolve_hourly_rate(employee, RULES) == Decimal("0.13")


def test_salary_divisors_come_from_the_rules_file(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("salary:\n  working_days_per_month: 20\n  hours_per_day: 8\n", encoding="utf-8")
    rules = load_rules(path)
    employee = EmployeeProfile(employee_id=4, rank_classification="RANK_AND_FILE", monthly_basic_salary=Decimal("32000"))

    assert resolve_hourly_rate(employee, rules) == Decimal("200.00")
    slip = assemble_payslip(employee, _days(2), BenefitSet(), PERIOD, rules)
    assert slip.hourly_rate == Decimal("200.00")
    assert slip.daily_rate == Decimal("1600.00")
    assert slip.gross_income == Decimal("3200.00")


def test_full_month_payslip():
    employee = EmployeeProfile(
        employee_id=1,
        rank_classification="RANK_AND_FILE",
        monthly_basic_salary=Decimal("35200"),
        first_name="Ana",
        last_name="Santos",
    )
    benefits = BenefitSet(
        rice_subsidy=Decimal("1500"),
        phone_allowance=Decimal("500"),
        clothing_allowance=Decimal("1000"),
    )
    position = Position(position_id=3, title="Clerk", department="Accounting")

    slip = assemble_payslip(employee, _days(22), benefits, PERIOD, RULES, position=position)

    assert slip.employee_name == "Ana Santos"
    assert slip.department == "Accounting"
    assert slip.days_worked == 22
    assert slip.gross_income == Decimal("35200.00")
    assert slip.sss == Decimal("1584.00")
    assert slip.philhealth == Decimal("968.00")
    assert slip.pagibig == Decimal("704.00")
    assert slip.withholding_tax == Decimal("8800.00")
    assert slip.total_benefits == Decimal("3000.00")
    assert slip.total_deductions == Decimal("12056.00")
    assert slip.net_pay == Decimal("26144.00")


def test_net_pay_identity_holds_after_rounding():
    employee = EmployeeProfile(
        employee_id=7,
        rank_classification="RANK_AND_FILE",
        hourly_rate=Decimal("123.457"),
    )
    benefits = BenefitSet(rice_subsidy=Decimal("333.333"), phone_allowance=Decimal("0.005"))
    slip = assemble_payslip(employee, _days(13, hours="7.3333333333"), benefits, PERIOD, RULES)

    assert slip.net_pay == slip.gross_income + slip.total_benefits - slip.total_deductions
    assert slip.total_deductions == slip.sss + slip.philhealth + slip.pagibig + slip.withholding_tax
    assert slip.total_benefits == slip.rice_subsidy + slip.phone_allowance + slip.clothing_allowance
    for amount in (slip.gross_income, slip.net_pay, slip.sss, slip.withholding_tax):
        assert amount == amount.quantize(Decimal("0.01"))


def test_missing_benefits_default_to_zero(caplog):
    employee = EmployeeProfile(employee_id=9, rank_classification="NON_RANK_AND_FILE", hourly_rate=Decimal("100"))
    with caplog.at_level(logging.WARNING):
        slip = assemble_payslip(employee, _days(2), None, PERIOD, RULES)

    assert slip.total_benefits == 0
    assert slip.gross_income == Decimal("1600.00")
    assert slip.net_pay == slip.gross_income - slip.total_deductions
    assert "benefits default to zero" in caplog.text


def test_days_without_hours_are_not_counted():
    employee = EmployeeProfile(employee_id=5, rank_classification="RANK_AND_FILE", hourly_rate=Decimal("100"))
    daily = _days(3) + [DailyHoursResult(date=date(2024, 3, 10))]
    slip = assemble_payslip(employee, daily, BenefitSet(), PERIOD, RULES)
    assert slip.days_worked == 3
    assert slip.worked_hours == Decimal("24")
