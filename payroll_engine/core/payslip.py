from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from payroll_engine.core.deductions import compute_deductions
from payroll_engine.core.rules import PayrollRules, default_rules
from payroll_engine.core.schema import (
    ZERO,
    BenefitSet,
    DailyHoursResult,
    EmployeeProfile,
    PayPeriod,
    PayslipDetails,
    Position,
)

logger = logging.getLogger(__name__)


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def resolve_hourly_rate(employee: EmployeeProfile, rules: PayrollRules | None = None) -> Decimal:
    """The rate on file, or one derived from the monthly salary."""

    if employee.hourly_rate is not None:
        return employee.hourly_rate
    rules = rules or default_rules()
    return rules.hourly_rate_from_monthly(employee.monthly_basic_salary)


def assemble_payslip(
    employee: EmployeeProfile,
    daily_results: Iterable[DailyHoursResult],
    benefits: BenefitSet | None,
    period: PayPeriod,
    rules: PayrollRules | None = None,
    *,
    position: Position | None = None,
) -> PayslipDetails:
    """Combine one employee's period hours, benefits and deductions.

    Gross income is always hours-derived; the monthly salary on file is only
    used to derive an hourly rate when none is recorded. Deductions come off
    gross income alone and benefits are added back to net pay.
    """

    rules = rules or default_rules()
    results = list(daily_results)
    rate = resolve_hourly_rate(employee, rules)

    days_worked = sum(1 for day in results if day.worked_hours > 0)
    worked_hours = sum((day.worked_hours for day in results), ZERO)
    late_hours = sum((day.late_hours for day in results), ZERO)
    overtime_hours = sum((day.overtime_hours for day in results), ZERO)
    gross = _quantize(sum((day.worked_hours * rate for day in results), ZERO))

    if benefits is None:
        logger.warning(
            "No benefit record for employee %s (position %s); benefits default to zero",
            employee.employee_id,
            employee.position_id,
        )
        benefits = BenefitSet()

    rice = _quantize(benefits.rice_subsidy)
    phone = _quantize(benefits.phone_allowance)
    clothing = _quantize(benefits.clothing_allowance)
    total_benefits = rice + phone + clothing

    deductions = compute_deductions(gross, rules)
    sss = _quantize(deductions.sss)
    philhealth = _quantize(deductions.philhealth)
    pagibig = _quantize(deductions.pagibig)
    tax = _quantize(deductions.withholding_tax)
    total_deductions = sss + philhealth + pagibig + tax

    return PayslipDetails(
        employee_id=employee.employee_id,
        period_id=period.period_id,
        employee_name=employee.full_name,
        rank_classification=employee.rank_classification,
        position_id=employee.position_id,
        department=position.department if position else None,
        hourly_rate=rate,
        daily_rate=rules.daily_rate(rate),
        days_worked=days_worked,
        worked_hours=worked_hours,
        late_hours=late_hours,
        overtime_hours=overtime_hours,
        gross_income=gross,
        rice_subsidy=rice,
        phone_allowance=phone,
        clothing_allowance=clothing,
        total_benefits=total_benefits,
        sss=sss,
        philhealth=philhealth,
        pagibig=pagibig,
        withholding_tax=tax,
        total_deductions=total_deductions,
        net_pay=gross + total_benefits - total_deductions,
    )
