"""Secondary reports derived from a summary report."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from payroll_engine.core.rules import PayrollRules, default_rules
from payroll_engine.core.schema import (
    ZERO,
    ComplianceReport,
    OvertimeEntry,
    OvertimeReport,
    SummaryReport,
)
from payroll_engine.core.time_rules import RankClassification, parse_classification
from payroll_engine.core.validation import InvalidClassificationError


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _is_rank_and_file(value: str | None) -> bool:
    try:
        return parse_classification(value) is RankClassification.RANK_AND_FILE
    except InvalidClassificationError:
        return False


def overtime_report(report: SummaryReport, rules: PayrollRules | None = None) -> OvertimeReport:
    """Rank-and-file employees with overtime, largest first.

    Overtime pay is informational and is not part of gross income.
    """

    rules = rules or default_rules()
    entries: list[OvertimeEntry] = []
    for slip in report.payslips:
        if slip.overtime_hours <= 0 or not _is_rank_and_file(slip.rank_classification):
            continue
        entries.append(
            OvertimeEntry(
                employee_id=slip.employee_id,
                employee_name=slip.employee_name,
                department=slip.department,
                overtime_hours=slip.overtime_hours,
                hourly_rate=slip.hourly_rate,
                overtime_pay=_quantize(slip.overtime_hours * slip.hourly_rate * rules.overtime_multiplier),
            )
        )
    entries.sort(key=lambda entry: (-entry.overtime_hours, entry.employee_id))

    total_hours = sum((entry.overtime_hours for entry in entries), ZERO)
    total_pay = sum((entry.overtime_pay for entry in entries), ZERO)
    average = _quantize(total_hours / Decimal(len(entries))) if entries else ZERO
    return OvertimeReport(
        period_id=report.period.period_id,
        entries=tuple(entries),
        total_overtime_hours=total_hours,
        total_overtime_pay=total_pay,
        average_overtime_hours=average,
    )


def compliance_report(report: SummaryReport) -> ComplianceReport:
    totals = report.totals
    return ComplianceReport(
        period_id=report.period.period_id,
        department=report.department,
        total_sss=totals.sss,
        total_philhealth=totals.philhealth,
        total_pagibig=totals.pagibig,
        total_withholding_tax=totals.withholding_tax,
        total_employees=report.employee_count,
    )
