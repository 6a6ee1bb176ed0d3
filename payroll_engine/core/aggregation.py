"""Roll individual payslips into a period summary report."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from payroll_engine.core.hours import compute_daily_hours, records_in_period
from payroll_engine.core.name_normalize import ALL_DEPARTMENTS, is_all, same_department
from payroll_engine.core.payslip import assemble_payslip
from payroll_engine.core.rules import PayrollRules
from payroll_engine.core.schema import (
    MONETARY_COLUMNS,
    ZERO,
    EmployeeProfile,
    PayPeriod,
    PayslipDetails,
    Position,
    ReportTotals,
    SummaryReport,
)
from payroll_engine.core.sources import AttendanceSource, EmployeeDirectory
from payroll_engine.core.time_rules import resolve_policy
from payroll_engine.core.validation import MissingDataError

logger = logging.getLogger(__name__)


def build_summary(
    period: PayPeriod,
    payslips: Iterable[PayslipDetails],
    department: str | None = None,
) -> SummaryReport:
    ordered = tuple(sorted(payslips, key=lambda slip: slip.employee_id))
    totals = {
        column: sum((getattr(slip, column) for slip in ordered), ZERO)
        for column in MONETARY_COLUMNS
    }
    return SummaryReport(
        period=period,
        department=ALL_DEPARTMENTS if is_all(department) else department.strip(),
        payslips=ordered,
        totals=ReportTotals(**totals),
        employee_count=len(ordered),
    )


def _lookup_position(directory: EmployeeDirectory, employee: EmployeeProfile) -> Position | None:
    try:
        return directory.position_for(employee.position_id)
    except MissingDataError:
        logger.info("Employee %s has no position on file", employee.employee_id)
        return None


def payslip_for_employee(
    employee: EmployeeProfile,
    period: PayPeriod,
    *,
    attendance: AttendanceSource,
    directory: EmployeeDirectory,
    rules: PayrollRules | None = None,
    position: Position | None = None,
) -> PayslipDetails | None:
    """Assemble one payslip, or ``None`` when the employee has no attendance in the period."""

    records = records_in_period(
        attendance.attendance_for(employee.employee_id, period.start_date, period.end_date),
        period,
    )
    if not records:
        return None

    policy = resolve_policy(employee.rank_classification, rules, employee_id=employee.employee_id)
    daily = [compute_daily_hours(record, policy) for record in records]

    try:
        benefits = directory.benefits_for(employee.position_id)
    except MissingDataError:
        benefits = None

    if position is None:
        position = _lookup_position(directory, employee)
    return assemble_payslip(employee, daily, benefits, period, rules, position=position)


def aggregate(
    employees: Iterable[EmployeeProfile],
    period: PayPeriod,
    department_filter: str | None = None,
    *,
    attendance: AttendanceSource,
    directory: EmployeeDirectory,
    rules: PayrollRules | None = None,
    max_workers: int | None = None,
) -> SummaryReport:
    """Build the summary report for ``period``.

    Employees outside ``department_filter`` (case-insensitive; ``None`` or
    ``"All"`` keeps everyone) and employees without attendance in the period
    are left out. ``InvalidClassificationError`` propagates to the caller.
    """

    selected: list[tuple[EmployeeProfile, Position | None]] = []
    for employee in employees:
        position = _lookup_position(directory, employee)
        if not is_all(department_filter):
            if position is None or not same_department(position.department, department_filter):
                continue
        selected.append((employee, position))

    def _assemble(item: tuple[EmployeeProfile, Position | None]) -> PayslipDetails | None:
        employee, position = item
        return payslip_for_employee(
            employee,
            period,
            attendance=attendance,
            directory=directory,
            rules=rules,
            position=position,
        )

    if max_workers and max_workers > 1 and len(selected) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(_assemble, selected))
    else:
        results = [_assemble(item) for item in selected]

    payslips = [slip for slip in results if slip is not None]
    skipped = len(results) - len(payslips)
    if skipped:
        logger.info("%s employee(s) had no attendance in period %s", skipped, period.period_id)
    return build_summary(period, payslips, department_filter)
