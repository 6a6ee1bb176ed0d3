"""Per-employee attendance statistics for a pay period."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from payroll_engine.core.hours import compute_daily_hours, records_in_period
from payroll_engine.core.periods import working_days
from payroll_engine.core.schema import ZERO, AttendanceRecord, AttendanceSummary, PayPeriod
from payroll_engine.core.time_rules import HoursPolicy, RankClassification


def _rate(numerator: int, denominator: int) -> Decimal:
    if denominator == 0:
        return ZERO
    value = Decimal(numerator) / Decimal(denominator) * Decimal(100)
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def summarize_attendance(
    employee_id: int,
    records: Iterable[AttendanceRecord],
    policy: HoursPolicy,
    period: PayPeriod,
) -> AttendanceSummary:
    """Count late and grace-period arrivals and total the period's hours.

    Effective hours subtract late hours for rank-and-file employees. A grace
    arrival is after the work start but no later than the grace cutoff.
    """

    rules = policy.rules
    rank_and_file = policy.classification is RankClassification.RANK_AND_FILE
    in_period = records_in_period(records, period)

    late_days = 0
    grace_days = 0
    total_hours = ZERO
    effective_hours = ZERO
    overtime_hours = ZERO
    late_hours = ZERO

    for record in in_period:
        result = compute_daily_hours(record, policy)
        total_hours += result.worked_hours
        overtime_hours += result.overtime_hours
        late_hours += result.late_hours
        effective = result.worked_hours
        if rank_and_file:
            effective = max(ZERO, effective - result.late_hours)
        effective_hours += effective

        if not rank_and_file or not record.has_time_in:
            continue
        if record.time_in > rules.grace_cutoff:
            late_days += 1
        elif record.time_in > rules.work_start:
            grace_days += 1

    days = len(in_period)
    return AttendanceSummary(
        employee_id=employee_id,
        period_id=period.period_id,
        rank_and_file=rank_and_file,
        total_days=days,
        late_days=late_days,
        within_grace_days=grace_days,
        total_hours=total_hours,
        effective_hours=effective_hours,
        overtime_hours=overtime_hours,
        late_hours=late_hours,
        attendance_rate=_rate(days - late_days, days),
        punctuality_rate=_rate(days - late_days + grace_days, days),
        working_days=working_days(period),
    )
