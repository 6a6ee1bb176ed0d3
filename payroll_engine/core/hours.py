from __future__ import annotations

from typing import Iterable

from payroll_engine.core.schema import AttendanceRecord, DailyHoursResult, PayPeriod
from payroll_engine.core.time_rules import HoursPolicy


def compute_daily_hours(record: AttendanceRecord, policy: HoursPolicy) -> DailyHoursResult:
    return policy.compute(record)


def records_in_period(records: Iterable[AttendanceRecord], period: PayPeriod) -> list[AttendanceRecord]:
    """Attendance inside ``[start_date, end_date]``, one per day, ordered by date."""

    by_date: dict = {}
    for record in records:
        if period.start_date <= record.date <= period.end_date:
            by_date[record.date] = record
    return [by_date[day] for day in sorted(by_date)]


def compute_period_hours(
    records: Iterable[AttendanceRecord],
    policy: HoursPolicy,
    period: PayPeriod,
) -> list[DailyHoursResult]:
    return [compute_daily_hours(record, policy) for record in records_in_period(records, period)]
