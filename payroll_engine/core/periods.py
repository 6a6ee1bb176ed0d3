from __future__ import annotations

import calendar
import re
from datetime import date, timedelta

from payroll_engine.core.schema import PayPeriod

MONTH_LABEL = re.compile(r"^(\d{4})-(\d{2})$")


def is_month_label(value: str) -> bool:
    match = MONTH_LABEL.fullmatch(value.strip())
    return bool(match) and 1 <= int(match.group(2)) <= 12


def month_period(label: str) -> PayPeriod:
    """Whole-month period for a ``YYYY-MM`` label."""

    label = label.strip()
    if not is_month_label(label):
        raise ValueError(f"invalid month label: {label!r}")
    year, month = (int(part) for part in label.split("-"))
    last_day = calendar.monthrange(year, month)[1]
    return PayPeriod(
        period_id=label,
        start_date=date(year, month, 1),
        end_date=date(year, month, last_day),
        label=label,
    )


def contains(period: PayPeriod, day: date) -> bool:
    return period.start_date <= day <= period.end_date


def overlaps(first: PayPeriod, second: PayPeriod) -> bool:
    return not (first.end_date < second.start_date or first.start_date > second.end_date)


def total_days(period: PayPeriod) -> int:
    return (period.end_date - period.start_date).days + 1


def working_days(period: PayPeriod) -> int:
    count = 0
    current = period.start_date
    while current <= period.end_date:
        if current.weekday() < 5:
            count += 1
        current += timedelta(days=1)
    return count


def month_label(period: PayPeriod) -> str:
    return f"{period.start_date.year:04d}-{period.start_date.month:02d}"
