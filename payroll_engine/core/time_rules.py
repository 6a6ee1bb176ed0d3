"""Hour-calculation policies and the resolver that picks one per employee.

Rank classification is checked exactly once, here. Everything downstream
receives a ``HoursPolicy`` and stays free of classification branches.
"""

from __future__ import annotations

import unicodedata
from enum import Enum
from typing import Protocol

from payroll_engine.core.rules import PayrollRules, default_rules, hours_between
from payroll_engine.core.schema import ZERO, AttendanceRecord, DailyHoursResult
from payroll_engine.core.validation import InvalidClassificationError


class RankClassification(str, Enum):
    RANK_AND_FILE = "RANK_AND_FILE"
    NON_RANK_AND_FILE = "NON_RANK_AND_FILE"


_ALIASES = {
    "rankandfile": RankClassification.RANK_AND_FILE,
    "rnf": RankClassification.RANK_AND_FILE,
    "nonrankandfile": RankClassification.NON_RANK_AND_FILE,
    "notrankandfile": RankClassification.NON_RANK_AND_FILE,
}


def parse_classification(value: object, employee_id: int | None = None) -> RankClassification:
    if isinstance(value, RankClassification):
        return value
    if not isinstance(value, str):
        raise InvalidClassificationError(value, employee_id)
    key = unicodedata.normalize("NFKC", value).strip().lower()
    key = "".join(ch for ch in key if ch.isalnum())
    try:
        return _ALIASES[key]
    except KeyError:
        raise InvalidClassificationError(value, employee_id) from None


class HoursPolicy(Protocol):
    classification: RankClassification
    rules: PayrollRules

    def compute(self, record: AttendanceRecord) -> DailyHoursResult: ...


def _absent(record: AttendanceRecord) -> DailyHoursResult:
    return DailyHoursResult(date=record.date)


class RankAndFilePolicy:
    """Clock-time hours inside the standard work window."""

    classification = RankClassification.RANK_AND_FILE

    def __init__(self, rules: PayrollRules | None = None) -> None:
        self.rules = rules or default_rules()

    def compute(self, record: AttendanceRecord) -> DailyHoursResult:
        if not record.is_complete:
            return _absent(record)

        rules = self.rules
        effective_in = max(record.time_in, rules.work_start)
        effective_out = min(record.time_out, rules.work_end)

        span = max(ZERO, hours_between(effective_in, effective_out))
        lunch = ZERO
        if effective_in <= rules.lunch_start and effective_out >= rules.lunch_end:
            lunch = rules.lunch_hours
        worked = max(ZERO, span - lunch)

        late = ZERO
        if record.time_in > rules.grace_cutoff:
            late = hours_between(rules.work_start, record.time_in)

        early = max(ZERO, hours_between(record.time_in, rules.work_start))
        stayed = max(ZERO, hours_between(rules.work_end, record.time_out))

        return DailyHoursResult(
            date=record.date,
            worked_hours=worked,
            late_hours=max(ZERO, late),
            overtime_hours=early + stayed,
        )


class FixedDayPolicy:
    """A fixed day credit for anyone who punched in."""

    classification = RankClassification.NON_RANK_AND_FILE

    def __init__(self, rules: PayrollRules | None = None) -> None:
        self.rules = rules or default_rules()

    def compute(self, record: AttendanceRecord) -> DailyHoursResult:
        if not record.has_time_in:
            return _absent(record)
        return DailyHoursResult(date=record.date, worked_hours=self.rules.fixed_day_hours)


_POLICIES: dict[RankClassification, type] = {
    RankClassification.RANK_AND_FILE: RankAndFilePolicy,
    RankClassification.NON_RANK_AND_FILE: FixedDayPolicy,
}


def resolve_policy(
    rank_classification: object,
    rules: PayrollRules | None = None,
    *,
    employee_id: int | None = None,
) -> HoursPolicy:
    classification = parse_classification(rank_classification, employee_id)
    return _POLICIES[classification](rules)
