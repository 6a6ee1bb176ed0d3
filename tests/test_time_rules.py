import sys
from datetime import date, time
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from payroll_engine.core.hours import compute_period_hours
from payroll_engine.core.periods import month_period
from payroll_engine.core.rules import PayrollRules, hours_between
from payroll_engine.core.schema import AttendanceRecord
from payroll_engine.core.time_rules import (
    FixedDayPolicy,
    RankAndFilePolicy,
    RankClassification,
    parse_classification,
    resolve_policy,
)
from payroll_engine.core.validation import InvalidClassificationError

DAY = date(2024, 3, 4)
RULES = PayrollRules()


def _record(time_in, time_out, day=DAY):
    return AttendanceRecord(employee_id=1, date=day, time_in=time_in, time_out=time_out)


def test_regular_day_subtracts_lunch():
    result = RankAndFilePolicy(RULES).compute(_record(time(8, 0), time(17, 0)))
    assert result.worked_hours == Decimal("8.00")
    assert result.late_hours == 0
    assert result.overtime_hours == 0


def test_early_arrival_and_late_departure_count_as_overtime():
    result = RankAndFilePolicy(RULES).compute(_record(time(7, 30), time(18, 0)))
    assert result.worked_hours == Decimal("8.00")
    assert result.overtime_hours == Decimal("1.5")
    assert result.late_hours == 0


def test_late_arrival_counts_from_work_start():
    result = RankAndFilePolicy(RULES).compute(_record(time(8, 30), time(17, 0)))
    assert result.late_hours == Decimal("0.5")
    assert result.worked_hours == Decimal("7.5")


def test_arrival_at_grace_cutoff_is_not_late():
    policy = RankAndFilePolicy(RULES)
    on_cutoff = policy.compute(_record(time(8, 10), time(17, 0)))
    after_cutoff = policy.compute(_record(time(8, 11), time(17, 0)))
    assert on_cutoff.late_hours == 0
    assert after_cutoff.late_hours == hours_between(time(8, 0), time(8, 11))


def test_missing_punch_yields_zero_hours_for_rank_and_file():
    policy = RankAndFilePolicy(RULES)
    for record in (_record(None, None), _record(time(8, 0), None)):
        result = policy.compute(record)
        assert result.worked_hours == 0
        assert result.late_hours == 0
        assert result.overtime_hours == 0


def test_partial_lunch_overlap_is_not_deducted():
    result = RankAndFilePolicy(RULES).compute(_record(time(12, 30), time(17, 0)))
    assert result.worked_hours == Decimal("4.5")


def test_punches_outside_window_clamp_to_zero():
    result = RankAndFilePolicy(RULES).compute(_record(time(6, 0), time(7, 0)))
    assert result.worked_hours == 0


@pytest.mark.parametrize(
    "time_in,time_out",
    [
        (time(6, 0), time(23, 0)),
        (time(8, 0), time(12, 0)),
        (time(13, 0), time(17, 0)),
        (time(9, 45), time(16, 20)),
        (time(7, 59), time(17, 1)),
    ],
)
def test_rank_and_file_hours_stay_within_the_work_window(time_in, time_out):
    result = RankAndFilePolicy(RULES).compute(_record(time_in, time_out))
    assert Decimal("0") <= result.worked_hours <= Decimal("8")
    assert result.late_hours >= 0
    assert result.overtime_hours >= 0


def test_fixed_day_only_needs_time_in():
    policy = FixedDayPolicy(RULES)
    result = policy.compute(_record(time(9, 0), None))
    assert result.worked_hours == Decimal("8.00")
    assert result.late_hours == 0
    assert result.overtime_hours == 0
    assert policy.compute(_record(None, time(17, 0))).worked_hours == 0


def test_custom_rules_move_the_window():
    rules = PayrollRules(work_start=time(9, 0), work_end=time(18, 0), grace_cutoff=time(9, 15))
    result = RankAndFilePolicy(rules).compute(_record(time(9, 10), time(18, 0)))
    assert result.late_hours == 0
    assert result.worked_hours == hours_between(time(9, 10), time(18, 0)) - Decimal("1")


def test_resolve_policy_accepts_common_spellings():
    assert isinstance(resolve_policy("RANK_AND_FILE", RULES), RankAndFilePolicy)
    assert isinstance(resolve_policy("rank-and-file", RULES), RankAndFilePolicy)
    assert isinstance(resolve_policy("Non Rank and File", RULES), FixedDayPolicy)
    assert parse_classification(" non_rank_and_file ") is RankClassification.NON_RANK_AND_FILE


@pytest.mark.parametrize("value", ["CONTRACTOR", "", None, 3])
def test_unknown_classification_is_rejected(value):
    with pytest.raises(InvalidClassificationError) as excinfo:
        resolve_policy(value, RULES, employee_id=42)
    assert excinfo.value.employee_id == 42
    assert "42" in str(excinfo.value)


def test_period_hours_keep_only_in_period_days_in_order():
    period = month_period("2024-03")
    records = [
        _record(time(8, 0), time(17, 0), day=date(2024, 3, 5)),
        _record(time(8, 0), time(17, 0), day=date(2024, 2, 29)),
        _record(time(8, 0), time(17, 0), day=date(2024, 3, 1)),
    ]
    results = compute_period_hours(records, RankAndFilePolicy(RULES), period)
    assert [item.date for item in results] == [date(2024, 3, 1), date(2024, 3, 5)]
