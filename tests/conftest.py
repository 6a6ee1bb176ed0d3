import sys
from datetime import date, time
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from payroll_engine.core.schema import AttendanceRecord, BenefitSet, EmployeeProfile, Position
from payroll_engine.infrastructure import InMemoryPayrollRepository


@pytest.fixture()
def repository():
    """Four employees across three departments; employee 2 never punches in."""

    repo = InMemoryPayrollRepository()
    standard = BenefitSet(rice_subsidy=Decimal("1500"), phone_allowance=Decimal("500"), clothing_allowance=Decimal("1000"))
    repo.upsert_position(Position(position_id=1, title="HR Manager", department="HR"), standard)
    repo.upsert_position(Position(position_id=2, title="Accountant", department="Accounting"), standard)
    repo.upsert_position(Position(position_id=3, title="Developer", department="IT"), standard)
    repo.upsert_position(Position(position_id=4, title="Bookkeeper", department="Accounting"))

    repo.upsert_employee(
        EmployeeProfile(employee_id=3, rank_classification="RANK_AND_FILE", position_id=1, hourly_rate=Decimal("200"))
    )
    repo.upsert_employee(
        EmployeeProfile(employee_id=1, rank_classification="NON_RANK_AND_FILE", position_id=2, hourly_rate=Decimal("400"))
    )
    repo.upsert_employee(
        EmployeeProfile(employee_id=2, rank_classification="RANK_AND_FILE", position_id=3, hourly_rate=Decimal("300"))
    )
    repo.upsert_employee(
        EmployeeProfile(employee_id=4, rank_classification="RANK_AND_FILE", position_id=4, hourly_rate=Decimal("100"))
    )

    punches = {
        3: (time(8, 0), time(17, 0)),
        1: (time(9, 0), None),
        4: (time(7, 30), time(18, 0)),
    }
    for employee_id, (time_in, time_out) in punches.items():
        for day in (date(2024, 3, 4), date(2024, 3, 5)):
            repo.add_attendance(AttendanceRecord(employee_id=employee_id, date=day, time_in=time_in, time_out=time_out))
    # outside March
    repo.add_attendance(AttendanceRecord(employee_id=2, date=date(2024, 2, 28), time_in=time(8, 0), time_out=time(17, 0)))
    return repo
