"""Infrastructure layer for payroll data persistence."""
from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Protocol

from payroll_engine.core.periods import is_month_label, month_period
from payroll_engine.core.schema import AttendanceRecord, BenefitSet, EmployeeProfile, PayPeriod, Position
from payroll_engine.core.validation import MissingDataError, PeriodNotFoundError
from payroll_engine.domain import IngestJob, PayrollDataset


class PayrollRepository(Protocol):
    """Persistence contract for the data the engine reads."""

    def upsert_employee(self, employee: EmployeeProfile) -> None: ...

    def list_employees(self) -> list[EmployeeProfile]: ...

    def get_employee(self, employee_id: int) -> EmployeeProfile | None: ...

    def upsert_position(self, position: Position, benefits: BenefitSet | None = None) -> None: ...

    def position_for(self, position_id: int | None) -> Position: ...

    def benefits_for(self, position_id: int | None) -> BenefitSet: ...

    def list_positions(self) -> list[Position]: ...

    def add_attendance(self, record: AttendanceRecord) -> None: ...

    def attendance_for(self, employee_id: int, start: date, end: date) -> list[AttendanceRecord]: ...

    def add_period(self, period: PayPeriod) -> None: ...

    def get_period(self, reference: str) -> PayPeriod: ...

    def list_periods(self) -> list[PayPeriod]: ...

    def next_job_id(self) -> str: ...

    def register_job(self, job_id: str, filename: str) -> None: ...

    def update_job(self, job_id: str, status: str, *, kind: str | None = None, rows: int = 0, error: str | None = None) -> None: ...

    def list_jobs(self) -> list[dict[str, object]]: ...

    def reset(self) -> None: ...


class InMemoryPayrollRepository:
    """Simple in-memory repository for fast iteration and tests."""

    def __init__(self) -> None:
        self._dataset = PayrollDataset()
        self._job_counter = 0

    # ------------------------------------------------------------------
    # employees & positions
    # ------------------------------------------------------------------
    def upsert_employee(self, employee: EmployeeProfile) -> None:
        self._dataset.employees[employee.employee_id] = employee

    def list_employees(self) -> list[EmployeeProfile]:
        return [self._dataset.employees[key] for key in sorted(self._dataset.employees)]

    def get_employee(self, employee_id: int) -> EmployeeProfile | None:
        return self._dataset.employees.get(employee_id)

    def upsert_position(self, position: Position, benefits: BenefitSet | None = None) -> None:
        self._dataset.positions[position.position_id] = position
        if benefits is not None:
            self._dataset.benefits[position.position_id] = benefits

    def position_for(self, position_id: int | None) -> Position:
        position = self._dataset.positions.get(position_id) if position_id is not None else None
        if position is None:
            raise MissingDataError(f"no position record for position {position_id}")
        return position

    def benefits_for(self, position_id: int | None) -> BenefitSet:
        benefits = self._dataset.benefits.get(position_id) if position_id is not None else None
        if benefits is None:
            raise MissingDataError(f"no benefit record for position {position_id}")
        return benefits

    def list_positions(self) -> list[Position]:
        return [self._dataset.positions[key] for key in sorted(self._dataset.positions)]

    # ------------------------------------------------------------------
    # attendance
    # ------------------------------------------------------------------
    def add_attendance(self, record: AttendanceRecord) -> None:
        self._dataset.attendance.setdefault(record.employee_id, {})[record.date] = record

    def attendance_for(self, employee_id: int, start: date, end: date) -> list[AttendanceRecord]:
        by_date = self._dataset.attendance.get(employee_id, {})
        return [by_date[day] for day in sorted(by_date) if start <= day <= end]

    # ------------------------------------------------------------------
    # pay periods
    # ------------------------------------------------------------------
    def add_period(self, period: PayPeriod) -> None:
        self._dataset.periods[period.period_id] = period

    def get_period(self, reference: str) -> PayPeriod:
        reference = str(reference or "").strip()
        if not reference:
            raise PeriodNotFoundError("a pay period reference is required")
        period = self._dataset.periods.get(reference)
        if period is not None:
            return period
        for candidate in self._dataset.periods.values():
            if candidate.label and candidate.label == reference:
                return candidate
        if is_month_label(reference):
            return month_period(reference)
        raise PeriodNotFoundError(f"unknown pay period {reference!r}")

    def list_periods(self) -> list[PayPeriod]:
        return sorted(self._dataset.periods.values(), key=lambda period: period.start_date)

    # ------------------------------------------------------------------
    # ingest jobs
    # ------------------------------------------------------------------
    def next_job_id(self) -> str:
        self._job_counter += 1
        return f"job-{self._job_counter:05d}"

    def register_job(self, job_id: str, filename: str) -> None:
        self._dataset.jobs.append(IngestJob(job_id=job_id, filename=filename, status="queued"))

    def update_job(
        self,
        job_id: str,
        status: str,
        *,
        kind: str | None = None,
        rows: int = 0,
        error: str | None = None,
    ) -> None:
        for job in self._dataset.jobs:
            if job.job_id == job_id:
                job.status = status
                job.kind = kind or job.kind
                job.rows = rows or job.rows
                job.error = error
                break

    def list_jobs(self) -> list[dict[str, object]]:
        return [asdict(job) for job in self._dataset.jobs]

    def reset(self) -> None:
        self._dataset = PayrollDataset()
        self._job_counter = 0
