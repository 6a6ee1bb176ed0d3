"""Contracts the engine expects from the embedding application."""

from __future__ import annotations

from datetime import date
from typing import Protocol

from payroll_engine.core.schema import AttendanceRecord, BenefitSet, EmployeeProfile, PayPeriod, Position


class AttendanceSource(Protocol):
    def attendance_for(self, employee_id: int, start: date, end: date) -> list[AttendanceRecord]: ...


class EmployeeDirectory(Protocol):
    def list_employees(self) -> list[EmployeeProfile]: ...

    def get_employee(self, employee_id: int) -> EmployeeProfile | None: ...

    def position_for(self, position_id: int | None) -> Position:
        """Raise ``MissingDataError`` when the position is unknown."""
        ...

    def benefits_for(self, position_id: int | None) -> BenefitSet:
        """Raise ``MissingDataError`` when no benefit record exists."""
        ...


class PeriodSource(Protocol):
    def get_period(self, reference: str) -> PayPeriod:
        """Resolve by period id or ``YYYY-MM`` label; raise ``PeriodNotFoundError``."""
        ...

    def list_periods(self) -> list[PayPeriod]: ...
