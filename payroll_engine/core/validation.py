from __future__ import annotations

from decimal import Decimal

from payroll_engine.core.schema import AttendanceRecord, EmployeeProfile


class PayrollError(Exception):
    """Base class for payroll engine failures."""


class ValidationError(PayrollError):
    """Raised when an input record fails domain validation."""


class MissingDataError(PayrollError):
    """Raised when an employee has no position or benefit record."""


class InvalidClassificationError(PayrollError):
    """Raised when an employee carries an unknown rank classification."""

    def __init__(self, value: object, employee_id: int | None = None) -> None:
        self.value = value
        self.employee_id = employee_id
        subject = f"employee {employee_id}" if employee_id is not None else "employee"
        super().__init__(f"{subject} has unrecognised rank classification {value!r}")


class PeriodNotFoundError(PayrollError):
    """Raised when a pay period reference cannot be resolved."""


class EmployeeNotFoundError(PayrollError):
    """Raised when an employee id is not on the roster."""


def validate_attendance(record: AttendanceRecord) -> None:
    if record.time_out is not None and record.time_in is None:
        raise ValidationError("time_out recorded without time_in")
    if record.time_in is not None and record.time_out is not None and record.time_out < record.time_in:
        raise ValidationError("time_out cannot be before time_in")


def validate_employee(employee: EmployeeProfile) -> None:
    if employee.monthly_basic_salary < Decimal("0"):
        raise ValidationError("monthly_basic_salary cannot be negative")
    if employee.hourly_rate is not None and employee.hourly_rate < Decimal("0"):
        raise ValidationError("hourly_rate cannot be negative")