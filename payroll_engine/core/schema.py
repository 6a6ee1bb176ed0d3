from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ZERO = Decimal("0")


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class AttendanceRecord(FrozenModel):
    employee_id: int
    date: date
    time_in: time | None = None
    time_out: time | None = None

    @property
    def has_time_in(self) -> bool:
        return self.time_in is not None

    @property
    def is_complete(self) -> bool:
        return self.time_in is not None and self.time_out is not None


class EmployeeProfile(FrozenModel):
    employee_id: int
    rank_classification: str
    position_id: int | None = None
    monthly_basic_salary: Decimal = ZERO
    hourly_rate: Decimal | None = None
    first_name: str | None = None
    last_name: str | None = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class BenefitSet(FrozenModel):
    rice_subsidy: Decimal = ZERO
    phone_allowance: Decimal = ZERO
    clothing_allowance: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.rice_subsidy + self.phone_allowance + self.clothing_allowance


class Position(FrozenModel):
    position_id: int
    title: str = ""
    department: str | None = None


class PayPeriod(FrozenModel):
    period_id: str
    start_date: date
    end_date: date
    label: str = ""

    @model_validator(mode="after")
    def _check_range(self) -> "PayPeriod":
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class DailyHoursResult(FrozenModel):
    date: date
    worked_hours: Decimal = ZERO
    late_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO


class DeductionSet(FrozenModel):
    sss: Decimal = ZERO
    philhealth: Decimal = ZERO
    pagibig: Decimal = ZERO
    withholding_tax: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.sss + self.philhealth + self.pagibig + self.withholding_tax


class PayslipDetails(FrozenModel):
    employee_id: int
    period_id: str
    employee_name: str = ""
    rank_classification: str | None = None
    position_id: int | None = None
    department: str | None = None
    hourly_rate: Decimal = ZERO
    daily_rate: Decimal = ZERO
    days_worked: int = 0
    worked_hours: Decimal = ZERO
    late_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    gross_income: Decimal = ZERO
    rice_subsidy: Decimal = ZERO
    phone_allowance: Decimal = ZERO
    clothing_allowance: Decimal = ZERO
    total_benefits: Decimal = ZERO
    sss: Decimal = ZERO
    philhealth: Decimal = ZERO
    pagibig: Decimal = ZERO
    withholding_tax: Decimal = ZERO
    total_deductions: Decimal = ZERO
    net_pay: Decimal = ZERO


MONETARY_COLUMNS = (
    "gross_income",
    "rice_subsidy",
    "phone_allowance",
    "clothing_allowance",
    "total_benefits",
    "sss",
    "philhealth",
    "pagibig",
    "withholding_tax",
    "total_deductions",
    "net_pay",
)


class ReportTotals(FrozenModel):
    gross_income: Decimal = ZERO
    rice_subsidy: Decimal = ZERO
    phone_allowance: Decimal = ZERO
    clothing_allowance: Decimal = ZERO
    total_benefits: Decimal = ZERO
    sss: Decimal = ZERO
    philhealth: Decimal = ZERO
    pagibig: Decimal = ZERO
    withholding_tax: Decimal = ZERO
    total_deductions: Decimal = ZERO
    net_pay: Decimal = ZERO


class SummaryReport(FrozenModel):
    period: PayPeriod
    department: str = "All"
    payslips: tuple[PayslipDetails, ...] = ()
    totals: ReportTotals = Field(default_factory=ReportTotals)
    employee_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.payslips


class AttendanceSummary(FrozenModel):
    employee_id: int
    period_id: str
    rank_and_file: bool
    total_days: int = 0
    late_days: int = 0
    within_grace_days: int = 0
    total_hours: Decimal = ZERO
    effective_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    late_hours: Decimal = ZERO
    attendance_rate: Decimal = ZERO
    punctuality_rate: Decimal = ZERO
    working_days: int = 0


class OvertimeEntry(FrozenModel):
    employee_id: int
    employee_name: str = ""
    department: str | None = None
    overtime_hours: Decimal = ZERO
    hourly_rate: Decimal = ZERO
    overtime_pay: Decimal = ZERO


class OvertimeReport(FrozenModel):
    period_id: str
    entries: tuple[OvertimeEntry, ...] = ()
    total_overtime_hours: Decimal = ZERO
    total_overtime_pay: Decimal = ZERO
    average_overtime_hours: Decimal = ZERO


class ComplianceReport(FrozenModel):
    period_id: str
    department: str = "All"
    total_sss: Decimal = ZERO
    total_philhealth: Decimal = ZERO
    total_pagibig: Decimal = ZERO
    total_withholding_tax: Decimal = ZERO
    total_employees: int = 0

