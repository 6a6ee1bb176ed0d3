"""Application service layer for payroll use cases."""
from __future__ import annotations

import logging
import os
from typing import Any, Iterable

from pydantic import ValidationError as SchemaError

from payroll_engine.core.aggregation import aggregate, payslip_for_employee
from payroll_engine.core.attendance_summary import summarize_attendance
from payroll_engine.core.name_normalize import ALL_DEPARTMENTS, normalize
from payroll_engine.core.periods import overlaps
from payroll_engine.core.reports import compliance_report, overtime_report
from payroll_engine.core.rules import PayrollRules, default_rules
from payroll_engine.core.schema import (
    AttendanceRecord,
    AttendanceSummary,
    BenefitSet,
    ComplianceReport,
    EmployeeProfile,
    OvertimeReport,
    PayPeriod,
    PayslipDetails,
    Position,
    SummaryReport,
)
from payroll_engine.core.time_rules import resolve_policy
from payroll_engine.core.validation import (
    EmployeeNotFoundError,
    ValidationError,
    validate_attendance,
    validate_employee,
)
from payroll_engine.extractors.roster_sheet import RosterParseResult
from payroll_engine.infrastructure import InMemoryPayrollRepository, PayrollRepository

logger = logging.getLogger(__name__)


def _worker_count() -> int:
    raw = os.getenv("PAYROLL_WORKERS", "0") or "0"
    try:
        return max(0, int(raw))
    except ValueError:
        logger.warning("Ignoring invalid PAYROLL_WORKERS value %r", raw)
        return 0


class PayrollService:
    """Coordinates payroll use cases over a repository."""

    def __init__(self, repository: PayrollRepository, rules: PayrollRules | None = None) -> None:
        self._repository = repository
        self._rules = rules

    @property
    def rules(self) -> PayrollRules:
        return self._rules or default_rules()

    # ------------------------------------------------------------------
    # master data
    # ------------------------------------------------------------------
    def upsert_employee(self, employee: EmployeeProfile) -> None:
        validate_employee(employee)
        self._repository.upsert_employee(employee)

    def upsert_position(self, position: Position, benefits: BenefitSet | None = None) -> None:
        self._repository.upsert_position(position, benefits)

    def list_employees(self) -> list[EmployeeProfile]:
        return self._repository.list_employees()

    def get_employee(self, employee_id: int) -> EmployeeProfile:
        employee = self._repository.get_employee(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(f"unknown employee {employee_id}")
        return employee

    def list_departments(self) -> list[str]:
        seen: dict[str, str] = {}
        for position in self._repository.list_positions():
            name = (position.department or "").strip()
            if name and normalize(name) != normalize(ALL_DEPARTMENTS):
                seen.setdefault(normalize(name), name)
        return [ALL_DEPARTMENTS, *sorted(seen.values())]

    def load_roster(self, result: RosterParseResult) -> int:
        """Store parsed positions and employees; returns the number of employees loaded."""

        for row in result.positions:
            position = Position(
                position_id=row["position_id"],
                title=row.get("title") or "",
                department=row.get("department"),
            )
            benefits = BenefitSet(**row["benefits"]) if row.get("benefits") else None
            self.upsert_position(position, benefits)

        loaded = 0
        for row in result.employees:
            try:
                employee = EmployeeProfile(**row)
                self.upsert_employee(employee)
            except (SchemaError, ValidationError) as exc:
                logger.warning("Skipping roster row for employee %s: %s", row.get("employee_id"), exc)
                continue
            loaded += 1
        return loaded

    # ------------------------------------------------------------------
    # attendance
    # ------------------------------------------------------------------
    def add_attendance(self, record: AttendanceRecord) -> None:
        validate_attendance(record)
        self._repository.add_attendance(record)

    def load_attendance(self, rows: Iterable[dict[str, Any]]) -> int:
        loaded = 0
        for row in rows:
            try:
                self.add_attendance(AttendanceRecord(**row))
            except (SchemaError, ValidationError) as exc:
                logger.warning(
                    "Skipping attendance for employee %s on %s: %s",
                    row.get("employee_id"),
                    row.get("date"),
                    exc,
                )
                continue
            loaded += 1
        return loaded

    # ------------------------------------------------------------------
    # pay periods
    # ------------------------------------------------------------------
    def add_period(self, period: PayPeriod) -> None:
        for existing in self._repository.list_periods():
            if existing.period_id != period.period_id and overlaps(existing, period):
                logger.info("Pay period %s overlaps %s", period.period_id, existing.period_id)
        self._repository.add_period(period)

    def get_period(self, reference: str) -> PayPeriod:
        return self._repository.get_period(reference)

    def list_periods(self) -> list[PayPeriod]:
        return self._repository.list_periods()

    # ------------------------------------------------------------------
    # reports
    # ------------------------------------------------------------------
    def summary(self, period_ref: str, department: str | None = None) -> SummaryReport:
        period = self.get_period(period_ref)
        return aggregate(
            self._repository.list_employees(),
            period,
            department,
            attendance=self._repository,
            directory=self._repository,
            rules=self.rules,
            max_workers=_worker_count(),
        )

    def payslip(self, employee_id: int, period_ref: str) -> PayslipDetails | None:
        employee = self.get_employee(employee_id)
        period = self.get_period(period_ref)
        return payslip_for_employee(
            employee,
            period,
            attendance=self._repository,
            directory=self._repository,
            rules=self.rules,
        )

    def attendance_summary(self, employee_id: int, period_ref: str) -> AttendanceSummary:
        employee = self.get_employee(employee_id)
        period = self.get_period(period_ref)
        policy = resolve_policy(employee.rank_classification, self.rules, employee_id=employee_id)
        records = self._repository.attendance_for(employee_id, period.start_date, period.end_date)
        return summarize_attendance(employee_id, records, policy, period)

    def overtime_report(self, period_ref: str, department: str | None = None) -> OvertimeReport:
        return overtime_report(self.summary(period_ref, department), self.rules)

    def compliance_report(self, period_ref: str, department: str | None = None) -> ComplianceReport:
        return compliance_report(self.summary(period_ref, department))

    # ------------------------------------------------------------------
    # job orchestration
    # ------------------------------------------------------------------
    def next_job_id(self) -> str:
        return self._repository.next_job_id()

    def register_job(self, job_id: str, filename: str) -> None:
        self._repository.register_job(job_id, filename)

    def update_job(
        self,
        job_id: str,
        status: str,
        *,
        kind: str | None = None,
        rows: int = 0,
        error: str | None = None,
    ) -> None:
        self._repository.update_job(job_id, status, kind=kind, rows=rows, error=error)

    def list_jobs(self) -> list[dict[str, object]]:
        return self._repository.list_jobs()

    # ------------------------------------------------------------------
    # testing helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self._repository.reset()


_repository = InMemoryPayrollRepository()
_service = PayrollService(_repository)


def get_payroll_service() -> PayrollService:
    """Return the singleton payroll service for the process."""

    return _service


def reset_payroll_state() -> None:
    """Reset the in-memory store (used in tests)."""

    _service.reset()
