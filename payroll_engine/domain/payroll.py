"""Domain entities for the in-memory payroll dataset."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from payroll_engine.core.schema import AttendanceRecord, BenefitSet, EmployeeProfile, PayPeriod, Position


@dataclass(slots=True)
class IngestJob:
    """Represents one uploaded file being parsed into the dataset."""

    job_id: str
    status: str = "pending"
    filename: str | None = None
    kind: str | None = None
    rows: int = 0
    error: str | None = None


@dataclass(slots=True)
class PayrollDataset:
    """Everything the engine reads: people, positions, punches and periods."""

    employees: dict[int, EmployeeProfile] = field(default_factory=dict)
    positions: dict[int, Position] = field(default_factory=dict)
    benefits: dict[int, BenefitSet] = field(default_factory=dict)
    attendance: dict[int, dict[date, AttendanceRecord]] = field(default_factory=dict)
    periods: dict[str, PayPeriod] = field(default_factory=dict)
    jobs: list[IngestJob] = field(default_factory=list)
