"""Formula constants shared by the hours and deduction calculators."""

from __future__ import annotations

import os
from datetime import time
from decimal import Decimal, ROUND_HALF_UP
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


class PayrollRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    work_start: time = time(8, 0)
    work_end: time = time(17, 0)
    grace_cutoff: time = time(8, 10)
    lunch_start: time = time(12, 0)
    lunch_end: time = time(13, 0)
    fixed_day_hours: Decimal = Decimal("8.00")

    sss_rate: Decimal = Decimal("0.045")
    philhealth_rate: Decimal = Decimal("0.0275")
    pagibig_rate: Decimal = Decimal("0.02")

    tax_exempt_ceiling: Decimal = Decimal("20833")
    tax_middle_ceiling: Decimal = Decimal("33333")
    tax_middle_rate: Decimal = Decimal("0.20")
    tax_top_rate: Decimal = Decimal("0.25")

    overtime_multiplier: Decimal = Decimal("1.25")

    working_days_per_month: int = 22
    hours_per_day: int = 8

    @property
    def lunch_hours(self) -> Decimal:
        return hours_between(self.lunch_start, self.lunch_end)

    def hourly_rate_from_monthly(self, monthly_salary: Decimal) -> Decimal:
        """Hourly rate for a monthly salary, rounded half up to the centavo."""

        divisor = Decimal(self.working_days_per_month) * Decimal(self.hours_per_day)
        return (Decimal(monthly_salary) / divisor).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def daily_rate(self, hourly_rate: Decimal) -> Decimal:
        return hourly_rate * Decimal(self.hours_per_day)


def seconds_of_day(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def hours_between(start: time, end: time) -> Decimal:
    """Signed elapsed hours from ``start`` to ``end``."""

    return Decimal(seconds_of_day(end) - seconds_of_day(start)) / Decimal(3600)


def _rules_path() -> Path:
    env_path = os.getenv("PAYROLL_RULES_PATH")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return CONFIG_DIR / "payroll_rules.yaml"


def _flatten(data: dict) -> dict:
    window = data.get("work_window") or {}
    contributions = data.get("contributions") or {}
    tax = data.get("withholding_tax") or {}
    overtime = data.get("overtime") or {}
    salary = data.get("salary") or {}

    flat = {
        "work_start": window.get("start"),
        "work_end": window.get("end"),
        "grace_cutoff": window.get("grace_cutoff"),
        "lunch_start": window.get("lunch_start"),
        "lunch_end": window.get("lunch_end"),
        "fixed_day_hours": window.get("fixed_day_hours"),
        "sss_rate": contributions.get("sss"),
        "philhealth_rate": contributions.get("philhealth"),
        "pagibig_rate": contributions.get("pagibig"),
        "tax_exempt_ceiling": tax.get("exempt_ceiling"),
        "tax_middle_ceiling": tax.get("middle_ceiling"),
        "tax_middle_rate": tax.get("middle_rate"),
        "tax_top_rate": tax.get("top_rate"),
        "overtime_multiplier": overtime.get("multiplier"),
        "working_days_per_month": salary.get("working_days_per_month"),
        "hours_per_day": salary.get("hours_per_day"),
    }
    return {key: str(value) for key, value in flat.items() if value is not None}


def load_rules(path: Path | None = None) -> PayrollRules:
    path = path or _rules_path()
    if not path.exists():
        return PayrollRules()
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    return PayrollRules(**_flatten(data))


@lru_cache(maxsize=1)
def default_rules() -> PayrollRules:
    return load_rules()
