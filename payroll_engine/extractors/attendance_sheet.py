"""Parser for daily punch logs (one row per employee per day)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import pandas as pd

from payroll_engine.extractors.detect import EXCEL_SUFFIXES, normalise_token


EMPLOYEE_COLUMNS = ["employee id", "employeeid", "emp id", "empid", "employee no", "employee"]
DATE_COLUMNS = ["date", "work day", "day"]
TIME_IN_COLUMNS = ["time in", "timein", "log in", "clock in"]
TIME_OUT_COLUMNS = ["time out", "timeout", "log out", "clock out"]

TIME_FORMATS = ["%H:%M:%S", "%H:%M", "%I:%M %p", "%I:%M:%S %p", "%I:%M%p"]


@dataclass
class AttendanceParseResult:
    records: list[dict[str, Any]]
    skipped: list[int] = field(default_factory=list)


def _normalise_columns(dataframe: pd.DataFrame) -> pd.DataFrame:
    renamed = {col: str(col).strip() for col in dataframe.columns}
    dataframe = dataframe.rename(columns=renamed)
    return dataframe.dropna(how="all")


def _find_column(dataframe: pd.DataFrame, keywords: list[str]) -> str | None:
    for keyword in keywords:
        for column in dataframe.columns:
            if keyword in normalise_token(column):
                return column
    return None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _safe_int(value: Any) -> int | None:
    if _is_blank(value):
        return None
    try:
        return int(float(str(value).strip()))
    except ValueError:
        return None


def _safe_date(value: Any) -> date | None:
    if _is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return pd.to_datetime(str(value).strip()).date()
    except (ValueError, OverflowError):
        return None


def _safe_time(value: Any) -> time | None:
    if _is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.time().replace(microsecond=0)
    if isinstance(value, time):
        return value.replace(microsecond=0)
    text = str(value).strip().upper()
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    return None


def _read(path: Path, sheet_name: str | None) -> pd.DataFrame:
    if path.suffix.lower() in EXCEL_SUFFIXES:
        return pd.read_excel(path, sheet_name=sheet_name or 0)
    return pd.read_csv(path, dtype=str)


def parse(path: Path, sheet_name: str | None = None) -> AttendanceParseResult:
    dataframe = _normalise_columns(_read(path, sheet_name))

    employee_column = _find_column(dataframe, EMPLOYEE_COLUMNS)
    date_column = _find_column(dataframe, DATE_COLUMNS)
    if not employee_column or not date_column:
        return AttendanceParseResult(records=[])
    time_in_column = _find_column(dataframe, TIME_IN_COLUMNS)
    time_out_column = _find_column(dataframe, TIME_OUT_COLUMNS)

    records: list[dict[str, Any]] = []
    skipped: list[int] = []
    for index, row in enumerate(dataframe.to_dict(orient="records"), start=2):
        employee_id = _safe_int(row.get(employee_column))
        day = _safe_date(row.get(date_column))
        if employee_id is None or day is None:
            skipped.append(index)
            continue
        records.append(
            {
                "employee_id": employee_id,
                "date": day,
                "time_in": _safe_time(row.get(time_in_column)) if time_in_column else None,
                "time_out": _safe_time(row.get(time_out_column)) if time_out_column else None,
            }
        )

    return AttendanceParseResult(records=records, skipped=skipped)
