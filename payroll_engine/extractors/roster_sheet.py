"""Parser for employee roster spreadsheets (employees, positions, allowances)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import pandas as pd

from payroll_engine.extractors.detect import EXCEL_SUFFIXES, normalise_token


EMPLOYEE_COLUMNS = ["employee id", "employeeid", "emp id", "empid", "employee no"]
FIRST_NAME_COLUMNS = ["first name", "firstname", "given name"]
LAST_NAME_COLUMNS = ["last name", "lastname", "surname", "family name"]
RANK_COLUMNS = ["rank", "classification", "employee type"]
POSITION_ID_COLUMNS = ["position id", "positionid", "position no"]
POSITION_COLUMNS = ["position", "job title", "title"]
DEPARTMENT_COLUMNS = ["department", "dept"]
SALARY_COLUMNS = ["basic salary", "monthly salary", "monthly basic"]
RATE_COLUMNS = ["hourly rate", "hourly", "rate per hour"]
RICE_COLUMNS = ["rice subsidy", "rice"]
PHONE_COLUMNS = ["phone allowance", "phone"]
CLOTHING_COLUMNS = ["clothing allowance", "clothing"]


@dataclass
class RosterParseResult:
    employees: list[dict[str, Any]]
    positions: list[dict[str, Any]]


def _normalise_columns(dataframe: pd.DataFrame) -> pd.DataFrame:
    renamed = {col: str(col).strip() for col in dataframe.columns}
    dataframe = dataframe.rename(columns=renamed)
    return dataframe.dropna(how="all")


def _find_column(dataframe: pd.DataFrame, keywords: list[str], exclude: set[str] | None = None) -> str | None:
    for keyword in keywords:
        for column in dataframe.columns:
            if exclude and column in exclude:
                continue
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


def _safe_decimal(value: Any) -> Decimal | None:
    if _is_blank(value):
        return None
    text = str(value).replace(",", "").strip()
    try:
        decimal_value = Decimal(text)
    except InvalidOperation:
        return None
    if not decimal_value.is_finite():
        return None
    return decimal_value


def _text(value: Any) -> str | None:
    if _is_blank(value):
        return None
    return str(value).strip()


def _infer_rank(position: str | None, department: str | None) -> str:
    # Rank-and-file staff are marked by their position title or department.
    for label in (position, department):
        token = normalise_token(label)
        if "rank and file" in token:
            return "RANK_AND_FILE"
    return "NON_RANK_AND_FILE"


def _read(path: Path, sheet_name: str | None) -> pd.DataFrame:
    if path.suffix.lower() in EXCEL_SUFFIXES:
        return pd.read_excel(path, sheet_name=sheet_name or 0)
    return pd.read_csv(path, dtype=str)


def parse(path: Path, sheet_name: str | None = None) -> RosterParseResult:
    dataframe = _normalise_columns(_read(path, sheet_name))

    employee_column = _find_column(dataframe, EMPLOYEE_COLUMNS)
    if not employee_column:
        return RosterParseResult(employees=[], positions=[])

    position_id_column = _find_column(dataframe, POSITION_ID_COLUMNS)
    columns = {
        "first_name": _find_column(dataframe, FIRST_NAME_COLUMNS),
        "last_name": _find_column(dataframe, LAST_NAME_COLUMNS),
        "rank": _find_column(dataframe, RANK_COLUMNS),
        "position": _find_column(dataframe, POSITION_COLUMNS, exclude={position_id_column} if position_id_column else None),
        "department": _find_column(dataframe, DEPARTMENT_COLUMNS),
        "salary": _find_column(dataframe, SALARY_COLUMNS),
        "rate": _find_column(dataframe, RATE_COLUMNS),
        "rice": _find_column(dataframe, RICE_COLUMNS),
        "phone": _find_column(dataframe, PHONE_COLUMNS),
        "clothing": _find_column(dataframe, CLOTHING_COLUMNS),
    }

    def get_value(row: dict[str, Any], key: str) -> Any:
        column = columns.get(key)
        return row.get(column) if column else None

    employees: list[dict[str, Any]] = []
    positions: dict[int, dict[str, Any]] = {}
    synthetic_ids: dict[str, int] = {}

    for row in dataframe.to_dict(orient="records"):
        employee_id = _safe_int(row.get(employee_column))
        if employee_id is None:
            continue

        title = _text(get_value(row, "position"))
        department = _text(get_value(row, "department"))

        position_id = _safe_int(row.get(position_id_column)) if position_id_column else None
        if position_id is None and title:
            key = normalise_token(title)
            position_id = synthetic_ids.setdefault(key, len(synthetic_ids) + 1)

        if position_id is not None and position_id not in positions:
            benefits = {
                "rice_subsidy": _safe_decimal(get_value(row, "rice")),
                "phone_allowance": _safe_decimal(get_value(row, "phone")),
                "clothing_allowance": _safe_decimal(get_value(row, "clothing")),
            }
            has_benefits = any(value is not None for value in benefits.values())
            positions[position_id] = {
                "position_id": position_id,
                "title": title or "",
                "department": department,
                "benefits": {k: v for k, v in benefits.items() if v is not None} if has_benefits else None,
            }

        rank = _text(get_value(row, "rank")) or _infer_rank(title, department)
        employee: dict[str, Any] = {
            "employee_id": employee_id,
            "rank_classification": rank,
            "position_id": position_id,
            "first_name": _text(get_value(row, "first_name")),
            "last_name": _text(get_value(row, "last_name")),
        }
        salary = _safe_decimal(get_value(row, "salary"))
        if salary is not None:
            employee["monthly_basic_salary"] = salary
        rate = _safe_decimal(get_value(row, "rate"))
        if rate is not None:
            employee["hourly_rate"] = rate
        employees.append(employee)

    return RosterParseResult(employees=employees, positions=list(positions.values()))
