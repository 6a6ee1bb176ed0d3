"""Sheet kind detection for uploaded attendance and roster files.

The detector inspects header tokens to classify the upload:

* punch logs (employee id, date, time in/out) → ``attendance_sheet``
* employee master data (rank, position, salary, allowances) → ``roster_sheet``

Anything else is reported as ``unknown`` and rejected by the ingest worker.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable
from zipfile import BadZipFile

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException


KEYWORDS_ATTENDANCE = ["time in", "time out", "timein", "timeout", "log in", "log out"]
KEYWORDS_ROSTER = [
    "rank",
    "classification",
    "position",
    "department",
    "basic salary",
    "hourly rate",
    "rice subsidy",
    "phone allowance",
    "clothing allowance",
]

EXCEL_SUFFIXES = {".xlsx", ".xls", ".xlsm"}


@dataclass
class DetectedTemplate:
    schema: str
    sheet: str | None = None


def normalise_token(text: object) -> str:
    if text is None:
        return ""
    return " ".join(str(text).strip().lower().replace("_", " ").replace("-", " ").split())


def _detect_from_tokens(tokens: Iterable[object]) -> str | None:
    lowered = [normalise_token(token) for token in tokens]
    lowered = [token for token in lowered if token]
    if not lowered:
        return None

    if any(keyword in token for token in lowered for keyword in KEYWORDS_ATTENDANCE):
        return "attendance_sheet"
    roster_hits = sum(1 for keyword in KEYWORDS_ROSTER for token in lowered if keyword in token)
    if roster_hits >= 2:
        return "roster_sheet"
    return None


def _detect_from_frame(frame: pd.DataFrame) -> str | None:
    return _detect_from_tokens(frame.columns)


def detect_excel(path: Path) -> DetectedTemplate:
    try:
        excel = pd.ExcelFile(path)
    except (OSError, ValueError, BadZipFile, InvalidFileException):
        return DetectedTemplate(schema="unknown")

    for sheet_name in excel.sheet_names:
        frame = excel.parse(sheet_name=sheet_name, nrows=20)
        schema = _detect_from_frame(frame)
        if schema:
            return DetectedTemplate(schema=schema, sheet=sheet_name)
    return DetectedTemplate(schema="unknown")


def detect(path: Path) -> DetectedTemplate:
    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        return detect_excel(path)
    if suffix == ".csv":
        try:
            frame = pd.read_csv(path, nrows=5)
        except (OSError, ValueError, pd.errors.ParserError):
            return DetectedTemplate(schema="unknown")
        return DetectedTemplate(schema=_detect_from_frame(frame) or "unknown")
    return DetectedTemplate(schema="unknown")
