from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Iterable

import pandas as pd


def _plain(value: object) -> object:
    # keep the exact two-place amounts instead of float renderings
    if isinstance(value, Decimal):
        return format(value, "f")
    return value


def write_records_to_csv(path: Path, rows: Iterable[dict], columns: list[str] | None = None) -> Path:
    records = [{key: _plain(value) for key, value in row.items()} for row in rows]
    df = pd.DataFrame(records, columns=columns)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path
