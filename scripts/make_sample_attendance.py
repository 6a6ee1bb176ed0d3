#!/usr/bin/env python
from __future__ import annotations

import argparse
import calendar
from datetime import date, time
from pathlib import Path

from openpyxl import Workbook


PUNCHES = {
    10001: (time(8, 0), time(17, 0)),
    10002: (time(8, 5), time(17, 30)),
    10003: (time(7, 30), time(18, 0)),
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a sample attendance workbook")
    parser.add_argument("--month", required=True, help="Pay month, formatted YYYY-MM")
    parser.add_argument("--output", required=True, help="Output file path (.xlsx)")
    args = parser.parse_args()

    year, month = (int(part) for part in args.month.split("-"))
    last_day = calendar.monthrange(year, month)[1]

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Attendance"
    sheet.append(["Employee ID", "Date", "Time In", "Time Out"])
    for day in range(1, last_day + 1):
        current = date(year, month, day)
        if current.weekday() >= 5:
            continue
        for employee_id, (time_in, time_out) in PUNCHES.items():
            sheet.append([employee_id, current, time_in, time_out])

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    print(f"Sample attendance written to {output}")


if __name__ == "__main__":
    main()
