#!/usr/bin/env python
from __future__ import annotations

import argparse
import csv
from pathlib import Path


HEADER = [
    "Employee ID",
    "First Name",
    "Last Name",
    "Rank",
    "Position ID",
    "Position",
    "Department",
    "Basic Salary",
    "Rice Subsidy",
    "Phone Allowance",
    "Clothing Allowance",
]

ROWS = [
    [10001, "Manuel", "Garcia", "NON_RANK_AND_FILE", 1, "Chief Executive Officer", "Leadership", 90000, 1500, 2000, 1000],
    [10002, "Antonio", "Lim", "NON_RANK_AND_FILE", 2, "HR Manager", "HR", 52670, 1500, 1000, 1000],
    [10003, "Bianca", "Aquino", "RANK_AND_FILE", 3, "Account Rank and File", "Accounting", 22500, 1500, 500, 1000],
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a sample employee roster CSV")
    parser.add_argument("--output", required=True, help="Output file path (.csv)")
    args = parser.parse_args()

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", newline="", encoding="utf-8") as fp:
        writer = csv.writer(fp)
        writer.writerow(HEADER)
        writer.writerows(ROWS)

    print(f"Sample roster written to {output}")


if __name__ == "__main__":
    main()
