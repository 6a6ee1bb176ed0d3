from __future__ import annotations

from pathlib import Path

from payroll_engine.core.csvio import write_records_to_csv
from payroll_engine.core.schema import SummaryReport

REMITTANCE_COLUMNS = [
    "employee_id",
    "employee",
    "period",
    "gross_income",
    "sss",
    "philhealth",
    "pagibig",
    "withholding_tax",
]


def export_remittance(path: Path, report: SummaryReport) -> Path:
    """Government contributions and withholding tax per employee."""

    records = [
        {
            "employee_id": slip.employee_id,
            "employee": slip.employee_name,
            "period": slip.period_id,
            "gross_income": slip.gross_income,
            "sss": slip.sss,
            "philhealth": slip.philhealth,
            "pagibig": slip.pagibig,
            "withholding_tax": slip.withholding_tax,
        }
        for slip in report.payslips
    ]
    return write_records_to_csv(path, records, columns=REMITTANCE_COLUMNS)
