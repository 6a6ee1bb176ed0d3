from __future__ import annotations

from pathlib import Path

from payroll_engine.core.csvio import write_records_to_csv
from payroll_engine.core.schema import SummaryReport

BANK_COLUMNS = ["employee_id", "employee", "amount", "period"]


def export_bank_payroll(path: Path, report: SummaryReport) -> Path:
    records = []
    for slip in report.payslips:
        records.append({
            "employee_id": slip.employee_id,
            "employee": slip.employee_name,
            "amount": slip.net_pay,
            "period": slip.period_id,
        })
    return write_records_to_csv(path, records, columns=BANK_COLUMNS)
