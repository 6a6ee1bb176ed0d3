from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import FileResponse

from payroll_engine.application import get_payroll_service
from payroll_engine.core.storage import export_path
from payroll_engine.core.validation import PayrollError
from payroll_engine.exporters.bank_payroll_csv import export_bank_payroll
from payroll_engine.exporters.remittance_csv import export_remittance
from payroll_engine.routes.errors import http_error

router = APIRouter(tags=["reports"])

EXPORTERS = {
    "bank": export_bank_payroll,
    "remittance": export_remittance,
}


@router.get("/reports/departments")
async def list_departments() -> dict:
    return {"items": get_payroll_service().list_departments()}


@router.get("/reports/summary")
async def get_summary(
    period: str = Query(...),
    department: str | None = Query(default=None),
) -> dict:
    try:
        report = get_payroll_service().summary(period, department)
    except PayrollError as exc:
        raise http_error(exc) from exc
    return report.model_dump(mode="json")


@router.get("/reports/overtime")
async def get_overtime(
    period: str = Query(...),
    department: str | None = Query(default=None),
) -> dict:
    try:
        report = get_payroll_service().overtime_report(period, department)
    except PayrollError as exc:
        raise http_error(exc) from exc
    return report.model_dump(mode="json")


@router.get("/reports/compliance")
async def get_compliance(
    period: str = Query(...),
    department: str | None = Query(default=None),
) -> dict:
    try:
        report = get_payroll_service().compliance_report(period, department)
    except PayrollError as exc:
        raise http_error(exc) from exc
    return report.model_dump(mode="json")


@router.get("/reports/export/{kind}")
async def export_report(
    kind: str,
    period: str = Query(...),
    department: str | None = Query(default=None),
) -> FileResponse:
    exporter = EXPORTERS.get(kind)
    if exporter is None:
        raise HTTPException(status_code=404, detail=f"unknown export {kind!r}")
    try:
        report = get_payroll_service().summary(period, department)
    except PayrollError as exc:
        raise http_error(exc) from exc
    target = exporter(export_path(f"{kind}_{report.period.period_id}.csv"), report)
    return FileResponse(target, media_type="text/csv", filename=target.name)


@router.get("/employees")
async def list_employees() -> dict:
    employees = get_payroll_service().list_employees()
    return {"items": [employee.model_dump(mode="json") for employee in employees]}


@router.get("/employees/{employee_id}/payslip")
async def get_payslip(employee_id: int, period: str = Query(...)) -> dict:
    try:
        slip = get_payroll_service().payslip(employee_id, period)
    except PayrollError as exc:
        raise http_error(exc) from exc
    if slip is None:
        raise HTTPException(status_code=404, detail="no attendance recorded in this period")
    return slip.model_dump(mode="json")


@router.get("/employees/{employee_id}/attendance")
async def get_attendance_summary(employee_id: int, period: str = Query(...)) -> dict:
    try:
        summary = get_payroll_service().attendance_summary(employee_id, period)
    except PayrollError as exc:
        raise http_error(exc) from exc
    return summary.model_dump(mode="json")
