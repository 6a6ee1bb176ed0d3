from __future__ import annotations

from fastapi import HTTPException

from payroll_engine.core.validation import (
    EmployeeNotFoundError,
    InvalidClassificationError,
    PayrollError,
    PeriodNotFoundError,
)


def http_error(exc: PayrollError) -> HTTPException:
    """Translate a payroll failure into the HTTP error returned to clients."""

    if isinstance(exc, (PeriodNotFoundError, EmployeeNotFoundError)):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InvalidClassificationError):
        return HTTPException(
            status_code=422,
            detail={"message": str(exc), "employee_id": exc.employee_id, "value": str(exc.value)},
        )
    return HTTPException(status_code=400, detail=str(exc))
