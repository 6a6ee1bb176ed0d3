from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from payroll_engine.application import get_payroll_service
from payroll_engine.core.schema import PayPeriod

router = APIRouter(prefix="/periods", tags=["periods"])


@router.get("")
async def list_periods() -> dict:
    service = get_payroll_service()
    return {"items": [period.model_dump(mode="json") for period in service.list_periods()]}


@router.post("")
async def create_period(payload: dict) -> dict:
    if not payload.get("period_id"):
        raise HTTPException(status_code=400, detail="period_id is required")
    try:
        period = PayPeriod(**payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.errors(include_url=False, include_context=False)) from exc
    get_payroll_service().add_period(period)
    return period.model_dump(mode="json")
