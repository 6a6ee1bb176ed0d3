from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, File, HTTPException, UploadFile

from payroll_engine.application import get_payroll_service
from payroll_engine.core.storage import save_raw_file
from payroll_engine.workers.ingest import IngestRequest, UnsupportedUploadError, get_ingest_worker

router = APIRouter(tags=["upload"])


@router.post("/upload")
async def upload_file(files: list[UploadFile] = File(...)) -> dict:
    """Upload attendance logs or rosters and load them into the payroll store."""
    if not files:
        raise HTTPException(status_code=400, detail="At least one file must be provided")

    worker = get_ingest_worker()
    jobs: list[dict[str, object]] = []

    for upload in files:
        try:
            if not upload.filename:
                raise HTTPException(status_code=400, detail="Uploaded file must have a filename")

            safe_name = Path(upload.filename).name
            raw_path = save_raw_file(safe_name, upload.file)

            payload = IngestRequest(
                filename=safe_name,
                file_path=raw_path,
                content_type=upload.content_type,
            )
            try:
                job = await worker.enqueue(payload)
            except UnsupportedUploadError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
            jobs.append(
                {
                    "job_id": job.job_id,
                    "status": job.status,
                    "filename": safe_name,
                    "kind": job.kind,
                    "rows": job.rows,
                }
            )
        finally:
            await upload.close()

    return {"items": jobs}


@router.get("/jobs")
async def list_jobs() -> dict:
    service = get_payroll_service()
    return {"items": service.list_jobs()}
