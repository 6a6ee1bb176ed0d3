from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from zipfile import BadZipFile

from openpyxl.utils.exceptions import InvalidFileException

from payroll_engine.application import get_payroll_service
from payroll_engine.extractors import attendance_sheet as attendance_parser
from payroll_engine.extractors import detect
from payroll_engine.extractors import roster_sheet as roster_parser

logger = logging.getLogger(__name__)


class UnsupportedUploadError(ValueError):
    """Raised when an upload is neither an attendance log nor a roster."""


@dataclass
class IngestRequest:
    filename: str
    file_path: Path
    content_type: str | None = None


@dataclass
class IngestResult:
    job_id: str
    status: str
    kind: str | None = None
    rows: int = 0


class IngestWorker:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    async def enqueue(self, payload: IngestRequest) -> IngestResult:
        async with self._lock:
            service = get_payroll_service()
            job_id = service.next_job_id()
            service.register_job(job_id, payload.filename)
            service.update_job(job_id, "processing")
            try:
                kind, rows = await asyncio.to_thread(self._process_file, payload)
            except Exception as exc:
                logger.warning("Ingest job %s for %s failed: %s", job_id, payload.filename, exc)
                service.update_job(job_id, "failed", error=str(exc))
                raise
            service.update_job(job_id, "completed", kind=kind, rows=rows)
            logger.info("Ingest job %s loaded %s %s row(s) from %s", job_id, rows, kind, payload.filename)
            return IngestResult(job_id=job_id, status="completed", kind=kind, rows=rows)

    def _process_file(self, payload: IngestRequest) -> tuple[str, int]:
        try:
            return self._load(payload)
        except UnsupportedUploadError:
            raise
        except (OSError, ValueError, BadZipFile, InvalidFileException) as exc:
            raise UnsupportedUploadError(f"{payload.filename}: unreadable file ({exc})") from exc

    def _load(self, payload: IngestRequest) -> tuple[str, int]:
        template = detect.detect(payload.file_path)
        service = get_payroll_service()

        if template.schema == "attendance_sheet":
            result = attendance_parser.parse(payload.file_path, sheet_name=template.sheet)
            if result.skipped:
                logger.info("Skipped %s unreadable row(s) in %s", len(result.skipped), payload.filename)
            return template.schema, service.load_attendance(result.records)

        if template.schema == "roster_sheet":
            result = roster_parser.parse(payload.file_path, sheet_name=template.sheet)
            return template.schema, service.load_roster(result)

        raise UnsupportedUploadError(
            f"{payload.filename}: expected an attendance log or an employee roster"
        )


_worker: IngestWorker | None = None


def get_ingest_worker() -> IngestWorker:
    global _worker
    if _worker is None:
        _worker = IngestWorker()
    return _worker
