from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, File, Header, HTTPException, UploadFile

from backend.application import DashboardService
from backend.core.auth import verify_admin_secret
from backend.domain import SheetUpload
from backend.routes.deps import get_dashboard_service, get_ingestion_worker
from backend.workers.pipeline import IngestionWorker

router = APIRouter(tags=["upload"])


@router.post("/auth")
async def authenticate(payload: dict) -> dict:
    if not verify_admin_secret(payload.get("password")):
        raise HTTPException(status_code=401, detail="Noto'g'ri parol")
    return {"success": True}


@router.post("/upload")
async def upload_files(
    files: list[UploadFile] | None = File(default=None),
    x_admin_password: str | None = Header(default=None),
    worker: IngestionWorker = Depends(get_ingestion_worker),
    service: DashboardService = Depends(get_dashboard_service),
) -> dict:
    """Replace the current agent list with the uploaded workbooks."""
    if not verify_admin_secret(x_admin_password):
        raise HTTPException(status_code=401, detail="Ruxsat yo'q")
    if not files:
        raise HTTPException(status_code=400, detail="Fayllar yuklanmadi")

    batch: list[SheetUpload] = []
    for upload in files:
        try:
            filename = Path(upload.filename or "").name
            batch.append(SheetUpload(filename=filename, content=await upload.read()))
        finally:
            await upload.close()

    result = await worker.ingest(batch)
    status = service.get_status()
    return {
        "success": True,
        "message": f"{len(result.agents)} ta agent ma'lumotlari yuklandi",
        "agents": len(result.agents),
        "skipped": result.skipped,
        "lastUpdated": status["lastUpdated"],
        "historyCount": status["historyCount"],
    }
