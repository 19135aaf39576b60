from __future__ import annotations

from fastapi import Request

from backend.application import DashboardService
from backend.workers.pipeline import IngestionWorker


def get_dashboard_service(request: Request) -> DashboardService:
    return request.app.state.dashboard_service


def get_ingestion_worker(request: Request) -> IngestionWorker:
    return request.app.state.ingestion_worker
