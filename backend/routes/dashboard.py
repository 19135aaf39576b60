from __future__ import annotations

import re

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.application import DashboardService
from backend.core.validation import SnapshotNotFoundError
from backend.routes.deps import get_dashboard_service

router = APIRouter(tags=["dashboard"])

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_limit(value: str | None) -> int | None:
    """Leading integer of ``value``: ``"2abc"`` -> 2, ``"1.5"`` -> 1, ``"abc"`` -> None."""
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


@router.get("/data")
async def get_data(service: DashboardService = Depends(get_dashboard_service)) -> dict:
    return service.get_data()


@router.get("/history")
async def get_history(
    limit: str | None = Query(default=None),
    service: DashboardService = Depends(get_dashboard_service),
) -> dict:
    return service.get_history(_parse_limit(limit))


@router.get("/compare/{date}")
async def compare_with_date(date: str, service: DashboardService = Depends(get_dashboard_service)) -> dict:
    try:
        return service.get_comparison(date)
    except SnapshotNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Bu sana uchun ma'lumot topilmadi") from exc


@router.get("/dates")
async def list_dates(service: DashboardService = Depends(get_dashboard_service)) -> list[dict]:
    return service.get_dates()
