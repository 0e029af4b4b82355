from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.growth.trends import dashboard, growth_series, summarize
from app.schemas.measurement import AnalyticsResponse, DashboardResponse
from app.services import baby_store, measurement_service


router = APIRouter(tags=["analytics"])


@router.get("/analytics/{baby_id}", response_model=AnalyticsResponse)
def baby_analytics(baby_id: str) -> AnalyticsResponse:
    """Chart series (oldest -> newest) and headline stats for one baby."""
    if baby_store.get_baby(baby_id) is None:
        raise HTTPException(status_code=404, detail=f"Baby {baby_id} not found")
    rows = measurement_service.list_measurements(baby_id, newest_first=False)
    return AnalyticsResponse(baby_id=baby_id, summary=summarize(rows), series=growth_series(rows))


@router.get("/dashboard", response_model=DashboardResponse)
def home_dashboard() -> DashboardResponse:
    return DashboardResponse(**dashboard(baby_store.list_babies(), measurement_service.list_all_measurements()))
