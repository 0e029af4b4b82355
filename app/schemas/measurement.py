from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class MeasurementCreate(BaseModel):
    """Manual entry. HAZ fields are computed server-side from height and age."""

    baby_id: str = Field(..., min_length=1)
    height_cm: float = Field(..., gt=0)
    weight_kg: Optional[float] = Field(None, gt=0, description="Estimated from height when omitted")
    measurement_date: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None


class MeasurementUpdate(BaseModel):
    height_cm: Optional[float] = Field(None, gt=0)
    weight_kg: Optional[float] = Field(None, gt=0)
    age_months: Optional[int] = Field(None, ge=0)
    haz_score: Optional[float] = None
    haz_category: Optional[str] = None
    haz_color: Optional[str] = None
    measurement_date: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None


class MeasurementOut(BaseModel):
    id: str
    baby_id: str
    height_cm: float
    weight_kg: float
    age_months: int
    haz_score: float
    haz_category: str
    haz_color: str
    scale_cm_per_px: Optional[float] = None
    method: Optional[str] = None
    image_url: Optional[str] = None
    notes: Optional[str] = None
    landmarks_data: Optional[Dict[str, Any]] = None
    measurement_date: str
    created_at: str


class PredictionOut(BaseModel):
    height_cm: float
    weight_kg: float
    haz: float
    haz_category: str
    haz_color: str
    scale_cm_per_px: float
    method: str
    confidence: float
    landmarks: Optional[Dict[str, Any]] = None


class ScanResponse(BaseModel):
    baby_id: str
    age_months: int
    prediction: PredictionOut
    measurement: MeasurementOut


class SeriesPoint(BaseModel):
    measurement: int
    height: float
    weight: float
    haz: float
    date: str
    age: int


class AnalyticsSummary(BaseModel):
    total_measurements: int
    latest_height_cm: Optional[float] = None
    latest_weight_kg: Optional[float] = None
    growth_status: Optional[str] = None
    growth_color: Optional[str] = None
    height_velocity_cm_per_month: Optional[float] = None


class AnalyticsResponse(BaseModel):
    baby_id: str
    summary: AnalyticsSummary
    series: List[SeriesPoint]


class DashboardResponse(BaseModel):
    total_babies: int
    total_measurements: int
    this_month: int
    recent: List[MeasurementOut]
