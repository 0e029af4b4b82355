from __future__ import annotations

from fastapi import APIRouter

from app.growth.scoring import calculate_haz, estimate_weight_kg
from app.schemas.growth import GrowthInput, GrowthOutput


router = APIRouter(prefix="/growth", tags=["growth"])


@router.post("/score", response_model=GrowthOutput)
def growth_score(inp: GrowthInput) -> GrowthOutput:
    """Score a height without storing anything."""
    haz = calculate_haz(inp.height_cm, inp.age_months, inp.sex)
    return GrowthOutput(
        sex=inp.sex,
        age_months=inp.age_months,
        height_cm=inp.height_cm,
        median_height_cm=haz.median_cm,
        sd_cm=haz.sd_cm,
        haz=haz.haz,
        haz_category=haz.category,
        haz_color=haz.color,
        estimated_weight_kg=estimate_weight_kg(inp.height_cm, inp.bmi),
    )
