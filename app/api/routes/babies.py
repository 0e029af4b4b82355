from __future__ import annotations

from typing import List, Literal

from fastapi import APIRouter, HTTPException, Response

from app.schemas.baby import BabyCreate, BabyOut, BabyUpdate
from app.schemas.measurement import MeasurementOut
from app.services import baby_store, measurement_service


router = APIRouter(prefix="/babies", tags=["babies"])


def _require_baby(baby_id: str) -> dict:
    baby = baby_store.get_baby(baby_id)
    if baby is None:
        raise HTTPException(status_code=404, detail=f"Baby {baby_id} not found")
    return baby


@router.post("", response_model=BabyOut, status_code=201)
def create_baby(inp: BabyCreate) -> BabyOut:
    return BabyOut(**baby_store.create_baby(**inp.model_dump()))


@router.get("", response_model=List[BabyOut])
def list_babies() -> List[BabyOut]:
    return [BabyOut(**b) for b in baby_store.list_babies()]


@router.get("/{baby_id}", response_model=BabyOut)
def get_baby(baby_id: str) -> BabyOut:
    return BabyOut(**_require_baby(baby_id))


@router.patch("/{baby_id}", response_model=BabyOut)
def update_baby(baby_id: str, inp: BabyUpdate) -> BabyOut:
    baby = baby_store.update_baby(baby_id, inp.model_dump(exclude_unset=True))
    if baby is None:
        raise HTTPException(status_code=404, detail=f"Baby {baby_id} not found")
    return BabyOut(**baby)


@router.delete("/{baby_id}", status_code=204)
def delete_baby(baby_id: str) -> Response:
    if not baby_store.delete_baby(baby_id):
        raise HTTPException(status_code=404, detail=f"Baby {baby_id} not found")
    return Response(status_code=204)


@router.get("/{baby_id}/measurements", response_model=List[MeasurementOut])
def list_measurements(baby_id: str, order: Literal["desc", "asc"] = "desc", limit: int | None = None):
    """Measurements for a baby by measurement date; newest first unless order=asc."""
    _require_baby(baby_id)
    return measurement_service.list_measurements(baby_id, newest_first=(order == "desc"), limit=limit)
