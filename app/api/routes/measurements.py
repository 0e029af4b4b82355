from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response

from app.growth.age import age_in_months
from app.growth.errors import InvalidDate
from app.schemas.measurement import MeasurementCreate, MeasurementOut, MeasurementUpdate
from app.services import baby_store, measurement_service


router = APIRouter(prefix="/measurements", tags=["measurements"])


@router.post("", response_model=MeasurementOut, status_code=201)
def create_measurement(inp: MeasurementCreate) -> MeasurementOut:
    baby = baby_store.get_baby(inp.baby_id)
    if baby is None:
        raise HTTPException(status_code=404, detail=f"Baby {inp.baby_id} not found")

    try:
        age = age_in_months(baby["birth_date"], inp.measurement_date)
        row = measurement_service.save_manual(
            baby_id=inp.baby_id,
            sex=baby["sex"],
            age_months=age,
            height_cm=inp.height_cm,
            weight_kg=inp.weight_kg,
            notes=inp.notes,
            image_url=inp.image_url,
            measurement_date=inp.measurement_date,
        )
    except InvalidDate as e:
        raise HTTPException(status_code=422, detail=str(e))
    return MeasurementOut(**row)


@router.get("/{measurement_id}", response_model=MeasurementOut)
def get_measurement(measurement_id: str) -> MeasurementOut:
    row = measurement_service.get_measurement(measurement_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Measurement {measurement_id} not found")
    return MeasurementOut(**row)


@router.patch("/{measurement_id}", response_model=MeasurementOut)
def update_measurement(measurement_id: str, inp: MeasurementUpdate) -> MeasurementOut:
    try:
        row = measurement_service.update_measurement(measurement_id, inp.model_dump(exclude_unset=True))
    except InvalidDate as e:
        raise HTTPException(status_code=422, detail=str(e))
    if row is None:
        raise HTTPException(status_code=404, detail=f"Measurement {measurement_id} not found")
    return MeasurementOut(**row)


@router.delete("/{measurement_id}", status_code=204)
def delete_measurement(measurement_id: str) -> Response:
    if not measurement_service.delete_measurement(measurement_id):
        raise HTTPException(status_code=404, detail=f"Measurement {measurement_id} not found")
    return Response(status_code=204)
