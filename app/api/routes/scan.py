from __future__ import annotations

import io
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError

from app.api.deps import get_measurer, get_scan_settings
from app.config import ScanSettings
from app.growth.age import age_in_months
from app.growth.errors import DetectionFailed, InvalidScale, SimulationTimeout
from app.growth.measurement import PoseMeasurer, measure_subject
from app.schemas.measurement import MeasurementOut, PredictionOut, ScanResponse
from app.services import baby_store, measurement_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scan", tags=["scan"])


def _verify_image(contents: bytes) -> None:
    if not contents:
        raise HTTPException(status_code=400, detail="Uploaded image is empty")
    try:
        with Image.open(io.BytesIO(contents)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid image: {e}")


@router.post("", response_model=ScanResponse)
async def scan(
    baby_id: str = Form(..., min_length=1),
    image: UploadFile = File(...),
    scale_cm_per_px: Optional[float] = Form(None),
    notes: Optional[str] = Form(None),
    measurer: PoseMeasurer = Depends(get_measurer),
    settings: ScanSettings = Depends(get_scan_settings),
) -> ScanResponse:
    if image.content_type and not image.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Upload must be an image file")

    baby = baby_store.get_baby(baby_id)
    if baby is None:
        raise HTTPException(status_code=404, detail=f"Baby {baby_id} not found")

    try:
        contents = await image.read()
    finally:
        await image.close()
    _verify_image(contents)

    scale = settings.default_scale_cm_per_px if scale_cm_per_px is None else scale_cm_per_px
    age = age_in_months(baby["birth_date"])

    try:
        prediction = await measure_subject(
            measurer,
            contents,
            age_months=age,
            sex=baby["sex"],
            scale_cm_per_px=scale,
            timeout_s=settings.timeout_s,
        )
    except InvalidScale as e:
        logger.info("Rejected scan for baby %s: %s", baby_id, e)
        raise HTTPException(status_code=422, detail=str(e))
    except DetectionFailed as e:
        logger.info("No subject detected for baby %s: %s", baby_id, e)
        raise HTTPException(status_code=422, detail=f"Detection failed: {e}")
    except SimulationTimeout as e:
        raise HTTPException(status_code=504, detail=str(e))

    row = measurement_service.save_prediction(
        baby_id=baby_id,
        age_months=age,
        prediction=prediction,
        notes=notes,
    )
    return ScanResponse(
        baby_id=baby_id,
        age_months=age,
        prediction=PredictionOut(**prediction.to_dict()),
        measurement=MeasurementOut(**row),
    )
