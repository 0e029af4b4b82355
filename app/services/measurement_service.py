from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.db.models import Baby, Measurement
from app.db.session import SessionLocal
from app.growth.age import parse_date
from app.growth.measurement import PredictionResult
from app.growth.scoring import calculate_haz, estimate_weight_kg
from app.utils.time import iso_utc, now_utc


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "height_cm",
    "weight_kg",
    "age_months",
    "haz_score",
    "haz_category",
    "haz_color",
    "measurement_date",
    "notes",
    "image_url",
)


def _stored_date(value: Optional[Any]) -> datetime:
    if value is None or value == "":
        return now_utc()
    return parse_date(value).replace(tzinfo=None)


def measurement_to_dict(row: Measurement) -> Dict[str, Any]:
    return {
        "id": row.id,
        "baby_id": row.baby_id,
        "height_cm": row.height_cm,
        "weight_kg": row.weight_kg,
        "age_months": row.age_months,
        "haz_score": row.haz_score,
        "haz_category": row.haz_category,
        "haz_color": row.haz_color,
        "scale_cm_per_px": row.scale_cm_per_px,
        "method": row.method,
        "image_url": row.image_url,
        "notes": row.notes,
        "landmarks_data": row.landmarks_data,
        "measurement_date": iso_utc(row.measurement_date),
        "created_at": iso_utc(row.created_at),
    }


def _insert(row: Measurement) -> Dict[str, Any]:
    db = SessionLocal()
    try:
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info(
            "Stored measurement %s for baby %s: %.1f cm, HAZ %.2f (%s)",
            row.id, row.baby_id, row.height_cm, row.haz_score, row.haz_category,
        )
        return measurement_to_dict(row)
    finally:
        db.close()


def save_prediction(
    *,
    baby_id: str,
    age_months: int,
    prediction: PredictionResult,
    notes: Optional[str] = None,
    image_url: Optional[str] = None,
    measurement_date: Optional[str] = None,
) -> Dict[str, Any]:
    """Persist the output of a pose measurer as a Measurement row."""
    return _insert(
        Measurement(
            id=uuid.uuid4().hex,
            baby_id=baby_id,
            height_cm=prediction.height_cm,
            weight_kg=prediction.weight_kg,
            age_months=age_months,
            haz_score=prediction.haz,
            haz_category=prediction.haz_category,
            haz_color=prediction.haz_color,
            scale_cm_per_px=prediction.scale_cm_per_px,
            method=prediction.method,
            landmarks_data=prediction.landmarks,
            image_url=image_url,
            notes=notes,
            measurement_date=_stored_date(measurement_date),
        )
    )


def save_manual(
    *,
    baby_id: str,
    sex: str,
    age_months: int,
    height_cm: float,
    weight_kg: Optional[float] = None,
    notes: Optional[str] = None,
    image_url: Optional[str] = None,
    measurement_date: Optional[str] = None,
) -> Dict[str, Any]:
    """Persist a tape-measured height, scoring it the same way a scan would."""
    haz = calculate_haz(height_cm, age_months, sex)
    return _insert(
        Measurement(
            id=uuid.uuid4().hex,
            baby_id=baby_id,
            height_cm=height_cm,
            weight_kg=weight_kg if weight_kg is not None else estimate_weight_kg(height_cm),
            age_months=age_months,
            haz_score=haz.haz,
            haz_category=haz.category,
            haz_color=haz.color,
            method="manual",
            image_url=image_url,
            notes=notes,
            measurement_date=_stored_date(measurement_date),
        )
    )


def get_measurement(measurement_id: str) -> Optional[Dict[str, Any]]:
    db = SessionLocal()
    try:
        row = db.get(Measurement, measurement_id)
        return measurement_to_dict(row) if row is not None else None
    finally:
        db.close()


def list_measurements(baby_id: str, newest_first: bool = True, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Measurements for one baby ordered by measurement_date (descending unless newest_first=False)."""
    db = SessionLocal()
    try:
        order = Measurement.measurement_date.desc() if newest_first else Measurement.measurement_date.asc()
        q = db.query(Measurement).filter(Measurement.baby_id == baby_id).order_by(order)
        if limit is not None:
            q = q.limit(limit)
        return [measurement_to_dict(r) for r in q.all()]
    finally:
        db.close()


def list_all_measurements() -> List[Dict[str, Any]]:
    db = SessionLocal()
    try:
        rows = db.query(Measurement).order_by(Measurement.measurement_date.desc()).all()
        return [measurement_to_dict(r) for r in rows]
    finally:
        db.close()


def update_measurement(measurement_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    db = SessionLocal()
    try:
        row = db.get(Measurement, measurement_id)
        if row is None:
            return None
        for key, value in updates.items():
            if key not in EDITABLE_FIELDS or value is None:
                continue
            if key == "measurement_date":
                value = _stored_date(value)
            setattr(row, key, value)
        db.commit()
        db.refresh(row)
        return measurement_to_dict(row)
    finally:
        db.close()


def delete_measurement(measurement_id: str) -> bool:
    db = SessionLocal()
    try:
        row = db.get(Measurement, measurement_id)
        if row is None:
            return False
        db.delete(row)
        db.commit()
        return True
    finally:
        db.close()


def rescore_all() -> int:
    """Recompute HAZ score, category and color for every stored measurement.

    Returns the number of rows whose stored values changed.
    """
    db = SessionLocal()
    try:
        changed = 0
        rows = db.query(Measurement, Baby.sex).join(Baby, Baby.id == Measurement.baby_id).all()
        for row, sex in rows:
            haz = calculate_haz(row.height_cm, row.age_months, sex)
            if (row.haz_score, row.haz_category, row.haz_color) != (haz.haz, haz.category, haz.color):
                row.haz_score = haz.haz
                row.haz_category = haz.category
                row.haz_color = haz.color
                changed += 1
        db.commit()
        return changed
    finally:
        db.close()
