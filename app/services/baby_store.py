from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Any, Dict, Optional

from app.db.models import Baby
from app.db.session import SessionLocal
from app.growth.age import age_in_months
from app.utils.time import iso_utc


logger = logging.getLogger(__name__)

BABY_FIELDS = ("name", "birth_date", "sex", "parent_name")


def baby_to_dict(row: Baby) -> Dict[str, Any]:
    return {
        "id": row.id,
        "name": row.name,
        "birth_date": row.birth_date,
        "sex": row.sex,
        "parent_name": row.parent_name or "",
        "age_months": age_in_months(row.birth_date),
        "created_at": iso_utc(row.created_at),
        "updated_at": iso_utc(row.updated_at),
    }


def create_baby(*, name: str, birth_date: date, sex: str, parent_name: str = "") -> Dict[str, Any]:
    db = SessionLocal()
    try:
        row = Baby(
            id=uuid.uuid4().hex,
            name=name,
            birth_date=birth_date,
            sex=sex,
            parent_name=parent_name,
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info("Registered baby %s", row.id)
        return baby_to_dict(row)
    finally:
        db.close()


def get_baby(baby_id: str) -> Optional[Dict[str, Any]]:
    db = SessionLocal()
    try:
        row = db.get(Baby, baby_id)
        return baby_to_dict(row) if row is not None else None
    finally:
        db.close()


def list_babies() -> list[dict]:
    """All babies, most recently registered first."""
    db = SessionLocal()
    try:
        rows = db.query(Baby).order_by(Baby.created_at.desc()).all()
        return [baby_to_dict(r) for r in rows]
    finally:
        db.close()


def update_baby(baby_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    db = SessionLocal()
    try:
        row = db.get(Baby, baby_id)
        if row is None:
            return None
        for key, value in updates.items():
            if key in BABY_FIELDS and value is not None:
                setattr(row, key, value)
        db.commit()
        db.refresh(row)
        return baby_to_dict(row)
    finally:
        db.close()


def delete_baby(baby_id: str) -> bool:
    """Delete a baby and, through the cascade, all of its measurements."""
    db = SessionLocal()
    try:
        row = db.get(Baby, baby_id)
        if row is None:
            return False
        db.delete(row)
        db.commit()
        logger.info("Deleted baby %s", baby_id)
        return True
    finally:
        db.close()
