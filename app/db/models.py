from __future__ import annotations

from sqlalchemy import JSON, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

from app.utils.time import now_utc


Base = declarative_base()


class Baby(Base):
    __tablename__ = "babies"

    id = Column(String, primary_key=True)  # uuid4 hex
    name = Column(String, nullable=False)
    birth_date = Column(Date, nullable=False)
    sex = Column(String(6), nullable=False)  # "male" | "female"
    parent_name = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=now_utc, nullable=False)
    updated_at = Column(DateTime, default=now_utc, onupdate=now_utc, nullable=False)

    measurements = relationship(
        "Measurement",
        back_populates="baby",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Measurement(Base):
    __tablename__ = "measurements"

    id = Column(String, primary_key=True)
    baby_id = Column(String, ForeignKey("babies.id", ondelete="CASCADE"), index=True, nullable=False)

    height_cm = Column(Float, nullable=False)
    weight_kg = Column(Float, nullable=False)
    age_months = Column(Integer, nullable=False)
    haz_score = Column(Float, nullable=False)
    haz_category = Column(String, nullable=False)
    haz_color = Column(String, nullable=False)

    scale_cm_per_px = Column(Float, nullable=True)
    method = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    # raw pose landmarks / diagnostics from the measurer
    landmarks_data = Column(JSON, nullable=True)

    measurement_date = Column(DateTime, default=now_utc, index=True, nullable=False)
    created_at = Column(DateTime, default=now_utc, nullable=False)

    baby = relationship("Baby", back_populates="measurements")
