from typing import Literal

from pydantic import BaseModel, Field


class GrowthInput(BaseModel):
    sex: Literal["male", "female"]
    age_months: float = Field(..., ge=0)
    height_cm: float = Field(..., gt=0)
    bmi: float = Field(15.0, gt=0, description="BMI assumed when estimating weight from height")


class GrowthOutput(BaseModel):
    sex: Literal["male", "female"]
    age_months: float
    height_cm: float
    median_height_cm: float
    sd_cm: float
    haz: float
    haz_category: str
    haz_color: str
    estimated_weight_kg: float
