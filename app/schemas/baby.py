from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field


class BabyCreate(BaseModel):
    name: str = Field(..., min_length=1)
    birth_date: date
    sex: Literal["male", "female"]
    parent_name: str = ""


class BabyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    birth_date: Optional[date] = None
    sex: Optional[Literal["male", "female"]] = None
    parent_name: Optional[str] = None


class BabyOut(BaseModel):
    id: str
    name: str
    birth_date: date
    sex: Literal["male", "female"]
    parent_name: str
    age_months: int
    created_at: str
    updated_at: str
