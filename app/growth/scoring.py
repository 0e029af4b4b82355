from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .reference import Sex, clamp_month, median_height


@dataclass(frozen=True)
class StuntingLabel:
    threshold: float
    label: str
    color: str


@dataclass(frozen=True)
class HAZResult:
    haz: float
    category: str
    color: str
    median_cm: float
    sd_cm: float


# Evaluated in order; first threshold strictly above the z-score wins.
STUNTING_LABELS: tuple[StuntingLabel, ...] = (
    StuntingLabel(-2.0, "Severely Stunted", "#e02401"),
    StuntingLabel(-1.0, "Stunted", "#ff9e00"),
    StuntingLabel(1.0, "Normal", "#26a269"),
    StuntingLabel(math.inf, "Tall", "#3182ce"),
)

SD_FRACTION = 0.05
MIN_SD_CM = 1.0
DEFAULT_BMI = 15.0


def validate_labels(labels: Sequence[StuntingLabel]) -> None:
    if not labels:
        raise ValueError("Stunting label table is empty")
    thresholds = [lab.threshold for lab in labels]
    for lo, hi in zip(thresholds, thresholds[1:]):
        if not lo < hi:
            raise ValueError(f"Stunting thresholds must be strictly increasing: {thresholds}")


validate_labels(STUNTING_LABELS)


def simplified_sd(median_cm: float) -> float:
    """5% of the median, floored at 1 cm. A proxy, not the WHO LMS spread."""
    return max(median_cm * SD_FRACTION, MIN_SD_CM)


def haz_score(height_cm: float, age_months: float, sex: Sex) -> float:
    median = median_height(sex, clamp_month(age_months))
    return (height_cm - median) / simplified_sd(median)


def classify_haz(z: float, labels: Sequence[StuntingLabel] = STUNTING_LABELS) -> StuntingLabel:
    for entry in labels:
        if z < entry.threshold:
            return entry
    # NaN never compares below a threshold; fall back to the catch-all.
    return labels[-1]


def calculate_haz(height_cm: float, age_months: float, sex: Sex) -> HAZResult:
    """Score a height against the reference median and attach its stunting label."""
    median = median_height(sex, age_months)
    sd = simplified_sd(median)
    z = (height_cm - median) / sd
    label = classify_haz(z)
    return HAZResult(haz=z, category=label.label, color=label.color, median_cm=median, sd_cm=sd)


def estimate_weight_kg(height_cm: float, bmi: float = DEFAULT_BMI) -> float:
    return bmi * (height_cm / 100.0) ** 2
