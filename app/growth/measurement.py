"""Pose-based measurement boundary.

`PoseMeasurer.detect` is the only piece a real inference backend has to
provide; scoring and classification stay in `measure`. `MockPoseMeasurer`
stands in for the model: it ignores the image and derives a height from a
fixed pixel span.
"""
from __future__ import annotations

import abc
import asyncio
import logging
import math
import random
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from .errors import InvalidScale, SimulationTimeout
from .reference import Sex
from .scoring import DEFAULT_BMI, calculate_haz, estimate_weight_kg


logger = logging.getLogger(__name__)

MIN_HEIGHT_CM = 20.0
MAX_HEIGHT_CM = 130.0
MOCK_METHOD = "YOLO v8 Pose + MediaPipe"


@dataclass(frozen=True)
class PoseDetection:
    height_cm: float
    confidence: float
    landmarks: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class PredictionResult:
    height_cm: float
    weight_kg: float
    haz: float
    haz_category: str
    haz_color: str
    scale_cm_per_px: float
    method: str
    confidence: float
    landmarks: Optional[Dict[str, Any]] = field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PoseMeasurer(abc.ABC):
    method: str = "pose-measurer"
    bmi: float = DEFAULT_BMI

    @abc.abstractmethod
    async def detect(self, image: bytes, scale_cm_per_px: float) -> PoseDetection:
        """Locate the subject and return its height in cm.

        Raise DetectionFailed when no subject can be found. A weak detection
        is still returned, with its confidence.
        """

    async def measure(
        self,
        image: bytes,
        age_months: float,
        sex: Sex,
        scale_cm_per_px: float,
    ) -> PredictionResult:
        detection = await self.detect(image, scale_cm_per_px)
        height = detection.height_cm
        haz = calculate_haz(height, age_months, sex)
        return PredictionResult(
            height_cm=height,
            weight_kg=estimate_weight_kg(height, self.bmi),
            haz=haz.haz,
            haz_category=haz.category,
            haz_color=haz.color,
            scale_cm_per_px=scale_cm_per_px,
            method=self.method,
            confidence=detection.confidence,
            landmarks=detection.landmarks,
        )


class MockPoseMeasurer(PoseMeasurer):
    def __init__(
        self,
        reference_height_px: float = 800.0,
        jitter_cm: float = 2.0,
        delay_s: float = 2.0,
        bmi: float = DEFAULT_BMI,
        method: str = MOCK_METHOD,
        rng: Optional[random.Random] = None,
    ):
        self.reference_height_px = reference_height_px
        self.jitter_cm = jitter_cm
        self.delay_s = delay_s
        self.bmi = bmi
        self.method = method
        self._rng = rng or random.Random()

    def base_height_cm(self, scale_cm_per_px: float) -> float:
        return self.reference_height_px * scale_cm_per_px

    async def detect(self, image: bytes, scale_cm_per_px: float) -> PoseDetection:
        if self.delay_s > 0:
            await asyncio.sleep(self.delay_s)

        variation = (self._rng.random() - 0.5) * 2.0 * self.jitter_cm
        height = self.base_height_cm(scale_cm_per_px) + variation
        height = max(MIN_HEIGHT_CM, min(MAX_HEIGHT_CM, height))
        landmarks = {
            "head": {"x": 0.5, "y": 0.1},
            "feet": {"x": 0.5, "y": 0.9},
            "confidence": 0.95,
        }
        return PoseDetection(height_cm=height, confidence=0.95, landmarks=landmarks)


def validate_scale(scale_cm_per_px: float) -> float:
    try:
        scale = float(scale_cm_per_px)
    except (TypeError, ValueError) as e:
        raise InvalidScale(f"Scale must be a number, got {scale_cm_per_px!r}") from e
    if not math.isfinite(scale) or scale <= 0:
        raise InvalidScale(f"Scale must be a positive number of cm per pixel, got {scale_cm_per_px!r}")
    return scale


async def measure_subject(
    measurer: PoseMeasurer,
    image: bytes,
    age_months: float,
    sex: Sex,
    scale_cm_per_px: float,
    timeout_s: Optional[float] = None,
) -> PredictionResult:
    """Validate inputs, run the measurer and enforce the caller's timeout.

    Raises InvalidScale before the model runs, SimulationTimeout when the
    deadline passes, and lets DetectionFailed from the measurer through.
    """
    scale = validate_scale(scale_cm_per_px)
    age = max(0.0, float(age_months))

    coro = measurer.measure(image, age, sex, scale)
    if timeout_s is None:
        return await coro
    try:
        return await asyncio.wait_for(coro, timeout=timeout_s)
    except asyncio.TimeoutError:
        logger.warning("Measurement with %s timed out after %ss", measurer.method, timeout_s)
        raise SimulationTimeout(timeout_s) from None
