from __future__ import annotations

from fastapi import Depends

from app.config import ScanSettings, load_config, scan_settings
from app.growth.measurement import MockPoseMeasurer, PoseMeasurer


cfg = load_config()
_scan_settings = scan_settings(cfg)


def get_scan_settings() -> ScanSettings:
    return _scan_settings


def get_measurer(settings: ScanSettings = Depends(get_scan_settings)) -> PoseMeasurer:
    """Measurer used by /scan. Override this dependency to plug in a real pose model."""
    return MockPoseMeasurer(
        reference_height_px=settings.reference_height_px,
        jitter_cm=settings.jitter_cm,
        delay_s=settings.delay_s,
        bmi=settings.bmi,
        method=settings.method,
    )
