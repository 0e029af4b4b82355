from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml


PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "configs" / "config.yaml"


@dataclass(frozen=True)
class ScanSettings:
    default_scale_cm_per_px: float = 0.1
    reference_height_px: float = 800.0
    jitter_cm: float = 2.0
    delay_s: float = 2.0
    timeout_s: float = 30.0
    bmi: float = 15.0
    method: str = "YOLO v8 Pose + MediaPipe"


def config_path() -> Path:
    override = os.environ.get("GROWTH_TRACKER_CONFIG")
    return Path(override) if override else DEFAULT_CONFIG_PATH


def load_config(path: Path | None = None) -> dict:
    cfg_path = path or config_path()
    if not cfg_path.exists():
        raise FileNotFoundError(f"{cfg_path} not found")
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def scan_settings(cfg: dict) -> ScanSettings:
    """Build ScanSettings from the `scan` section, falling back to defaults per key."""
    section = cfg.get("scan") or {}
    defaults = ScanSettings()
    settings = ScanSettings(
        default_scale_cm_per_px=float(section.get("default_scale_cm_per_px", defaults.default_scale_cm_per_px)),
        reference_height_px=float(section.get("reference_height_px", defaults.reference_height_px)),
        jitter_cm=float(section.get("jitter_cm", defaults.jitter_cm)),
        delay_s=float(section.get("delay_s", defaults.delay_s)),
        timeout_s=float(section.get("timeout_s", defaults.timeout_s)),
        bmi=float(section.get("bmi", defaults.bmi)),
        method=str(section.get("method", defaults.method)),
    )
    if settings.default_scale_cm_per_px <= 0:
        raise ValueError(f"scan.default_scale_cm_per_px must be > 0, got {settings.default_scale_cm_per_px}")
    if settings.timeout_s <= 0:
        raise ValueError(f"scan.timeout_s must be > 0, got {settings.timeout_s}")
    if settings.delay_s < 0:
        raise ValueError(f"scan.delay_s must be >= 0, got {settings.delay_s}")
    return settings


def db_url(cfg: dict) -> str:
    db_path = Path((cfg.get("paths") or {}).get("db_path", "outputs/growth.db"))
    if not db_path.is_absolute():
        db_path = PROJECT_ROOT / db_path
    return f"sqlite:///{db_path}"
