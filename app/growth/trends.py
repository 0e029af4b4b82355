from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from app.utils.time import parse_to_utc_aware


SERIES_COLUMNS = ["measurement", "height", "weight", "haz", "date", "age"]
RECENT_LIMIT = 5


def _frame(measurements: List[Dict[str, Any]]) -> pd.DataFrame:
    if not measurements:
        return pd.DataFrame(columns=["measurement_date", "height_cm", "weight_kg", "haz_score", "age_months", "haz_category"])
    df = pd.DataFrame(measurements)
    df["_ts"] = [parse_to_utc_aware(ts) for ts in df["measurement_date"]]
    return df.sort_values("_ts", kind="stable").reset_index(drop=True)


def growth_series(measurements: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Chart rows, oldest -> newest, numbered from 1."""
    df = _frame(measurements)
    if df.empty:
        return []
    out = pd.DataFrame(
        {
            "measurement": range(1, len(df) + 1),
            "height": df["height_cm"].astype(float).round(1),
            "weight": df["weight_kg"].astype(float).round(2),
            "haz": df["haz_score"].astype(float).round(2),
            "date": [ts.date().isoformat() for ts in df["_ts"]],
            "age": df["age_months"].astype(int),
        },
        columns=SERIES_COLUMNS,
    )
    return out.to_dict(orient="records")


def height_velocity(df: pd.DataFrame) -> Optional[float]:
    """Least-squares slope of height over age in cm/month; None without two distinct ages."""
    ages = df["age_months"].to_numpy(dtype=float)
    heights = df["height_cm"].to_numpy(dtype=float)
    if len(np.unique(ages)) < 2:
        return None
    slope, _ = np.polyfit(ages, heights, 1)
    return round(float(slope), 3)


def summarize(measurements: List[Dict[str, Any]]) -> Dict[str, Any]:
    df = _frame(measurements)
    if df.empty:
        return {
            "total_measurements": 0,
            "latest_height_cm": None,
            "latest_weight_kg": None,
            "growth_status": None,
            "growth_color": None,
            "height_velocity_cm_per_month": None,
        }
    latest = df.iloc[-1]
    return {
        "total_measurements": int(len(df)),
        "latest_height_cm": float(latest["height_cm"]),
        "latest_weight_kg": float(latest["weight_kg"]),
        "growth_status": latest.get("haz_category"),
        "growth_color": latest.get("haz_color"),
        "height_velocity_cm_per_month": height_velocity(df),
    }


def dashboard(
    babies: List[Dict[str, Any]],
    measurements: List[Dict[str, Any]],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Home screen numbers: totals, the most recent measurements, and this month's count."""
    ref = parse_to_utc_aware(now if now is not None else datetime.now(timezone.utc))
    stamps = [parse_to_utc_aware(m.get("measurement_date")) for m in measurements]
    this_month = sum(1 for ts in stamps if (ts.year, ts.month) == (ref.year, ref.month))
    order = sorted(range(len(measurements)), key=lambda i: stamps[i], reverse=True)
    return {
        "total_babies": len(babies),
        "total_measurements": len(measurements),
        "this_month": this_month,
        "recent": [measurements[i] for i in order[:RECENT_LIMIT]],
    }
