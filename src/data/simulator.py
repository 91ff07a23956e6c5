"""
src/data/simulator.py
─────────────────────
Synthetic values for the live sensor panel and the KPI trend chart.

Generates:
  - One fresh reading per active sensor on each refresh tick
  - A daily OEE history per equipment ending at the current metrics

Design:
  - Reproducible when called with a seeded numpy Generator
  - Sensor values are drawn around the midpoint of the configured range with
    σ = half-range × SPREAD, so most draws stay in range and a few cross it
"""
from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from typing import Any, Sequence

import numpy as np
import pandas as pd

from config.options import SensorStatus
from config.settings import settings
from src.data.models import SensorReading
from src.table.columns import get_value

SPREAD = 0.6      # σ as a fraction of the half-range
TREND_NOISE = 1.5  # OEE random-walk step σ, percentage points


def make_rng(seed: int | None = settings.SIMULATION_SEED) -> np.random.Generator:
    return np.random.default_rng(seed)


def classify(value: float, lo: float, hi: float) -> SensorStatus:
    return SensorStatus.ACTIVE if lo <= value <= hi else SensorStatus.WARNING


def simulate_sensor_values(
    sensors: Sequence[Any],
    rng: np.random.Generator,
    now: datetime | None = None,
) -> list[SensorReading]:
    """
    One reading per sensor; inactive sensors are skipped.

    Status is `warning` when the drawn value falls outside [min, max].
    """
    ts = (now or datetime.now(tz=UTC)).replace(microsecond=0).isoformat()
    readings: list[SensorReading] = []
    for sensor in sensors:
        if get_value(sensor, "status") == SensorStatus.INACTIVE.value:
            continue
        lo = float(get_value(sensor, "min_value") or 0.0)
        hi = float(get_value(sensor, "max_value") or 0.0)
        mid = (lo + hi) / 2.0
        sigma = max((hi - lo) / 2.0 * SPREAD, 1e-6)
        value = round(float(rng.normal(mid, sigma)), 2)
        readings.append(SensorReading(
            sensor_id=str(get_value(sensor, "id")),
            timestamp=ts,
            value=value,
            status=classify(value, lo, hi),
        ))
    return readings


def apply_readings(sensors: Sequence[dict], readings: Sequence[SensorReading]) -> list[dict]:
    """Copy of `sensors` with last_value/status taken from `readings`."""
    by_id = {r.sensor_id: r for r in readings}
    updated = []
    for sensor in sensors:
        reading = by_id.get(sensor.get("id"))
        if reading is None:
            updated.append(dict(sensor))
        else:
            updated.append({**sensor, "last_value": reading.value, "status": reading.status})
    return updated


def kpi_trend(
    metrics: Sequence[Any],
    rng: np.random.Generator,
    days: int = 30,
    end: date | None = None,
) -> pd.DataFrame:
    """
    Daily OEE per equipment for the last `days` days.

    A backward random walk from each equipment's current OEE, clipped to
    [0, 100]. Columns: date, equipment_name, oee.
    """
    end = end or date.today()
    dates = [end - timedelta(days=d) for d in range(days - 1, -1, -1)]
    frames = []
    for m in metrics:
        current = float(get_value(m, "oee") or 0.0)
        steps = rng.normal(0.0, TREND_NOISE, size=days - 1)
        walk = np.concatenate([[0.0], np.cumsum(steps)])
        series = np.clip(current + walk - walk[-1], 0.0, 100.0)
        frames.append(pd.DataFrame({
            "date": dates,
            "equipment_name": get_value(m, "equipment_name"),
            "oee": np.round(series, 1),
        }))
    if not frames:
        return pd.DataFrame(columns=["date", "equipment_name", "oee"])
    return pd.concat(frames, ignore_index=True)


def to_dataframe(readings: list[SensorReading]) -> pd.DataFrame:
    """Convert a list of SensorReadings to a pandas DataFrame."""
    return pd.DataFrame([r.model_dump() for r in readings])
