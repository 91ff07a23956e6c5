"""
src/analytics/kpi.py
────────────────────
Fleet KPI aggregation over per-equipment metrics.

Health grade bands:
  A ≥ 90 · B ≥ 80 · C ≥ 70 · D ≥ 60 · F otherwise
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np

from config.options import EquipmentStatus, PreventiveOrderStatus, RiskLevel, StockStatus
from src.table.columns import get_value

GRADE_BANDS: tuple[tuple[float, str], ...] = (
    (90.0, "A"),
    (80.0, "B"),
    (70.0, "C"),
    (60.0, "D"),
)

GRADE_COLORS = {
    "A": "#2ea44f",
    "B": "#58a6ff",
    "C": "#e8a020",
    "D": "#f0883e",
    "F": "#da3633",
}


@dataclass(frozen=True)
class KpiOverview:
    equipment_count: int
    avg_mtbf: float
    avg_mttr: float
    avg_availability: float
    avg_oee: float
    avg_health: float
    risk_counts: dict[str, int] = field(default_factory=dict)


def health_grade(score: float | None) -> str:
    if score is None:
        return "F"
    for threshold, grade in GRADE_BANDS:
        if score >= threshold:
            return grade
    return "F"


def _mean(records: Sequence[Any], key: str) -> float:
    values = [get_value(r, key) for r in records]
    values = [float(v) for v in values if v is not None]
    return round(float(np.mean(values)), 1) if values else 0.0


def kpi_overview(metrics: Sequence[Any]) -> KpiOverview:
    """Averages of MTBF/MTTR/availability/OEE/health and risk level counts."""
    risks = Counter(get_value(m, "risk_level") for m in metrics)
    return KpiOverview(
        equipment_count=len(metrics),
        avg_mtbf=_mean(metrics, "mtbf"),
        avg_mttr=_mean(metrics, "mttr"),
        avg_availability=_mean(metrics, "availability"),
        avg_oee=_mean(metrics, "oee"),
        avg_health=_mean(metrics, "health_score"),
        risk_counts={level.value: risks.get(level.value, 0) for level in RiskLevel},
    )


def kpi_color(value: float, good: float, fair: float) -> str:
    """Green at or above `good`, amber at or above `fair`, red below."""
    if value >= good:
        return GRADE_COLORS["A"]
    if value >= fair:
        return GRADE_COLORS["C"]
    return GRADE_COLORS["F"]


@dataclass(frozen=True)
class DashboardSummary:
    equipment_total: int
    equipment_failed: int
    open_orders: int
    stock_alerts: int
    status_counts: dict[str, int] = field(default_factory=dict)


def dashboard_summary(
    equipment: Sequence[Any],
    orders: Sequence[Any],
    stocks: Sequence[Any],
) -> DashboardSummary:
    """Headline counts for the home dashboard."""
    statuses = Counter(get_value(e, "status") for e in equipment)
    closed = {PreventiveOrderStatus.COMPLETED.value, PreventiveOrderStatus.CANCELLED.value}
    alerts = {StockStatus.LOW.value, StockStatus.OUT.value}
    return DashboardSummary(
        equipment_total=len(equipment),
        equipment_failed=statuses.get(EquipmentStatus.FAILURE.value, 0),
        open_orders=sum(1 for o in orders if get_value(o, "status") not in closed),
        stock_alerts=sum(1 for s in stocks if get_value(s, "status") in alerts),
        status_counts={s.value: statuses.get(s.value, 0) for s in EquipmentStatus},
    )
