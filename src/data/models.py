"""
src/data/models.py
──────────────────
Pydantic v2 data models for the facility management records.

Every record is flat, carries a textual `id`, and keeps dates as ISO
strings ("YYYY-MM-DD") so that it round-trips through the browser stores
unchanged.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from config.options import (
    ActivityStatus,
    EquipmentStatus,
    OrganizationType,
    PreventiveOrderStatus,
    PreventivePeriodType,
    Priority,
    RiskLevel,
    SensorStatus,
    StockStatus,
)


class Record(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str


# ── Equipment ─────────────────────────────────────────────────────────────────

class Equipment(Record):
    code: str
    name: str
    type: str
    location: str
    department: str = ""
    status: EquipmentStatus = EquipmentStatus.RUNNING
    priority: Priority = Priority.MEDIUM
    install_date: str | None = None


class Failure(Record):
    equipment_id: str
    equipment_name: str
    failure_type: str
    description: str = ""
    reported_at: str
    status: str = "open"
    downtime_hours: float = Field(default=0.0, ge=0.0)


# ── Sensors ───────────────────────────────────────────────────────────────────

class Sensor(Record):
    name: str
    type: str
    equipment_id: str = ""
    location: str = ""
    unit: str = ""
    status: SensorStatus = SensorStatus.ACTIVE
    min_value: float = 0.0
    max_value: float = 100.0
    last_value: float | None = None


class SensorReading(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    sensor_id: str
    timestamp: str
    value: float
    status: SensorStatus = SensorStatus.ACTIVE


# ── KPI ───────────────────────────────────────────────────────────────────────

class KpiMetrics(Record):
    equipment_id: str
    equipment_name: str
    mtbf: float = Field(ge=0.0)       # hours
    mttr: float = Field(ge=0.0)       # hours
    availability: float = Field(ge=0.0, le=100.0)
    oee: float = Field(ge=0.0, le=100.0)
    health_score: float = Field(ge=0.0, le=100.0)
    health_grade: str = "A"
    risk_level: RiskLevel = RiskLevel.LOW
    trend: str = "stable"             # improving / stable / declining
    last_updated: str = ""


# ── Preventive maintenance ────────────────────────────────────────────────────

class PreventiveMaster(Record):
    code: str
    name: str
    equipment_id: str
    equipment_name: str = ""
    period_type: PreventivePeriodType = PreventivePeriodType.TIME_BASED
    interval_days: int | None = Field(default=None, ge=1)
    interval_months: int | None = Field(default=None, ge=1)
    estimated_duration: int | None = Field(default=None, ge=0)  # minutes
    estimated_cost: float | None = Field(default=None, ge=0.0)
    is_active: bool = True
    effective_date: str
    last_executed_date: str | None = None
    next_schedule_date: str | None = None


class PreventiveOrder(Record):
    order_number: str
    master_id: str
    equipment_id: str
    equipment_name: str = ""
    status: PreventiveOrderStatus = PreventiveOrderStatus.PLANNED
    priority: Priority = Priority.MEDIUM
    scheduled_date: str
    completed_date: str | None = None
    assigned_to_name: str = ""
    estimated_cost: float | None = Field(default=None, ge=0.0)


# ── Materials ─────────────────────────────────────────────────────────────────

class MaterialStock(Record):
    material_code: str
    material_name: str
    warehouse_name: str
    location: str = ""
    current_stock: float = Field(ge=0.0)
    safety_stock: float = Field(default=0.0, ge=0.0)
    unit: str = "EA"
    unit_price: float = Field(default=0.0, ge=0.0)
    total_value: float = Field(default=0.0, ge=0.0)
    status: StockStatus = StockStatus.NORMAL
    last_updated: str = ""


# ── TPM ───────────────────────────────────────────────────────────────────────

class TPMTeam(Record):
    code: str
    name: str
    department: str
    leader_name: str
    member_count: int = Field(default=0, ge=0)
    equipment_area: str = ""
    meeting_day: str = ""
    status: str = "active"


class TPMActivity(Record):
    activity_no: str
    title: str
    team_id: str = ""
    team_name: str = ""
    activity_type: str = "autonomous"
    status: ActivityStatus = ActivityStatus.PLANNED
    priority: str = "normal"
    start_date: str
    end_date: str
    completion_rate: float = Field(default=0.0, ge=0.0, le=100.0)


# ── Metering ──────────────────────────────────────────────────────────────────

class CalibrationRecord(Record):
    instrument_code: str
    instrument_name: str
    location: str = ""
    calibration_date: str
    next_calibration_date: str
    result: str = "pass"          # pass / fail / conditional
    status: str = "completed"     # scheduled / completed / overdue
    agency: str = ""
    cost: float = Field(default=0.0, ge=0.0)


# ── Carbon ────────────────────────────────────────────────────────────────────

class EmissionSource(Record):
    name: str
    type: str
    location: str


class ReductionActivity(Record):
    name: str
    type: str
    start: str
    end: str
    status: str


class Scope3Emission(Record):
    partner: str
    activity: str
    emission: float = Field(ge=0.0)   # tCO2eq


# ── Organization / users ──────────────────────────────────────────────────────

class Organization(Record):
    code: str
    name: str
    type: OrganizationType = OrganizationType.DEPARTMENT
    parent_id: str | None = None
    sort_order: int = 0
    is_active: bool = True


class User(Record):
    username: str
    name: str
    email: str
    level: str
    department: str = ""
    position: str = ""
    company: str = ""
    company_id: str = ""


class Credential(User):
    """Mock login entry; never stored in application state."""
    password: str
