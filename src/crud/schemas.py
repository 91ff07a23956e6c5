"""
src/crud/schemas.py
───────────────────
Entity schema registry: one entry per CRUD page.

Column titles, form labels and import/export headers are translation keys
in the "fields" namespace; the Dash layer translates them for display and
for spreadsheet headers.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from config.options import (
    ActivityStatus,
    EquipmentStatus,
    OrganizationType,
    PreventiveOrderStatus,
    PreventivePeriodType,
    Priority,
    SensorStatus,
    StockStatus,
    enum_options,
)
from src.analytics.schedule import next_schedule_date
from src.crud.entity import EntitySchema, FormField
from src.data import mock
from src.data.models import (
    CalibrationRecord,
    EmissionSource,
    Equipment,
    Failure,
    MaterialStock,
    Organization,
    PreventiveMaster,
    PreventiveOrder,
    ReductionActivity,
    Scope3Emission,
    Sensor,
    TPMActivity,
    TPMTeam,
    User,
)
from src.table.columns import Column, FilterOption, ImportColumn

# ── Builders ──────────────────────────────────────────────────────────────────


def _opts(*values: str) -> tuple[dict, ...]:
    return tuple({"label": v, "value": v} for v in values)


def _text(key: str, required: bool = False, kind: str = "text") -> FormField:
    return FormField(key=key, label=key, kind=kind, required=required)


def _number(key: str, required: bool = False, default: Any = None) -> FormField:
    return FormField(key=key, label=key, kind="number", required=required, default=default)


def _date(key: str, required: bool = False) -> FormField:
    return FormField(key=key, label=key, kind="date", required=required)


def _select(key: str, options: tuple[dict, ...], default: Any = None, required: bool = True) -> FormField:
    return FormField(key=key, label=key, kind="select", required=required, options=options, default=default)


def _enum(key: str, enum_cls: type[Enum], default: Enum) -> FormField:
    return _select(key, tuple(enum_options(enum_cls)), default=default.value)


def _switch(key: str, default: bool = True) -> FormField:
    return FormField(key=key, label=key, kind="checkbox", default=default)


def col(
    key: str,
    search: bool = False,
    filter: bool = False,
    sort: bool = True,
    enum_cls: type[Enum] | None = None,
    align: str = "left",
) -> Column:
    options = None
    if enum_cls is not None:
        options = tuple(
            FilterOption(label=f"{enum_cls.__name__}.{m.value}", value=m.value) for m in enum_cls
        )
    return Column(
        key=key,
        title=key,
        searchable=search,
        filterable=filter,
        sortable=sort,
        filter_options=options,
        option_group=enum_cls.__name__ if enum_cls is not None else None,
        align=align,
    )


def num_col(key: str) -> Column:
    return col(key, align="right")


def _imp(key: str, required: bool = False, type: str = "string", enum_cls: type[Enum] | None = None) -> ImportColumn:
    choices = tuple(m.value for m in enum_cls) if enum_cls is not None else ()
    return ImportColumn(key=key, title=key, required=required, type=type, choices=choices)


# ── Derived fields ────────────────────────────────────────────────────────────


def prepare_preventive_master(data: dict) -> dict:
    """Fill next_schedule_date from the last execution (or effective date) and the interval."""
    if data.get("next_schedule_date"):
        return data
    base = data.get("last_executed_date") or data.get("effective_date")
    if data.get("interval_months"):
        nxt = next_schedule_date(base, "MONTHLY", int(data["interval_months"]))
    elif data.get("interval_days"):
        nxt = next_schedule_date(base, "CUSTOM_DAYS", int(data["interval_days"]))
    else:
        return data
    return {**data, "next_schedule_date": nxt}


def prepare_material_stock(data: dict) -> dict:
    """Stock value and status follow from quantity, safety stock and price."""
    current = float(data.get("current_stock") or 0)
    safety = float(data.get("safety_stock") or 0)
    price = float(data.get("unit_price") or 0)
    if current <= 0:
        status = StockStatus.OUT
    elif current < safety:
        status = StockStatus.LOW
    elif safety > 0 and current > safety * 3:
        status = StockStatus.EXCESS
    else:
        status = StockStatus.NORMAL
    return {**data, "total_value": round(current * price, 2), "status": status.value}


# ── Carbon ────────────────────────────────────────────────────────────────────

EMISSION_TYPES = _opts("설비", "공정", "차량", "기타")
ACTIVITY_TYPES = _opts("설비 개선", "공정 개선", "에너지 전환", "기타")
ACTIVITY_STATES = _opts("계획", "진행중", "완료")

SOURCES = EntitySchema(
    name="sources",
    model=EmissionSource,
    title_key="sources.title",
    fields=(
        _text("name", required=True),
        _select("type", EMISSION_TYPES),
        _text("location", required=True),
    ),
    columns=(
        col("name", search=True),
        col("type", search=True, filter=True),
        col("location", search=True, filter=True),
    ),
    import_columns=(_imp("name", True), _imp("type", True), _imp("location", True)),
    initial=lambda: mock.seed(mock.EMISSION_SOURCES),
)

ACTIVITIES = EntitySchema(
    name="activities",
    model=ReductionActivity,
    title_key="activities.title",
    fields=(
        _text("name", required=True),
        _select("type", ACTIVITY_TYPES),
        _date("start", required=True),
        _date("end", required=True),
        _select("status", ACTIVITY_STATES, default="계획"),
    ),
    columns=(
        col("name", search=True),
        col("type", search=True, filter=True),
        col("start"),
        col("end"),
        col("status", filter=True),
    ),
    import_columns=(
        _imp("name", True), _imp("type", True),
        _imp("start", True, "date"), _imp("end", True, "date"),
        _imp("status", True),
    ),
    initial=lambda: mock.seed(mock.REDUCTION_ACTIVITIES),
)

SCOPE3 = EntitySchema(
    name="scope3",
    model=Scope3Emission,
    title_key="scope3.title",
    fields=(
        _text("partner", required=True),
        _text("activity", required=True),
        _number("emission", required=True),
    ),
    columns=(
        col("partner", search=True),
        col("activity", search=True, filter=True),
        num_col("emission"),
    ),
    import_columns=(_imp("partner", True), _imp("activity", True), _imp("emission", True, "number")),
    initial=lambda: mock.seed(mock.SCOPE3_EMISSIONS),
)

# ── Sensors ───────────────────────────────────────────────────────────────────

SENSOR_TYPES = _opts("temperature", "vibration", "pressure", "current", "humidity", "flow")

SENSORS = EntitySchema(
    name="sensors",
    model=Sensor,
    title_key="sensors.title",
    fields=(
        _text("name", required=True),
        _select("type", SENSOR_TYPES),
        _text("equipment_id"),
        _text("location"),
        _text("unit"),
        _enum("status", SensorStatus, SensorStatus.ACTIVE),
        _number("min_value", required=True, default=0),
        _number("max_value", required=True, default=100),
    ),
    columns=(
        col("id", search=True),
        col("name", search=True),
        col("type", filter=True),
        col("location", search=True, filter=True),
        num_col("last_value"),
        col("unit", sort=False),
        col("status", filter=True, enum_cls=SensorStatus),
    ),
    import_columns=(
        _imp("name", True), _imp("type", True), _imp("equipment_id"), _imp("location"),
        _imp("unit"), _imp("status", enum_cls=SensorStatus),
        _imp("min_value", True, "number"), _imp("max_value", True, "number"),
    ),
    initial=lambda: mock.seed(mock.SENSORS),
)

# ── Materials ─────────────────────────────────────────────────────────────────

MATERIALS = EntitySchema(
    name="materials",
    model=MaterialStock,
    title_key="materials.title",
    fields=(
        _text("material_code", required=True),
        _text("material_name", required=True),
        _text("warehouse_name", required=True),
        _text("location"),
        _number("current_stock", required=True, default=0),
        _number("safety_stock", default=0),
        _text("unit"),
        _number("unit_price", default=0),
    ),
    columns=(
        col("material_code", search=True),
        col("material_name", search=True),
        col("warehouse_name", filter=True),
        col("location", search=True),
        num_col("current_stock"),
        num_col("safety_stock"),
        col("unit", sort=False),
        num_col("total_value"),
        col("status", filter=True, enum_cls=StockStatus),
    ),
    import_columns=(
        _imp("material_code", True), _imp("material_name", True), _imp("warehouse_name", True),
        _imp("location"), _imp("current_stock", True, "number"), _imp("safety_stock", type="number"),
        _imp("unit"), _imp("unit_price", type="number"),
    ),
    prepare=prepare_material_stock,
    derived=("total_value", "status"),
    initial=lambda: mock.seed(mock.MATERIAL_STOCKS),
)

# ── TPM ───────────────────────────────────────────────────────────────────────

TEAM_STATES = _opts("active", "inactive")
TPM_ACTIVITY_TYPES = _opts("autonomous", "focused", "planned", "quality", "education")

TPM_TEAMS = EntitySchema(
    name="tpm_teams",
    model=TPMTeam,
    title_key="tpm_teams.title",
    fields=(
        _text("code", required=True),
        _text("name", required=True),
        _text("department", required=True),
        _text("leader_name", required=True),
        _number("member_count", default=0),
        _text("equipment_area"),
        _text("meeting_day"),
        _select("status", TEAM_STATES, default="active"),
    ),
    columns=(
        col("code", search=True),
        col("name", search=True),
        col("department", search=True, filter=True),
        col("leader_name", search=True),
        num_col("member_count"),
        col("equipment_area"),
        col("status", filter=True),
    ),
    import_columns=(
        _imp("code", True), _imp("name", True), _imp("department", True), _imp("leader_name", True),
        _imp("member_count", type="integer"), _imp("equipment_area"), _imp("meeting_day"),
        _imp("status"),
    ),
    initial=lambda: mock.seed(mock.TPM_TEAMS),
)

TPM_ACTIVITIES = EntitySchema(
    name="tpm_activities",
    model=TPMActivity,
    title_key="tpm_activities.title",
    fields=(
        _text("activity_no", required=True),
        _text("title", required=True),
        _text("team_name"),
        _select("activity_type", TPM_ACTIVITY_TYPES, default="autonomous"),
        _enum("status", ActivityStatus, ActivityStatus.PLANNED),
        _select("priority", _opts("high", "normal", "low"), default="normal"),
        _date("start_date", required=True),
        _date("end_date", required=True),
        _number("completion_rate", default=0),
    ),
    columns=(
        col("activity_no", search=True),
        col("title", search=True),
        col("team_name", filter=True),
        col("activity_type", filter=True),
        col("status", filter=True, enum_cls=ActivityStatus),
        col("start_date"),
        col("end_date"),
        num_col("completion_rate"),
    ),
    import_columns=(
        _imp("activity_no", True), _imp("title", True), _imp("team_name"), _imp("activity_type"),
        _imp("status", enum_cls=ActivityStatus), _imp("priority"),
        _imp("start_date", True, "date"), _imp("end_date", True, "date"),
        _imp("completion_rate", type="number"),
    ),
    initial=lambda: mock.seed(mock.TPM_ACTIVITIES),
)

# ── Preventive maintenance ────────────────────────────────────────────────────

PREVENTIVE_MASTERS = EntitySchema(
    name="preventive_masters",
    model=PreventiveMaster,
    title_key="preventive_masters.title",
    fields=(
        _text("code", required=True),
        _text("name", required=True),
        _text("equipment_id", required=True),
        _text("equipment_name"),
        _enum("period_type", PreventivePeriodType, PreventivePeriodType.TIME_BASED),
        _number("interval_days"),
        _number("interval_months"),
        _number("estimated_duration"),
        _number("estimated_cost"),
        _date("effective_date", required=True),
        _date("last_executed_date"),
        _switch("is_active"),
    ),
    columns=(
        col("code", search=True),
        col("name", search=True),
        col("equipment_name", search=True, filter=True),
        col("period_type", filter=True, enum_cls=PreventivePeriodType),
        num_col("interval_months"),
        num_col("interval_days"),
        col("last_executed_date"),
        col("next_schedule_date"),
        col("is_active", filter=True),
    ),
    import_columns=(
        _imp("code", True), _imp("name", True), _imp("equipment_id", True), _imp("equipment_name"),
        _imp("period_type", enum_cls=PreventivePeriodType),
        _imp("interval_days", type="integer"), _imp("interval_months", type="integer"),
        _imp("estimated_duration", type="integer"), _imp("estimated_cost", type="number"),
        _imp("effective_date", True, "date"), _imp("last_executed_date", type="date"),
        _imp("is_active", type="boolean"),
    ),
    prepare=prepare_preventive_master,
    derived=("next_schedule_date",),
    initial=lambda: mock.seed(mock.PREVENTIVE_MASTERS),
)

PREVENTIVE_ORDERS = EntitySchema(
    name="preventive_orders",
    model=PreventiveOrder,
    title_key="preventive_orders.title",
    fields=(
        _text("order_number", required=True),
        _text("master_id", required=True),
        _text("equipment_id", required=True),
        _text("equipment_name"),
        _enum("status", PreventiveOrderStatus, PreventiveOrderStatus.PLANNED),
        _enum("priority", Priority, Priority.MEDIUM),
        _date("scheduled_date", required=True),
        _date("completed_date"),
        _text("assigned_to_name"),
        _number("estimated_cost"),
    ),
    columns=(
        col("order_number", search=True),
        col("equipment_name", search=True, filter=True),
        col("status", filter=True, enum_cls=PreventiveOrderStatus),
        col("priority", filter=True, enum_cls=Priority),
        col("scheduled_date"),
        col("completed_date"),
        col("assigned_to_name", search=True),
        num_col("estimated_cost"),
    ),
    import_columns=(
        _imp("order_number", True), _imp("master_id", True), _imp("equipment_id", True),
        _imp("equipment_name"), _imp("status", enum_cls=PreventiveOrderStatus),
        _imp("priority", enum_cls=Priority), _imp("scheduled_date", True, "date"),
        _imp("completed_date", type="date"), _imp("assigned_to_name"),
        _imp("estimated_cost", type="number"),
    ),
    initial=lambda: mock.seed(mock.PREVENTIVE_ORDERS),
)

# ── Metering ──────────────────────────────────────────────────────────────────

CALIBRATION_RESULTS = _opts("pass", "fail", "conditional")
CALIBRATION_STATES = _opts("scheduled", "completed", "overdue")

CALIBRATIONS = EntitySchema(
    name="calibrations",
    model=CalibrationRecord,
    title_key="calibrations.title",
    fields=(
        _text("instrument_code", required=True),
        _text("instrument_name", required=True),
        _text("location"),
        _date("calibration_date", required=True),
        _date("next_calibration_date", required=True),
        _select("result", CALIBRATION_RESULTS, default="pass"),
        _select("status", CALIBRATION_STATES, default="scheduled"),
        _text("agency"),
        _number("cost", default=0),
    ),
    columns=(
        col("instrument_code", search=True),
        col("instrument_name", search=True),
        col("location", filter=True),
        col("calibration_date"),
        col("next_calibration_date"),
        col("result", filter=True),
        col("status", filter=True),
        col("agency", search=True),
        num_col("cost"),
    ),
    import_columns=(
        _imp("instrument_code", True), _imp("instrument_name", True), _imp("location"),
        _imp("calibration_date", True, "date"), _imp("next_calibration_date", True, "date"),
        _imp("result"), _imp("status"), _imp("agency"), _imp("cost", type="number"),
    ),
    initial=lambda: mock.seed(mock.CALIBRATIONS),
)

# ── Equipment ─────────────────────────────────────────────────────────────────

EQUIPMENT_TYPES = _opts("compressor", "conveyor", "pump", "robot", "crane", "motor", "other")
FAILURE_STATES = _opts("open", "in_progress", "closed")

EQUIPMENT = EntitySchema(
    name="equipment",
    model=Equipment,
    title_key="equipment.title",
    fields=(
        _text("code", required=True),
        _text("name", required=True),
        _select("type", EQUIPMENT_TYPES),
        _text("location", required=True),
        _text("department"),
        _enum("status", EquipmentStatus, EquipmentStatus.RUNNING),
        _enum("priority", Priority, Priority.MEDIUM),
        _date("install_date"),
    ),
    columns=(
        col("code", search=True),
        col("name", search=True),
        col("type", filter=True),
        col("location", search=True, filter=True),
        col("department", filter=True),
        col("status", filter=True, enum_cls=EquipmentStatus),
        col("priority", filter=True, enum_cls=Priority),
        col("install_date"),
    ),
    import_columns=(
        _imp("code", True), _imp("name", True), _imp("type", True), _imp("location", True),
        _imp("department"), _imp("status", enum_cls=EquipmentStatus),
        _imp("priority", enum_cls=Priority), _imp("install_date", type="date"),
    ),
    initial=lambda: mock.seed(mock.EQUIPMENT),
)

FAILURES = EntitySchema(
    name="failures",
    model=Failure,
    title_key="failures.title",
    fields=(
        _text("equipment_id", required=True),
        _text("equipment_name", required=True),
        _text("failure_type", required=True),
        _text("description", kind="textarea"),
        _date("reported_at", required=True),
        _select("status", FAILURE_STATES, default="open"),
        _number("downtime_hours", default=0),
    ),
    columns=(
        col("equipment_name", search=True, filter=True),
        col("failure_type", filter=True),
        col("description", search=True, sort=False),
        col("reported_at"),
        col("status", filter=True),
        num_col("downtime_hours"),
    ),
    import_columns=(
        _imp("equipment_id", True), _imp("equipment_name", True), _imp("failure_type", True),
        _imp("description"), _imp("reported_at", True, "date"), _imp("status"),
        _imp("downtime_hours", type="number"),
    ),
    initial=lambda: mock.seed(mock.FAILURES),
)

# ── System ────────────────────────────────────────────────────────────────────

USER_LEVELS = _opts("admin", "manager", "user")

ORGANIZATIONS = EntitySchema(
    name="organizations",
    model=Organization,
    title_key="organizations.title",
    fields=(
        _text("code", required=True),
        _text("name", required=True),
        _enum("type", OrganizationType, OrganizationType.DEPARTMENT),
        _text("parent_id"),
        _number("sort_order", default=0),
        _switch("is_active"),
    ),
    columns=(
        col("code", search=True),
        col("name", search=True),
        col("type", filter=True, enum_cls=OrganizationType),
        col("parent_id"),
        num_col("sort_order"),
        col("is_active", filter=True),
    ),
    import_columns=(
        _imp("code", True), _imp("name", True), _imp("type", enum_cls=OrganizationType),
        _imp("parent_id"), _imp("sort_order", type="integer"), _imp("is_active", type="boolean"),
    ),
    initial=lambda: mock.seed(mock.ORGANIZATIONS),
)

USERS = EntitySchema(
    name="users",
    model=User,
    title_key="users.title",
    fields=(
        _text("username", required=True),
        _text("name", required=True),
        _text("email", required=True),
        _select("level", USER_LEVELS, default="user"),
        _text("department"),
        _text("position"),
        _text("company"),
        _select("company_id", tuple(mock.COMPANIES), default="company1"),
    ),
    columns=(
        col("username", search=True),
        col("name", search=True),
        col("email", search=True),
        col("level", filter=True),
        col("department", filter=True),
        col("position"),
        col("company", filter=True),
    ),
    import_columns=(
        _imp("username", True), _imp("name", True), _imp("email", True), _imp("level", True),
        _imp("department"), _imp("position"), _imp("company"), _imp("company_id"),
    ),
    initial=lambda: mock.seed(mock.USERS),
)

SCHEMAS: dict[str, EntitySchema] = {
    s.name: s
    for s in (
        EQUIPMENT, FAILURES, SOURCES, ACTIVITIES, SCOPE3, SENSORS, MATERIALS,
        TPM_TEAMS, TPM_ACTIVITIES, PREVENTIVE_MASTERS, PREVENTIVE_ORDERS,
        CALIBRATIONS, ORGANIZATIONS, USERS,
    )
}


def get_schema(name: str) -> EntitySchema:
    try:
        return SCHEMAS[name]
    except KeyError:
        raise KeyError(f"Unknown entity schema: {name}") from None
