"""
config/options.py
─────────────────
Status / priority enumerations and their display configuration.

Option labels are translation keys in the "options" namespace, named
"<EnumName>.<value>".
"""

from enum import Enum


class EquipmentStatus(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"
    MAINTENANCE = "maintenance"
    FAILURE = "failure"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SensorStatus(str, Enum):
    ACTIVE = "active"
    WARNING = "warning"
    ERROR = "error"
    INACTIVE = "inactive"


class StockStatus(str, Enum):
    NORMAL = "normal"
    LOW = "low"
    OUT = "out"
    EXCESS = "excess"


class PreventivePeriodType(str, Enum):
    TIME_BASED = "TIME_BASED"
    USAGE_BASED = "USAGE_BASED"
    CONDITION_BASED = "CONDITION_BASED"


class PreventiveOrderStatus(str, Enum):
    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    OVERDUE = "OVERDUE"


class ActivityStatus(str, Enum):
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class OrganizationType(str, Enum):
    COMPANY = "company"
    DEPARTMENT = "department"
    TEAM = "team"


GREEN = "#2ea44f"
BLUE = "#58a6ff"
AMBER = "#e8a020"
ORANGE = "#f0883e"
RED = "#da3633"
GREY = "#8b949e"

# Colors per option group; the same value means different things in
# different groups ("low" stock vs "low" risk).
STATUS_COLORS: dict[str, dict[str, str]] = {
    "EquipmentStatus": {
        EquipmentStatus.RUNNING.value: GREEN,
        EquipmentStatus.STOPPED.value: GREY,
        EquipmentStatus.MAINTENANCE.value: AMBER,
        EquipmentStatus.FAILURE.value: RED,
    },
    "SensorStatus": {
        SensorStatus.ACTIVE.value: GREEN,
        SensorStatus.WARNING.value: AMBER,
        SensorStatus.ERROR.value: RED,
        SensorStatus.INACTIVE.value: GREY,
    },
    "StockStatus": {
        StockStatus.NORMAL.value: GREEN,
        StockStatus.LOW.value: AMBER,
        StockStatus.OUT.value: RED,
        StockStatus.EXCESS.value: BLUE,
    },
    "PreventiveOrderStatus": {
        PreventiveOrderStatus.PLANNED.value: BLUE,
        PreventiveOrderStatus.IN_PROGRESS.value: AMBER,
        PreventiveOrderStatus.COMPLETED.value: GREEN,
        PreventiveOrderStatus.CANCELLED.value: GREY,
        PreventiveOrderStatus.OVERDUE.value: RED,
    },
    "ActivityStatus": {
        ActivityStatus.PLANNED.value: BLUE,
        ActivityStatus.IN_PROGRESS.value: AMBER,
        ActivityStatus.COMPLETED.value: GREEN,
        ActivityStatus.CANCELLED.value: GREY,
    },
    "RiskLevel": {
        RiskLevel.LOW.value: GREEN,
        RiskLevel.MEDIUM.value: AMBER,
        RiskLevel.HIGH.value: ORANGE,
        RiskLevel.CRITICAL.value: RED,
    },
    "Priority": {
        Priority.CRITICAL.value: RED,
        Priority.HIGH.value: ORANGE,
        Priority.MEDIUM.value: BLUE,
        Priority.LOW.value: GREY,
    },
    # Plain string statuses without an enum
    "calibration": {"scheduled": BLUE, "completed": GREEN, "overdue": RED},
    "failure": {"open": RED, "in_progress": AMBER, "closed": GREEN},
}

# Accent palette for the theme settings page
ACCENT_COLORS: dict[str, str] = {
    "blue": "#58a6ff",
    "green": "#2ea44f",
    "purple": "#a371f7",
    "orange": "#f0883e",
    "red": "#da3633",
}


def enum_options(enum_cls: type[Enum]) -> list[dict[str, str]]:
    """{label, value} pairs for a select input; labels are translation keys."""
    return [{"label": f"{enum_cls.__name__}.{m.value}", "value": m.value} for m in enum_cls]


def status_color(group: str, value: str) -> str:
    return STATUS_COLORS.get(group, {}).get(value, GREY)
