"""
config/navigation.py
────────────────────
Menu / route registry.

Each section groups routes shown in the sidebar. Route keys are either an
entity schema name (rendered by the generic entity page) or a dedicated
page key.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Route:
    path: str
    page: str          # entity schema name or dedicated page key
    label_key: str     # translation key in the "nav" namespace


@dataclass(frozen=True)
class Section:
    key: str
    label_key: str
    routes: tuple[Route, ...]


LOGIN_PATH = "/login"
HOME_PATH = "/"

NAVIGATION: tuple[Section, ...] = (
    Section("home", "section.home", (
        Route("/", "dashboard", "dashboard"),
        Route("/kpi", "kpi", "kpi"),
    )),
    Section("equipment", "section.equipment", (
        Route("/equipment", "equipment", "equipment"),
        Route("/failures", "failures", "failures"),
    )),
    Section("carbon", "section.carbon", (
        Route("/carbon/sources", "sources", "carbon_sources"),
        Route("/carbon/reduction-activities", "activities", "carbon_activities"),
        Route("/carbon/scope3", "scope3", "carbon_scope3"),
    )),
    Section("sensor", "section.sensor", (
        Route("/sensor/overview", "sensors", "sensor_overview"),
        Route("/sensor/live", "sensor_live", "sensor_live"),
    )),
    Section("maintenance", "section.maintenance", (
        Route("/preventive/masters", "preventive_masters", "preventive_masters"),
        Route("/preventive/orders", "preventive_orders", "preventive_orders"),
        Route("/preventive/calendar", "preventive_calendar", "preventive_calendar"),
        Route("/metering/calibration", "calibrations", "calibration"),
        Route("/metering/calendar", "calibration_calendar", "calibration_calendar"),
    )),
    Section("materials", "section.materials", (
        Route("/materials/stock", "materials", "material_stock"),
    )),
    Section("tpm", "section.tpm", (
        Route("/tpm/teams", "tpm_teams", "tpm_teams"),
        Route("/tpm/activities", "tpm_activities", "tpm_activities"),
    )),
    Section("system", "section.system", (
        Route("/system/organization", "organizations", "organization"),
        Route("/system/users", "users", "users"),
        Route("/system/theme", "theme", "theme"),
    )),
)

ROUTES: dict[str, Route] = {r.path: r for s in NAVIGATION for r in s.routes}
