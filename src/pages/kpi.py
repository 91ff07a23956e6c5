"""
src/pages/kpi.py
────────────────
Equipment KPI analysis: fleet cards, health score bars, OEE trend and the
per-equipment metrics table.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.options import RiskLevel
from src.crud.schemas import col, num_col
from src.data import mock
from src.i18n.translator import t
from src.layout.components.data_table import data_table
from src.layout.components.kpi_card import panel
from src.pages.entity import page_header
from src.table.columns import ExportColumn
from src.table.data_table import DataTable
from src.table.registry import register_table

KPI_TABLE = register_table(DataTable(
    "kpi",
    [
        col("equipment_name", search=True),
        num_col("mtbf"),
        num_col("mttr"),
        num_col("availability"),
        num_col("oee"),
        num_col("health_score"),
        col("health_grade", filter=True),
        col("risk_level", filter=True, enum_cls=RiskLevel),
        col("trend", filter=True),
        col("last_updated"),
    ],
    title="KPI",
    export_columns=[
        ExportColumn("equipment_name", "equipment_name", width=22),
        ExportColumn("mtbf", "mtbf", width=10),
        ExportColumn("mttr", "mttr", width=10),
        ExportColumn("availability", "availability", width=12),
        ExportColumn("oee", "oee", width=10),
        ExportColumn("health_score", "health_score", width=12),
        ExportColumn("health_grade", "health_grade", width=10),
        ExportColumn("risk_level", "risk_level", width=12),
    ],
))


def layout(lang: str | None = None) -> html.Div:
    return html.Div(
        [
            page_header(t("kpi.title", "pages", lang), t("kpi.subtitle", "pages", lang)),
            html.Div(id="kpi-cards", className="mb-3"),
            dbc.Row(
                [
                    dbc.Col(panel(t("kpi.health_chart", "pages", lang),
                                  dcc.Graph(id="kpi-health-chart", config={"displayModeBar": False})), md=6),
                    dbc.Col(panel(t("kpi.oee_trend", "pages", lang),
                                  dcc.Graph(id="kpi-oee-chart", config={"displayModeBar": False})), md=6),
                ],
                className="g-3 mb-3",
            ),
            data_table(KPI_TABLE, lang, data=mock.seed(mock.KPI_METRICS)),
        ]
    )
