"""
src/callbacks/dashboard.py
───────────────────────────
Home dashboard widgets and the KPI analysis page.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
import plotly.graph_objects as go
from dash import Input, Output, State, dcc, html

from config.options import STATUS_COLORS, PreventiveOrderStatus, StockStatus
from src.analytics.kpi import GRADE_COLORS, dashboard_summary, health_grade, kpi_color, kpi_overview
from src.data.simulator import kpi_trend, make_rng
from src.i18n.translator import t
from src.layout.components.charts import base_layout, empty_figure
from src.layout.components.data_table import dt_id
from src.layout.components.kpi_card import kpi_card, panel
from src.layout.components.status_badge import status_badge
from src.state.app_state import load_state

MUTED = "var(--fms-muted)"
BORDER = "var(--fms-border)"
LIST_LIMIT = 5


def _list(rows: list, lang: str | None) -> html.Div:
    if not rows:
        return html.Div(t("no_data", "data_table", lang), style={"color": MUTED, "padding": "8px"})
    return html.Div(rows)


def _row(left, right, sub: str = "") -> html.Div:
    return html.Div(
        [
            html.Div([
                html.Div(left, style={"fontSize": ".82rem", "fontWeight": "600"}),
                html.Div(sub, style={"fontSize": ".7rem", "color": MUTED}) if sub else None,
            ]),
            html.Div(right, className="ms-auto"),
        ],
        style={"display": "flex", "alignItems": "center", "padding": "6px 0",
               "borderBottom": f"1px solid {BORDER}"},
    )


# ── Widgets ───────────────────────────────────────────────────────────────────

def _kpi_widget(equipment, orders, stocks, lang):
    s = dashboard_summary(equipment, orders, stocks)
    return dbc.Row(
        [
            dbc.Col(kpi_card(t("widget.equipment_total", "pages", lang), str(s.equipment_total),
                             icon="⚙", href="/equipment"), xs=6, md=3),
            dbc.Col(kpi_card(t("widget.equipment_failed", "pages", lang), str(s.equipment_failed),
                             "#da3633" if s.equipment_failed else "#2ea44f", icon="⚠", href="/failures"), xs=6, md=3),
            dbc.Col(kpi_card(t("widget.open_orders", "pages", lang), str(s.open_orders), "#58a6ff",
                             icon="🛠", href="/preventive/orders"), xs=6, md=3),
            dbc.Col(kpi_card(t("widget.stock_alerts", "pages", lang), str(s.stock_alerts),
                             "#e8a020" if s.stock_alerts else "#2ea44f", icon="📦", href="/materials/stock"), xs=6, md=3),
        ],
        className="g-3",
    )


def _equipment_status_widget(equipment, theme, lang):
    counts = dashboard_summary(equipment, [], []).status_counts
    counts = {k: v for k, v in counts.items() if v}
    if not counts:
        fig = empty_figure(theme, t("no_data", "data_table", lang), height=240)
    else:
        colors = STATUS_COLORS["EquipmentStatus"]
        fig = go.Figure(go.Pie(
            labels=[t(f"EquipmentStatus.{k}", "options", lang, fallback=k) for k in counts],
            values=list(counts.values()),
            marker={"colors": [colors[k] for k in counts]},
            hole=0.55,
            textinfo="value",
        ))
        fig.update_layout(**base_layout(theme, height=240))
    return panel(t("widget.equipment_status", "pages", lang),
                 dcc.Graph(figure=fig, config={"displayModeBar": False}))


def _failures_widget(failures, lang):
    recent = sorted(failures, key=lambda f: f.get("reported_at") or "", reverse=True)[:LIST_LIMIT]
    rows = [
        _row(f.get("equipment_name"), status_badge("failure", f.get("status"), lang),
             f"{f.get('reported_at', '')} · {f.get('failure_type', '')}")
        for f in recent
    ]
    return panel(t("widget.failures", "pages", lang), _list(rows, lang))


def _work_orders_widget(orders, lang):
    closed = {PreventiveOrderStatus.COMPLETED.value, PreventiveOrderStatus.CANCELLED.value}
    upcoming = sorted(
        (o for o in orders if o.get("status") not in closed),
        key=lambda o: o.get("scheduled_date") or "",
    )[:LIST_LIMIT]
    rows = [
        _row(o.get("equipment_name") or o.get("order_number"),
             status_badge("PreventiveOrderStatus", o.get("status"), lang),
             f"{o.get('scheduled_date', '')} · {o.get('order_number', '')}")
        for o in upcoming
    ]
    return panel(t("widget.work_orders", "pages", lang), _list(rows, lang))


def _stock_widget(stocks, lang):
    alerts = {StockStatus.LOW.value, StockStatus.OUT.value}
    low = [s for s in stocks if s.get("status") in alerts][:LIST_LIMIT]
    rows = [
        _row(s.get("material_name"), status_badge("StockStatus", s.get("status"), lang),
             f"{s.get('current_stock')} / {s.get('safety_stock')} {s.get('unit', '')}")
        for s in low
    ]
    return panel(t("widget.stock", "pages", lang), _list(rows, lang))


# ── KPI page ──────────────────────────────────────────────────────────────────

def _kpi_cards(metrics, lang):
    o = kpi_overview(metrics)
    grade = health_grade(o.avg_health if metrics else None)
    cards = [
        (t("kpi.avg_mtbf", "pages", lang), f"{o.avg_mtbf:,.1f} h", kpi_color(o.avg_mtbf, 500, 200)),
        (t("kpi.avg_mttr", "pages", lang), f"{o.avg_mttr:,.1f} h", kpi_color(-o.avg_mttr, -4, -8)),
        (t("kpi.avg_availability", "pages", lang), f"{o.avg_availability:.1f}%", kpi_color(o.avg_availability, 95, 90)),
        (t("kpi.avg_oee", "pages", lang), f"{o.avg_oee:.1f}%", kpi_color(o.avg_oee, 85, 65)),
        (t("kpi.avg_health", "pages", lang), f"{o.avg_health:.1f} ({grade})", GRADE_COLORS[grade]),
        (t("kpi.high_risk", "pages", lang), str(o.risk_counts["high"] + o.risk_counts["critical"]), "#da3633"),
    ]
    return dbc.Row(
        [dbc.Col(kpi_card(label, value, color), xs=6, md=2) for label, value, color in cards],
        className="g-3",
    )


def _health_figure(metrics, theme, lang):
    if not metrics:
        return empty_figure(theme, t("no_data", "data_table", lang))
    ordered = sorted(metrics, key=lambda m: m.get("health_score") or 0)
    fig = go.Figure(go.Bar(
        x=[m.get("health_score") for m in ordered],
        y=[m.get("equipment_name") for m in ordered],
        orientation="h",
        marker={"color": [GRADE_COLORS[health_grade(m.get("health_score"))] for m in ordered]},
        text=[health_grade(m.get("health_score")) for m in ordered],
        textposition="outside",
    ))
    fig.update_layout(**base_layout(theme, showlegend=False))
    fig.update_xaxes(range=[0, 105])
    return fig


def _oee_figure(metrics, theme, lang):
    df = kpi_trend(metrics, make_rng())
    if df.empty:
        return empty_figure(theme, t("no_data", "data_table", lang))
    fig = go.Figure()
    for name, group in df.groupby("equipment_name", sort=False):
        fig.add_trace(go.Scatter(x=group["date"], y=group["oee"], mode="lines", name=name))
    fig.add_hline(y=85, line_dash="dot", line_color="#2ea44f",
                  annotation_text=t("kpi.world_class", "pages", lang), annotation_position="top left")
    fig.update_layout(**base_layout(theme))
    return fig


def register(app) -> None:

    @app.callback(
        Output("dashboard-content", "children"),
        Input("dashboard-widgets", "value"),
        Input(dt_id("data", "equipment"), "data"),
        Input(dt_id("data", "preventive_orders"), "data"),
        Input(dt_id("data", "materials"), "data"),
        Input(dt_id("data", "failures"), "data"),
        State("store-app", "data"),
    )
    def update_dashboard(widgets, equipment, orders, stocks, failures, app_data):
        state = load_state(app_data)
        lang = state.language
        equipment, orders, stocks, failures = equipment or [], orders or [], stocks or [], failures or []
        shown = set(widgets or [])

        children = []
        if "kpi" in shown:
            children.append(html.Div(_kpi_widget(equipment, orders, stocks, lang), className="mb-3"))
        builders = {
            "equipment_status": lambda: _equipment_status_widget(equipment, state.theme, lang),
            "failures": lambda: _failures_widget(failures, lang),
            "work_orders": lambda: _work_orders_widget(orders, lang),
            "stock": lambda: _stock_widget(stocks, lang),
        }
        cols = [dbc.Col(build(), md=6) for key, build in builders.items() if key in shown]
        if cols:
            children.append(dbc.Row(cols, className="g-3"))
        if not children:
            children.append(html.Div(t("dashboard.empty", "pages", lang), style={"color": MUTED}))
        return children

    @app.callback(
        Output("kpi-cards", "children"),
        Output("kpi-health-chart", "figure"),
        Output("kpi-oee-chart", "figure"),
        Input(dt_id("data", "kpi"), "data"),
        State("store-app", "data"),
    )
    def update_kpi(metrics, app_data):
        state = load_state(app_data)
        metrics = metrics or []
        return (
            _kpi_cards(metrics, state.language),
            _health_figure(metrics, state.theme, state.language),
            _oee_figure(metrics, state.theme, state.language),
        )
