"""
src/callbacks/sensors.py
─────────────────────────
Live sensor panel: on each interval tick draw new readings, write them into
the sensors store (so the sensor list shows the latest values) and extend a
short rolling history for the chart.
"""
from __future__ import annotations

import logging

import dash_bootstrap_components as dbc
import plotly.graph_objects as go
from dash import Input, Output, State, no_update

from config.options import SensorStatus, status_color
from src.data.simulator import apply_readings, make_rng, simulate_sensor_values, to_dataframe
from src.data.models import SensorReading
from src.i18n.translator import t
from src.layout.components.charts import base_layout, empty_figure
from src.layout.components.data_table import dt_id, format_value
from src.layout.components.kpi_card import stat
from src.layout.components.status_badge import status_badge
from src.state.app_state import load_state

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 300  # readings kept for the chart
CARD_BG = "var(--fms-card)"
BORDER = "var(--fms-border)"

_rng = make_rng()


def _sensor_card(sensor: dict, lang: str | None) -> dbc.Col:
    status = sensor.get("status")
    color = status_color("SensorStatus", status)
    return dbc.Col(
        dbc.Card(
            dbc.CardBody([
                dbc.Row([
                    dbc.Col(stat(sensor.get("type", ""), sensor.get("name", "")), width=8),
                    dbc.Col(status_badge("SensorStatus", status, lang), width=4, className="text-end"),
                ]),
                stat(
                    t("sensor_live.value", "pages", lang),
                    f"{format_value(sensor.get('last_value'))} {sensor.get('unit', '')}",
                    color,
                ),
                stat(
                    t("sensor_live.range", "pages", lang),
                    f"{format_value(sensor.get('min_value'))} – {format_value(sensor.get('max_value'))}",
                ),
            ]),
            style={"backgroundColor": CARD_BG, "border": f"1px solid {color if status != 'active' else BORDER}"},
        ),
        xs=12, md=6, lg=3,
        className="mb-3",
    )


def _chart(history: list[dict], sensors: list[dict], state) -> go.Figure:
    if not history:
        return empty_figure(state.theme, t("sensor_live.waiting", "pages", state.language))
    df = to_dataframe([SensorReading.model_validate(h) for h in history])
    names = {s.get("id"): s.get("name", s.get("id")) for s in sensors}
    fig = go.Figure()
    for sensor_id, group in df.groupby("sensor_id", sort=False):
        fig.add_trace(go.Scatter(
            x=group["timestamp"], y=group["value"],
            mode="lines+markers", marker={"size": 4},
            name=names.get(sensor_id, sensor_id),
        ))
    fig.update_layout(**base_layout(state.theme, height=320))
    return fig


def register(app) -> None:

    @app.callback(
        Output(dt_id("data", "sensors"), "data", allow_duplicate=True),
        Output("sensor-history", "data"),
        Input("interval-sensors", "n_intervals"),
        State("sensor-live-pause", "value"),
        State(dt_id("data", "sensors"), "data"),
        State("sensor-history", "data"),
        prevent_initial_call=True,
    )
    def tick(n_intervals, paused, sensors, history):
        if paused or not sensors:
            return no_update, no_update
        readings = simulate_sensor_values(sensors, _rng)
        logger.debug("Tick %s: %d readings", n_intervals, len(readings))
        history = (history or []) + [r.model_dump() for r in readings]
        return apply_readings(sensors, readings), history[-HISTORY_LIMIT:]

    @app.callback(
        Output("sensor-live-cards", "children"),
        Output("sensor-live-chart", "figure"),
        Input("sensor-history", "data"),
        Input(dt_id("data", "sensors"), "data"),
        State("store-app", "data"),
    )
    def render_live(history, sensors, app_data):
        state = load_state(app_data)
        sensors = sensors or []
        shown = [s for s in sensors if s.get("status") != SensorStatus.INACTIVE.value]
        cards = dbc.Row([_sensor_card(s, state.language) for s in shown])
        return cards, _chart(history or [], sensors, state)
