"""
src/callbacks/data_table.py
────────────────────────────
Pattern-matching callbacks shared by every DataTable on every page.

The browser holds two things per table: the records (dt-data) and the view
state (dt-state, selection included). Each callback looks up the configured table in the
registry, binds it to those two stores, applies one transition and writes
the state back. Rendering is a pure function of state + records.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import replace

import dash_bootstrap_components as dbc
from dash import ALL, MATCH, Input, Output, State, ctx, dcc, no_update
from pydantic import ValidationError

from src.callbacks.navigation import clicked
from src.i18n.translator import t
from src.layout.components.data_table import (
    dt_id,
    filter_dropdown_options,
    render_import_result,
    render_pager,
    render_selection,
    render_summary,
    render_table,
)
from src.state.app_state import load_state
from src.table.data_table import DataTable
from src.table.exporter import MIME_TYPES, export_filename
from src.table.registry import get_merger, get_table
from src.table.view import TableState

logger = logging.getLogger(__name__)


def _bound(table_id: str, records: list | None, state_data: dict | None) -> DataTable:
    state = TableState.model_validate(state_data) if state_data else None
    return get_table(table_id).bind(records or [], state)


def localized(table: DataTable, lang: str | None) -> DataTable:
    """Copy whose spreadsheet headers are translated column titles."""
    out = copy.copy(table)
    out.export_columns = [replace(c, title=t(c.title, "fields", lang, fallback=c.title)) for c in table.export_columns]
    out.import_columns = [replace(c, title=t(c.title, "fields", lang, fallback=c.title)) for c in table.import_columns]
    return out


def filter_dropdowns(table_id: str, keys: list[str], records: list | None, lang: str | None) -> list[list[dict]]:
    """Dropdown options per filter column over the records currently in the store."""
    table = get_table(table_id).bind(records or [])
    return [filter_dropdown_options(table, key, lang) for key in keys]


def _page_target(target, table: DataTable) -> int:
    v = table.view
    return {
        "first": 1,
        "prev": v.page - 1,
        "next": v.page + 1,
        "last": v.page_count,
    }.get(target, target)


def register(app) -> None:

    # ── View state ────────────────────────────────────────────────────────────
    @app.callback(
        Output(dt_id("state", MATCH), "data"),
        Output(dt_id("search", MATCH), "value"),
        Output(dt_id("filter", MATCH, column=ALL), "value"),
        Input(dt_id("search", MATCH), "value"),
        Input(dt_id("filter", MATCH, column=ALL), "value"),
        Input(dt_id("reset", MATCH), "n_clicks"),
        Input(dt_id("sort", MATCH, column=ALL), "n_clicks"),
        Input(dt_id("page", MATCH, target=ALL), "n_clicks"),
        Input(dt_id("page-size", MATCH), "value"),
        Input(dt_id("columns", MATCH), "value"),
        State(dt_id("state", MATCH), "data"),
        State(dt_id("data", MATCH), "data"),
        prevent_initial_call=True,
    )
    def update_state(query, filter_values, _reset, _sorts, _pages, page_size, visible, state_data, records):
        trigger = ctx.triggered_id
        if trigger is None:
            return no_update, no_update, no_update
        table = _bound(trigger["table"], records, state_data)
        kind = trigger["type"]
        search_out, filters_out = no_update, no_update

        if kind == "dt-search":
            table.search(query)
        elif kind == "dt-filter":
            column = trigger["column"]
            values = {item["id"]["column"]: item.get("value") for item in ctx.inputs_list[1]}
            table.set_filter(column, values.get(column))
        elif kind == "dt-reset":
            if not clicked():
                return no_update, no_update, no_update
            table.reset()
            search_out, filters_out = "", ["all"] * len(filter_values)
        elif kind == "dt-sort":
            if not clicked():
                return no_update, no_update, no_update
            table.toggle_sort(trigger["column"])
        elif kind == "dt-page":
            if not clicked():
                return no_update, no_update, no_update
            table.go_to_page(_page_target(trigger["target"], table))
        elif kind == "dt-page-size":
            table.set_page_size(int(page_size))
        elif kind == "dt-columns":
            shown = set(visible or [])
            hidden = [c.key for c in table.columns if not c.hidden and c.key not in shown]
            table.state = table.state.model_copy(update={"hidden_columns": hidden})

        return table.state.model_dump(), search_out, filters_out

    # ── Render ────────────────────────────────────────────────────────────────
    @app.callback(
        Output(dt_id("body", MATCH), "children"),
        Output(dt_id("pager", MATCH), "children"),
        Output(dt_id("summary", MATCH), "children"),
        Output(dt_id("selection-count", MATCH), "children"),
        Output(dt_id("selection", MATCH), "style"),
        Input(dt_id("state", MATCH), "data"),
        Input(dt_id("data", MATCH), "data"),
        State("store-app", "data"),
    )
    def render(state_data, records, app_data):
        table_id = ctx.outputs_list[0]["id"]["table"]
        table = _bound(table_id, records, state_data)
        lang = load_state(app_data).language
        count, style = render_selection(table, lang)
        return render_table(table, lang), render_pager(table, lang), render_summary(table, lang), count, style

    # ── Filter options follow the records ─────────────────────────────────────
    @app.callback(
        Output(dt_id("filter", MATCH, column=ALL), "options"),
        Input(dt_id("data", MATCH), "data"),
        State("store-app", "data"),
    )
    def filter_options(records, app_data):
        if not ctx.outputs_list:
            return []
        table_id = ctx.outputs_list[0]["id"]["table"]
        keys = [item["id"]["column"] for item in ctx.outputs_list]
        return filter_dropdowns(table_id, keys, records, load_state(app_data).language)

    # ── Row selection ─────────────────────────────────────────────────────────
    @app.callback(
        Output(dt_id("state", MATCH), "data", allow_duplicate=True),
        Input(dt_id("select", MATCH, row=ALL), "value"),
        Input(dt_id("select-all", MATCH), "value"),
        Input(dt_id("deselect", MATCH), "n_clicks"),
        State(dt_id("state", MATCH), "data"),
        State(dt_id("data", MATCH), "data"),
        prevent_initial_call=True,
    )
    def select_rows(_rows, all_value, _deselect, state_data, records):
        trigger = ctx.triggered_id
        if trigger is None:
            return no_update
        table = _bound(trigger["table"], records, state_data)
        kind = trigger["type"]

        # Re-rendered checkboxes report their current value; only real changes count.
        if kind == "dt-select":
            value = bool(ctx.triggered[0]["value"])
            if value == (trigger["row"] in table.state.selected):
                return no_update
            table.select_row(trigger["row"], value)
        elif kind == "dt-select-all":
            if bool(all_value) == table.all_selected:
                return no_update
            table.select_page(bool(all_value))
        elif kind == "dt-deselect":
            if not clicked():
                return no_update
            table.clear_selection()
        return table.state.model_dump()

    # ── Filter panel ──────────────────────────────────────────────────────────
    @app.callback(
        Output(dt_id("filter-collapse", MATCH), "is_open"),
        Input(dt_id("filter-toggle", MATCH), "n_clicks"),
        State(dt_id("filter-collapse", MATCH), "is_open"),
        prevent_initial_call=True,
    )
    def toggle_filters(n_clicks, is_open):
        return not is_open

    # ── Export / template download ────────────────────────────────────────────
    @app.callback(
        Output(dt_id("download", MATCH), "data"),
        Input(dt_id("export", MATCH, fmt=ALL), "n_clicks"),
        State(dt_id("state", MATCH), "data"),
        State(dt_id("data", MATCH), "data"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def download(_clicks, state_data, records, app_data):
        if not clicked():
            return no_update
        trigger = ctx.triggered_id
        lang = load_state(app_data).language
        table = localized(_bound(trigger["table"], records, state_data), lang)

        if trigger["fmt"] == "template":
            content = table.create_template("xlsx")
            filename = export_filename(table.title, "xlsx", suffix="_template")
            fmt = "xlsx"
        else:
            fmt = trigger["fmt"]
            content = table.export(fmt)
            filename = export_filename(table.title, fmt)
        logger.info("Download %s (%d bytes)", filename, len(content))
        return dcc.send_bytes(content, filename, type=MIME_TYPES[fmt])

    # ── Import: parse + preview ───────────────────────────────────────────────
    @app.callback(
        Output(dt_id("import-modal", MATCH), "is_open"),
        Output(dt_id("import-body", MATCH), "children"),
        Output(dt_id("import-result", MATCH), "data"),
        Output(dt_id("import-confirm", MATCH), "disabled"),
        Input(dt_id("upload", MATCH), "contents"),
        State(dt_id("upload", MATCH), "filename"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def preview_import(contents, filename, app_data):
        if not contents:
            return no_update, no_update, no_update, no_update
        lang = load_state(app_data).language
        table = localized(get_table(ctx.triggered_id["table"]), lang)
        result = table.import_file(contents, filename or "")
        body = render_import_result(result, table.columns, lang)
        return True, body, result.data, not result.data

    # ── Import: confirm / cancel ──────────────────────────────────────────────
    @app.callback(
        Output(dt_id("data", MATCH), "data", allow_duplicate=True),
        Output(dt_id("import-modal", MATCH), "is_open", allow_duplicate=True),
        Output(dt_id("import-result", MATCH), "data", allow_duplicate=True),
        Output(dt_id("upload", MATCH), "contents"),
        Output(dt_id("import-body", MATCH), "children", allow_duplicate=True),
        Output(dt_id("import-confirm", MATCH), "disabled", allow_duplicate=True),
        Input(dt_id("import-confirm", MATCH), "n_clicks"),
        Input(dt_id("import-cancel", MATCH), "n_clicks"),
        State(dt_id("import-result", MATCH), "data"),
        State(dt_id("data", MATCH), "data"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def finish_import(_confirm, _cancel, rows, records, app_data):
        if not clicked():
            return (no_update,) * 6
        trigger = ctx.triggered_id
        merged = no_update
        if trigger["type"] == "dt-import-confirm" and rows:
            merge = get_merger(trigger["table"])
            if merge is None:
                logger.warning("Table %s has no import merger", trigger["table"])
            else:
                try:
                    merged = merge(records or [], rows)
                except ValidationError as e:
                    logger.warning("Import into %s rejected on merge: %s", trigger["table"], e)
                    message = t("error.invalid_value", "data_table", load_state(app_data).language)
                    return no_update, True, no_update, no_update, dbc.Alert(message, color="danger"), True
        return merged, False, None, None, no_update, no_update
