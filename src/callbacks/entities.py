"""
src/callbacks/entities.py
──────────────────────────
Add / edit / delete for every entity page.

Tables for all schemas are registered here so the generic DataTable
callbacks can find them; accepted import rows are merged into the records
store with fresh ids.
"""
from __future__ import annotations

import logging
from functools import partial

from dash import ALL, MATCH, Input, Output, State, ctx, no_update
from pydantic import ValidationError

from src.callbacks.navigation import clicked
from src.crud.entity import (
    blank_form,
    create_record,
    delete_record,
    find_record,
    form_from_record,
    merge_imported,
    update_record,
    validate_form,
)
from src.crud.schemas import SCHEMAS, get_schema
from src.i18n.translator import t
from src.layout.components.data_table import dt_id
from src.layout.components.entity_form import form_id
from src.state.app_state import load_state
from src.table.registry import register_table

logger = logging.getLogger(__name__)

for _schema in SCHEMAS.values():
    register_table(_schema.table(), merge=partial(merge_imported, _schema))


def _validation_message(error: ValidationError, lang: str | None) -> str:
    fields = sorted({str(e["loc"][0]) for e in error.errors() if e.get("loc")})
    labels = ", ".join(t(f, "fields", lang, fallback=f) for f in fields)
    return t("invalid_fields", "common", lang, fields=labels)


def register(app) -> None:

    # ── Open / close the form ─────────────────────────────────────────────────
    @app.callback(
        Output(form_id("modal", MATCH), "is_open"),
        Output(form_id("editing", MATCH), "data"),
        Output(form_id("field", MATCH, field=ALL), "value"),
        Output(form_id("title", MATCH), "children"),
        Output(form_id("error", MATCH), "is_open"),
        Input(dt_id("add", MATCH), "n_clicks"),
        Input(dt_id("action", MATCH, action=ALL, row=ALL), "n_clicks"),
        Input(form_id("cancel", MATCH), "n_clicks"),
        State(dt_id("data", MATCH), "data"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def open_form(_add, _actions, _cancel, records, app_data):
        nothing = (no_update,) * 5
        if not clicked():
            return nothing
        trigger = ctx.triggered_id
        schema = get_schema(trigger["table"])
        lang = load_state(app_data).language
        name = t(schema.title_key, "pages", lang)

        if trigger["type"] == "entity-cancel":
            return False, None, no_update, no_update, False
        if trigger["type"] == "dt-add":
            form, editing = blank_form(schema), None
            title = t("add_title", "common", lang, name=name)
        elif trigger["type"] == "dt-action" and trigger["action"] == "edit":
            record = find_record(records or [], trigger["row"])
            if record is None:
                logger.warning("Edit of missing %s %s", schema.name, trigger["row"])
                return nothing
            form, editing = form_from_record(schema, record), record["id"]
            title = t("edit_title", "common", lang, name=name)
        else:
            return nothing

        keys = [item["id"]["field"] for item in ctx.outputs_list[2]]
        return True, editing, [form.get(k) for k in keys], title, False

    # ── Delete ────────────────────────────────────────────────────────────────
    @app.callback(
        Output(dt_id("data", MATCH), "data", allow_duplicate=True),
        Input(dt_id("action", MATCH, action=ALL, row=ALL), "n_clicks"),
        State(dt_id("data", MATCH), "data"),
        prevent_initial_call=True,
    )
    def delete_row(_actions, records):
        trigger = ctx.triggered_id
        if not clicked() or trigger is None or trigger["action"] != "delete":
            return no_update
        logger.info("Deleted %s %s", trigger["table"], trigger["row"])
        return delete_record(records or [], trigger["row"])

    # ── Save ──────────────────────────────────────────────────────────────────
    @app.callback(
        Output(dt_id("data", MATCH), "data", allow_duplicate=True),
        Output(form_id("modal", MATCH), "is_open", allow_duplicate=True),
        Output(form_id("error", MATCH), "children"),
        Output(form_id("error", MATCH), "is_open", allow_duplicate=True),
        Input(form_id("submit", MATCH), "n_clicks"),
        State(form_id("field", MATCH, field=ALL), "value"),
        State(form_id("editing", MATCH), "data"),
        State(dt_id("data", MATCH), "data"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def save(n_clicks, values, editing, records, app_data):
        if not n_clicks:
            return no_update, no_update, no_update, no_update
        schema = get_schema(ctx.triggered_id["table"])
        lang = load_state(app_data).language
        keys = [item["id"]["field"] for item in ctx.states_list[0]]

        cleaned, missing = validate_form(schema, dict(zip(keys, values)))
        if missing:
            labels = ", ".join(t(m, "fields", lang, fallback=m) for m in missing)
            return no_update, no_update, t("required_fields", "common", lang, fields=labels), True

        try:
            if editing:
                records = update_record(schema, records or [], editing, cleaned)
            else:
                records = create_record(schema, records or [], cleaned)
        except ValidationError as e:
            logger.info("Rejected %s form: %s", schema.name, e)
            return no_update, no_update, _validation_message(e, lang), True
        return records, False, "", False
