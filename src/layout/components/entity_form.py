"""
src/layout/components/entity_form.py
─────────────────────────────────────
Modal add/edit form generated from an EntitySchema.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from src.crud.entity import EntitySchema, FormField
from src.i18n.translator import t


def form_id(kind: str, name: str, **extra) -> dict:
    return {"type": f"entity-{kind}", "table": name, **extra}


def _input(schema: EntitySchema, f: FormField, lang: str | None):
    fid = form_id("field", schema.name, field=f.key)
    if f.kind == "select":
        options = [
            {"label": t(o["label"], "options", lang, fallback=str(o["label"])), "value": o["value"]}
            for o in f.options
        ]
        return dbc.Select(id=fid, options=options, value=f.default)
    if f.kind == "checkbox":
        return dbc.Switch(id=fid, value=bool(f.default))
    if f.kind == "textarea":
        return dbc.Textarea(id=fid, value=f.default, rows=3)
    if f.kind == "date":
        return dbc.Input(id=fid, type="date", value=f.default or None)
    return dbc.Input(id=fid, type="number" if f.kind == "number" else "text", value=f.default)


def entity_modal(schema: EntitySchema, lang: str | None = None) -> html.Div:
    rows = []
    for f in schema.fields:
        label = t(f.label, "fields", lang, fallback=f.label)
        rows.append(dbc.Row(
            [
                dbc.Label([label, html.Span(" *", style={"color": "#da3633"}) if f.required else None], width=4),
                dbc.Col(_input(schema, f, lang), width=8),
            ],
            className="mb-2",
        ))

    return html.Div([
        dcc.Store(id=form_id("editing", schema.name), data=None),
        dbc.Modal(
            [
                dbc.ModalHeader(dbc.ModalTitle(id=form_id("title", schema.name))),
                dbc.ModalBody([
                    dbc.Alert(id=form_id("error", schema.name), color="danger", is_open=False),
                    dbc.Form(rows),
                ]),
                dbc.ModalFooter([
                    dbc.Button(t("cancel", "common", lang), id=form_id("cancel", schema.name),
                               n_clicks=0, color="secondary"),
                    dbc.Button(t("save", "common", lang), id=form_id("submit", schema.name),
                               n_clicks=0, color="primary"),
                ]),
            ],
            id=form_id("modal", schema.name),
            is_open=False,
            size="lg",
        ),
    ])
