"""
src/layout/components/data_table.py
────────────────────────────────────
Dash rendering of a DataTable.

Static part (built once per page):   toolbar, filter panel, column
settings, page-size selector, download/upload, import preview modal.
Dynamic part (rebuilt by callbacks): header with sort buttons and the
select-all box, body rows with checkboxes and action buttons, pagination
bar, summary and selection lines, filter dropdown options.

Every component id is a dict {"type": "dt-…", "table": <table id>} so all
tables share the pattern-matching callbacks in src/callbacks/data_table.py.
"""
from __future__ import annotations

from typing import Any

import dash_bootstrap_components as dbc
from dash import dcc, html

from src.i18n.translator import t
from src.layout.components.status_badge import status_badge
from src.table.columns import Column, get_value
from src.table.data_table import DataTable
from src.table.importer import ImportResult

CARD_BG = "var(--fms-card)"
BG = "var(--fms-bg)"
BORDER = "var(--fms-border)"
MUTED = "var(--fms-muted)"
ACCENT = "var(--fms-accent)"

MAX_ERRORS_SHOWN = 10
PREVIEW_ROWS = 5
PAGE_WINDOW = 5

_SORT_ICONS = {"asc": "▲", "desc": "▼", None: "↕"}

_SELECTION_STYLE = {
    "alignItems": "center",
    "gap": "12px",
    "padding": "6px 12px",
    "marginBottom": "8px",
    "borderRadius": "6px",
    "backgroundColor": BG,
    "border": f"1px solid {BORDER}",
    "fontSize": ".8rem",
}


def dt_id(kind: str, table_id: str, **extra: Any) -> dict:
    return {"type": f"dt-{kind}", "table": table_id, **extra}


def column_title(column: Column, lang: str | None) -> str:
    return t(column.title, "fields", lang, fallback=column.title)


# ── Cells ─────────────────────────────────────────────────────────────────────

def format_value(value: Any) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, bool):
        return "✓" if value else "–"
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:,.2f}".rstrip("0").rstrip(".")
    return str(value)


def render_cell(column: Column, record: Any, lang: str | None):
    value = get_value(record, column.key)
    if column.option_group and value not in (None, ""):
        return status_badge(column.option_group, value, lang)
    if column.render is not None:
        return column.render(value, record)
    return format_value(value)


# ── Dynamic part ──────────────────────────────────────────────────────────────

def render_header(table: DataTable, lang: str | None) -> html.Thead:
    cells = []
    if table.selectable:
        cells.append(html.Th(
            dbc.Checkbox(id=dt_id("select-all", table.table_id), value=table.all_selected,
                         className="dt-check" + (" partial" if table.some_selected else "")),
            style={"width": "36px"},
        ))
    for column in table.visible_columns:
        title = column_title(column, lang)
        if column.sortable:
            direction = table.state.sort_direction if table.state.sort_key == column.key else None
            content = html.Button(
                [title, html.Span(_SORT_ICONS[direction], className="dt-sort-icon")],
                id=dt_id("sort", table.table_id, column=column.key),
                n_clicks=0,
                className="dt-sort-btn" + (" active" if direction else ""),
            )
        else:
            content = title
        cells.append(html.Th(content, style={"width": column.width, "textAlign": column.align}))
    if table.actions:
        cells.append(html.Th(t("actions", "data_table", lang), style={"textAlign": "right"}))
    return html.Thead(html.Tr(cells))


def _action_buttons(table: DataTable, record: Any, lang: str | None) -> html.Td:
    buttons = [
        dbc.Button(
            [action.icon, " ", t(action.label, "data_table", lang)] if action.icon else t(action.label, "data_table", lang),
            id=dt_id("action", table.table_id, action=action.key, row=str(get_value(record, "id"))),
            n_clicks=0,
            size="sm",
            color="danger" if action.variant == "destructive" else "secondary",
            outline=True,
            disabled=action.is_disabled(record),
            className="ms-1",
        )
        for action in table.actions_for(record)
    ]
    return html.Td(buttons, style={"textAlign": "right", "whiteSpace": "nowrap"})


def render_body(table: DataTable, lang: str | None) -> html.Tbody:
    columns = table.visible_columns
    rows = table.rows
    if not rows:
        span = len(columns) + (1 if table.actions else 0) + (1 if table.selectable else 0)
        return html.Tbody(html.Tr(html.Td(
            t("no_data", "data_table", lang),
            colSpan=span,
            style={"textAlign": "center", "color": MUTED, "padding": "24px"},
        )))
    body = []
    for record in rows:
        cells = [
            html.Td(render_cell(c, record, lang), style={"textAlign": c.align})
            for c in columns
        ]
        selected = table.selectable and table.is_selected(record)
        if table.selectable:
            cells.insert(0, html.Td(dbc.Checkbox(
                id=dt_id("select", table.table_id, row=table.row_id(record)),
                value=selected,
                className="dt-check",
            )))
        if table.actions:
            cells.append(_action_buttons(table, record, lang))
        body.append(html.Tr(cells, className="dt-selected" if selected else None))
    return html.Tbody(body)


def render_table(table: DataTable, lang: str | None) -> html.Table:
    return html.Table(
        [render_header(table, lang), render_body(table, lang)],
        className="dt-table",
    )


def _page_window(page: int, page_count: int) -> range:
    half = PAGE_WINDOW // 2
    first = max(1, min(page - half, page_count - PAGE_WINDOW + 1))
    last = min(page_count, first + PAGE_WINDOW - 1)
    return range(first, last + 1)


def render_pager(table: DataTable, lang: str | None) -> html.Div:
    v = table.view
    tid = table.table_id

    def nav(target: Any, label: str, disabled: bool, active: bool = False) -> dbc.Button:
        return dbc.Button(
            label,
            id=dt_id("page", tid, target=target),
            n_clicks=0,
            size="sm",
            color="primary" if active else "secondary",
            outline=not active,
            disabled=disabled,
            className="me-1",
        )

    first_page = v.page <= 1
    last_page = v.page >= v.page_count
    buttons = [nav("first", "«", first_page), nav("prev", "‹", first_page)]
    buttons += [nav(p, str(p), False, active=p == v.page) for p in _page_window(v.page, v.page_count)]
    buttons += [nav("next", "›", last_page), nav("last", "»", last_page)]
    return html.Div(buttons, style={"display": "flex", "flexWrap": "wrap"})


def render_summary(table: DataTable, lang: str | None) -> str:
    s = table.summary
    return t(
        "summary", "data_table", lang,
        start=s.start, end=s.end, filtered=s.filtered, total=s.total,
    )


def render_selection(table: DataTable, lang: str | None) -> tuple[str, dict]:
    """Selected-count text and the bar style; the bar is hidden when nothing is selected."""
    count = len(table.selected_rows) if table.selectable else 0
    style = dict(_SELECTION_STYLE, display="flex" if count else "none")
    return t("selected_count", "data_table", lang, count=count), style


def filter_dropdown_options(table: DataTable, key: str, lang: str | None) -> list[dict]:
    """"All" followed by the column's options over the table's current records."""
    options = [{"label": t("all", "data_table", lang), "value": "all"}]
    options += [
        {"label": t(o.label, "options", lang, fallback=o.label), "value": o.value}
        for o in table.filter_options(key)
    ]
    return options


# ── Import preview ────────────────────────────────────────────────────────────

def render_import_result(result: ImportResult, columns: list[Column], lang: str | None) -> html.Div:
    summary = result.summary
    counters = dbc.Row(
        [
            dbc.Col(_counter(t("import_total", "data_table", lang), summary.total, ACCENT)),
            dbc.Col(_counter(t("import_success", "data_table", lang), summary.success, "#2ea44f")),
            dbc.Col(_counter(t("import_failed", "data_table", lang), summary.failed, "#da3633")),
        ],
        className="g-2 mb-3",
    )
    children: list = [counters] if result.success else []

    if result.errors:
        items = []
        for err in result.errors[:MAX_ERRORS_SHOWN]:
            message = t(f"error.{err.code}", "data_table", lang, fallback=err.message)
            if err.row:
                field = t(err.field, "fields", lang, fallback=err.field) if err.field else ""
                items.append(html.Li(t("row_error", "data_table", lang, row=err.row, field=field, message=message)))
            else:
                items.append(html.Li(message))
        hidden = len(result.errors) - MAX_ERRORS_SHOWN
        if hidden > 0:
            items.append(html.Li(t("more_errors", "data_table", lang, count=hidden), style={"color": MUTED}))
        children.append(dbc.Alert(html.Ul(items, className="mb-0"), color="danger"))

    if result.data:
        keys = [c.key for c in columns]
        titles = {c.key: column_title(c, lang) for c in columns}
        shown = [k for k in keys if any(k in row for row in result.data)] or list(result.data[0])
        preview = html.Table(
            [
                html.Thead(html.Tr([html.Th(titles.get(k, k)) for k in shown])),
                html.Tbody([
                    html.Tr([html.Td(format_value(row.get(k))) for k in shown])
                    for row in result.data[:PREVIEW_ROWS]
                ]),
            ],
            className="dt-table",
        )
        children += [
            html.Div(t("import_preview", "data_table", lang, count=min(PREVIEW_ROWS, len(result.data))),
                     style={"fontSize": ".75rem", "color": MUTED, "marginBottom": "6px"}),
            html.Div(preview, style={"overflowX": "auto"}),
        ]
    return html.Div(children)


def _counter(label: str, value: int, color: str) -> html.Div:
    return html.Div(
        [
            html.Div(label, style={"fontSize": ".68rem", "color": MUTED}),
            html.Div(str(value), style={"fontSize": "1.3rem", "fontWeight": "700", "color": color}),
        ],
        style={"border": f"1px solid {BORDER}", "borderRadius": "6px", "padding": "8px 12px"},
    )


# ── Static part ───────────────────────────────────────────────────────────────

def _filter_panel(table: DataTable, lang: str | None) -> dbc.Collapse:
    dropdowns = []
    for column in table.filterable_columns:
        dropdowns.append(dbc.Col(
            [
                html.Label(column_title(column, lang), className="dt-label"),
                dcc.Dropdown(
                    id=dt_id("filter", table.table_id, column=column.key),
                    options=filter_dropdown_options(table, column.key, lang),
                    value="all",
                    clearable=False,
                    className="dt-dropdown",
                ),
            ],
            md=3,
        ))
    return dbc.Collapse(
        dbc.Row(dropdowns, className="g-2 mb-3"),
        id=dt_id("filter-collapse", table.table_id),
        is_open=False,
    )


def _column_settings(table: DataTable, lang: str | None) -> dbc.DropdownMenu:
    columns = [c for c in table.columns if not c.hidden]
    return dbc.DropdownMenu(
        dbc.Checklist(
            id=dt_id("columns", table.table_id),
            options=[{"label": column_title(c, lang), "value": c.key} for c in columns],
            value=[c.key for c in columns if c.key not in table.state.hidden_columns],
            className="px-3 py-1",
        ),
        label=t("columns", "data_table", lang),
        size="sm",
        color="secondary",
        className="me-2",
    )


def _toolbar(table: DataTable, lang: str | None, addable: bool) -> html.Div:
    tid = table.table_id
    left = []
    if table.searchable:
        left.append(dbc.Input(
            id=dt_id("search", tid),
            placeholder=t("search_placeholder", "data_table", lang),
            value=table.state.query,
            debounce=True,
            size="sm",
            style={"maxWidth": "260px"},
            className="me-2",
        ))
    if table.filterable and table.filterable_columns:
        left.append(dbc.Button(t("filters", "data_table", lang), id=dt_id("filter-toggle", tid),
                               n_clicks=0, size="sm", color="secondary", outline=True, className="me-2"))
    left.append(dbc.Button(t("reset", "data_table", lang), id=dt_id("reset", tid),
                           n_clicks=0, size="sm", color="secondary", outline=True, className="me-2"))
    left.append(_column_settings(table, lang))

    right = []
    if table.exportable:
        right += [
            dbc.Button(t("export_excel", "data_table", lang), id=dt_id("export", tid, fmt="xlsx"),
                       n_clicks=0, size="sm", color="success", outline=True, className="me-2"),
            dbc.Button(t("export_csv", "data_table", lang), id=dt_id("export", tid, fmt="csv"),
                       n_clicks=0, size="sm", color="success", outline=True, className="me-2"),
        ]
    if table.importable:
        right += [
            dbc.Button(t("template", "data_table", lang), id=dt_id("export", tid, fmt="template"),
                       n_clicks=0, size="sm", color="info", outline=True, className="me-2"),
            dcc.Upload(
                dbc.Button(t("import", "data_table", lang), size="sm", color="info", className="me-2"),
                id=dt_id("upload", tid),
                accept=".csv,.xlsx",
                multiple=False,
            ),
        ]
    if addable:
        right.append(dbc.Button(["+ ", t("add", "data_table", lang)], id=dt_id("add", tid),
                                n_clicks=0, size="sm", color="primary"))
    return html.Div(
        [
            html.Div(left, style={"display": "flex", "alignItems": "center", "flexWrap": "wrap"}),
            html.Div(right, style={"display": "flex", "alignItems": "center", "marginLeft": "auto"}),
        ],
        style={"display": "flex", "flexWrap": "wrap", "gap": "8px", "marginBottom": "12px"},
    )


def _import_modal(table: DataTable, lang: str | None) -> dbc.Modal:
    tid = table.table_id
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle(t("import_title", "data_table", lang))),
            dbc.ModalBody(html.Div(id=dt_id("import-body", tid))),
            dbc.ModalFooter([
                dbc.Button(t("cancel", "common", lang), id=dt_id("import-cancel", tid),
                           n_clicks=0, color="secondary"),
                dbc.Button(t("import_confirm", "data_table", lang), id=dt_id("import-confirm", tid),
                           n_clicks=0, color="primary"),
            ]),
        ],
        id=dt_id("import-modal", tid),
        is_open=False,
        size="lg",
    )


def data_table(
    table: DataTable,
    lang: str | None = None,
    data: list | None = None,
    addable: bool = False,
) -> html.Div:
    """
    Full table block.

    When `data` is given the records store is created here (page-local
    tables); otherwise it is expected in the root layout.
    """
    tid = table.table_id
    if data is not None:
        table = table.bind(data, table.state)
    count, selection_style = render_selection(table, lang)
    page_sizes = [{"label": t("page_size", "data_table", lang, size=n), "value": n}
                  for n in table.page_size_options]
    children = [
        dcc.Store(id=dt_id("state", tid), data=table.state.model_dump()),
        dcc.Store(id=dt_id("import-result", tid), data=None),
        dcc.Download(id=dt_id("download", tid)),
    ]
    if data is not None:
        children.append(dcc.Store(id=dt_id("data", tid), data=data))
    children += [
        _toolbar(table, lang, addable),
        _filter_panel(table, lang),
        html.Div(
            [
                html.Span(count, id=dt_id("selection-count", tid)),
                dbc.Button(t("deselect", "data_table", lang), id=dt_id("deselect", tid),
                           n_clicks=0, size="sm", color="secondary", outline=True),
            ],
            id=dt_id("selection", tid),
            style=selection_style,
        ),
        html.Div(id=dt_id("body", tid), style={"overflowX": "auto"}),
        html.Div(
            [
                html.Div(id=dt_id("summary", tid), style={"fontSize": ".75rem", "color": MUTED}),
                html.Div(id=dt_id("pager", tid), className="ms-auto"),
                dbc.Select(
                    id=dt_id("page-size", tid),
                    options=page_sizes,
                    value=table.state.page_size,
                    size="sm",
                    style={"width": "auto", "marginLeft": "8px"},
                ),
            ],
            style={"display": "flex", "alignItems": "center", "marginTop": "12px", "flexWrap": "wrap", "gap": "8px"},
        ),
    ]
    if table.importable:
        children.append(_import_modal(table, lang))

    return html.Div(
        children,
        className="dt-container",
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {BORDER}",
            "borderRadius": "8px",
            "padding": "16px",
        },
    )
