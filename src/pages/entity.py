"""
src/pages/entity.py
───────────────────
Generic CRUD page: title, DataTable with edit/delete actions and an add
button, modal form. One layout for every EntitySchema.
"""

from dash import html

from src.crud.entity import EntitySchema
from src.i18n.translator import t
from src.layout.components.data_table import data_table
from src.layout.components.entity_form import entity_modal


def page_header(title: str, subtitle: str = "") -> html.Div:
    children = [html.H2(title, className="page-title")]
    if subtitle:
        children.append(html.P(subtitle, className="page-subtitle"))
    return html.Div(children, className="page-header")


def layout(schema: EntitySchema, lang: str | None = None) -> html.Div:
    title = t(schema.title_key, "pages", lang)
    table = schema.table(title=title)
    return html.Div(
        [
            page_header(title, t(f"{schema.name}.subtitle", "pages", lang, fallback="")),
            data_table(table, lang, addable=True),
            entity_modal(schema, lang),
        ]
    )
