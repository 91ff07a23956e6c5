"""
src/layout/components/kpi_card.py
──────────────────────────────────
Metric cards and titled panels shared by the dashboard, KPI and sensor pages.

Colors come from the theme CSS variables on the root container; only the
status color of a value is set inline.
"""
from dash import dcc, html


def kpi_card(
    label: str,
    value: str,
    color: str | None = None,
    icon: str = "",
    sub_label: str = "",
    href: str | None = None,
):
    """
    Headline metric card.

    Args:
        label: Metric name (shown above value)
        value: Formatted value string
        color: Status color for the value and the left edge; theme text if None
        icon: Optional single-char/emoji icon
        sub_label: Small secondary line below the value
        href: Makes the whole card a link to the matching list page
    """
    head = [html.Span(label, className="kpi-label")]
    if icon:
        head.insert(0, html.Span(icon, className="kpi-icon"))
    children = [
        html.Div(head, className="kpi-head"),
        html.Div(value, className="kpi-value", style={"color": color} if color else None),
    ]
    if sub_label:
        children.append(html.Div(sub_label, className="kpi-sub"))

    card = html.Div(
        children,
        className="kpi-card",
        style={"borderLeftColor": color} if color else None,
    )
    if href:
        return dcc.Link(card, href=href, className="kpi-link")
    return card


def stat(label: str, value: str, color: str | None = None) -> html.Div:
    """Label over value, for dense cards."""
    return html.Div([
        html.Div(label, className="stat-label"),
        html.Div(value, className="stat-value", style={"color": color} if color else None),
    ])


def panel(title: str, body, extra=None) -> html.Div:
    """Titled card container used by dashboard widgets and charts."""
    header = [html.Span(title, className="panel-title")]
    if extra is not None:
        header.append(html.Div(extra, className="ms-auto"))
    return html.Div(
        [html.Div(header, className="panel-head"), body],
        className="fms-panel",
    )
