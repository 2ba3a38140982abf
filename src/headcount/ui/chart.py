"""Plotly rendering for the registered-vs-actual chart."""
from __future__ import annotations

from collections.abc import Sequence

import plotly.graph_objects as go

from headcount.schemas.attendance import ChartRow

TITLE = "Registered vs Actual"
SUBTITLE = "Adults / Children"

SERIES_COLORS = {
    "Registered": "#1976d2",
    "Actual": "#f39c12",
}
BAR_WIDTH = 0.28


def build_figure(rows: Sequence[ChartRow], height: int = 300) -> go.Figure:
    """Grouped bars, one Registered/Actual pair per category, values on top."""
    groups = [row.group.value for row in rows]
    series = {
        "Registered": [row.registered for row in rows],
        "Actual": [row.actual for row in rows],
    }

    fig = go.Figure()
    for name, values in series.items():
        fig.add_trace(go.Bar(
            x=groups,
            y=values,
            name=name,
            marker_color=SERIES_COLORS[name],
            width=BAR_WIDTH,
            text=values,
            textposition="outside",
            cliponaxis=False,
            hovertemplate="%{x}<br>Count: %{y}<extra>" + name + "</extra>",
        ))

    fig.update_layout(
        barmode="group",
        height=height,
        margin=dict(t=10, r=20, l=0, b=5),
        plot_bgcolor="rgba(0,0,0,0)",
        legend=dict(orientation="h", yanchor="bottom", y=-0.25),
    )
    fig.update_yaxes(tickformat="d", rangemode="tozero", gridcolor="#e0e0e0", griddash="dash")
    return fig
