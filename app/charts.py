"""
Plotly figure builders for the what-if panels.

Every builder takes plain records (or a ProjectionSeries) and returns a
``go.Figure``; none of them touch Streamlit, so they can be exercised in tests
without a running app.
"""
from __future__ import annotations

from typing import Iterable, Mapping, Optional

import pandas as pd
import plotly.graph_objects as go

from core.models import SCENARIO_KEYS, SCENARIO_LABELS, ProjectionSeries

CHART_LAYOUT = dict(
    plot_bgcolor="rgba(0,0,0,0)",
    paper_bgcolor="rgba(0,0,0,0)",
    font=dict(family="Nunito Sans, sans-serif", size=11, color="#071A2F"),
    margin=dict(t=20, b=10, l=0, r=0),
    height=300,
    yaxis=dict(gridcolor="#E8EEF4", zerolinecolor="#D0DAE4", tickfont=dict(size=10)),
    xaxis=dict(tickfont=dict(size=10)),
    showlegend=False,
)

SCENARIO_COLOURS = {
    "business_as_usual": "#E84C4C",
    "partial":           "#4A6FA5",
    "full_intervention": "#1DB87A",
}

PALETTE = ["#00C2A8", "#4A6FA5", "#1DB87A", "#FFA500", "#E84C4C", "#0A5C3E", "#CBD8E6"]


def _layout(**overrides) -> dict:
    return {**CHART_LAYOUT, **overrides}


def _label(key: str) -> str:
    return key.replace("_", " ").capitalize()


# ─────────────────────────────────────────────────────────────────────────────
# PROJECTIONS
# ─────────────────────────────────────────────────────────────────────────────
def projection_figure(series: ProjectionSeries, metric: str, y_title: str = "") -> go.Figure:
    """Three scenario lines (BAU / current funding / full) for one metric."""
    if metric not in series.metrics:
        raise KeyError(f"Metric '{metric}' not projected. Available metrics: {list(series.metrics)}")
    fig = go.Figure()
    for key in SCENARIO_KEYS:
        rows = series.scenario(key)
        fig.add_trace(go.Scatter(
            x=[r["year"] for r in rows],
            y=[r[metric] for r in rows],
            mode="lines",
            name=SCENARIO_LABELS[key],
            line=dict(color=SCENARIO_COLOURS[key], width=2,
                      dash="dot" if key == "business_as_usual" else "solid"),
        ))
    fig.update_layout(**_layout(showlegend=True, legend=dict(orientation="h", y=-0.2)),
                      yaxis_title=y_title or _label(metric))
    return fig


def series_figure(rows: list[dict], x: str, ys: Iterable[str], kind: str = "line") -> go.Figure:
    """Generic multi-trace chart for a domain's extra series records."""
    frame = pd.DataFrame(rows)
    fig = go.Figure()
    for i, y in enumerate(ys):
        colour = PALETTE[i % len(PALETTE)]
        if kind == "bar":
            fig.add_trace(go.Bar(x=frame[x], y=frame[y], name=_label(y), marker_color=colour))
        else:
            fig.add_trace(go.Scatter(x=frame[x], y=frame[y], mode="lines", name=_label(y),
                                     line=dict(color=colour, width=2)))
    fig.update_layout(**_layout(showlegend=True, legend=dict(orientation="h", y=-0.2)))
    return fig


# ─────────────────────────────────────────────────────────────────────────────
# SHARES & RANKINGS
# ─────────────────────────────────────────────────────────────────────────────
def share_donut(shares: Mapping[str, float]) -> go.Figure:
    fig = go.Figure(go.Pie(
        labels=[_label(k) for k in shares],
        values=list(shares.values()),
        hole=0.55,
        marker=dict(colors=PALETTE[: len(shares)]),
        textinfo="label+percent",
        sort=False,
    ))
    fig.update_layout(**_layout(showlegend=False))
    return fig


def bar_figure(rows: list[dict], label_key: str, value_key: str, x_title: str = "") -> go.Figure:
    """Horizontal bars, largest at the top (ROI tables, allocations)."""
    ordered = sorted(rows, key=lambda r: r.get(value_key) or 0.0)
    fig = go.Figure(go.Bar(
        x=[r.get(value_key) or 0.0 for r in ordered],
        y=[r[label_key] for r in ordered],
        orientation="h",
        marker_color="#00C2A8",
    ))
    fig.update_layout(**_layout(), xaxis_title=x_title or _label(value_key))
    return fig


def gauge_figure(value: Optional[float], title: str, upper: float = 100.0) -> go.Figure:
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=value or 0.0,
        number={"suffix": "%"},
        title={"text": title},
        gauge={"axis": {"range": [0, upper]}, "bar": {"color": "#00C2A8"}},
    ))
    fig.update_layout(**_layout(margin=dict(t=40, b=10, l=20, r=20)))
    return fig


# ─────────────────────────────────────────────────────────────────────────────
# TRAVEL
# ─────────────────────────────────────────────────────────────────────────────
def compliance_heatmap(rows: list[dict]) -> go.Figure:
    """Single-row month heatmap of policy compliance (0–100)."""
    fig = go.Figure(go.Heatmap(
        z=[[r["compliance"] for r in rows]],
        x=[r["month"] for r in rows],
        y=["Compliance"],
        zmin=0, zmax=100,
        colorscale=[[0, "#E84C4C"], [0.5, "#FFA500"], [1, "#1DB87A"]],
        hovertemplate="%{x}: %{z:.1f}%<extra></extra>",
    ))
    fig.update_layout(**_layout(height=160))
    return fig


def destinations_map(rows: list[dict], geojson: dict) -> go.Figure:
    """Choropleth of flights per destination over *geojson*, with bubble markers."""
    fig = go.Figure()
    if rows:
        fig.add_trace(go.Choropleth(
            geojson=geojson,
            featureidkey="properties.name",
            locations=[r["country"] for r in rows],
            z=[r["flights"] for r in rows],
            colorscale="Teal",
            marker_line_color="#FFFFFF",
            showscale=False,
        ))
        fig.add_trace(go.Scattergeo(
            lon=[r["coordinates"][0] for r in rows],
            lat=[r["coordinates"][1] for r in rows],
            text=[f"{r['country']}: {r['flights']:,.0f} flights" for r in rows],
            marker=dict(size=[max(4.0, r["emissions"] ** 0.5) for r in rows], color="#4A6FA5"),
            hoverinfo="text",
        ))
    fig.update_geos(showcountries=True, showframe=False, lataxis_range=[-58, 85])
    fig.update_layout(**_layout(height=380))
    return fig
