"""
Renders one what-if panel from its DomainModel declaration.

Slider and toggle controls come from ``model.sliders`` and the intervention
registry; BAN cards from ``model.headline``; charts from the DerivedMetrics
shares/tables, the three-scenario projection and any named extra series.
Nothing here computes a metric; it only lays out what the engine returns.
"""
from __future__ import annotations

from dataclasses import replace

import pandas as pd
import streamlit as st

import app.charts as charts
from app import session
from app.branding import render_ban, render_chart_title, render_section
from app.sidebar import build_domain_state, on_push_to_main
from config.constants import TRAVEL_DESTINATIONS
from core.domains import get_engine
from core.engine import DEMAND_KEY, FUNDING_KEY, ScenarioEngine
from core.formatting import format_metric
from core.models import UserInputs
from services.geodata import load_world_geojson


# Table → ROI chart value column (first present wins)
_ROI_VALUE_KEYS = ("roi", "gas_saving_pct")
_SERIES_SKIP = {"year", "historical"}


def widget_key(domain_id: str, key: str) -> str:
    return f"{domain_id}:{key}"


# ─────────────────────────────────────────────────────────────────────────────
# CONTROLS
# ─────────────────────────────────────────────────────────────────────────────
def _render_slider(domain_id: str, spec, value: float) -> float:
    return st.slider(
        f"{spec.label} ({spec.unit})" if spec.unit else spec.label,
        min_value=float(spec.min_value),
        max_value=float(spec.max_value),
        value=float(value),
        step=float(spec.step),
        key=widget_key(domain_id, spec.key),
    )


def render_controls(engine: ScenarioEngine, inputs: UserInputs) -> UserInputs:
    """Draw every declared slider and intervention toggle; return updated inputs."""
    model = engine.model
    domain_id = model.domain_id
    grouped: dict[str, list] = {}
    for spec in model.sliders:
        group = spec.key.split(".")[1] if spec.key.startswith("alloc.") else ""
        grouped.setdefault(group, []).append(spec)

    updated = inputs
    for group, specs in grouped.items():
        container = st.expander(f"{group.title()} programmes") if group else st.container()
        with container:
            for spec in specs:
                if spec.key == FUNDING_KEY:
                    level = _render_slider(domain_id, spec, updated.funding_level)
                    updated = updated.with_funding(level)
                elif spec.key == DEMAND_KEY:
                    demand = _render_slider(domain_id, spec, updated.demand_index)
                    updated = replace(updated, demand_index=demand)
                else:
                    value = _render_slider(domain_id, spec, updated.sliders.get(spec.key, spec.default))
                    updated = updated.with_slider(spec.key, value)

    if len(model.registry):
        st.markdown("**Interventions**")
        cols = st.columns(2)
        for i, spec in enumerate(model.registry):
            with cols[i % 2]:
                on = st.toggle(
                    spec.display_name,
                    value=bool(updated.enabled.get(spec.id, spec.enabled_by_default)),
                    key=widget_key(domain_id, f"iv.{spec.id}"),
                )
            updated = updated.toggled(spec.id, on)
    return updated


# ─────────────────────────────────────────────────────────────────────────────
# OUTPUTS
# ─────────────────────────────────────────────────────────────────────────────
def render_headline(model, metrics, reference=None) -> None:
    cols = st.columns(min(3, max(1, len(model.headline))))
    for i, ban in enumerate(model.headline):
        value = metrics[ban.metric]
        subtext = ""
        if reference is not None and ban.kind != "percent":
            subtext = f"No funding: {format_metric(reference[ban.metric], ban.kind, ban.unit)}"
        with cols[i % len(cols)]:
            render_ban(ban.label, format_metric(value, ban.kind, ban.unit), subtext, position=i)


def render_projection(engine: ScenarioEngine, inputs: UserInputs, current_year: int) -> None:
    metrics = engine.model.projection.metrics
    if not metrics:
        return
    series = engine.project(inputs, current_year=current_year)
    render_section("Scenario projection")
    metric = st.selectbox(
        "Projected metric", list(metrics),
        format_func=lambda m: m.replace("_", " ").capitalize(),
        key=widget_key(engine.domain_id, "projection_metric"),
    )
    st.plotly_chart(charts.projection_figure(series, metric), use_container_width=True,
                    config={"displayModeBar": False})
    with st.expander("Projection data"):
        st.dataframe(series.to_frame(), use_container_width=True, hide_index=True)


def render_shares(result) -> None:
    if not result.shares:
        return
    render_section("Breakdown")
    cols = st.columns(min(3, len(result.shares)))
    for i, (name, shares) in enumerate(result.shares.items()):
        with cols[i % len(cols)]:
            render_chart_title(name.replace("_", " "))
            st.plotly_chart(charts.share_donut(shares), use_container_width=True,
                            config={"displayModeBar": False})


def render_tables(result) -> None:
    tables = result.tables
    if "roi" in tables and tables["roi"]:
        value_key = next((k for k in _ROI_VALUE_KEYS if k in tables["roi"][0]), None)
        if value_key:
            render_section("Intervention returns")
            st.plotly_chart(charts.bar_figure(tables["roi"], "label", value_key),
                            use_container_width=True, config={"displayModeBar": False})

    if "compliance" in tables:
        render_section("Monthly policy compliance")
        st.plotly_chart(charts.compliance_heatmap(tables["compliance"]),
                        use_container_width=True, config={"displayModeBar": False})

    if "destinations" in tables:
        render_section("Destinations")
        geojson = load_world_geojson(
            extra_url=st.session_state.get("geodata_url") or None,
            timeout=st.session_state.get("geodata_timeout", session.geodata_timeout()),
        )
        st.plotly_chart(charts.destinations_map(tables["destinations"], geojson),
                        use_container_width=True, config={"displayModeBar": False})
        if geojson.get("source") == "embedded":
            st.caption("ℹ️ World map unavailable — showing simplified country outlines")

    if "allocations" in tables:
        render_section("Allocations")
        st.plotly_chart(charts.bar_figure(tables["allocations"], "programme", "allocated"),
                        use_container_width=True, config={"displayModeBar": False})

    for name, rows in tables.items():
        if rows and name != "compliance":
            with st.expander(f"{name.replace('_', ' ').capitalize()} table"):
                st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


def render_series(engine: ScenarioEngine, inputs: UserInputs, current_year: int) -> None:
    for name in engine.model.series_names:
        rows = engine.series(name, inputs, current_year=current_year)
        if not rows:
            continue
        ys = [k for k, v in rows[0].items() if k not in _SERIES_SKIP and isinstance(v, (int, float))]
        render_section(name.replace("_", " "))
        st.plotly_chart(charts.series_figure(rows, "year", ys), use_container_width=True,
                        config={"displayModeBar": False})


# ─────────────────────────────────────────────────────────────────────────────
# PANEL
# ─────────────────────────────────────────────────────────────────────────────
def external_data(domain_id: str, current_year: int) -> dict:
    """Collaborator data the engine does not own."""
    external = {"current_year": current_year}
    if domain_id == "travel":
        external["destinations"] = TRAVEL_DESTINATIONS
    return external


def render(domain_id: str) -> None:
    """Render the full panel for *domain_id*."""
    engine = get_engine(domain_id)
    model = engine.model
    current_year = st.session_state.get("current_year", session.current_year())

    st.header(f"{model.icon} {model.label}")
    controls, outputs = st.columns([1, 3])
    with controls:
        inputs = render_controls(engine, session.get_inputs(domain_id))
        session.set_inputs(domain_id, inputs)

    external = external_data(domain_id, current_year)
    result = engine.compute_metrics(inputs, external=external)
    reference = None
    if len(model.registry):
        reference = engine.compute_metrics(inputs.with_funding(0.0), external=external)

    with outputs:
        render_headline(model, result, reference)
        render_projection(engine, inputs, current_year)
        render_shares(result)
        render_tables(result)
        render_series(engine, inputs, current_year)

    with controls:
        st.markdown("---")
        if st.button("📤 Push to main dashboard", key=widget_key(domain_id, "push"),
                     use_container_width=True):
            on_push_to_main(build_domain_state(domain_id, engine.clamp_inputs(inputs), result))
            st.success("Scenario sent to the main dashboard.")
