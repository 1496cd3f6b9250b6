# © 2026 Aparajita Parihar. All rights reserved.
# CampusLens Platform — Smoke tests for the Plotly figure builders

import os
import sys

import plotly.graph_objects as go
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from app import charts
from config.constants import TRAVEL_DESTINATIONS
from core.domains import get_engine
from core.domains.travel import compliance_calendar
from services.geodata import fallback_geojson


def test_projection_figure_has_three_scenarios():
    engine = get_engine("electricity")
    series = engine.project(engine.default_inputs().with_funding(50), current_year=2025)
    fig = charts.projection_figure(series, "carbon")
    assert isinstance(fig, go.Figure)
    assert [t.name for t in fig.data] == ["Business as usual", "Current funding", "Full intervention"]
    assert len(fig.data[0].x) == 26


def test_projection_figure_unknown_metric():
    engine = get_engine("population")
    series = engine.project(engine.default_inputs(), current_year=2025)
    with pytest.raises(KeyError, match="not projected"):
        charts.projection_figure(series, "carbon")


def test_share_donut_and_bars():
    result = get_engine("water").compute_metrics(get_engine("water").default_inputs().with_funding(60))
    donut = charts.share_donut(result.shares["facilities"])
    assert len(donut.data[0].values) == 6
    bars = charts.bar_figure(result.tables["roi"], "label", "roi")
    assert list(bars.data[0].x) == sorted(bars.data[0].x)


def test_series_figure_bar_kind():
    engine = get_engine("solar")
    rows = engine.series("cash_flow", engine.default_inputs(), current_year=2025)
    fig = charts.series_figure(rows, "year", ["capex", "savings"], kind="bar")
    assert [type(t) for t in fig.data] == [go.Bar, go.Bar]


def test_gauge_handles_none():
    assert charts.gauge_figure(None, "Progress").data[0].value == 0.0


def test_compliance_heatmap_twelve_months():
    fig = charts.compliance_heatmap(compliance_calendar(50, 30))
    assert len(fig.data[0].x) == 12


def test_destinations_map():
    engine = get_engine("travel")
    result = engine.compute_metrics(engine.default_inputs(), external={"destinations": TRAVEL_DESTINATIONS})
    fig = charts.destinations_map(result.tables["destinations"], fallback_geojson())
    assert isinstance(fig.data[0], go.Choropleth)
    assert len(fig.data[0].locations) == 15
    assert charts.destinations_map([], fallback_geojson()).data == ()
