# © 2026 Aparajita Parihar. All rights reserved.
# CampusLens Platform — Tests for the projection generator

import os
import sys

import pandas as pd
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from core.domains import get_engine
from core.models import SCENARIO_KEYS
from core.projection import growth_factor, ramp_multiplier


# ─────────────────────────────────────────────────────────────────────────────
# 1. Multipliers
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("years,maturity,expected", [
    (0, 10, 0.0), (5, 10, 0.5), (10, 10, 1.0), (25, 10, 1.0), (0, 0, 1.0), (7, 0, 1.0),
])
def test_ramp_multiplier(years, maturity, expected):
    assert ramp_multiplier(years, maturity) == pytest.approx(expected)


def test_growth_factor_compounds():
    assert growth_factor(0, 0.015) == 1.0
    assert growth_factor(2, 0.1) == pytest.approx(1.21)


# ─────────────────────────────────────────────────────────────────────────────
# 2. Series shape
# ─────────────────────────────────────────────────────────────────────────────
def test_electricity_series_span_fixed_years():
    engine = get_engine("electricity")
    series = engine.project(engine.default_inputs(), current_year=2031)
    assert series.years[0] == 2025
    assert series.years[-1] == 2050
    for key in SCENARIO_KEYS:
        assert len(series.scenario(key)) == 26


def test_travel_series_start_at_injected_year():
    engine = get_engine("travel")
    series = engine.project(engine.default_inputs(), current_year=2030)
    assert series.years == list(range(2030, 2041))


def test_horizon_override_and_zero_horizon():
    engine = get_engine("water")
    inputs = engine.default_inputs()
    assert len(engine.project(inputs, current_year=2025, horizon_years=3).partial) == 4
    assert len(engine.project(inputs, current_year=2025, horizon_years=0).partial) == 1


def test_negative_horizon_raises():
    engine = get_engine("waste")
    with pytest.raises(ValueError, match="horizon_years"):
        engine.project(engine.default_inputs(), current_year=2025, horizon_years=-1)


# ─────────────────────────────────────────────────────────────────────────────
# 3. Growth & funding
# ─────────────────────────────────────────────────────────────────────────────
def test_bau_grows_at_domain_rate():
    engine = get_engine("electricity")
    series = engine.project(engine.default_inputs(), current_year=2025)
    first, tenth = series.at("business_as_usual", 2025), series.at("business_as_usual", 2035)
    assert tenth["total_use"] == pytest.approx(first["total_use"] * 1.015 ** 10)


def test_growth_rate_override():
    engine = get_engine("water")
    series = engine.project(engine.default_inputs(), current_year=2025, growth_rate=0.0)
    values = [row["total_use"] for row in series.business_as_usual]
    assert values == pytest.approx([values[0]] * len(values))


def test_bau_ignores_funding_and_full_uses_100():
    engine = get_engine("electricity")
    inputs = engine.default_inputs().with_funding(25)
    series = engine.project(inputs, current_year=2025)
    bau = engine.compute_metrics(inputs.with_funding(0))
    full = engine.compute_metrics(inputs.with_funding(100))
    assert series.business_as_usual[0]["total_use"] == pytest.approx(bau["total_use"])
    assert series.full_intervention[0]["total_use"] == pytest.approx(full["total_use"])


def test_gas_ramp_reaches_full_effect_at_maturity():
    engine = get_engine("gas")
    series = engine.project(engine.default_inputs().with_funding(40), current_year=2025,
                            growth_rate=0.0)
    reductions = [1 - r["total_use"] / series.business_as_usual[i]["total_use"]
                  for i, r in enumerate(series.partial)]
    assert reductions[0] == pytest.approx(0.0)
    assert reductions[5] < reductions[10]
    # Past maturity only the heat-pump trend keeps improving
    assert reductions[10] <= reductions[20] + 1e-12


# ─────────────────────────────────────────────────────────────────────────────
# 4. Accessors
# ─────────────────────────────────────────────────────────────────────────────
def test_at_outside_horizon_raises():
    engine = get_engine("travel")
    series = engine.project(engine.default_inputs(), current_year=2025)
    with pytest.raises(KeyError, match="outside the projection horizon"):
        series.at("partial", 2099)
    with pytest.raises(KeyError):
        series.scenario("optimistic")


def test_to_frame_is_long_format():
    engine = get_engine("waste")
    series = engine.project(engine.default_inputs(), current_year=2025, horizon_years=4)
    frame = series.to_frame()
    assert isinstance(frame, pd.DataFrame)
    assert len(frame) == 3 * 5
    assert set(frame["scenario"]) == set(SCENARIO_KEYS)
    assert {"year", "total_use", "cost", "carbon"} <= set(frame.columns)
