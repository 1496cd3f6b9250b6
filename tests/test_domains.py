# © 2026 Aparajita Parihar. All rights reserved.
# CampusLens Platform — Domain model tests (one section per panel)

import os
import sys
from dataclasses import replace

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config.constants import TRAVEL_DESTINATIONS
from core.domains import DOMAIN_IDS, get_domain_model, get_engine
from core.domains.base import DomainModel
from core.domains.financial import allocation_key
from core.domains.travel import compliance_calendar, monthly_variation
from core.engine import ScenarioContext
from core.formatting import format_metric


def _run(domain_id, funding=None, external=None, **sliders):
    engine = get_engine(domain_id)
    inputs = engine.default_inputs()
    if funding is not None:
        inputs = inputs.with_funding(funding)
    for key, value in sliders.items():
        inputs = inputs.with_slider(key, value)
    return engine.compute_metrics(inputs, external=external)


# ─────────────────────────────────────────────────────────────────────────────
# 0. Domain registry
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("domain_id", DOMAIN_IDS)
def test_get_domain_model(domain_id):
    model = get_domain_model(domain_id)
    assert isinstance(model, DomainModel)
    assert model.domain_id == domain_id
    assert model.headline, f"{domain_id} declares no BAN cards"


def test_unknown_domain_raises_valueerror():
    with pytest.raises(ValueError, match="Unknown domain"):
        get_domain_model("nuclear")


def test_unknown_series_and_slider_raise_keyerror():
    model = get_domain_model("solar")
    with pytest.raises(KeyError):
        model.slider_spec("tilt_angle")
    with pytest.raises(KeyError, match="not provided"):
        model.series("weather", get_engine("solar").default_inputs(), 2025)


# ─────────────────────────────────────────────────────────────────────────────
# 1. Electricity
# ─────────────────────────────────────────────────────────────────────────────
def test_electricity_full_funding():
    result = _run("electricity", funding=100)
    assert result["reduction_fraction"] == pytest.approx(0.65)
    assert result["total_use"] == pytest.approx(18_500_000 * 0.35)
    assert result["renewable_share"] == pytest.approx(65.0)
    assert result["peak_reduction"] == pytest.approx(25.0)


def test_electricity_footfall_scales_baseline():
    engine = get_engine("electricity")
    inputs = replace(engine.default_inputs(), demand_index=120)
    result = engine.compute_metrics(inputs)
    assert result["adjusted_baseline"] == pytest.approx(18_500_000 * 1.2)
    # per-student denominator scales with footfall too
    assert result["use_per_student"] == pytest.approx(18_500_000 / 25_000)


def test_electricity_renewable_share_needs_onsite_renewables():
    engine = get_engine("electricity")
    inputs = engine.default_inputs().with_funding(100).toggled("onsite_renewables", False)
    assert engine.compute_metrics(inputs)["renewable_share"] == pytest.approx(15.0)


def test_electricity_roi_table():
    rows = _run("electricity", funding=50).tables["roi"]
    assert len(rows) == 5
    led = next(r for r in rows if r["intervention"] == "led_retrofits")
    assert led["implementation_cost"] == pytest.approx(45_000 * 1.25)
    assert led["roi"] == pytest.approx(0.08 + 0.07 * 0.5)


def test_electricity_payback_is_none_without_savings():
    rows = _run("electricity", funding=0).tables["roi"]
    assert all(r["payback_years"] is None for r in rows)


# ─────────────────────────────────────────────────────────────────────────────
# 2. Natural gas
# ─────────────────────────────────────────────────────────────────────────────
def test_gas_defaults():
    result = _run("gas", funding=0)
    assert result["total_use"] == 8_500_000
    assert result["heat_pump_share"] == pytest.approx(5.0)
    assert result["carbon"] == pytest.approx(1_615 + 148.75)
    assert result["cost"] == pytest.approx(646_000 + 17_000)
    assert result["heating_intensity"] == pytest.approx(8_500_000 / 150_000)


def test_gas_roi_rows_cover_disabled_interventions():
    engine = get_engine("gas")
    inputs = engine.default_inputs().with_funding(100).toggled("dhw_efficiency", False)
    rows = engine.compute_metrics(inputs).tables["roi"]
    assert len(rows) == 6
    dhw = next(r for r in rows if r["intervention"] == "dhw_efficiency")
    assert dhw["enabled"] is False
    assert min(r["payback_years"] for r in rows) >= 0.5


def test_gas_heat_pump_trend_capped():
    engine = get_engine("gas")
    inputs = engine.default_inputs().with_funding(100)
    spec = engine.model.registry.get("heat_pump_conversion")
    result = engine.evaluate(inputs, years_elapsed=25)
    assert result["reduction_fraction"] == pytest.approx(0.95)
    ctx = ScenarioContext(engine.model, engine.clamp_inputs(inputs), years_elapsed=25)
    assert ctx.contribution(spec) == pytest.approx(0.39)


def test_gas_reduction_scale_reflects_the_clamp():
    engine = get_engine("gas")
    inputs = engine.clamp_inputs(engine.default_inputs())
    unclamped = ScenarioContext(engine.model, inputs.with_funding(50))
    clamped = ScenarioContext(engine.model, inputs.with_funding(100))
    assert unclamped.reduction_scale("use") == 1.0
    assert clamped.raw_reduction("use") == pytest.approx(1.0)
    assert clamped.reduction_scale("use") == pytest.approx(0.95)
    assert ScenarioContext(engine.model, inputs.with_funding(0)).reduction_scale("use") == 1.0


# ─────────────────────────────────────────────────────────────────────────────
# 3. Water
# ─────────────────────────────────────────────────────────────────────────────
def test_water_defaults():
    result = _run("water", funding=0)
    assert result["total_use"] == 450_000
    assert result["wastewater"] == pytest.approx(382_500)
    assert result["carbon"] == pytest.approx(157_500)
    assert result["cost"] == pytest.approx(1_125_000)
    assert result["reuse_rate"] == pytest.approx(5.0)
    assert result["litres_per_student_day"] == pytest.approx(450_000_000 / (25_000 * 365))


def test_water_full_funding_reuse_and_floors():
    result = _run("water", funding=100)
    total = 450_000 * (1 - 0.63)
    assert result["total_use"] == pytest.approx(total)
    assert result["reuse_rate"] == pytest.approx(35.0)
    assert result["carbon"] >= result["total_use"] * 0.35 * 0.2
    assert result["cost"] >= result["total_use"] * 2.5 * 0.4


def test_water_facility_floor():
    shares = _run("water", funding=100).shares["facilities"]
    assert min(shares.values()) > 0


# ─────────────────────────────────────────────────────────────────────────────
# 4. Waste
# ─────────────────────────────────────────────────────────────────────────────
def test_waste_defaults():
    result = _run("waste", funding=0)
    assert result["total_use"] == 12_500
    assert result["recycled"] == pytest.approx(5_625)
    assert result["reused"] == pytest.approx(625)
    assert result["landfill"] == pytest.approx(6_250)
    assert result["carbon"] == pytest.approx(26_250 - 4_500 - 750)
    assert result["cost"] == pytest.approx(1_500_000 - 253_125 - 53_125)
    assert result["kg_per_student"] == pytest.approx(500)


def test_waste_full_funding_rates():
    result = _run("waste", funding=100)
    assert result["recycling_rate"] == pytest.approx(85.0)
    assert result["reuse_rate"] == pytest.approx(15.0)
    assert result["diversion_rate"] == pytest.approx(100.0)
    assert result["landfill"] == pytest.approx(0.0, abs=1e-9)
    assert result["carbon"] >= result["total_use"] * 2.1 * 0.15


def test_waste_destination_split_conserves_tonnage():
    result = _run("waste", funding=40)
    assert result["recycled"] + result["reused"] + result["landfill"] == pytest.approx(result["total_use"])


# ─────────────────────────────────────────────────────────────────────────────
# 5. Business travel
# ─────────────────────────────────────────────────────────────────────────────
def test_travel_defaults():
    result = _run("travel")
    assert result["total_use"] == pytest.approx(3_570)
    assert result["carbon"] == pytest.approx(2_082.5 + 669.8)
    assert result["cost"] == pytest.approx(95_200 + 1_062_500 + 315_200)
    assert result["policy_compliance"] == pytest.approx(15.0)
    assert result["lower_emission_pct"] == pytest.approx(13.5)


def test_travel_rail_shift_needs_air_policy():
    engine = get_engine("travel")
    inputs = engine.default_inputs().toggled("air_travel_policy", False)
    result = engine.compute_metrics(inputs)
    assert result["air_reduction_pct"] == 0.0
    assert result["lower_emission_pct"] == 0.0


def test_travel_destinations_from_external_table():
    result = _run("travel", external={"destinations": TRAVEL_DESTINATIONS})
    rows = result.tables["destinations"]
    assert len(rows) == 15
    germany = next(r for r in rows if r["country"] == "Germany")
    assert germany["flights"] == pytest.approx(580 * 0.85)


def test_travel_without_destinations_still_aggregates():
    result = _run("travel")
    assert result.tables["destinations"] == []
    assert result["total_use"] > 0


def test_compliance_calendar_is_seeded():
    first = compliance_calendar(50, 30)
    assert first == compliance_calendar(50, 30)
    assert [r["month"] for r in first][:2] == ["Jan", "Feb"]
    assert all(0 <= r["compliance"] <= 100 for r in first)
    assert 0.9 <= monthly_variation(3, 30) <= 1.1


def test_compliance_calendar_saturates_at_100():
    assert all(r["compliance"] <= 100 for r in compliance_calendar(100, 100))


# ─────────────────────────────────────────────────────────────────────────────
# 6. Solar PV
# ─────────────────────────────────────────────────────────────────────────────
def test_solar_defaults():
    result = _run("solar")
    generation = 100 * 85 * 8.76
    assert result["annual_generation"] == pytest.approx(generation)
    assert result["annual_savings"] == pytest.approx(generation * 0.12)
    assert result["carbon_offset"] == pytest.approx(generation * 0.0004)
    assert result["initial_investment"] == pytest.approx(250_000)
    assert result["payback_years"] == pytest.approx(250_000 / (generation * 0.12))
    assert result["rooftop_utilisation"] == pytest.approx(100 / 3)


def test_solar_zero_capacity_has_no_payback():
    result = _run("solar", capacity_kw=0)
    assert result["payback_years"] is None
    assert result["roi_pct"] == 0.0


def test_solar_rooftop_clamped():
    assert _run("solar", capacity_kw=4_500)["rooftop_utilisation"] == 100.0


def test_solar_cash_flow_series():
    engine = get_engine("solar")
    rows = engine.series("cash_flow", engine.default_inputs(), current_year=2025)
    assert rows[0]["year"] == 2025 and rows[-1]["year"] == 2050
    assert sum(r["capex"] for r in rows) == pytest.approx(250_000)
    assert rows[5]["capex"] == 0.0


def test_solar_generation_series_flags_history():
    engine = get_engine("solar")
    rows = engine.series("generation", engine.default_inputs(), current_year=2024)
    assert rows[0]["year"] == 2020
    assert [r["historical"] for r in rows[:6]] == [True] * 5 + [False]


# ─────────────────────────────────────────────────────────────────────────────
# 7. Financial planning
# ─────────────────────────────────────────────────────────────────────────────
def test_financial_defaults():
    result = _run("financial")
    assert result["total_allocated"] == pytest.approx(5_275_000)
    assert result["remaining_budget"] == pytest.approx(-275_000)
    assert result["over_allocation"] == pytest.approx(275_000)
    assert result["utilisation_pct"] == pytest.approx(105.5)
    assert result["carbon_reduction"] == pytest.approx(3_689.5)


def test_financial_zero_budget_is_guarded():
    result = _run("financial", total_budget=0)
    assert result["utilisation_pct"] == 0.0
    assert all(row["budget_pct"] == 0.0 for row in result.tables["categories"])


def test_financial_zero_allocations():
    engine = get_engine("financial")
    inputs = engine.default_inputs()
    for spec in engine.model.sliders:
        if spec.key.startswith("alloc."):
            inputs = inputs.with_slider(spec.key, 0)
    result = engine.compute_metrics(inputs)
    assert result["carbon_reduction"] == 0.0
    assert result["cost_per_tonne"] is None
    assert sum(result.shares["categories"].values()) == pytest.approx(100.0)


def test_financial_allocation_slider_clamped():
    key = allocation_key("gas", "heat_pumps")
    result = _run("financial", **{key: 5_000_000})
    row = next(r for r in result.tables["allocations"] if r["programme"] == "heat_pumps")
    assert row["allocated"] == 1_000_000


def test_financial_budget_outlook():
    engine = get_engine("financial")
    rows = engine.series("budget_outlook", engine.default_inputs(), current_year=2025)
    assert len(rows) == 11
    assert rows[10]["budget"] == pytest.approx(5_000_000 * 1.035 ** 10)
    assert rows[1]["cumulative_carbon"] == pytest.approx(2 * 3_689.5)


# ─────────────────────────────────────────────────────────────────────────────
# 8. Student population
# ─────────────────────────────────────────────────────────────────────────────
def test_population_defaults():
    result = _run("population", external={"current_year": 2025})
    assert result["carbon_reduction_needed"] == pytest.approx(100)
    assert result["financial_impact"] == pytest.approx(240_000)
    assert result["adjusted_emissions"] == pytest.approx(45_900)
    assert result["kg_per_student"] == pytest.approx(4_590)
    assert result["annual_reduction_to_zero"] == pytest.approx(45_900 / 25)


def test_population_target_year_reached():
    result = _run("population", external={"current_year": 2050})
    assert result["annual_reduction_to_zero"] is None


def test_population_past_target_year_reports_no_annual_cut():
    result = _run("population", external={"current_year": 2060})
    assert result["years_to_target"] == 0
    assert result["annual_reduction_to_zero"] is None
    assert format_metric(result["annual_reduction_to_zero"], "number", "tCO₂e") == "N/A"


def test_population_series():
    engine = get_engine("population")
    rows = engine.series("population", engine.default_inputs(), current_year=2025)
    history = [r for r in rows if r["historical"]]
    assert [r["year"] for r in history] == [2020, 2021, 2022, 2023, 2024]
    assert rows[-1]["year"] == 2045
    assert rows[-1]["population"] == round(10_000 * 1.02 ** 20)


def test_budget_gap_series():
    engine = get_engine("population")
    rows = engine.series("budget_gap", engine.default_inputs(), current_year=2025)
    assert len(rows) == 11
    assert rows[0]["gap"] == pytest.approx(0.0)
    # 2% enrolment growth outpaces 1.5% budget growth
    assert rows[10]["gap"] < 0
