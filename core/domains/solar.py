# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Solar PV Scenario Model
# © 2026 Aparajita Parihar. All rights reserved.
#
# Rooftop PV sizing: one capacity slider drives generation, savings, carbon
# offset, investment, payback and ROI. Common metric keys describe the
# array itself: total_use = annual generation (kWh), cost = installed
# investment (€), carbon = annual offset (tCO₂e).
#
# Extra series:
#   cash_flow   CAPEX spread over five years against savings rising 3%/yr
#   generation  cumulative generation 2020–2050 with a smooth yearly swing
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import math

from config.constants import PROJECTION_END_YEAR, PROJECTION_START_YEAR, SOLAR_BASELINE
from core.domains.base import DomainModel
from core.engine import ScenarioContext
from core.models import DerivedMetrics, Headline, ProjectionSettings, SliderSpec, UserInputs


class SolarModel(DomainModel):
    domain_id = "solar"
    label = "Solar PV"
    icon = "☀️"
    baseline = SOLAR_BASELINE
    sliders = (
        SliderSpec("capacity_kw", "Installed capacity", 0, SOLAR_BASELINE["max_capacity_kw"], 100, 10, "kW"),
    )
    projection = ProjectionSettings(
        metrics=("annual_savings",),
        growth_rate=SOLAR_BASELINE["savings_growth"],
        horizon_years=PROJECTION_END_YEAR - PROJECTION_START_YEAR,
        start_year=PROJECTION_START_YEAR,
    )
    headline = (
        Headline("annual_generation", "Annual generation", "compact", "kWh"),
        Headline("annual_savings", "Annual savings", "currency"),
        Headline("carbon_offset", "Carbon offset", "number", "tCO₂e"),
        Headline("rooftop_utilisation", "Rooftop utilisation", "percent"),
        Headline("payback_years", "Payback", "years"),
        Headline("roi_pct", "Annual ROI", "percent"),
    )
    series_names = ("cash_flow", "generation")

    def _generation(self, capacity_kw: float) -> float:
        b = self.baseline
        return capacity_kw * b["system_efficiency_pct"] * b["hours_factor"]

    def compute(self, ctx: ScenarioContext) -> DerivedMetrics:
        b = self.baseline
        capacity = ctx.slider("capacity_kw")
        generation = self._generation(capacity)
        savings = generation * b["saving_per_kwh"] * ctx.growth_factor
        offset = generation * b["carbon_t_per_kwh"]
        investment = capacity * b["cost_per_kw"]
        utilisation = min(100.0, ctx.divide(generation, self._generation(b["max_capacity_kw"])) * 100)
        rooftop = min(100.0, capacity / b["rooftop_capacity_kw"] * 100)

        metrics = {
            "adjusted_baseline":    generation,
            "reduction_fraction":   0.0,
            "total_use":            generation,
            "cost":                 investment,
            "carbon":               offset,
            "capacity_kw":          capacity,
            "annual_generation":    generation,
            "annual_savings":       savings,
            "carbon_offset":        offset,
            "initial_investment":   investment,
            "payback_years":        ctx.divide(investment, savings, None),
            "roi_pct":              ctx.divide(savings, investment) * 100,
            "rooftop_utilisation":  rooftop,
            "capacity_utilisation": utilisation,
        }
        shares = {
            "rooftop": {"used": rooftop, "free": 100 - rooftop},
        }
        return self.result(metrics, shares)

    def cash_flow_series(self, inputs: UserInputs, current_year: int) -> list[dict]:
        """Yearly CAPEX / savings / cumulative net cash flow, 2025–2050."""
        b = self.baseline
        capacity = inputs.sliders["capacity_kw"]
        annual_capex = capacity * b["cost_per_kw"] / b["capex_years"]
        savings = self._generation(capacity) * b["saving_per_kwh"]
        rows, cumulative = [], 0.0
        for i in range(PROJECTION_END_YEAR - PROJECTION_START_YEAR + 1):
            capex = annual_capex if i < b["capex_years"] else 0.0
            yearly = savings * (1 + b["savings_growth"]) ** i
            cumulative += yearly - capex
            rows.append({
                "year":           PROJECTION_START_YEAR + i,
                "capex":          capex,
                "savings":        yearly,
                "net_cash_flow":  yearly - capex,
                "cumulative":     cumulative,
            })
        return rows

    def generation_series(self, inputs: UserInputs, current_year: int) -> list[dict]:
        """Cumulative generation; years up to *current_year* are flagged historical."""
        b = self.baseline
        annual = inputs.sliders["capacity_kw"] * b["yield_kwh_per_kw"]
        start = b["series_start_year"]
        rows, cumulative = [], 0.0
        for year in range(start, PROJECTION_END_YEAR + 1):
            produced = annual * (1 + math.sin((year - start) * 0.1) * 0.1)
            cumulative += produced
            rows.append({
                "year":       year,
                "generation": produced,
                "cumulative": cumulative,
                "historical": year <= current_year,
            })
        return rows
