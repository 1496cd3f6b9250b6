# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Electricity Scenario Model
# © 2026 Aparajita Parihar. All rights reserved.
#
# Campus electricity under a footfall index and five interventions:
#   • total use      = baseline × footfall × (1 − additive reduction)
#   • supply mix     = grid / onsite renewable (boosted by onsite renewables)
#   • cost, carbon   = Σ mix × unit cost / carbon factor (kWh → MWh for tCO₂e)
#   • end-use split  = multiplicative share chain, renormalised
#   • ROI table      = per-intervention savings at the current funding level
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from config.constants import (
    DEMAND_INDEX_DEFAULT,
    DEMAND_INDEX_MAX,
    DEMAND_INDEX_MIN,
    ELECTRICITY_BASELINE,
    PROJECTION_END_YEAR,
    PROJECTION_START_YEAR,
)
from core.domains.base import DomainModel
from core.engine import ScenarioContext
from core.models import DerivedMetrics, Headline, ProjectionSettings, SliderSpec


class ElectricityModel(DomainModel):
    domain_id = "electricity"
    label = "Electricity"
    icon = "⚡"
    baseline = ELECTRICITY_BASELINE
    sliders = (
        SliderSpec("demand_index", "Campus footfall", DEMAND_INDEX_MIN, DEMAND_INDEX_MAX,
                   DEMAND_INDEX_DEFAULT, 1, "%"),
        SliderSpec("funding_level", "Intervention funding", 0, 100, 0, 1, "%"),
    )
    projection = ProjectionSettings(
        metrics=("total_use", "cost", "carbon"),
        growth_rate=ELECTRICITY_BASELINE["growth_rate"],
        maturity_years=0,
        horizon_years=PROJECTION_END_YEAR - PROJECTION_START_YEAR,
        start_year=PROJECTION_START_YEAR,
    )
    headline = (
        Headline("total_use", "Total electricity", "compact", "kWh"),
        Headline("cost", "Annual cost", "currency"),
        Headline("carbon", "Carbon emissions", "number", "tCO₂e"),
        Headline("renewable_share", "Renewable share", "percent"),
        Headline("use_per_student", "Per student", "number", "kWh"),
        Headline("peak_reduction", "Peak demand reduction", "percent"),
    )

    def compute(self, ctx: ScenarioContext) -> DerivedMetrics:
        b = self.baseline
        adjusted = b["base_use_kwh"] * ctx.scale
        reduction = ctx.reduction("use")
        total = adjusted * (1 - reduction)

        renewable_share = ctx.boosted_share(
            "renewable_share", b["renewable_share_base"], b["renewable_share_max"]
        )
        renewable_kwh = total * renewable_share / 100
        grid_kwh = total - renewable_kwh

        cost = grid_kwh * b["grid_cost_per_kwh"] + renewable_kwh * b["renewable_cost_per_kwh"]
        carbon = (
            grid_kwh / 1000 * b["grid_carbon_t_per_mwh"]
            + renewable_kwh / 1000 * b["renewable_carbon_t_per_mwh"]
        )
        students = b["students"] * ctx.demand
        peak_reduction = ctx.boosted_share("peak_reduction", 0.0, b["peak_reduction_max"])

        end_use = ctx.shares(b["end_use_shares"])
        metrics = {
            "adjusted_baseline":   adjusted,
            "reduction_fraction":  reduction,
            "total_use":           total,
            "grid_use":            grid_kwh,
            "renewable_use":       renewable_kwh,
            "renewable_share":     renewable_share,
            "cost":                cost,
            "carbon":              carbon,
            "use_per_student":     ctx.divide(total, students),
            "peak_reduction":      peak_reduction,
        }
        shares = {
            "supply_mix": {"grid": 100 - renewable_share, "renewable": renewable_share},
            "end_use": end_use,
        }
        tables = {
            "end_use": self._end_use_rows(end_use, total),
            "roi": self._roi_rows(ctx, total),
        }
        return self.result(metrics, shares, tables)

    def _end_use_rows(self, end_use: dict[str, float], total: float) -> list[dict]:
        rows = []
        for category, share in end_use.items():
            base_pct, variable_pct = self.baseline["load_profile"][category]
            use = total * share / 100
            rows.append({
                "category":      category,
                "share":         share,
                "use":           use,
                "base_load":     use * base_pct / 100,
                "variable_load": use * variable_pct / 100,
            })
        return rows

    def _roi_rows(self, ctx: ScenarioContext, total: float) -> list[dict]:
        f = ctx.funding
        tariff = self.baseline["grid_cost_per_kwh"]
        rows = []
        for spec in ctx.enabled:
            roi_base = spec.attribute("roi_base")
            saved = total * spec.effect("use") * f
            cost_savings = saved * tariff
            implementation_cost = spec.base_cost * (1 + 0.5 * f)
            rows.append({
                "intervention":        spec.id,
                "label":               spec.display_name,
                "roi":                 roi_base + (spec.attribute("roi_max") - roi_base) * f,
                "energy_saved":        saved,
                "cost_savings":        cost_savings,
                "carbon_saved":        saved / 1000 * spec.attribute("carbon_t_per_mwh"),
                "implementation_cost": implementation_cost,
                "payback_years":       ctx.divide(implementation_cost, cost_savings, None),
            })
        return rows
