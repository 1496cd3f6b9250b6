# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Natural Gas Scenario Model
# © 2026 Aparajita Parihar. All rights reserved.
#
# Campus heating under a heating-demand index and six interventions.
# Heat-pump conversion moves a share of delivered heat from gas boilers to
# heat pumps (COP 3.0); its effectiveness additionally improves with grid
# decarbonisation over the projection horizon. Interventions ramp to full
# effect over ten years in projections.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from config.constants import (
    DEMAND_INDEX_DEFAULT,
    DEMAND_INDEX_MAX,
    DEMAND_INDEX_MIN,
    GAS_BASELINE,
    PROJECTION_END_YEAR,
    PROJECTION_START_YEAR,
)
from core.domains.base import DomainModel
from core.engine import ScenarioContext
from core.models import DerivedMetrics, Headline, ProjectionSettings, SliderSpec

MIN_PAYBACK_YEARS = 0.5


class GasModel(DomainModel):
    domain_id = "gas"
    label = "Natural Gas"
    icon = "🔥"
    baseline = GAS_BASELINE
    sliders = (
        SliderSpec("demand_index", "Heating demand index", DEMAND_INDEX_MIN, DEMAND_INDEX_MAX,
                   DEMAND_INDEX_DEFAULT, 1, "%"),
        SliderSpec("funding_level", "Intervention funding", 0, 100, 0, 1, "%"),
    )
    projection = ProjectionSettings(
        metrics=("total_use", "cost", "carbon"),
        growth_rate=GAS_BASELINE["growth_rate"],
        maturity_years=GAS_BASELINE["maturity_years"],
        horizon_years=PROJECTION_END_YEAR - PROJECTION_START_YEAR,
        start_year=PROJECTION_START_YEAR,
    )
    headline = (
        Headline("total_use", "Total heat demand", "compact", "kWh"),
        Headline("carbon", "Carbon emissions", "number", "tCO₂e"),
        Headline("cost", "Annual cost", "currency"),
        Headline("heat_pump_share", "Heat pump share", "percent"),
        Headline("heating_intensity", "Heating intensity", "number", "kWh/m²"),
        Headline("peak_reduction", "Peak demand reduction", "percent"),
    )

    def compute(self, ctx: ScenarioContext) -> DerivedMetrics:
        b = self.baseline
        adjusted = b["base_use_kwh"] * ctx.scale
        reduction = ctx.reduction("use")
        total = adjusted * (1 - reduction)

        # Heat-pump share only advances as far as the clamped use reduction does
        heat_pump_share = ctx.boosted_share(
            "heat_pump_share", b["heat_pump_share_base"], b["heat_pump_share_max"],
            scale=ctx.reduction_scale("use"),
        )
        heat_pump_kwh = total * heat_pump_share / 100
        gas_kwh = total - heat_pump_kwh

        carbon = (
            gas_kwh * b["gas_carbon_t_per_mwh"]
            + heat_pump_kwh * b["heat_pump_carbon_t_per_mwh"]
        ) / 1000
        cost = gas_kwh * b["gas_cost_per_kwh"] + heat_pump_kwh * b["heat_pump_cost_per_kwh"]

        metrics = {
            "adjusted_baseline":  adjusted,
            "reduction_fraction": reduction,
            "total_use":          total,
            "gas_use":            gas_kwh,
            "heat_pump_use":      heat_pump_kwh,
            "heat_pump_share":    heat_pump_share,
            "cost":               cost,
            "carbon":             carbon,
            "heating_intensity":  ctx.divide(total, b["floor_area_m2"]),
            "peak_reduction":     ctx.boosted_share("peak_reduction", 0.0, b["peak_reduction_max"]),
        }
        end_use = ctx.shares(b["end_use_shares"])
        shares = {
            "supply_mix": {"gas": 100 - heat_pump_share, "heat_pump": heat_pump_share},
            "end_use": end_use,
        }
        tables = {
            "end_use": [
                {"category": k, "share": v, "use": total * v / 100} for k, v in end_use.items()
            ],
            "roi": self._roi_rows(ctx),
        }
        return self.result(metrics, shares, tables)

    def _roi_rows(self, ctx: ScenarioContext) -> list[dict]:
        """Payback and savings for every intervention; disabled rows are flagged."""
        f = ctx.funding
        demand = ctx.demand
        rows = []
        for spec in self.registry:
            payback = ctx.divide(spec.attribute("payback_years"), demand * (0.3 + 0.7 * f), None)
            rows.append({
                "intervention":   spec.id,
                "label":          spec.display_name,
                "enabled":        ctx.is_enabled(spec.id),
                "payback_years":  None if payback is None else max(MIN_PAYBACK_YEARS, payback),
                "gas_saving_pct": spec.attribute("gas_saving_pct") * demand * f,
                "carbon_saving_pct": spec.attribute("carbon_saving_pct") * demand * f,
                "cost":           spec.base_cost * f,
            })
        return rows
