# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Water Scenario Model
# © 2026 Aparajita Parihar. All rights reserved.
#
# Campus water supply under a footfall index and five interventions.
# Carbon and cost are baseline figures less per-intervention offsets, each
# floored at a fraction of the baseline (20% carbon, 40% cost).
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from config.constants import (
    DEMAND_INDEX_DEFAULT,
    DEMAND_INDEX_MAX,
    DEMAND_INDEX_MIN,
    PROJECTION_END_YEAR,
    PROJECTION_START_YEAR,
    WATER_BASELINE,
)
from core import composition
from core.domains.base import DomainModel
from core.engine import ScenarioContext
from core.models import DerivedMetrics, Headline, ProjectionSettings, SliderSpec

DAYS_PER_YEAR = 365
LITRES_PER_M3 = 1000


class WaterModel(DomainModel):
    domain_id = "water"
    label = "Water"
    icon = "💧"
    baseline = WATER_BASELINE
    sliders = (
        SliderSpec("demand_index", "Campus footfall", DEMAND_INDEX_MIN, DEMAND_INDEX_MAX,
                   DEMAND_INDEX_DEFAULT, 1, "%"),
        SliderSpec("funding_level", "Intervention funding", 0, 100, 0, 1, "%"),
    )
    projection = ProjectionSettings(
        metrics=("total_use", "cost", "carbon"),
        growth_rate=WATER_BASELINE["growth_rate"],
        maturity_years=0,
        horizon_years=PROJECTION_END_YEAR - PROJECTION_START_YEAR,
        start_year=PROJECTION_START_YEAR,
    )
    headline = (
        Headline("total_use", "Total water use", "number", "m³"),
        Headline("wastewater", "Wastewater", "number", "m³"),
        Headline("reuse_rate", "Reuse / recycling rate", "percent"),
        Headline("carbon", "Carbon emissions", "number", "tCO₂e"),
        Headline("cost", "Annual cost", "currency"),
        Headline("litres_per_student_day", "Per student per day", "number", "L"),
    )

    def compute(self, ctx: ScenarioContext) -> DerivedMetrics:
        b = self.baseline
        adjusted = b["base_use_m3"] * ctx.scale
        reduction = ctx.reduction("use")
        total = adjusted * (1 - reduction)
        f = ctx.effective_funding

        baseline_carbon = total * b["carbon_t_per_m3"]
        carbon = composition.floored_offset(
            baseline_carbon,
            (total * s.effect("use") * s.attribute("carbon_intensity") * f for s in ctx.enabled),
            b["carbon_floor_ratio"],
        )
        baseline_cost = total * b["cost_per_m3"]
        cost = composition.floored_offset(
            baseline_cost,
            (total * s.effect("use") * s.attribute("saving_per_m3") * f for s in ctx.enabled),
            b["cost_floor_ratio"],
        )
        reuse_rate = ctx.boosted_share("reuse_rate", b["reuse_rate_base"], b["reuse_rate_max"])
        students = b["students"] * ctx.demand

        metrics = {
            "adjusted_baseline":  adjusted,
            "reduction_fraction": reduction,
            "total_use":          total,
            "wastewater":         total * b["wastewater_ratio"],
            "reuse_rate":         reuse_rate,
            "carbon":             carbon,
            "cost":               cost,
            "litres_per_student_day": ctx.divide(total * LITRES_PER_M3, students * DAYS_PER_YEAR),
        }
        facilities = ctx.shares(b["facility_shares"], floor_ratio=b["facility_floor_ratio"])
        shares = {
            "facilities": facilities,
            "reuse": {"reused": reuse_rate, "single_use": 100 - reuse_rate},
        }
        tables = {
            "facilities": [
                {"category": k, "share": v, "use": total * v / 100} for k, v in facilities.items()
            ],
            "roi": [
                {
                    "intervention": s.id,
                    "label":        s.display_name,
                    "water_saved":  total * s.effect("use") * ctx.funding,
                    "money_saved":  total * s.effect("use") * s.attribute("saving_per_m3") * ctx.funding,
                    "roi":          s.attribute("roi_base") * (1 + 0.4 * ctx.funding),
                }
                for s in ctx.enabled
            ],
        }
        return self.result(metrics, shares, tables)
