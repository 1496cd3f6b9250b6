# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Waste Scenario Model
# © 2026 Aparajita Parihar. All rights reserved.
#
# Campus waste generation under a footfall index and five interventions.
# Generated tonnage splits into recycled / reused / landfill using boosted
# recycling and reuse rates. Carbon and cost are baseline figures less
# intervention offsets, floored at 15% and 30% of baseline respectively.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from config.constants import (
    DEMAND_INDEX_DEFAULT,
    DEMAND_INDEX_MAX,
    DEMAND_INDEX_MIN,
    PROJECTION_END_YEAR,
    PROJECTION_START_YEAR,
    WASTE_BASELINE,
)
from core import composition
from core.domains.base import DomainModel
from core.engine import ScenarioContext
from core.models import DerivedMetrics, Headline, ProjectionSettings, SliderSpec

KG_PER_TONNE = 1000


class WasteModel(DomainModel):
    domain_id = "waste"
    label = "Waste"
    icon = "♻️"
    baseline = WASTE_BASELINE
    sliders = (
        SliderSpec("demand_index", "Campus footfall", DEMAND_INDEX_MIN, DEMAND_INDEX_MAX,
                   DEMAND_INDEX_DEFAULT, 1, "%"),
        SliderSpec("funding_level", "Intervention funding", 0, 100, 0, 1, "%"),
    )
    projection = ProjectionSettings(
        metrics=("total_use", "cost", "carbon"),
        growth_rate=WASTE_BASELINE["growth_rate"],
        maturity_years=0,
        horizon_years=PROJECTION_END_YEAR - PROJECTION_START_YEAR,
        start_year=PROJECTION_START_YEAR,
    )
    headline = (
        Headline("total_use", "Waste generated", "number", "t"),
        Headline("recycled", "Recycled", "number", "t"),
        Headline("recycling_rate", "Recycling rate", "percent"),
        Headline("carbon", "Carbon emissions", "number", "tCO₂e"),
        Headline("cost", "Annual cost", "currency"),
        Headline("kg_per_student", "Per student", "number", "kg"),
    )

    def compute(self, ctx: ScenarioContext) -> DerivedMetrics:
        b = self.baseline
        adjusted = b["base_tonnes"] * ctx.scale
        reduction = ctx.reduction("use")
        total = adjusted * (1 - reduction)
        f = ctx.effective_funding

        recycling_rate = ctx.boosted_share(
            "recycling_rate", b["recycling_rate_base"], b["recycling_rate_max"]
        )
        reuse_rate = ctx.boosted_share("reuse_rate", b["reuse_rate_base"], b["reuse_rate_max"])
        recycled = total * recycling_rate / 100
        reused = total * reuse_rate / 100
        landfill = max(0.0, total - recycled - reused)

        carbon_offsets, cost_offsets = [], []
        for spec in ctx.enabled:
            if spec.id == "recycling_uplift":
                carbon_offsets.append(recycled * b["recycling_carbon_t_per_t"])
                cost_offsets.append(recycled * b["recycling_saving_per_t"])
            elif spec.id == "campus_reuse":
                carbon_offsets.append(reused * b["reuse_carbon_t_per_t"])
                cost_offsets.append(reused * b["reuse_saving_per_t"])
            else:
                stream = total * spec.attribute("stream_share") * f
                carbon_offsets.append(stream * spec.attribute("carbon_t_per_t"))
                cost_offsets.append(stream * spec.attribute("saving_per_t"))

        carbon = composition.floored_offset(
            total * b["carbon_t_per_t"], carbon_offsets, b["carbon_floor_ratio"]
        )
        cost = composition.floored_offset(total * b["cost_per_t"], cost_offsets, b["cost_floor_ratio"])
        students = b["students"] * ctx.demand

        metrics = {
            "adjusted_baseline":  adjusted,
            "reduction_fraction": reduction,
            "total_use":          total,
            "recycled":           recycled,
            "reused":             reused,
            "landfill":           landfill,
            "recycling_rate":     recycling_rate,
            "reuse_rate":         reuse_rate,
            "diversion_rate":     recycling_rate + reuse_rate,
            "carbon":             carbon,
            "cost":               cost,
            "kg_per_student":     ctx.divide(total * KG_PER_TONNE, students),
        }
        streams = ctx.shares(b["stream_shares"], floor_ratio=b["stream_floor_ratio"])
        shares = {
            "streams": streams,
            "destination": composition.normalise_shares(
                {"recycled": recycled, "reused": reused, "landfill": landfill}
            ),
        }
        tables = {
            "streams": [
                {"category": k, "share": v, "tonnes": total * v / 100} for k, v in streams.items()
            ],
            "roi": self._roi_rows(ctx, carbon_offsets, cost_offsets),
        }
        return self.result(metrics, shares, tables)

    def _roi_rows(self, ctx: ScenarioContext, carbon_offsets: list[float], cost_offsets: list[float]) -> list[dict]:
        return [
            {
                "intervention":  spec.id,
                "label":         spec.display_name,
                "carbon_saved":  carbon_saved,
                "money_saved":   money_saved,
                "roi":           spec.attribute("roi_base") * (1 + 0.3 * ctx.funding),
            }
            for spec, carbon_saved, money_saved in zip(ctx.enabled, carbon_offsets, cost_offsets)
        ]
