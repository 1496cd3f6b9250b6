# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Business Travel Scenario Model
# © 2026 Aparajita Parihar. All rights reserved.
#
# Staff business travel under a travel-flexibility index and a policy
# implementation level (the funding slider). Adoption p = flexibility × policy.
#   • virtual meetings and the air-travel policy remove air trips (additive,
#     clamped)
#   • rail shift re-routes a share of the trips the air policy removes onto
#     ground transport, so it only acts together with that policy
#   • per-country flights come from an externally supplied destination table;
#     without it the aggregate figures are still produced
#   • the monthly compliance heatmap uses a seeded variation, never wall-clock
#     randomness
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import calendar
import logging
from typing import Any, Mapping

import numpy as np

from config.constants import (
    COMPLIANCE_VARIATION,
    HOLIDAY_COMPLIANCE_FACTOR,
    HOLIDAY_MONTHS,
    SUMMER_COMPLIANCE_FACTOR,
    SUMMER_MONTHS,
    TRAVEL_BASELINE,
)
from core import composition
from core.composition import clamp
from core.domains.base import DomainModel
from core.engine import ScenarioContext
from core.models import DerivedMetrics, Headline, ProjectionSettings, SliderSpec

logger = logging.getLogger(__name__)


def monthly_variation(month_index: int, funding_level: float) -> float:
    """Deterministic multiplier in [1 − v, 1 + v] for one heatmap cell."""
    rng = np.random.default_rng([month_index, int(round(funding_level * 100))])
    return 1.0 - COMPLIANCE_VARIATION + 2 * COMPLIANCE_VARIATION * float(rng.random())


def compliance_calendar(flexibility: float, policy: float) -> list[dict]:
    """Twelve monthly compliance records (percent, 0–100)."""
    base = min(flexibility * 0.4 + policy * 0.6, 100.0)
    rows = []
    for index in range(12):
        seasonal = SUMMER_COMPLIANCE_FACTOR if index in SUMMER_MONTHS else 1.0
        holiday = HOLIDAY_COMPLIANCE_FACTOR if index in HOLIDAY_MONTHS else 1.0
        value = base * seasonal * holiday * monthly_variation(index, policy)
        rows.append({
            "month":       calendar.month_abbr[index + 1],
            "month_index": index,
            "compliance":  clamp(value, 0.0, 100.0),
        })
    return rows


class TravelModel(DomainModel):
    domain_id = "travel"
    label = "Business Travel"
    icon = "✈️"
    baseline = TRAVEL_BASELINE
    sliders = (
        SliderSpec("flexibility_index", "Travel flexibility index", 0, 100, 50, 1, "%"),
        SliderSpec("funding_level", "Policy implementation", 0, 100, 30, 1, "%"),
    )
    projection = ProjectionSettings(
        metrics=("total_use", "cost", "carbon"),
        growth_rate=TRAVEL_BASELINE["growth_rate"],
        maturity_years=0,
        horizon_years=10,
    )
    headline = (
        Headline("carbon", "Travel emissions", "number", "tCO₂e"),
        Headline("cost", "Travel cost", "currency"),
        Headline("policy_compliance", "Policy compliance", "percent"),
        Headline("virtualised_pct", "Virtualised travel", "percent"),
        Headline("total_use", "Flights", "number"),
        Headline("lower_emission_pct", "Lower-emission travel", "percent"),
    )

    def compute(self, ctx: ScenarioContext) -> DerivedMetrics:
        b = self.baseline
        adoption = ctx.slider("flexibility_index") / 100 * ctx.effective_funding

        air_specs = [s for s in ctx.enabled if s.effect("use")]
        reduction = composition.additive_reduction((s.effect("use") for s in air_specs), adoption)
        raw = sum(s.effect("use") * adoption for s in air_specs)
        scale = reduction / raw if raw else 0.0
        virtualisation = self._rate(ctx, "virtual_meetings", adoption) * scale
        air_reduction = self._rate(ctx, "air_travel_policy", adoption) * scale
        ground_shift = (
            self._rate(ctx, "rail_shift", adoption, metric="ground_shift") * scale
            if ctx.is_enabled("air_travel_policy") else 0.0
        )

        remaining_air = 1 - reduction
        remaining_ground = 1 - virtualisation + ground_shift
        g = ctx.growth_factor
        flights = b["flights"] * remaining_air * g
        air_emissions = b["air_emissions_t"] * remaining_air * g
        ground_emissions = b["ground_emissions_t"] * remaining_ground * g
        cost = (
            b["virtual_cost"] * (1 + 2 * virtualisation)
            + b["air_cost"] * remaining_air * g
            + b["ground_cost"] * remaining_ground * g
        )

        metrics = {
            "adjusted_baseline":  b["flights"] * g,
            "reduction_fraction": reduction,
            "total_use":          flights,
            "air_emissions":      air_emissions,
            "ground_emissions":   ground_emissions,
            "carbon":             air_emissions + ground_emissions,
            "cost":               cost,
            "policy_compliance":  self._compliance(ctx, virtualisation, air_reduction, ground_shift),
            "virtualised_pct":    virtualisation * 100,
            "air_reduction_pct":  air_reduction * 100,
            "lower_emission_pct": (ground_shift + air_reduction) * 100,
            "distance_km":        b["distance_km"] * (remaining_air * 0.7 + remaining_ground * 0.3) * g,
            "hotel_nights":       b["hotel_nights"] * (remaining_air * 0.8 + remaining_ground * 0.5) * g,
        }
        modes = self._mode_split(air_reduction, ground_shift)
        shares = {
            "mode_emissions": composition.normalise_shares({m["mode"]: m["emissions"] for m in modes}),
            "mode_trips":     composition.normalise_shares({m["mode"]: m["trips"] for m in modes}),
        }
        tables = {
            "modes":       modes,
            "destinations": self._destinations(ctx.external.get("destinations"), remaining_air),
            "compliance":  compliance_calendar(ctx.slider("flexibility_index"), ctx.inputs.funding_level),
        }
        return self.result(metrics, shares, tables)

    @staticmethod
    def _rate(ctx: ScenarioContext, iv_id: str, adoption: float, metric: str = "use") -> float:
        if not ctx.is_enabled(iv_id):
            return 0.0
        return ctx.registry.get(iv_id).effect(metric) * adoption

    def _compliance(self, ctx, virtualisation, air_reduction, ground_shift) -> float:
        """Weighted progress of each lever towards its maximum rate (0–100)."""
        weights = self.baseline["compliance_weights"]
        achieved = {
            "virtual_meetings":  virtualisation,
            "air_travel_policy": air_reduction,
        }
        score = 0.0
        for iv_id, weight in weights.items():
            spec = ctx.registry.get(iv_id)
            ceiling = spec.effect("use") or spec.effect("ground_shift")
            rate = ground_shift if iv_id == "rail_shift" else achieved[iv_id]
            score += weight * ctx.divide(rate, ceiling)
        return clamp(score, 0.0, 100.0)

    def _mode_split(self, air_reduction: float, ground_shift: float) -> list[dict]:
        rows = []
        for mode, row in self.baseline["mode_split"].items():
            rate = air_reduction if mode == "flight" else ground_shift
            rows.append({
                "mode":      mode,
                "emissions": row["emissions"] * max(0.0, 1 + row["emission_response"] * rate),
                "trips":     row["trips"] * max(0.0, 1 + row["trip_response"] * rate),
            })
        return rows

    @staticmethod
    def _destinations(
        destinations: Mapping[str, Mapping[str, Any]] | None,
        remaining_air: float,
    ) -> list[dict]:
        if not destinations:
            logger.debug("travel: no destination table supplied; aggregates only")
            return []
        return [
            {
                "country":     country,
                "flights":     row["flights"] * remaining_air,
                "emissions":   row["emissions"] * remaining_air,
                "coordinates": tuple(row["coordinates"]),
            }
            for country, row in destinations.items()
        ]
