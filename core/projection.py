# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Projection Generator
# © 2026 Aparajita Parihar. All rights reserved.
#
# Extends a single-year scenario into three parallel yearly series:
#   business_as_usual   funding 0%
#   partial             the user's current funding level
#   full_intervention   funding 100%
#
# Each year i re-runs the domain formulas with the baseline grown by
# (1 + g)^i and intervention effectiveness ramped by min(1, i / maturity).
# Interventions carrying a TimeTrend additionally scale with years elapsed.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from typing import TYPE_CHECKING

from core.models import SCENARIO_KEYS, ProjectionSeries, UserInputs

if TYPE_CHECKING:
    from core.engine import ScenarioEngine


def ramp_multiplier(years_elapsed: int, maturity_years: int) -> float:
    """Linear 0 → 1 adoption ramp; a maturity of 0 disables the ramp."""
    if maturity_years <= 0:
        return 1.0
    return min(1.0, max(0.0, years_elapsed / maturity_years))


def growth_factor(years_elapsed: int, growth_rate: float) -> float:
    return (1.0 + growth_rate) ** years_elapsed


def project(
    engine: "ScenarioEngine",
    inputs: UserInputs,
    current_year: int,
    horizon_years: int | None = None,
    growth_rate: float | None = None,
) -> ProjectionSeries:
    """
    Build the three-scenario ProjectionSeries for *engine*'s domain.

    Args:
        engine:        Engine wrapping the domain model.
        inputs:        Current user inputs; only the funding level differs
                       between the three series.
        current_year:  Injected calendar year; used as year 0 unless the
                       domain pins a fixed start year.
        horizon_years: Number of years after year 0 (inclusive range). Falls
                       back to the domain's default.
        growth_rate:   Annual compounding baseline growth. Falls back to the
                       domain's default.

    Raises:
        ValueError: If the horizon is negative.
    """
    settings = engine.model.projection
    horizon = settings.horizon_years if horizon_years is None else horizon_years
    if horizon < 0:
        raise ValueError(f"horizon_years must be >= 0, got {horizon}")
    rate = settings.growth_rate if growth_rate is None else growth_rate
    start = settings.start_year if settings.start_year is not None else current_year

    base = engine.clamp_inputs(inputs)
    fundings = {
        "business_as_usual": 0.0,
        "partial":           base.funding_level,
        "full_intervention": 100.0,
    }

    rows: dict[str, list[dict[str, float]]] = {key: [] for key in SCENARIO_KEYS}
    for i in range(horizon + 1):
        gf = growth_factor(i, rate)
        tm = ramp_multiplier(i, settings.maturity_years)
        for key in SCENARIO_KEYS:
            result = engine.evaluate(
                base.with_funding(fundings[key]),
                growth_factor=gf,
                time_multiplier=tm,
                years_elapsed=i,
                external={"current_year": current_year},
            )
            row = {"year": start + i}
            row.update({m: result.metrics[m] for m in settings.metrics})
            rows[key].append(row)

    return ProjectionSeries(
        domain_id=engine.domain_id,
        metrics=tuple(settings.metrics),
        business_as_usual=rows["business_as_usual"],
        partial=rows["partial"],
        full_intervention=rows["full_intervention"],
    )
