# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Financial Planning Model
# © 2026 Aparajita Parihar. All rights reserved.
#
# Splits a sustainability budget across per-category programmes and converts
# spend into an estimated carbon reduction (tCO₂e per € by category).
# Common metric keys: adjusted_baseline = total_use = cost =
# allocated spend, carbon = estimated annual reduction.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from config.constants import FINANCIAL_BASELINE
from core import composition
from core.domains.base import DomainModel
from core.engine import ScenarioContext
from core.models import DerivedMetrics, Headline, ProjectionSettings, SliderSpec, UserInputs

OUTLOOK_YEARS = 10


def allocation_key(category: str, programme: str) -> str:
    return f"alloc.{category}.{programme}"


def _allocation_sliders() -> tuple[SliderSpec, ...]:
    b = FINANCIAL_BASELINE
    return tuple(
        SliderSpec(
            allocation_key(category, programme),
            programme.replace("_", " ").title(),
            0, b["allocation_max"], amount, b["allocation_step"], "€",
        )
        for category, programmes in b["allocations"].items()
        for programme, amount in programmes.items()
    )


class FinancialModel(DomainModel):
    domain_id = "financial"
    label = "Financial Planning"
    icon = "💶"
    baseline = FINANCIAL_BASELINE
    sliders = (
        SliderSpec("total_budget", "Total budget", 0, 20_000_000,
                   FINANCIAL_BASELINE["total_budget"], 100_000, "€"),
        SliderSpec("annual_growth_rate", "Annual budget growth", 0, 10,
                   FINANCIAL_BASELINE["annual_growth_rate"], 0.1, "%"),
    ) + _allocation_sliders()
    projection = ProjectionSettings(metrics=(), horizon_years=OUTLOOK_YEARS)
    headline = (
        Headline("total_allocated", "Allocated", "currency"),
        Headline("remaining_budget", "Remaining", "currency"),
        Headline("utilisation_pct", "Budget utilisation", "percent"),
        Headline("carbon_reduction", "Carbon reduction", "number", "tCO₂e"),
        Headline("target_progress_pct", "Progress to target", "percent"),
        Headline("cost_per_tonne", "Cost per tonne", "currency"),
    )
    series_names = ("budget_outlook",)

    def _category_totals(self, sliders) -> dict[str, float]:
        return {
            category: sum(sliders[allocation_key(category, p)] for p in programmes)
            for category, programmes in self.baseline["allocations"].items()
        }

    def compute(self, ctx: ScenarioContext) -> DerivedMetrics:
        b = self.baseline
        budget = ctx.slider("total_budget")
        by_category = self._category_totals(ctx.inputs.sliders)
        allocated = sum(by_category.values())
        carbon_by_category = {
            category: amount * b["carbon_t_per_eur"][category]
            for category, amount in by_category.items()
        }
        carbon = sum(carbon_by_category.values())
        remaining = budget - allocated

        metrics = {
            "adjusted_baseline":   allocated,
            "reduction_fraction":  0.0,
            "total_use":           allocated,
            "cost":                allocated,
            "carbon":              carbon,
            "total_budget":        budget,
            "total_allocated":     allocated,
            "remaining_budget":    remaining,
            "over_allocation":     max(0.0, -remaining),
            "utilisation_pct":     ctx.divide(allocated, budget) * 100,
            "carbon_reduction":    carbon,
            "target_progress_pct": carbon / b["carbon_target_t"] * 100,
            "cost_per_tonne":      ctx.divide(allocated, carbon, None),
        }
        shares = {"categories": composition.normalise_shares(by_category)}
        tables = {
            "categories": [
                {
                    "category":         category,
                    "allocated":        amount,
                    "budget_pct":       ctx.divide(amount, budget) * 100,
                    "carbon_reduction": carbon_by_category[category],
                }
                for category, amount in by_category.items()
            ],
            "allocations": [
                {
                    "category":  category,
                    "programme": programme,
                    "allocated": ctx.inputs.sliders[allocation_key(category, programme)],
                }
                for category, programmes in b["allocations"].items()
                for programme in programmes
            ],
        }
        return self.result(metrics, shares, tables)

    def budget_outlook_series(self, inputs: UserInputs, current_year: int) -> list[dict]:
        """Budget compounding at the growth slider against flat allocated spend."""
        rate = inputs.sliders["annual_growth_rate"] / 100
        budget = inputs.sliders["total_budget"]
        by_category = self._category_totals(inputs.sliders)
        allocated = sum(by_category.values())
        annual_carbon = sum(
            amount * self.baseline["carbon_t_per_eur"][c] for c, amount in by_category.items()
        )
        rows = []
        for i in range(OUTLOOK_YEARS + 1):
            year_budget = budget * (1 + rate) ** i
            rows.append({
                "year":              current_year + i,
                "budget":            year_budget,
                "allocated":         allocated,
                "headroom":          year_budget - allocated,
                "cumulative_carbon": annual_carbon * (i + 1),
            })
        return rows
