# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Student Population Model
# © 2026 Aparajita Parihar. All rights reserved.
#
# How enrolment growth moves the campus carbon budget. Five project areas
# carry the baseline emissions (45,000 tCO₂e in total), which scale by
# (1 + g). The reference year for the net-zero pathway is injected by the
# caller as ``external["current_year"]`` and never read from the clock.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from config.constants import NET_ZERO_TARGET_YEAR, POPULATION_BASELINE, PROJECTION_START_YEAR
from core.domains.base import DomainModel
from core.engine import ScenarioContext
from core.models import DerivedMetrics, Headline, ProjectionSettings, SliderSpec, UserInputs

KG_PER_TONNE = 1000


class PopulationModel(DomainModel):
    domain_id = "population"
    label = "Student Population"
    icon = "🎓"
    baseline = POPULATION_BASELINE
    sliders = (
        SliderSpec("population", "Student population", 1_000, 50_000,
                   POPULATION_BASELINE["population"], 100, "students"),
        SliderSpec("growth_rate", "Annual growth rate", -10, 10, 2.0, 0.1, "%"),
    )
    # No funding lever: the population and budget_gap series replace the three-scenario view
    projection = ProjectionSettings(metrics=(), horizon_years=POPULATION_BASELINE["horizon_years"])
    headline = (
        Headline("carbon_reduction_needed", "Extra carbon to cut", "number", "tCO₂e"),
        Headline("financial_impact", "Financial impact", "currency"),
        Headline("kg_per_student", "Per student", "number", "kg CO₂e"),
        Headline("annual_reduction_to_zero", "Annual cut to net zero", "number", "tCO₂e"),
    )
    series_names = ("population", "budget_gap")

    @property
    def base_emissions(self) -> float:
        return float(sum(self.baseline["project_emissions_t"].values()))

    def compute(self, ctx: ScenarioContext) -> DerivedMetrics:
        b = self.baseline
        population = ctx.slider("population")
        g = ctx.slider("growth_rate") / 100
        current_year = int(ctx.external.get("current_year", PROJECTION_START_YEAR))
        uplift = 1 + g
        emissions = self.base_emissions * uplift
        financial = g * population * b["cost_per_growth"]
        years_left = NET_ZERO_TARGET_YEAR - current_year

        metrics = {
            "adjusted_baseline":        emissions,
            "reduction_fraction":       0.0,
            "total_use":                emissions,
            "cost":                     financial,
            "carbon":                   emissions,
            "population":               population,
            "carbon_reduction_needed":  g * population * b["carbon_t_per_growth"],
            "financial_impact":         financial,
            "adjusted_emissions":       emissions,
            "kg_per_student":           ctx.divide(emissions * KG_PER_TONNE, population),
            "years_to_target":          max(0, years_left),
            "annual_reduction_to_zero": ctx.divide(emissions, years_left, None) if years_left > 0 else None,
        }
        tables = {
            "projects": [
                {
                    "project":          project,
                    "emissions":        base * uplift,
                    "cost_per_student": b["cost_per_student"][project],
                }
                for project, base in b["project_emissions_t"].items()
            ],
        }
        return self.result(metrics, tables=tables)

    def population_series(self, inputs: UserInputs, current_year: int) -> list[dict]:
        """Flat history from 2020, then compounding growth for twenty years."""
        b = self.baseline
        population = inputs.sliders["population"]
        rate = inputs.sliders["growth_rate"] / 100
        rows = [
            {"year": year, "population": population, "historical": True}
            for year in range(b["history_start_year"], current_year)
        ]
        for i in range(b["horizon_years"] + 1):
            rows.append({
                "year":       current_year + i,
                "population": round(population * (1 + rate) ** i),
                "historical": False,
            })
        return rows

    def budget_gap_series(self, inputs: UserInputs, current_year: int) -> list[dict]:
        """Available budget (growing 1.5%/yr) against what the enrolment requires."""
        b = self.baseline
        population = inputs.sliders["population"]
        rate = inputs.sliders["growth_rate"] / 100
        per_student = sum(b["cost_per_student"].values())
        initial = population * per_student
        rows = []
        for i in range(b["budget_horizon_years"] + 1):
            available = initial * (1 + b["budget_growth"]) ** i
            required = population * (1 + rate) ** i * per_student
            gap = available - required
            rows.append({
                "year":      current_year + i,
                "available": available,
                "required":  required,
                "gap":       gap,
                "gap_pct":   gap / available * 100 if available else 0.0,
            })
        return rows
