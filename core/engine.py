# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Generic Scenario Engine
# © 2026 Aparajita Parihar. All rights reserved.
#
# One engine, parameterised by a DomainModel (baseline constants + intervention
# registry + metric formulas). Entry points for the UI layer:
#   ScenarioEngine.compute_metrics(inputs)   → DerivedMetrics   (single year)
#   ScenarioEngine.project(inputs, ...)      → ProjectionSeries (three series)
#   ScenarioEngine.series(name, inputs, ...) → list[dict]       (domain extras)
#
# Every call is pure, synchronous and deterministic. Inputs are clamped into
# their declared ranges before any formula sees them.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

from core import composition
from core.models import DerivedMetrics, ProjectionSeries, UserInputs
from core.projection import project
from core.registry import InterventionSpec

if TYPE_CHECKING:
    from core.domains.base import DomainModel

logger = logging.getLogger(__name__)

FUNDING_KEY = "funding_level"
DEMAND_KEY = "demand_index"


class ScenarioContext:
    """What a domain formula sees for one evaluation.

    ``growth_factor``, ``time_multiplier`` and ``years_elapsed`` are 1, 1 and
    0 for a single-year computation; the projection generator varies them.
    """

    def __init__(
        self,
        model: "DomainModel",
        inputs: UserInputs,
        growth_factor: float = 1.0,
        time_multiplier: float = 1.0,
        years_elapsed: int = 0,
        external: Mapping[str, Any] | None = None,
    ):
        self.model = model
        self.inputs = inputs
        self.baseline = model.baseline
        self.registry = model.registry
        self.growth_factor = growth_factor
        self.time_multiplier = time_multiplier
        self.years_elapsed = years_elapsed
        self.external = MappingProxyType(dict(external or {}))
        self.enabled: list[InterventionSpec] = self.registry.enabled(inputs.enabled)
        self._enabled_ids = frozenset(s.id for s in self.enabled)

    # ── Scalars ───────────────────────────────────────────────────────────────
    @property
    def funding(self) -> float:
        """Funding level as a 0–1 fraction."""
        return self.inputs.funding_level / 100.0

    @property
    def effective_funding(self) -> float:
        """Funding fraction after the projection's time ramp."""
        return self.funding * self.time_multiplier

    @property
    def demand(self) -> float:
        return self.inputs.demand_index / 100.0

    @property
    def scale(self) -> float:
        """Multiplier applied to baseline resource quantities."""
        return self.demand * self.growth_factor

    def slider(self, key: str) -> float:
        try:
            return self.inputs.sliders[key]
        except KeyError:
            raise KeyError(
                f"Slider '{key}' not declared by domain '{self.model.domain_id}'. "
                f"Available sliders: {list(self.inputs.sliders)}"
            )

    def is_enabled(self, iv_id: str) -> bool:
        return iv_id in self._enabled_ids

    # ── Composition ───────────────────────────────────────────────────────────
    def contribution(self, spec: InterventionSpec, metric: str = "use") -> float:
        """One intervention's effect on *metric* at the effective funding."""
        effect = spec.effect(metric) * self.effective_funding
        if spec.trend is not None:
            effect = min(effect * spec.trend.multiplier(self.years_elapsed), spec.trend.cap)
        return effect

    def raw_reduction(self, metric: str = "use") -> float:
        return sum(self.contribution(s, metric) for s in self.enabled)

    def reduction(self, metric: str = "use") -> float:
        """Aggregate additive reduction on *metric*, clamped."""
        raw = self.raw_reduction(metric)
        clamped = composition.additive_reduction([raw], 1.0)
        if clamped != raw:
            logger.debug(
                "%s: %s reduction %.3f clamped to %.3f",
                self.model.domain_id, metric, raw, clamped,
            )
        return clamped

    def reduction_scale(self, metric: str = "use") -> float:
        """Share of the raw reduction that survives the clamp (1.0 when unclamped)."""
        raw = self.raw_reduction(metric)
        if raw <= 0:
            return 1.0
        return min(1.0, self.reduction(metric) / raw)

    def boost(self, metric: str) -> float:
        return composition.governing_boost(self.registry.governors(metric), self._enabled_ids)

    def boosted_share(self, metric: str, base: float, ceiling: float, scale: float = 1.0) -> float:
        """Boosted share at the effective funding, optionally scaled down."""
        return composition.boosted_share(
            base, ceiling, self.effective_funding * scale, self.boost(metric)
        )

    def shares(self, base_shares: Mapping[str, float], floor_ratio: float = 0.0) -> dict[str, float]:
        return composition.multiplicative_shares(
            base_shares,
            [s.category_effects for s in self.enabled],
            self.effective_funding,
            floor_ratio=floor_ratio,
        )

    def divide(self, numerator: float, denominator: float, default: float | None = 0.0):
        result = composition.safe_divide(numerator, denominator, default)
        if not denominator:
            logger.debug("%s: guarded division by zero", self.model.domain_id)
        return result


class ScenarioEngine:
    """Runs a DomainModel's formulas for the UI and the projection generator."""

    def __init__(self, model: "DomainModel"):
        self.model = model

    @property
    def domain_id(self) -> str:
        return self.model.domain_id

    # ── Inputs ────────────────────────────────────────────────────────────────
    def default_inputs(self) -> UserInputs:
        specs = {s.key: s for s in self.model.sliders}
        funding = specs[FUNDING_KEY].default if FUNDING_KEY in specs else 0.0
        demand = specs[DEMAND_KEY].default if DEMAND_KEY in specs else 100.0
        return UserInputs(
            funding_level=funding,
            demand_index=demand,
            enabled=self.model.registry.default_flags(),
            sliders={k: s.default for k, s in specs.items() if k not in (FUNDING_KEY, DEMAND_KEY)},
        )

    def clamp_inputs(self, inputs: UserInputs) -> UserInputs:
        """Clamp every slider into its declared range; fill missing ones."""
        specs = {s.key: s for s in self.model.sliders}
        funding = composition.clamp_funding(inputs.funding_level)
        if FUNDING_KEY in specs:
            funding = specs[FUNDING_KEY].clamp(funding)
        demand = specs[DEMAND_KEY].clamp(inputs.demand_index) if DEMAND_KEY in specs else 100.0
        sliders = {
            key: spec.clamp(inputs.sliders.get(key))
            for key, spec in specs.items()
            if key not in (FUNDING_KEY, DEMAND_KEY)
        }
        enabled = {iv_id: bool(inputs.enabled.get(iv_id, False)) for iv_id in self.model.registry.ids()}
        clamped = UserInputs(funding, demand, enabled, sliders)
        if clamped != inputs:
            logger.debug("%s: inputs normalised to declared ranges", self.domain_id)
        return clamped

    # ── Computation ───────────────────────────────────────────────────────────
    def evaluate(
        self,
        inputs: UserInputs,
        growth_factor: float = 1.0,
        time_multiplier: float = 1.0,
        years_elapsed: int = 0,
        external: Mapping[str, Any] | None = None,
    ) -> DerivedMetrics:
        ctx = ScenarioContext(
            self.model,
            self.clamp_inputs(inputs),
            growth_factor=growth_factor,
            time_multiplier=time_multiplier,
            years_elapsed=years_elapsed,
            external=external,
        )
        return self.model.compute(ctx)

    def compute_metrics(self, inputs: UserInputs, external: Mapping[str, Any] | None = None) -> DerivedMetrics:
        """Single-year DerivedMetrics for *inputs*."""
        return self.evaluate(inputs, external=external)

    def project(
        self,
        inputs: UserInputs,
        current_year: int,
        horizon_years: int | None = None,
        growth_rate: float | None = None,
    ) -> ProjectionSeries:
        return project(
            self, inputs,
            current_year=current_year,
            horizon_years=horizon_years,
            growth_rate=growth_rate,
        )

    def series(self, name: str, inputs: UserInputs, current_year: int) -> list[dict]:
        return self.model.series(name, self.clamp_inputs(inputs), current_year)
