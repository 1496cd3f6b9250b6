# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Intervention Registry
# © 2026 Aparajita Parihar. All rights reserved.
#
# Read-only, per-domain view over config/interventions.py.
# Builds immutable InterventionSpec records once per domain (lru_cache) and
# offers lookup, enumeration and enabled-subset filtering. There are no
# mutation operations.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Iterator, Mapping

from config.interventions import BOOST_GOVERNORS, INTERVENTIONS, METRIC_UNITS


@dataclass(frozen=True)
class MetricEffect:
    metric: str
    base_effect_factor: float
    unit: str = ""


@dataclass(frozen=True)
class TimeTrend:
    """Secondary effectiveness multiplier driven by an external systemic trend.

    ``multiplier(years) = 1 + (years / horizon_years) × uplift``; the
    intervention's combined effect is capped at ``cap``.
    """

    horizon_years: float
    uplift: float
    cap: float

    def multiplier(self, years_elapsed: float) -> float:
        if self.horizon_years <= 0:
            return 1.0
        return 1.0 + (max(0.0, years_elapsed) / self.horizon_years) * self.uplift


@dataclass(frozen=True)
class InterventionSpec:
    id: str
    display_name: str
    affects: tuple[MetricEffect, ...] = ()
    enabled_by_default: bool = True
    base_cost: float = 0.0
    category_effects: Mapping[str, float] = field(default_factory=dict)
    attributes: Mapping[str, float] = field(default_factory=dict)
    trend: TimeTrend | None = None

    def effect(self, metric: str) -> float:
        """Base effect factor on *metric*, or 0.0 when unaffected."""
        for eff in self.affects:
            if eff.metric == metric:
                return eff.base_effect_factor
        return 0.0

    def attribute(self, key: str, default: float = 0.0) -> float:
        return self.attributes.get(key, default)


class InterventionRegistry:
    """Ordered, read-only collection of a domain's interventions."""

    def __init__(
        self,
        domain_id: str,
        specs: tuple[InterventionSpec, ...] = (),
        governors: Mapping[str, Mapping[str, float]] | None = None,
    ):
        self._domain_id = domain_id
        self._specs = MappingProxyType({s.id: s for s in specs})
        self._governors = MappingProxyType(dict(governors or {}))

    @property
    def domain_id(self) -> str:
        return self._domain_id

    def __iter__(self) -> Iterator[InterventionSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, iv_id: object) -> bool:
        return iv_id in self._specs

    def ids(self) -> list[str]:
        return list(self._specs)

    def get(self, iv_id: str) -> InterventionSpec:
        """
        Retrieves an intervention by id.

        Raises:
            KeyError: If the id is not registered for this domain, listing the
                      ids that are.
        """
        try:
            return self._specs[iv_id]
        except KeyError:
            raise KeyError(
                f"Intervention '{iv_id}' not found in domain '{self._domain_id}'. "
                f"Available interventions: {self.ids()}"
            )

    def default_flags(self) -> dict[str, bool]:
        return {s.id: s.enabled_by_default for s in self}

    def enabled(self, flags: Mapping[str, bool]) -> list[InterventionSpec]:
        """Interventions switched on in *flags*, in registry order.

        Ids missing from *flags* are treated as disabled; ids in *flags* that
        the registry does not know are ignored.
        """
        return [s for s in self if flags.get(s.id, False)]

    def governors(self, metric: str) -> Mapping[str, float]:
        """Boost weights of the interventions governing a boosted-share metric."""
        return self._governors.get(metric, MappingProxyType({}))


def _spec_from_row(iv_id: str, row: dict) -> InterventionSpec:
    trend = row.get("trend")
    return InterventionSpec(
        id=iv_id,
        display_name=row["display_name"],
        affects=tuple(
            MetricEffect(metric, factor, METRIC_UNITS.get(metric, ""))
            for metric, factor in row.get("affects", {}).items()
        ),
        enabled_by_default=row.get("enabled", True),
        base_cost=float(row.get("base_cost", 0.0)),
        category_effects=MappingProxyType(dict(row.get("category_effects", {}))),
        attributes=MappingProxyType(dict(row.get("attributes", {}))),
        trend=TimeTrend(**trend) if trend else None,
    )


@lru_cache(maxsize=None)
def build_registry(domain_id: str) -> InterventionRegistry:
    """Registry for *domain_id*; domains without interventions get an empty one."""
    rows = INTERVENTIONS.get(domain_id, {})
    specs = tuple(_spec_from_row(iv_id, row) for iv_id, row in rows.items())
    governors = {
        metric: MappingProxyType(dict(weights))
        for metric, weights in BOOST_GOVERNORS.get(domain_id, {}).items()
    }
    return InterventionRegistry(domain_id, specs, governors)
