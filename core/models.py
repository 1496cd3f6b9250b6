# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Scenario Value Types
# © 2026 Aparajita Parihar. All rights reserved.
#
# Plain data carried between the UI, the engine and the renderers:
#   SliderSpec, UserInputs        — what the user controls
#   ProjectionSettings, Headline  — per-domain declarations
#   DerivedMetrics                — single-year outputs
#   ProjectionSeries              — multi-year outputs (three scenarios)
#
# Everything here is a frozen dataclass or a plain-record view of one; no
# renderer-specific shapes.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

import pandas as pd

SCENARIO_KEYS: tuple[str, ...] = ("business_as_usual", "partial", "full_intervention")
SCENARIO_LABELS: dict[str, str] = {
    "business_as_usual": "Business as usual",
    "partial":           "Current funding",
    "full_intervention": "Full intervention",
}


@dataclass(frozen=True)
class SliderSpec:
    key: str
    label: str
    min_value: float
    max_value: float
    default: float
    step: float = 1.0
    unit: str = ""

    def clamp(self, value: float | None) -> float:
        """Clamp into [min_value, max_value]; None/NaN fall back to the default."""
        if value is None or (isinstance(value, float) and math.isnan(value)):
            return self.default
        return max(self.min_value, min(self.max_value, float(value)))


@dataclass(frozen=True)
class Headline:
    """A BAN (single-value summary) declared by a domain."""

    metric: str
    label: str
    kind: str = "number"  # number | currency | percent | compact | years
    unit: str = ""


@dataclass(frozen=True)
class ProjectionSettings:
    metrics: tuple[str, ...] = ("total_use", "cost", "carbon")
    growth_rate: float = 0.0
    maturity_years: int = 0
    horizon_years: int = 25
    start_year: int | None = None  # None → the injected current year


@dataclass(frozen=True)
class UserInputs:
    """Per-domain user state. Replace, never mutate."""

    funding_level: float = 0.0
    demand_index: float = 100.0
    enabled: Mapping[str, bool] = field(default_factory=dict)
    sliders: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "enabled", MappingProxyType(dict(self.enabled)))
        object.__setattr__(self, "sliders", MappingProxyType(dict(self.sliders)))

    def with_funding(self, level: float) -> "UserInputs":
        return replace(self, funding_level=level)

    def with_slider(self, key: str, value: float) -> "UserInputs":
        return replace(self, sliders={**self.sliders, key: value})

    def toggled(self, iv_id: str, on: bool) -> "UserInputs":
        return replace(self, enabled={**self.enabled, iv_id: on})

    def with_all(self, on: bool) -> "UserInputs":
        return replace(self, enabled={k: on for k in self.enabled})


@dataclass(frozen=True)
class DerivedMetrics:
    domain_id: str
    metrics: dict[str, float | None]
    shares: dict[str, dict[str, float]] = field(default_factory=dict)
    tables: dict[str, list[dict[str, Any]]] = field(default_factory=dict)

    def __getitem__(self, key: str) -> float | None:
        return self.metrics[key]

    def record(self) -> dict[str, Any]:
        """Flat record of the scalar metrics, for renderers."""
        return {"domain": self.domain_id, **self.metrics}


@dataclass(frozen=True)
class ProjectionSeries:
    domain_id: str
    metrics: tuple[str, ...]
    business_as_usual: list[dict[str, float]]
    partial: list[dict[str, float]]
    full_intervention: list[dict[str, float]]

    @property
    def years(self) -> list[int]:
        return [row["year"] for row in self.business_as_usual]

    def scenario(self, key: str) -> list[dict[str, float]]:
        if key not in SCENARIO_KEYS:
            raise KeyError(f"Unknown scenario {key!r}; expected one of {SCENARIO_KEYS}")
        return getattr(self, key)

    def at(self, key: str, year: int) -> dict[str, float]:
        for row in self.scenario(key):
            if row["year"] == year:
                return row
        raise KeyError(f"Year {year} is outside the projection horizon")

    def to_frame(self) -> pd.DataFrame:
        """Long-format frame: one row per (scenario, year)."""
        frames = []
        for key in SCENARIO_KEYS:
            df = pd.DataFrame(self.scenario(key))
            df.insert(0, "scenario", key)
            frames.append(df)
        return pd.concat(frames, ignore_index=True)
