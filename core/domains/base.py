"""
Defines the abstract base class for all domain scenario models.
"""

from __future__ import annotations
import abc
from typing import Any, Mapping

from core.engine import ScenarioContext
from core.models import DerivedMetrics, Headline, ProjectionSettings, SliderSpec, UserInputs
from core.registry import InterventionRegistry, build_registry


class DomainModel(abc.ABC):
    """
    Abstract base class for every what-if panel's computation model.

    Each subclass owns one domain's baseline constants and metric formulas.
    The generic ScenarioEngine supplies clamped inputs and composition helpers
    through a ScenarioContext; subclasses only turn those into DerivedMetrics.

    Every subclass must report the common metrics ``adjusted_baseline``,
    ``reduction_fraction``, ``total_use``, ``cost`` and ``carbon``.
    """

    icon: str = ""
    sliders: tuple[SliderSpec, ...] = ()
    projection: ProjectionSettings = ProjectionSettings()
    headline: tuple[Headline, ...] = ()
    series_names: tuple[str, ...] = ()

    @property
    @abc.abstractmethod
    def domain_id(self) -> str:
        """A unique machine-readable identifier (e.g., 'electricity')."""
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def label(self) -> str:
        """The user-facing panel title."""
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def baseline(self) -> Mapping[str, Any]:
        """Immutable baseline constants for this domain."""
        raise NotImplementedError

    @abc.abstractmethod
    def compute(self, ctx: ScenarioContext) -> DerivedMetrics:
        """Pure single-year computation."""
        raise NotImplementedError

    @property
    def registry(self) -> InterventionRegistry:
        return build_registry(self.domain_id)

    def slider_spec(self, key: str) -> SliderSpec:
        """
        Retrieves a declared slider by key.

        Raises:
            KeyError: If the key is not declared by this domain.
        """
        for spec in self.sliders:
            if spec.key == key:
                return spec
        raise KeyError(
            f"Slider '{key}' not found in domain '{self.domain_id}'. "
            f"Available sliders: {[s.key for s in self.sliders]}"
        )

    def series(self, name: str, inputs: UserInputs, current_year: int) -> list[dict]:
        """Named domain-specific series (e.g. 'cash_flow'), as plain records."""
        if name not in self.series_names:
            raise KeyError(
                f"Series '{name}' not provided by domain '{self.domain_id}'. "
                f"Available series: {list(self.series_names)}"
            )
        return getattr(self, f"{name}_series")(inputs, current_year)

    def result(
        self,
        metrics: dict[str, float | None],
        shares: dict[str, dict[str, float]] | None = None,
        tables: dict[str, list[dict]] | None = None,
    ) -> DerivedMetrics:
        return DerivedMetrics(self.domain_id, metrics, shares or {}, tables or {})
