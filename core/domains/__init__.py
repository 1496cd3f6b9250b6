"""
This package contains one scenario model per dashboard domain.

The __init__.py file acts as a public interface, exporting a factory function
(get_domain_model) to retrieve the model for a given domain ID, and
get_engine to wrap it in a ScenarioEngine. It also defines the canonical list
of domain IDs and their display labels.

Models are imported lazily via importlib, so opening one panel does not load
every domain module.
"""

import importlib
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.engine import ScenarioEngine
    from .base import DomainModel

# Canonical domain identifiers, in sidebar order
DOMAIN_IDS = [
    "population",
    "solar",
    "electricity",
    "water",
    "waste",
    "gas",
    "travel",
    "financial",
]

DOMAIN_LABELS = {
    "population": "👥 Student Population",
    "solar": "☀️ Solar PV",
    "electricity": "⚡ Electricity",
    "water": "💧 Water",
    "waste": "♻️ Waste",
    "gas": "🔥 Natural Gas",
    "travel": "✈️ Business Travel",
    "financial": "💶 Financial Planning",
}

# Domains whose models compose interventions through the registry
INTERVENTION_DOMAIN_IDS = ["electricity", "gas", "water", "waste", "travel"]

_REGISTRY = {
    "population": ".population.PopulationModel",
    "solar": ".solar.SolarModel",
    "electricity": ".electricity.ElectricityModel",
    "water": ".water.WaterModel",
    "waste": ".waste.WasteModel",
    "gas": ".gas.GasModel",
    "travel": ".travel.TravelModel",
    "financial": ".financial.FinancialModel",
}


@lru_cache(maxsize=None)
def get_domain_model(domain_id: str) -> "DomainModel":
    """
    Lazily imports and returns the (shared, stateless) model for a domain.

    Raises:
        ValueError: If the domain_id is not registered.
    """
    if domain_id not in _REGISTRY:
        raise ValueError(f"Unknown domain: {domain_id!r}. Valid domains: {DOMAIN_IDS}")

    module_path, class_name = _REGISTRY[domain_id].rsplit(".", 1)
    module = importlib.import_module(module_path, package=__package__)
    return getattr(module, class_name)()


def get_engine(domain_id: str) -> "ScenarioEngine":
    from core.engine import ScenarioEngine

    return ScenarioEngine(get_domain_model(domain_id))
