# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Intervention Registry Tables
# © 2026 Aparajita Parihar. All rights reserved.
#
# Single source of truth for:
#   • INTERVENTIONS     — per-domain intervention rows (effect factors, costs)
#   • BOOST_GOVERNORS   — which interventions gate each boosted-share metric
#   • METRIC_UNITS      — unit label for every metric an intervention affects
#
# Row schema:
#   display_name      str               Label shown next to the toggle
#   affects           dict[str, float]  metric → max proportional effect at
#                                        100% funding, relative to BASELINE
#   category_effects  dict[str, float]  category → share multiplier at 100%
#                                        funding (1.0 = untouched)
#   base_cost         float             € implementation cost at 0% funding
#   attributes        dict[str, float]  domain-specific ROI parameters
#   enabled           bool              default toggle state
#   trend             dict | None       secondary time multiplier
#
# This file has ZERO Streamlit and ZERO network imports.
# It is safe to import in unit tests and CLI contexts.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from config.constants import (
    ELECTRICITY_BASELINE,
    GAS_BASELINE,
    WASTE_BASELINE,
    WATER_BASELINE,
)

METRIC_UNITS: dict[str, str] = {
    "use":          "fraction of baseline use",
    "ground_shift": "fraction of baseline ground travel",
}


# ─────────────────────────────────────────────────────────────────────────────
# INTERVENTION TABLES
# Keys must be stable — they are referenced by BOOST_GOVERNORS below and by
# the domain models.
# ─────────────────────────────────────────────────────────────────────────────

INTERVENTIONS: dict[str, dict[str, dict]] = {
    "electricity": {
        "led_retrofits": {
            "display_name": "LED Retrofits",
            "affects":      {"use": 0.15},
            "category_effects": {
                "labs": 0.88, "accommodation": 0.85, "admin": 0.87,
                "teaching": 0.86, "it_servers": 0.90,
            },
            "base_cost":    45_000,
            "attributes":   {"roi_base": 0.08, "roi_max": 0.15, "carbon_t_per_mwh": 0.35},
            "enabled":      True,
        },
        "smart_controls": {
            "display_name": "Smart Controls",
            "affects":      {"use": 0.12},
            "category_effects": {
                "labs": 0.85, "accommodation": 0.82, "admin": 0.83,
                "teaching": 0.78, "it_servers": 0.88,
            },
            "base_cost":    65_000,
            "attributes":   {"roi_base": 0.12, "roi_max": 0.22, "carbon_t_per_mwh": 0.35},
            "enabled":      True,
        },
        "behavioural_campaigns": {
            "display_name": "Behavioural Campaigns",
            "affects":      {"use": 0.08},
            "category_effects": {
                "labs": 0.92, "accommodation": 0.88, "admin": 0.90,
                "teaching": 0.85, "it_servers": 0.95,
            },
            "base_cost":    15_000,
            "attributes":   {"roi_base": 0.25, "roi_max": 0.40, "carbon_t_per_mwh": 0.35},
            "enabled":      True,
        },
        "onsite_renewables": {
            "display_name": "Onsite Renewables",
            "affects":      {"use": 0.20},
            "category_effects": {
                "labs": 0.80, "accommodation": 0.85, "admin": 0.85,
                "teaching": 0.85, "it_servers": 0.80,
            },
            "base_cost":    180_000,
            "attributes":   {"roi_base": 0.06, "roi_max": 0.11, "carbon_t_per_mwh": 0.45},
            "enabled":      True,
        },
        "demand_side_management": {
            "display_name": "Demand-Side Management",
            "affects":      {"use": 0.10},
            "category_effects": {
                "labs": 0.90, "accommodation": 0.88, "admin": 0.89,
                "teaching": 0.86, "it_servers": 0.92,
            },
            "base_cost":    35_000,
            "attributes":   {"roi_base": 0.10, "roi_max": 0.18, "carbon_t_per_mwh": 0.35},
            "enabled":      True,
        },
    },
    "gas": {
        "fabric_upgrades": {
            "display_name": "Fabric Upgrades",
            "affects":      {"use": 0.25},
            "category_effects": {"space_heating": 0.75, "hot_water": 0.95, "process": 0.90},
            "base_cost":    285_000,
            "attributes":   {"payback_years": 4.2, "gas_saving_pct": 25, "carbon_saving_pct": 18},
            "enabled":      True,
        },
        "heating_controls": {
            "display_name": "Heating Controls",
            "affects":      {"use": 0.08},
            "category_effects": {"space_heating": 0.92, "hot_water": 0.90, "process": 0.85},
            "base_cost":    85_000,
            "attributes":   {"payback_years": 2.1, "gas_saving_pct": 12, "carbon_saving_pct": 9},
            "enabled":      True,
        },
        "setpoints_scheduling": {
            "display_name": "Setpoints & Scheduling",
            "affects":      {"use": 0.12},
            "category_effects": {"space_heating": 0.88, "hot_water": 0.85, "process": 0.90},
            "base_cost":    45_000,
            "attributes":   {"payback_years": 1.8, "gas_saving_pct": 15, "carbon_saving_pct": 11},
            "enabled":      True,
        },
        "high_efficiency_boilers": {
            "display_name": "High-Efficiency Boilers",
            "affects":      {"use": 0.15},
            "category_effects": {"space_heating": 0.85, "hot_water": 0.80, "process": 0.82},
            "base_cost":    420_000,
            "attributes":   {"payback_years": 6.5, "gas_saving_pct": 18, "carbon_saving_pct": 14},
            "enabled":      True,
        },
        "heat_pump_conversion": {
            "display_name": "Heat Pump Conversion",
            "affects":      {"use": 0.30},
            "category_effects": {"space_heating": 0.70, "hot_water": 0.75, "process": 0.95},
            "base_cost":    680_000,
            "attributes":   {"payback_years": 8.2, "gas_saving_pct": 35, "carbon_saving_pct": 28},
            "enabled":      True,
            # Grid decarbonisation improves heat-pump effectiveness over time
            "trend":        {"horizon_years": 25, "uplift": 0.3, "cap": 0.6},
        },
        "dhw_efficiency": {
            "display_name": "Hot Water Efficiency",
            "affects":      {"use": 0.10},
            "category_effects": {"space_heating": 0.98, "hot_water": 0.70, "process": 0.85},
            "base_cost":    125_000,
            "attributes":   {"payback_years": 3.4, "gas_saving_pct": 22, "carbon_saving_pct": 16},
            "enabled":      True,
        },
    },
    "water": {
        "rainwater_harvesting": {
            "display_name": "Rainwater Harvesting",
            "affects":      {"use": 0.12},
            "category_effects": {"academic": 0.85, "research": 0.80},
            "base_cost":    0,
            "attributes":   {"carbon_intensity": 0.25, "saving_per_m3": 1.80, "roi_base": 65},
            "enabled":      True,
        },
        "greywater_recycling": {
            "display_name": "Greywater Recycling",
            "affects":      {"use": 0.15},
            "category_effects": {"residential": 0.75, "recreation": 0.70},
            "base_cost":    0,
            "attributes":   {"carbon_intensity": 0.30, "saving_per_m3": 2.20, "roi_base": 85},
            "enabled":      True,
        },
        "leak_detection": {
            "display_name": "Leak Detection",
            "affects":      {"use": 0.08},
            "category_effects": {
                "academic": 0.92, "residential": 0.92, "recreation": 0.92,
                "maintenance": 0.90,
            },
            "base_cost":    0,
            "attributes":   {"carbon_intensity": 0.35, "saving_per_m3": 2.50, "roi_base": 95},
            "enabled":      True,
        },
        "smart_irrigation": {
            "display_name": "Smart Irrigation",
            "affects":      {"use": 0.10},
            "category_effects": {"maintenance": 0.80, "recreation": 0.85},
            "base_cost":    0,
            "attributes":   {"carbon_intensity": 0.20, "saving_per_m3": 1.50, "roi_base": 55},
            "enabled":      True,
        },
        "water_efficiency_upgrades": {
            "display_name": "Water-Efficiency Upgrades",
            "affects":      {"use": 0.18},
            "category_effects": {
                "academic": 0.88, "residential": 0.82, "recreation": 0.90,
                "maintenance": 0.85, "catering": 0.80, "research": 0.90,
            },
            "base_cost":    0,
            "attributes":   {"carbon_intensity": 0.28, "saving_per_m3": 2.00, "roi_base": 75},
            "enabled":      True,
        },
    },
    "waste": {
        "food_waste_reduction": {
            "display_name": "Food Waste Reduction",
            "affects":      {"use": 0.08},
            "category_effects": {"organic": 0.75},
            "base_cost":    0,
            "attributes":   {"stream_share": 0.35, "carbon_t_per_t": 1.8, "saving_per_t": 45, "roi_base": 85},
            "enabled":      True,
        },
        "campus_reuse": {
            "display_name": "Campus Reuse Hub",
            "affects":      {"use": 0.06},
            "category_effects": {"it": 0.80, "mixed": 0.85},
            "base_cost":    0,
            "attributes":   {"roi_base": 120},
            "enabled":      True,
        },
        "recycling_uplift": {
            "display_name": "Recycling Uplift",
            "affects":      {"use": 0.04},
            "category_effects": {"paper": 0.90, "glass": 0.92, "metal": 0.88},
            "base_cost":    0,
            "attributes":   {"roi_base": 65},
            "enabled":      True,
        },
        "circular_procurement": {
            "display_name": "Circular Procurement",
            "affects":      {"use": 0.12},
            "category_effects": {"paper": 0.85, "mixed": 0.80},
            "base_cost":    0,
            "attributes":   {"stream_share": 0.25, "carbon_t_per_t": 1.2, "saving_per_t": 35, "roi_base": 95},
            "enabled":      True,
        },
        "cd_minimisation": {
            "display_name": "C&D Minimisation",
            "affects":      {"use": 0.05},
            "category_effects": {"mixed": 0.90, "metal": 0.92},
            "base_cost":    0,
            "attributes":   {"stream_share": 0.12, "carbon_t_per_t": 2.0, "saving_per_t": 65, "roi_base": 75},
            "enabled":      True,
        },
    },
    "travel": {
        "virtual_meetings": {
            "display_name": "Virtual Meetings",
            "affects":      {"use": 0.40},
            "enabled":      True,
        },
        "air_travel_policy": {
            "display_name": "Air Travel Policy",
            "affects":      {"use": 0.60},
            "enabled":      True,
        },
        "rail_shift": {
            "display_name": "Rail & Coach Shift",
            "affects":      {"ground_shift": 0.30},
            "enabled":      True,
        },
    },
}


# ─────────────────────────────────────────────────────────────────────────────
# BOOSTED-SHARE GOVERNORS
# metric → {intervention id: boost weight}.  Weights of 1.0 reproduce a single
# governing intervention; fractional weights split the boost between several.
# ─────────────────────────────────────────────────────────────────────────────

BOOST_GOVERNORS: dict[str, dict[str, dict[str, float]]] = {
    "electricity": {
        "renewable_share": {"onsite_renewables": 1.0},
        "peak_reduction":  {"demand_side_management": 1.0},
    },
    "gas": {
        "heat_pump_share": {"heat_pump_conversion": 1.0},
        "peak_reduction":  {
            "fabric_upgrades": 0.4, "heating_controls": 0.3, "setpoints_scheduling": 0.3,
        },
    },
    "water": {
        "reuse_rate": {
            "greywater_recycling": 15 / 30,
            "rainwater_harvesting": 10 / 30,
            "water_efficiency_upgrades": 5 / 30,
        },
    },
    "waste": {
        "recycling_rate": {"recycling_uplift": 1.0},
        "reuse_rate":     {"campus_reuse": 1.0},
    },
}

# Category sets each domain's category effects must refer to
_CATEGORIES: dict[str, frozenset] = {
    "electricity": frozenset(ELECTRICITY_BASELINE["end_use_shares"]),
    "gas":         frozenset(GAS_BASELINE["end_use_shares"]),
    "water":       frozenset(WATER_BASELINE["facility_shares"]),
    "waste":       frozenset(WASTE_BASELINE["stream_shares"]),
}


# ─────────────────────────────────────────────────────────────────────────────
# INTEGRITY CHECK (runs at import time)
# Raises ValueError immediately if a row is malformed or a governor references
# a missing intervention.
# ─────────────────────────────────────────────────────────────────────────────

def _assert_registry_integrity() -> None:
    for domain_id, rows in INTERVENTIONS.items():
        for iv_id, row in rows.items():
            for metric, factor in row.get("affects", {}).items():
                if metric not in METRIC_UNITS:
                    raise ValueError(
                        f"config/interventions.py integrity error: "
                        f"'{domain_id}.{iv_id}' affects unknown metric '{metric}'"
                    )
                if not 0.0 <= factor <= 1.0:
                    raise ValueError(
                        f"config/interventions.py integrity error: "
                        f"'{domain_id}.{iv_id}' factor {factor} for '{metric}' is outside [0, 1]"
                    )
            known = _CATEGORIES.get(domain_id, frozenset())
            for category, factor in row.get("category_effects", {}).items():
                if category not in known:
                    raise ValueError(
                        f"config/interventions.py integrity error: "
                        f"'{domain_id}.{iv_id}' references unknown category '{category}'"
                    )
                if not 0.0 <= factor <= 1.0:
                    raise ValueError(
                        f"config/interventions.py integrity error: "
                        f"'{domain_id}.{iv_id}' category factor {factor} is outside [0, 1]"
                    )
    for domain_id, governors in BOOST_GOVERNORS.items():
        rows = INTERVENTIONS.get(domain_id, {})
        for metric, weights in governors.items():
            for iv_id in weights:
                if iv_id not in rows:
                    raise ValueError(
                        f"config/interventions.py integrity error: "
                        f"'{domain_id}.{metric}' is governed by unknown intervention '{iv_id}'"
                    )


_assert_registry_integrity()
