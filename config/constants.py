# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Canonical Baseline Constants
# © 2026 Aparajita Parihar. All rights reserved.
#
# Single source of truth for every synthetic baseline used by the scenario
# models. Domain modules MUST import from here — never redefine constants
# locally.
#
# This file has ZERO Streamlit, ZERO network, and ZERO side-effect imports.
# It is safe to import in any context, including unit tests without a
# running Streamlit server.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from types import MappingProxyType


def _frozen(table: dict) -> MappingProxyType:
    """Wrap a (possibly nested) dict in read-only proxies."""
    return MappingProxyType({
        k: _frozen(v) if isinstance(v, dict) else v for k, v in table.items()
    })


# ─────────────────────────────────────────────────────────────────────────────
# COMPOSITION POLICY
# ─────────────────────────────────────────────────────────────────────────────

# Upper bound on any composed total-use reduction
MAX_REDUCTION_FRACTION: float = 0.95

# Funding / adoption slider range (percent)
FUNDING_MIN: float = 0.0
FUNDING_MAX: float = 100.0

# Footfall / demand index slider range (percent of nominal)
DEMAND_INDEX_MIN: float = 70.0
DEMAND_INDEX_MAX: float = 150.0
DEMAND_INDEX_DEFAULT: float = 100.0

# Shared projection horizon
PROJECTION_START_YEAR: int = 2025
PROJECTION_END_YEAR: int = 2050
NET_ZERO_TARGET_YEAR: int = 2050

# Campus headcount used by every per-student metric
STUDENT_POPULATION: int = 25_000


# ─────────────────────────────────────────────────────────────────────────────
# ELECTRICITY
# ─────────────────────────────────────────────────────────────────────────────
ELECTRICITY_BASELINE = _frozen({
    "base_use_kwh":          18_500_000,  # kWh / year at 100% footfall
    "grid_carbon_t_per_mwh":       0.35,  # tCO₂e / MWh
    "renewable_carbon_t_per_mwh":  0.05,  # tCO₂e / MWh
    "grid_cost_per_kwh":           0.12,  # € / kWh
    "renewable_cost_per_kwh":      0.08,  # € / kWh
    "renewable_share_base":        15.0,  # %
    "renewable_share_max":         65.0,  # %
    "peak_reduction_max":          25.0,  # %
    "students":        STUDENT_POPULATION,
    "end_use_shares": {                   # % of consumption
        "labs": 35.0, "accommodation": 25.0, "admin": 15.0,
        "teaching": 15.0, "it_servers": 10.0,
    },
    "load_profile": {                     # base-load % / variable-load %
        "labs":          (70.0, 30.0),
        "accommodation": (60.0, 40.0),
        "admin":         (55.0, 45.0),
        "teaching":      (40.0, 60.0),
        "it_servers":    (85.0, 15.0),
    },
    "growth_rate":                0.015,  # per year
})

# ─────────────────────────────────────────────────────────────────────────────
# NATURAL GAS
# ─────────────────────────────────────────────────────────────────────────────
HEAT_PUMP_COP: float = 3.0

GAS_BASELINE = _frozen({
    "base_use_kwh":           8_500_000,  # kWh / year at 100% heating demand
    "gas_carbon_t_per_mwh":        0.20,  # tCO₂e / MWh
    "heat_pump_carbon_t_per_mwh":  0.35,  # tCO₂e / MWh (electricity input)
    "gas_cost_per_kwh":            0.08,  # € / kWh
    "heat_pump_cost_per_kwh":      0.12 / HEAT_PUMP_COP,  # € / kWh heat
    "heat_pump_share_base":         5.0,  # %
    "heat_pump_share_max":         45.0,  # %
    "peak_reduction_max":          35.0,  # %
    "floor_area_m2":            150_000,  # m²
    "end_use_shares": {
        "space_heating": 70.0, "hot_water": 20.0, "process": 10.0,
    },
    "growth_rate":                0.007,
    "maturity_years":                10,
})

# ─────────────────────────────────────────────────────────────────────────────
# WATER
# ─────────────────────────────────────────────────────────────────────────────
WATER_BASELINE = _frozen({
    "base_use_m3":              450_000,  # m³ / year at 100% footfall
    "wastewater_ratio":            0.85,
    "cost_per_m3":                 2.50,  # € / m³
    "carbon_t_per_m3":             0.35,  # tCO₂e / m³
    "carbon_floor_ratio":          0.20,
    "cost_floor_ratio":            0.40,
    "reuse_rate_base":              5.0,  # %
    "reuse_rate_max":              35.0,  # %
    "students":        STUDENT_POPULATION,
    "facility_shares": {
        "academic": 25.0, "residential": 35.0, "recreation": 15.0,
        "maintenance": 12.0, "catering": 8.0, "research": 5.0,
    },
    "facility_floor_ratio":        0.40,
    "growth_rate":                 0.02,
})

# ─────────────────────────────────────────────────────────────────────────────
# WASTE
# ─────────────────────────────────────────────────────────────────────────────
WASTE_BASELINE = _frozen({
    "base_tonnes":               12_500,  # t / year at 100% footfall
    "carbon_t_per_t":               2.1,  # tCO₂e / t landfilled
    "cost_per_t":                 120.0,  # € / t
    "carbon_floor_ratio":          0.15,
    "cost_floor_ratio":            0.30,
    "recycling_rate_base":         45.0,  # %
    "recycling_rate_max":          85.0,  # %
    "reuse_rate_base":              5.0,  # %
    "reuse_rate_max":              15.0,  # %
    "recycling_carbon_t_per_t":     0.8,
    "recycling_saving_per_t":      45.0,
    "reuse_carbon_t_per_t":         1.2,
    "reuse_saving_per_t":          85.0,
    "students":        STUDENT_POPULATION,
    "stream_shares": {
        "glass": 15.0, "metal": 12.0, "paper": 28.0,
        "organic": 30.0, "it": 5.0, "mixed": 10.0,
    },
    "stream_floor_ratio":          0.30,
    "growth_rate":                 0.01,
})

# ─────────────────────────────────────────────────────────────────────────────
# BUSINESS TRAVEL
# ─────────────────────────────────────────────────────────────────────────────
TRAVEL_BASELINE = _frozen({
    "flights":                     4_200,
    "air_emissions_t":             2_450,  # tCO₂e / year
    "ground_emissions_t":            680,  # tCO₂e / year
    "virtual_cost":               85_000,  # € / year tooling
    "air_cost":                1_250_000,  # € / year
    "ground_cost":               320_000,  # € / year
    "distance_km":             8_500_000,
    "hotel_nights":                1_800,
    # Mode split: baseline emissions (tCO₂e) and trips, with the response of each
    # mode to the air-reduction rate (flight) or the ground-shift rate (train, car)
    "mode_split": {
        "flight": {"emissions": 2_450, "trips": 850, "emission_response": -1.0, "trip_response": -0.5 / 0.6},
        "train":  {"emissions":   145, "trips": 320, "emission_response":  2.0, "trip_response":  2.5},
        "car":    {"emissions":   380, "trips": 580, "emission_response":  1.5, "trip_response":  1.8},
    },
    "compliance_weights": {
        "virtual_meetings": 40.0, "air_travel_policy": 35.0, "rail_shift": 25.0,
    },
    "growth_rate":                  0.0,
})

# Baseline per-country flight activity (the travel map's country association)
TRAVEL_DESTINATIONS = _frozen({
    "Germany":        {"flights": 580, "emissions": 145, "coordinates": (10.4515, 51.1657)},
    "France":         {"flights": 520, "emissions": 125, "coordinates": (2.2137, 46.2276)},
    "Netherlands":    {"flights": 380, "emissions":  85, "coordinates": (5.2913, 52.1326)},
    "Spain":          {"flights": 290, "emissions":  98, "coordinates": (-3.7492, 40.4637)},
    "Italy":          {"flights": 245, "emissions":  88, "coordinates": (12.5674, 41.8719)},
    "United States":  {"flights": 425, "emissions": 385, "coordinates": (-95.7129, 37.0902)},
    "Canada":         {"flights": 180, "emissions": 165, "coordinates": (-106.3468, 56.1304)},
    "China":          {"flights": 320, "emissions": 445, "coordinates": (104.1954, 35.8617)},
    "Japan":          {"flights": 285, "emissions": 365, "coordinates": (138.2529, 36.2048)},
    "Singapore":      {"flights": 195, "emissions": 285, "coordinates": (103.8198, 1.3521)},
    "India":          {"flights": 240, "emissions": 325, "coordinates": (78.9629, 20.5937)},
    "Australia":      {"flights": 145, "emissions": 315, "coordinates": (133.7751, -25.2744)},
    "Brazil":         {"flights": 125, "emissions": 285, "coordinates": (-51.9253, -14.2350)},
    "United Kingdom": {"flights": 450, "emissions":  95, "coordinates": (-3.4360, 55.3781)},
    "South Korea":    {"flights": 165, "emissions": 225, "coordinates": (127.7669, 35.9078)},
})

# Monthly policy-compliance modifiers (index 0 = January)
SUMMER_MONTHS: tuple[int, ...] = (5, 6, 7)
HOLIDAY_MONTHS: tuple[int, ...] = (0, 11)
SUMMER_COMPLIANCE_FACTOR: float = 0.85
HOLIDAY_COMPLIANCE_FACTOR: float = 0.9
COMPLIANCE_VARIATION: float = 0.1  # ± fraction of monthly compliance

# ─────────────────────────────────────────────────────────────────────────────
# SOLAR PV
# ─────────────────────────────────────────────────────────────────────────────
SOLAR_BASELINE = _frozen({
    "max_capacity_kw":           5_000,
    "system_efficiency_pct":      85.0,
    "hours_factor":               8.76,  # 8760 h / 1000
    "saving_per_kwh":             0.12,  # € / kWh
    "carbon_t_per_kwh":         0.0004,  # tCO₂e / kWh offset
    "rooftop_capacity_kw":       3_000,
    "cost_per_kw":               2_500,  # € / kW installed
    "yield_kwh_per_kw":          1_200,  # kWh / kW / year (series)
    "capex_years":                   5,
    "savings_growth":             0.03,
    "series_start_year":          2020,
})

# ─────────────────────────────────────────────────────────────────────────────
# FINANCIAL PLANNING
# ─────────────────────────────────────────────────────────────────────────────
FINANCIAL_BASELINE = _frozen({
    "total_budget":          5_000_000,  # €
    "annual_growth_rate":          3.5,  # %
    "carbon_target_t":         2_000.0,
    "allocation_max":        1_000_000,
    "allocation_step":          10_000,
    "carbon_t_per_eur": {
        "water": 0.0003, "waste": 0.0005, "electricity": 0.0008,
        "gas": 0.001, "travel": 0.0006,
    },
    "allocations": {
        "water": {
            "rainwater_harvesting": 150_000, "leak_detection": 75_000,
            "water_recycling": 200_000, "low_flow_fixtures": 100_000,
            "greywater_systems": 250_000,
        },
        "waste": {
            "composting": 120_000, "recycling_programs": 80_000,
            "waste_reduction": 60_000, "bio_waste_digestion": 300_000,
            "zero_waste_initiatives": 150_000,
        },
        "electricity": {
            "solar_panels": 500_000, "led_lighting": 180_000,
            "smart_meters": 90_000, "energy_storage": 350_000,
            "hvac_optimization": 220_000, "wind_turbines": 400_000,
        },
        "gas": {
            "heat_pumps": 300_000, "insulation": 250_000,
            "smart_thermostats": 50_000, "boiler_upgrade": 200_000,
            "renewable_heating": 400_000,
        },
        "travel": {
            "electric_vehicles": 400_000, "remote_work": 100_000,
            "public_transport": 150_000, "carbon_offset": 80_000,
            "video_conferencing": 120_000,
        },
    },
})

# ─────────────────────────────────────────────────────────────────────────────
# STUDENT POPULATION
# ─────────────────────────────────────────────────────────────────────────────
POPULATION_BASELINE = _frozen({
    "population":               10_000,
    "history_start_year":         2020,
    "horizon_years":                20,
    "carbon_t_per_growth":         0.5,  # tCO₂e per additional student
    "cost_per_growth":         1_200.0,  # € per additional student
    "project_emissions_t": {
        "energy_infrastructure": 15_000, "transportation": 12_000,
        "buildings": 8_500, "food_services": 6_000, "waste_management": 3_500,
    },
    "cost_per_student": {
        "energy_infrastructure": 1_500, "transportation": 1_200,
        "buildings": 900, "food_services": 600, "waste_management": 400,
    },
    "budget_growth":             0.015,
    "budget_horizon_years":         10,
})
