# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Session State
# © 2026 Aparajita Parihar. All rights reserved.
#
# Owns every st.session_state key the dashboard uses, plus runtime settings
# read from Streamlit secrets or the environment. init_session() only fills
# missing keys, so it runs safely on every rerun. The wall clock is read in
# current_year() and nowhere else; scenario engines receive the year.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

import streamlit as st

from core.domains import DOMAIN_IDS, get_engine
from core.models import UserInputs
from services.geodata import DEFAULT_TIMEOUT_S

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# APPLICATION CONSTANTS
# ─────────────────────────────────────────────────────────────────────────────
DEFAULT_DOMAIN: str = "electricity"

# Maximum number of pushed scenarios retained per session
MAX_PUSHED_SCENARIOS: int = 20


# ─────────────────────────────────────────────────────────────────────────────
# RUNTIME SETTINGS
# ─────────────────────────────────────────────────────────────────────────────

def _get_secret(key: str, default: str = "") -> str:
    """Setting lookup: st.secrets first, then the environment, then *default*."""
    try:
        return st.secrets[key]
    except (KeyError, AttributeError, FileNotFoundError):
        return os.getenv(key, default)


def current_year() -> int:
    """Calendar year injected into projections; CAMPUSLENS_CURRENT_YEAR overrides it."""
    override = str(_get_secret("CAMPUSLENS_CURRENT_YEAR", "")).strip()
    if override:
        try:
            return int(override)
        except ValueError:
            logger.warning("Ignoring non-integer CAMPUSLENS_CURRENT_YEAR=%r", override)
    return datetime.now(timezone.utc).year


def geodata_timeout() -> float:
    raw = str(_get_secret("CAMPUSLENS_GEODATA_TIMEOUT", "")).strip()
    try:
        return float(raw) if raw else DEFAULT_TIMEOUT_S
    except ValueError:
        logger.warning("Ignoring non-numeric CAMPUSLENS_GEODATA_TIMEOUT=%r", raw)
        return DEFAULT_TIMEOUT_S


# ─────────────────────────────────────────────────────────────────────────────
# SESSION STATE INITIALISATION
# ─────────────────────────────────────────────────────────────────────────────

def init_session() -> None:
    """
    Fill in any missing session keys. Existing values are left alone.

    Keys:
        active_domain     str              panel on screen
        domain_inputs     dict[str, UserInputs]
        pushed_scenarios  list[dict]       snapshots sent to the main dashboard
        current_year      int              year 0 for projections
        geodata_url       str              extra GeoJSON source, tried first
        geodata_timeout   float            seconds per GeoJSON request
    """
    state = st.session_state

    # ── Navigation ────────────────────────────────────────────────────────────
    state.setdefault("active_domain", DEFAULT_DOMAIN)

    # ── Scenario state ────────────────────────────────────────────────────────
    state.setdefault("domain_inputs", {d: get_engine(d).default_inputs() for d in DOMAIN_IDS})
    state.setdefault("pushed_scenarios", [])

    # ── Runtime configuration ─────────────────────────────────────────────────
    state.setdefault("current_year",    current_year())
    state.setdefault("geodata_url",     _get_secret("CAMPUSLENS_GEODATA_URL", ""))
    state.setdefault("geodata_timeout", geodata_timeout())


def get_inputs(domain_id: str) -> UserInputs:
    return st.session_state["domain_inputs"][domain_id]


def set_inputs(domain_id: str, inputs: UserInputs) -> None:
    st.session_state["domain_inputs"][domain_id] = inputs


def reset_inputs(domain_id: str) -> UserInputs:
    """Restore a panel's defaults and drop its widget state (keys "<domain>:…")."""
    ss = st.session_state
    for key in [k for k in ss.keys() if str(k).startswith(f"{domain_id}:")]:
        del ss[key]
    inputs = get_engine(domain_id).default_inputs()
    set_inputs(domain_id, inputs)
    return inputs
