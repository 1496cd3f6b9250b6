"""
Renders the sidebar: domain navigation, scenario reset and the hand-off of
the active panel's scenario to the main dashboard.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

import streamlit as st

import services.audit as audit
from app import session
from core.domains import DOMAIN_IDS, DOMAIN_LABELS
from core.formatting import format_metric

logger = logging.getLogger(__name__)


def render_sidebar() -> str:
    """
    Renders the full sidebar and returns the active domain ID.
    """
    with st.sidebar:
        st.markdown("### CampusLens What-If")
        current = st.session_state.get("active_domain", session.DEFAULT_DOMAIN)
        domain_id = st.radio(
            "Dashboard",
            DOMAIN_IDS,
            index=DOMAIN_IDS.index(current) if current in DOMAIN_IDS else 0,
            format_func=lambda d: DOMAIN_LABELS[d],
            key="nav_domain",
        )
        st.session_state.active_domain = domain_id

        st.markdown("---")
        if st.button("↺ Reset this panel", key="btn_reset_panel", use_container_width=True):
            session.reset_inputs(domain_id)
            audit.log_event(audit.SCENARIO_RESET, "Panel restored to baseline defaults", domain_id)
            st.rerun()

        _render_audit_log()
        st.caption(f"Projection base year: {st.session_state.get('current_year')}")

    return domain_id


def _render_audit_log() -> None:
    entries = audit.get_log(5)
    if not entries:
        return
    with st.expander("📋 Recent activity"):
        for entry in entries:
            st.caption(f"{entry['ts']} · {entry['action']} · {entry['domain']} — {entry['details']}")


# ─────────────────────────────────────────────────────────────────────────────
# PUSH TO MAIN DASHBOARD
# ─────────────────────────────────────────────────────────────────────────────

def build_domain_state(domain_id: str, inputs, metrics) -> Dict[str, Any]:
    """Snapshot of one panel: its inputs plus the scalar metrics they produce."""
    return {
        "domain":        domain_id,
        "funding_level": inputs.funding_level,
        "demand_index":  inputs.demand_index,
        "enabled":       dict(inputs.enabled),
        "sliders":       dict(inputs.sliders),
        "metrics":       metrics.record(),
    }


def on_push_to_main(domain_state: Dict[str, Any]) -> None:
    """Hand a panel snapshot to the main dashboard (session-scoped) and audit it."""
    pushed = st.session_state.setdefault("pushed_scenarios", [])
    pushed.append(domain_state)
    if len(pushed) > session.MAX_PUSHED_SCENARIOS:
        st.session_state["pushed_scenarios"] = pushed[-session.MAX_PUSHED_SCENARIOS:]

    enabled = sum(1 for on in domain_state.get("enabled", {}).values() if on)
    carbon = format_metric(domain_state.get("metrics", {}).get("carbon"), "number", "tCO₂e")
    details = (
        f"funding {domain_state.get('funding_level', 0):.0f}%, "
        f"{enabled} interventions enabled, carbon {carbon}"
    )
    audit.log_event(audit.PUSH_TO_MAIN, details, domain_state.get("domain", ""))
    logger.info("Scenario pushed to main dashboard: %s (%s)", domain_state.get("domain"), details)
