# © 2026 Aparajita Parihar. All rights reserved.
# CampusLens Platform — Tests for session defaults and the push-to-main hand-off

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
import services.audit as audit
from app import session, sidebar
from core.domains import DOMAIN_IDS, get_engine


@pytest.fixture
def session_state(monkeypatch):
    state = {}
    monkeypatch.setattr(session.st, "session_state", state)
    monkeypatch.setattr(session.st, "secrets", {})
    monkeypatch.setattr(sidebar.st, "session_state", state)
    monkeypatch.setattr(audit.st, "session_state", state)
    return state


# ─────────────────────────────────────────────────────────────────────────────
# 1. Session defaults
# ─────────────────────────────────────────────────────────────────────────────
def test_init_session_is_idempotent(session_state, monkeypatch):
    monkeypatch.setenv("CAMPUSLENS_CURRENT_YEAR", "2031")
    session.init_session()
    assert session_state["current_year"] == 2031
    assert set(session_state["domain_inputs"]) == set(DOMAIN_IDS)

    session_state["active_domain"] = "gas"
    session.init_session()
    assert session_state["active_domain"] == "gas"


def test_current_year_ignores_bad_override(monkeypatch):
    monkeypatch.setattr(session.st, "secrets", {})
    monkeypatch.setenv("CAMPUSLENS_CURRENT_YEAR", "next year")
    assert session.current_year() >= 2025


def test_reset_inputs_drops_widget_keys(session_state):
    session.init_session()
    session.set_inputs("water", get_engine("water").default_inputs().with_funding(80))
    session_state["water:funding_level"] = 80
    session_state["gas:funding_level"] = 20

    inputs = session.reset_inputs("water")
    assert inputs.funding_level == 0
    assert session.get_inputs("water").funding_level == 0
    assert "water:funding_level" not in session_state
    assert "gas:funding_level" in session_state


# ─────────────────────────────────────────────────────────────────────────────
# 2. Push to main dashboard
# ─────────────────────────────────────────────────────────────────────────────
def _state(domain_id="electricity", funding=40):
    engine = get_engine(domain_id)
    inputs = engine.default_inputs().with_funding(funding).toggled("led_retrofits", False)
    return sidebar.build_domain_state(domain_id, inputs, engine.compute_metrics(inputs))


def test_build_domain_state_snapshot():
    state = _state()
    assert state["domain"] == "electricity"
    assert state["funding_level"] == 40
    assert state["enabled"]["led_retrofits"] is False
    assert state["metrics"]["domain"] == "electricity"
    assert "carbon" in state["metrics"]


def test_push_records_scenario_and_audits(session_state):
    sidebar.on_push_to_main(_state())
    assert len(session_state["pushed_scenarios"]) == 1
    entry = audit.get_log(1)[0]
    assert entry["action"] == audit.PUSH_TO_MAIN
    assert entry["domain"] == "electricity"
    assert "funding 40%" in entry["details"]
    assert "4 interventions enabled" in entry["details"]


def test_pushed_scenarios_are_capped(session_state):
    for _ in range(session.MAX_PUSHED_SCENARIOS + 3):
        sidebar.on_push_to_main(_state())
    assert len(session_state["pushed_scenarios"]) == session.MAX_PUSHED_SCENARIOS
