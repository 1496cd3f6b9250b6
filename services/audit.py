# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — In-Session Audit Log
# © 2026 Aparajita Parihar. All rights reserved.
#
# Records what each panel handed to the main dashboard, and panel resets.
# Entries live in a bounded deque inside st.session_state and disappear with
# the browser session; nothing is written to disk. Details describe slider
# settings only (no PII, no credentials), and secret-looking tokens are
# refused before they reach the log.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import re
from collections import deque
from datetime import datetime, timezone
from typing import Optional

import streamlit as st

_LOG_KEY = "_campuslens_audit_log"
_MAX_SIZE = 50

PUSH_TO_MAIN = "PUSH_TO_MAIN"
SCENARIO_RESET = "SCENARIO_RESET"
KNOWN_ACTIONS = frozenset({PUSH_TO_MAIN, SCENARIO_RESET})

# Long opaque tokens (API keys, session secrets)
SECRET_PATTERN = re.compile(r"[A-Za-z0-9_\-]{30,}")


def _events() -> deque:
    log = st.session_state.get(_LOG_KEY)
    if log is None:
        log = deque(maxlen=_MAX_SIZE)
        st.session_state[_LOG_KEY] = log
    return log


def _assert_no_secret(value: str) -> None:
    if SECRET_PATTERN.search(value):
        raise ValueError("Audit log details must not contain secret material.")


def log_event(action: str, details: str, domain_id: str = "") -> None:
    """
    Record one panel event.

    Raises:
        ValueError: If *action* is not a known event type, or *details*
                    carries something that looks like a credential.
    """
    if action not in KNOWN_ACTIONS:
        raise ValueError(f"Unknown audit action {action!r}. Known actions: {sorted(KNOWN_ACTIONS)}")
    _assert_no_secret(details)

    _events().append({
        "ts":      datetime.now(timezone.utc).strftime("%d %b %H:%M UTC"),
        "action":  action,
        "domain":  domain_id,
        "details": details,
    })


def get_log(n: int = 10, domain_id: Optional[str] = None) -> list[dict]:
    """Newest-first entries, optionally only those from one panel."""
    entries = [e for e in reversed(_events()) if domain_id is None or e["domain"] == domain_id]
    return entries[:n]


def clear_log() -> None:
    _events().clear()
