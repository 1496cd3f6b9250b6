# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Sustainability What-If Dashboard
# © 2026 Aparajita Parihar. All rights reserved.
#
# Independent research project. Not affiliated with any institution.
#
# Eight independent what-if panels (population, solar, electricity, water,
# waste, gas, travel, financial). Each panel is drawn by app.panels from its
# DomainModel; all figures come from the pure core.engine.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations
import os
import sys

from dotenv import load_dotenv
# Load .env from project root (parent directory of app/)
_env_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), ".env")
load_dotenv(_env_path)

import streamlit as st

# ─────────────────────────────────────────────────────────────────────────────
# PATH SETUP — Ensure config, core and services modules are accessible
# ─────────────────────────────────────────────────────────────────────────────
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from app import panels, session
from app.branding import inject_branding, render_footer
from app.sidebar import render_sidebar


def run() -> None:
    st.set_page_config(
        page_title            = "CampusLens What-If",
        page_icon             = "🌿",
        layout                = "wide",
        initial_sidebar_state = "expanded",
    )
    inject_branding()
    session.init_session()

    domain_id = render_sidebar()
    panels.render(domain_id)
    render_footer()


if __name__ == "__main__":
    run()
