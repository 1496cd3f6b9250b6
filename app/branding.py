# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Page Styling
# © 2026 Aparajita Parihar. All rights reserved.
# ═══════════════════════════════════════════════════════════════════════════════
"""
Page styling for the what-if panels: one stylesheet, BAN cards, section
headings and the footer. Every unsafe_allow_html call lives here and escapes
its text.
"""
from __future__ import annotations

import html

import streamlit as st

# Card accent per BAN position, cycling
BAN_ACCENTS = ("#00C2A8", "#1DB87A", "#4A6FA5", "#FFA500", "#0A5C3E", "#071A2F")

# ─────────────────────────────────────────────────────────────────────────────
# STYLESHEET
# ─────────────────────────────────────────────────────────────────────────────
CAMPUSLENS_CSS = """
.block-container { padding-top: 1.2rem; max-width: 1400px; }
div[data-testid="stSidebar"] { background: #F4F8FB; }

.ban {
  background: #FFFFFF;
  border: 1px solid #DCE6EF;
  border-left: 5px solid var(--ban-accent, #00C2A8);
  border-radius: 8px;
  padding: 14px 16px 12px;
  margin-bottom: 12px;
  min-height: 104px;
}
.ban-label     { font-size: .74rem; font-weight: 700; letter-spacing: .8px; text-transform: uppercase; color: #3A576B; }
.ban-value     { font-size: 1.65rem; font-weight: 700; color: #071A2F; margin-top: 4px; line-height: 1.15; }
.ban-reference { font-size: .75rem; color: #6A8598; margin-top: 4px; }

.section-title { font-size: .9rem; font-weight: 700; letter-spacing: 1.6px; text-transform: uppercase; color: #0A5C3E; border-bottom: 2px solid #E3EEF5; padding-bottom: 4px; margin: 18px 0 10px; }
.chart-title   { font-size: .82rem; font-weight: 700; color: #3A576B; text-transform: capitalize; margin-bottom: 2px; }
.page-footer   { margin-top: 36px; padding: 14px 0; border-top: 1px solid #DCE6EF; color: #6A8598; font-size: .76rem; text-align: center; }
"""


def inject_branding() -> None:
    st.markdown(f"<style>{CAMPUSLENS_CSS}</style>", unsafe_allow_html=True)


def render_section(title: str) -> None:
    st.markdown(f"<div class='section-title'>{html.escape(title)}</div>", unsafe_allow_html=True)


def render_chart_title(title: str) -> None:
    st.markdown(f"<div class='chart-title'>{html.escape(title)}</div>", unsafe_allow_html=True)


def render_ban(label: str, value: str, reference: str = "", position: int = 0) -> None:
    """One BAN card: label, formatted value and an optional reference line."""
    accent = BAN_ACCENTS[position % len(BAN_ACCENTS)]
    reference_html = (
        f"<div class='ban-reference'>{html.escape(reference)}</div>" if reference else ""
    )
    st.markdown(
        f"<div class='ban' style='--ban-accent:{accent}' role='group' "
        f"aria-label='{html.escape(label, quote=True)}: {html.escape(value, quote=True)}'>"
        f"<div class='ban-label'>{html.escape(label)}</div>"
        f"<div class='ban-value'>{html.escape(value)}</div>"
        f"{reference_html}</div>",
        unsafe_allow_html=True,
    )


def render_footer() -> None:
    st.markdown(
        "<div class='page-footer' role='contentinfo'>"
        "CampusLens Sustainability What-If Platform · synthetic baselines, illustrative only · "
        "© 2026 Aparajita Parihar</div>",
        unsafe_allow_html=True,
    )
