"""
# CampusLens Platform

This is the main entry point for the Streamlit application.

It directs users to the what-if dashboard page, which lives in app/main.py so
that the config, core and services packages stay importable from the root.
"""

import streamlit as st

# Redirect to the main application page.
st.switch_page("app/main.py")
