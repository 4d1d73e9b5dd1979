"""Streamlit dashboard for outcome pools."""
