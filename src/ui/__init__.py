"""Streamlit client."""
