import streamlit as st
from dataclasses import asdict
from premiere_hunter.ui.state import AppState


def render(app_state: AppState):
    st.title("Premiere Hunter")

    st.header("System Status")

    col1, col2 = st.columns(2)

    with col1:
        cfg_status = app_state.config_status
        st.metric("Config", cfg_status)
        if cfg_status == "ERROR":
            st.error(f"Config Error: {app_state.config.get('error')}")

    with col2:
        st.metric("Source", app_state.config.get("source") or "-")
        if app_state.config.get("config_path"):
            st.caption(app_state.config["config_path"])

    st.divider()

    st.header("Effective Settings")
    st.json(asdict(app_state.settings))
