import streamlit as st
from premiere_hunter.config.loader import load_config
from premiere_hunter.config.settings import ScanSettings, resolve_settings


class AppState:
    def __init__(self):
        # Load config once per session; a browser refresh keeps it
        if "app_config" not in st.session_state:
            st.session_state.app_config = load_config()

        self.config = st.session_state.app_config

    @property
    def config_status(self) -> str:
        return self.config.get("status", "UNKNOWN")

    @property
    def settings(self) -> ScanSettings:
        """
        Settings from the config file alone; the Scan page layers its inputs on top.
        """
        return resolve_settings(self.config.get("data", {}))


def init_app_state() -> AppState:
    return AppState()
