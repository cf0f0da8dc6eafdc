import streamlit as st
import sys
import os

# Ensure repo root is in path if run directly - MUST BE BEFORE LOCAL IMPORTS
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
if parent_dir not in sys.path:
   sys.path.insert(0, parent_dir)

from premiere_hunter.ui.state import init_app_state
from premiere_hunter.ui.components import navigation
from premiere_hunter.ui.pages import home, scan

def main():
    st.set_page_config(
        page_title="Premiere Hunter",
        page_icon="🎬",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    app_state = init_app_state()

    page_map = {
        "Home": home.render,
        "Scan": scan.render,
    }

    navigation.render_sidebar(app_state, page_map)

if __name__ == "__main__":
    main()
