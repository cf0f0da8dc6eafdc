import os
import streamlit as st
from typing import List, Tuple
from premiere_hunter.core.engine import ScanResult
from premiere_hunter.core.models import AssetListResult, MatchStatus


def render_matches(results: List[Tuple[str, ScanResult]], title: str = "Matches"):
    """
    Renders files that matched the search text, with snippets when present.
    Pure render component, no scanning.
    """
    st.subheader(title)
    matches = [(p, r) for p, r in results if not isinstance(r, AssetListResult) and r.status == MatchStatus.FOUND]
    if not matches:
        st.info("No matches.")
        return

    for path, result in matches:
        with st.expander(os.path.basename(path), expanded=False):
            st.markdown(f"`{path}`")
            if result.snippet is not None:
                st.code(result.snippet)
                st.caption(f"Line {result.line_number}")


def render_assets(results: List[Tuple[str, ScanResult]], title: str = "Assets"):
    """
    Renders the asset list of every project that has at least one asset.
    """
    st.subheader(title)
    projects = [(p, r) for p, r in results if isinstance(r, AssetListResult) and r.assets]
    if not projects:
        st.info("No assets listed.")
        return

    for path, result in projects:
        label = f"{os.path.basename(path)} ({len(result.assets)})"
        if result.partial:
            label += " - partial"
        with st.expander(label, expanded=False):
            st.markdown(f"`{path}`")
            st.code("\n".join(result.assets))
