import streamlit as st
import threading
from premiere_hunter.ui.state import AppState
from premiere_hunter.ui.components import result_panel
from premiere_hunter.config.settings import resolve_settings
from premiere_hunter.core.assets import AssetExtractor
from premiere_hunter.core.discovery import discover_files
from premiere_hunter.core.engine import ScanEngine
from premiere_hunter.core.scan_service import ScanService

MODES = {
    "Contains": "contains",
    "Snippets": "snippets",
    "List assets": "assets",
}


def render(app_state: AppState):
    st.title("Scan")

    if app_state.config_status == "ERROR":
        st.error(f"Config Error: {app_state.config.get('error')}")
        return

    config = app_state.config.get("data", {})
    defaults = app_state.settings

    # --- Inputs ---
    c_text, c_mode = st.columns([3, 1])
    with c_text:
        search_text = st.text_input("Search text", value=defaults.search_text or "",
                                    placeholder="Text to find, or asset filter in List assets mode")
    with c_mode:
        mode = MODES[st.radio("Mode", list(MODES.keys()))]

    roots_raw = st.text_input("Paths (comma-separated)", value=",".join(defaults.paths))
    snippet_chars = st.number_input("Snippet characters", min_value=10, value=defaults.snippet_chars, step=10)

    if not st.button("Start scan", type="primary"):
        return

    if mode != "assets" and not search_text.strip():
        st.warning("Search text cannot be empty.")
        return

    roots = [p.strip() for p in roots_raw.split(",") if p.strip()]
    settings = resolve_settings(
        # Roots typed on this page replace the configured ones
        {k: v for k, v in config.items() if k != "paths"},
        search_text=search_text.strip() or None,
        paths=roots,
        list_assets=mode == "assets",
        show_snippets=mode == "snippets",
        snippet_chars=int(snippet_chars),
    )
    request = settings.build_request()

    # --- Discovery ---
    cancel = threading.Event()
    with st.spinner("Discovering files..."):
        files = discover_files(
            settings.paths,
            settings.extensions,
            exclude_dirs=settings.exclude_dirs,
            follow_links=settings.follow_links,
            max_bytes=settings.max_file_size_bytes,
            cancel=cancel,
        )
    st.caption(f"Found {len(files)} files in {settings.paths}")
    if not files:
        st.info("No files found.")
        return

    # --- Scan ---
    engine = ScanEngine(AssetExtractor(separator=settings.asset_path_separator))
    service = ScanService(threads=settings.threads, max_bytes=settings.max_file_size_bytes, engine=engine)
    progress = st.progress(0.0, text="Scanning...")
    results = []

    def on_result(path, result):
        results.append((path, result))
        progress.progress(len(results) / len(files), text=f"{len(results)}/{len(files)} files")

    summary = service.run(files, request, cancel=cancel, on_result=on_result)
    progress.empty()

    # --- Summary ---
    col1, col2, col3 = st.columns(3)
    col1.metric("Files processed", summary.files_processed)
    if settings.list_assets:
        col2.metric("Projects with assets", summary.files_matched)
        col3.metric("Total assets", summary.total_assets)
    else:
        col2.metric("Matches", summary.files_matched)
        col3.metric("Errors", summary.errors)

    if settings.list_assets:
        result_panel.render_assets(results)
    else:
        result_panel.render_matches(results)
