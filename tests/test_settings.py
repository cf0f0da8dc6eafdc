import pytest
from premiere_hunter.config.settings import dedupe_paths, resolve_settings
from premiere_hunter.core.requests import ContainsRequest, ListAssetsRequest, SnippetRequest

def test_defaults_without_paths():
    settings = resolve_settings({}, search_text="x", drive_candidates=["C:\\", "D:\\"])
    assert settings.paths == ["C:\\", "D:\\"]
    assert settings.path_source == "defaults"
    assert settings.extensions == ["prproj"]
    assert settings.max_file_size_mb == 100
    assert settings.max_file_size_bytes == 100 * 1024 * 1024
    assert settings.snippet_chars == 120

def test_paths_merged_and_deduplicated():
    settings = resolve_settings(
        {"paths": ["/Projects", "/archive"]},
        paths=["/projects", "/new"],
    )
    assert settings.paths == ["/Projects", "/archive", "/new"]
    assert settings.path_source == "config+CLI (merged)"

def test_auto_drives_adds_existing_only(tmp_path):
    settings = resolve_settings(
        {},
        paths=["/cli"],
        auto_drives=True,
        drive_candidates=[str(tmp_path), str(tmp_path / "missing")],
    )
    assert settings.paths == ["/cli", str(tmp_path)]
    assert settings.path_source == "CLI+auto (merged)"

def test_cli_overrides_config_scalars():
    settings = resolve_settings(
        {"search_text": "cfg", "threads": 2, "snippet_chars": 50},
        search_text="cli",
        threads=6,
        snippet_chars=80,
    )
    assert settings.search_text == "cli"
    assert settings.threads == 6
    assert settings.snippet_chars == 80

def test_config_fills_missing_cli_values():
    settings = resolve_settings({"search_text": "cfg", "threads": 2, "logging": {"level": "info"}})
    assert settings.search_text == "cfg"
    assert settings.threads == 2
    assert settings.log_level == "INFO"

def test_zero_max_size_disables_limit():
    settings = resolve_settings({"max_file_size_mb": 0})
    assert settings.max_file_size_mb is None
    assert settings.max_file_size_bytes is None

def test_build_request_variants():
    assert resolve_settings({}, search_text="a").build_request() == ContainsRequest("a")
    assert resolve_settings({}, search_text="a", show_snippets=True, snippet_chars=40).build_request() \
        == SnippetRequest("a", 40)
    assert resolve_settings({}, list_assets=True).build_request() == ListAssetsRequest(None)
    assert resolve_settings({}, search_text="mp4", list_assets=True).build_request() == ListAssetsRequest("mp4")

def test_snippets_ignored_in_asset_mode():
    settings = resolve_settings({}, list_assets=True, show_snippets=True)
    assert settings.show_snippets is False

def test_search_mode_requires_text():
    with pytest.raises(ValueError):
        resolve_settings({}).build_request()

def test_dedupe_paths():
    assert dedupe_paths(["C:\\A", "c:\\a", "D:\\"]) == ["C:\\A", "D:\\"]
