import gzip
import io
import pytest
from premiere_hunter import cli
from premiere_hunter.config.loader import CONFIG_FILE_ENV
from premiere_hunter.core.models import AssetListResult, AssetStatus, MatchResult, MatchStatus

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)

@pytest.fixture
def projects(tmp_path):
    root = tmp_path / "projects"
    root.mkdir()
    (root / "summer.prproj").write_bytes(gzip.compress(
        b"<Project>\n<Title>Summer BA\nR cut</Title>\n<FilePath>C:/Media/beach.mp4</FilePath>\n</Project>\n"
    ))
    (root / "winter.prproj").write_text(
        "<Project><Media absolutePath=\"file:///D:/assets/logo.PNG\"/></Project>\n", encoding="utf-8"
    )
    (root / "readme.txt").write_text("bar", encoding="utf-8")
    return root

def test_contains_search(projects, capsys):
    code = cli.main(["bar", "-p", str(projects), "-t", "2"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Searching for: 'bar'" in out
    assert "Found 2 files to search" in out
    assert f"✓ MATCH: {projects / 'summer.prproj'}" in out
    assert f"✓ MATCH: {projects / 'winter.prproj'}" not in out
    assert "Matches found: 1" in out

def test_snippet_search(projects, capsys):
    code = cli.main(["bar", "-p", str(projects), "--show-snippets", "--snippet-chars", "40"])
    out = capsys.readouterr().out
    assert code == 0
    assert "BAR cut</Title>" in out

def test_list_assets(projects, capsys):
    code = cli.main(["--list-assets", "-p", str(projects)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Listing assets used in Premiere project files" in out
    assert "  - C:\\Media\\beach.mp4" in out
    assert "  - D:\\assets\\logo.PNG" in out
    assert "Projects with listed assets: 2" in out
    assert "Total assets listed: 2" in out

def test_list_assets_with_filter(projects, capsys):
    code = cli.main(["logo", "--list-assets", "-p", str(projects)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Asset filter (case-insensitive): 'logo'" in out
    assert "beach.mp4" not in out
    assert "Total assets listed: 1" in out

def test_config_file_drives_search(projects, tmp_path, capsys):
    cfg = tmp_path / "hunter.yaml"
    cfg.write_text(f"search_text: beach\npaths:\n  - {projects}\nexclude_dirs: [cache]\n", encoding="utf-8")
    code = cli.main(["-c", str(cfg)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Search paths (config)" in out
    assert "Excluding directories: ['cache']" in out
    assert "Matches found: 1" in out

def test_bad_config_exits_1(tmp_path, capsys):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("threads: many\n", encoding="utf-8")
    assert cli.main(["x", "-c", str(cfg)]) == 1
    assert "Error loading config file" in capsys.readouterr().err

def test_prompt_empty_exits_1(projects, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("\n"))
    assert cli.main(["-p", str(projects)]) == 1
    assert "Search text cannot be empty" in capsys.readouterr().err

def test_prompt_reads_search_text(projects, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("  beach \n"))
    assert cli.main(["-p", str(projects)]) == 0
    out = capsys.readouterr().out
    assert "Searching for: 'beach'" in out

def test_no_files(tmp_path, capsys):
    assert cli.main(["x", "-p", str(tmp_path)]) == 0
    assert "No files found." in capsys.readouterr().out

def test_format_result():
    assert cli.format_result("a", MatchResult(status=MatchStatus.NOT_FOUND)) is None
    assert cli.format_result("a", MatchResult(status=MatchStatus.FOUND)) == "\n✓ MATCH: a"
    assert cli.format_result("a", MatchResult(status=MatchStatus.FOUND, snippet="s")) == "\n✓ MATCH: a\n    s"
    assert cli.format_result("a", AssetListResult(status=AssetStatus.OK)) is None
    assert cli.format_result("a", AssetListResult(status=AssetStatus.OK, assets=("x",))) == "\nProject: a\n  - x"

def test_parser_splits_paths():
    args = cli.build_parser().parse_args(["-p", "C:\\a,D:\\b"])
    assert args.paths == ["C:\\a", "D:\\b"]
    assert args.search_text is None

@pytest.mark.parametrize("argv", [
    ["x", "--show-snippets", "--snippet-chars", "-1"],
    ["x", "-t", "0"],
    ["x", "--snippet-chars", "many"],
])
def test_invalid_numbers_rejected_by_parser(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    assert exc.value.code == 2
    assert "argument" in capsys.readouterr().err

def test_snippet_chars_zero_accepted():
    assert cli.build_parser().parse_args(["--snippet-chars", "0"]).snippet_chars == 0
