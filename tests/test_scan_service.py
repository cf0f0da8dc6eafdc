import gzip
import threading
import pytest
from premiere_hunter.core import engine as engine_module
from premiere_hunter.core.matcher import iter_decoded_lines
from premiere_hunter.core.models import MatchStatus
from premiere_hunter.core.requests import ContainsRequest, ListAssetsRequest, SnippetRequest
from premiere_hunter.core.scan_service import ScanService, ScanSummary


@pytest.fixture
def project_files(tmp_path):
    files = {
        "match.prproj": b"<Project>Holiday</Project>\n",
        "packed.prproj": gzip.compress(b"<Project>holi\nday</Project>\n"),
        "miss.prproj": b"<Project>Winter</Project>\n",
        "bad.prproj": b"\xff\xfe\n",
        "big.prproj": b"holiday " * 100,
    }
    paths = {}
    for name, data in files.items():
        p = tmp_path / name
        p.write_bytes(data)
        paths[name] = str(p)
    paths["gone.prproj"] = str(tmp_path / "gone.prproj")
    return paths


def test_search_summary_counts(project_files):
    service = ScanService(threads=3, max_bytes=500)
    seen = {}

    summary = service.run(
        project_files.values(),
        ContainsRequest("holiday"),
        on_result=lambda path, result: seen.__setitem__(path, result),
    )

    assert summary.files_total == 6
    assert summary.files_processed == 6
    assert summary.files_matched == 2
    assert summary.errors == 2  # undecodable + missing
    assert summary.skipped == 1
    assert summary.interrupted is False

    assert seen[project_files["packed.prproj"]].status == MatchStatus.FOUND
    assert seen[project_files["big.prproj"]].status == MatchStatus.SKIPPED
    assert seen[project_files["miss.prproj"]].status == MatchStatus.NOT_FOUND


def test_snippet_mode(project_files):
    service = ScanService(threads=2)
    results = {}
    service.run(
        [project_files["match.prproj"]],
        SnippetRequest("holiday", 120),
        on_result=lambda path, result: results.__setitem__(path, result),
    )
    result = results[project_files["match.prproj"]]
    assert result.snippet == "<Project>Holiday</Project>"


def test_asset_mode_totals(tmp_path):
    a = tmp_path / "a.prproj"
    a.write_text("<P><FilePath>C:/a.mp4</FilePath><FilePath>C:/b.wav</FilePath></P>", encoding="utf-8")
    b = tmp_path / "b.prproj"
    b.write_text("<P><Name>nothing</Name></P>", encoding="utf-8")

    summary = ScanService(threads=2).run([str(a), str(b)], ListAssetsRequest())
    assert summary.files_processed == 2
    assert summary.files_matched == 1
    assert summary.total_assets == 2
    assert summary.errors == 0


def test_cancel_before_start(project_files):
    cancel = threading.Event()
    cancel.set()
    summary = ScanService(threads=2).run(project_files.values(), ContainsRequest("x"), cancel=cancel)
    assert summary.files_processed == 0
    assert summary.interrupted is True


def test_cancel_stops_dispatch(tmp_path):
    paths = []
    for i in range(20):
        p = tmp_path / f"{i}.prproj"
        p.write_text("content\n", encoding="utf-8")
        paths.append(str(p))

    cancel = threading.Event()
    summary = ScanService(threads=1).run(
        paths,
        ContainsRequest("content"),
        cancel=cancel,
        on_result=lambda path, result: cancel.set(),
    )
    assert summary.interrupted is True
    assert 1 <= summary.files_processed < 20


def test_cancel_mid_file_finishes_running_scan(tmp_path, monkeypatch):
    path = tmp_path / "late.prproj"
    path.write_bytes(b"line one\nline two\nholiday\n")
    cancel = threading.Event()

    def lines_then_cancel(stream):
        for line_number, line in enumerate(iter_decoded_lines(stream), start=1):
            if line_number == 2:
                cancel.set()
            yield line

    monkeypatch.setattr(engine_module, "iter_decoded_lines", lines_then_cancel)
    results = {}
    summary = ScanService(threads=1).run(
        [str(path)],
        ContainsRequest("holiday"),
        cancel=cancel,
        on_result=lambda p, result: results.__setitem__(p, result),
    )

    assert summary.interrupted is True
    assert summary.files_processed == 1
    assert summary.files_matched == 1
    assert results[str(path)].status == MatchStatus.FOUND


def test_summary_skips_do_not_count_as_errors():
    from premiere_hunter.core.models import AssetListResult, AssetStatus, skipped_match
    summary = ScanSummary()
    summary.record(skipped_match())
    summary.record(AssetListResult(status=AssetStatus.SKIPPED))
    assert summary.files_processed == 2
    assert summary.skipped == 2
    assert summary.errors == 0
    assert summary.files_matched == 0
