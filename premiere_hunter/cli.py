from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from typing import List, Optional, TextIO

from tqdm import tqdm

from premiere_hunter.config.loader import load_config
from premiere_hunter.config.settings import ScanSettings, resolve_settings
from premiere_hunter.core.assets import AssetExtractor
from premiere_hunter.core.discovery import discover_files
from premiere_hunter.core.engine import ScanEngine, ScanResult
from premiere_hunter.core.models import AssetListResult, MatchStatus
from premiere_hunter.core.scan_service import ScanService, ScanSummary

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130
RULE = "=" * 60


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="premiere-hunter",
        description="Fast parallel search for text in Premiere Pro project files",
    )
    parser.add_argument("search_text", nargs="?", metavar="SEARCH_TEXT",
                        help="Text to search for (case-insensitive). Filters assets in --list-assets mode.")
    parser.add_argument("-p", "--paths", type=lambda s: [p for p in s.split(",") if p],
                        help="Comma-separated paths to search (defaults to C:\\ and D:\\).")
    parser.add_argument("--auto-drives", action="store_true",
                        help="Also search the common fixed drives (C:\\ and D:\\) that exist.")
    parser.add_argument("-t", "--threads", type=positive_int, help="Number of worker threads (defaults to CPU count).")
    parser.add_argument("-c", "--config", help="Path to YAML configuration file.")
    parser.add_argument("--list-assets", action="store_true",
                        help="List assets used in each project instead of free-text search.")
    parser.add_argument("--show-snippets", action="store_true",
                        help="Print a text snippet around each match.")
    parser.add_argument("--snippet-chars", type=non_negative_int, help="Max number of characters in each snippet (default 120).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def prompt_search_text(stdin: Optional[TextIO] = None) -> Optional[str]:
    print("No search text provided via CLI or config. Please enter the text to search for:")
    print("> ", end="", flush=True)
    line = (stdin or sys.stdin).readline()
    text = line.strip()
    return text or None


def install_interrupt_handler(cancel: threading.Event):
    """
    Ctrl+C sets the cancel flag; running scans are allowed to finish.
    Returns the previous handler, or None if it could not be installed.
    """
    def handler(signum, frame):
        if not cancel.is_set():
            cancel.set()
            print("\nReceived Ctrl+C - stopping early (letting active tasks finish)...", file=sys.stderr)

    try:
        return signal.signal(signal.SIGINT, handler)
    except ValueError as e:
        logger.warning(f"Failed to set Ctrl+C handler: {e}")
        return None


def print_header(settings: ScanSettings):
    if settings.list_assets:
        print("Listing assets used in Premiere project files")
        if settings.search_text:
            print(f"Asset filter (case-insensitive): '{settings.search_text}'")
    else:
        print(f"Searching for: '{settings.search_text}'")
    print(f"Search paths ({settings.path_source}): {settings.paths}")
    print(f"Extensions: {settings.extensions}")
    if settings.exclude_dirs:
        print(f"Excluding directories: {settings.exclude_dirs}")
    if settings.max_file_size_mb is not None:
        print(f"Max file size: {settings.max_file_size_mb} MB")
    print("Scanning for files...\n")


def format_result(path: str, result: ScanResult) -> Optional[str]:
    """
    Text printed for one file, or None when there is nothing to show.
    """
    if isinstance(result, AssetListResult):
        if not result.assets:
            return None
        lines = [f"\nProject: {path}"]
        lines.extend(f"  - {a}" for a in result.assets)
        return "\n".join(lines)

    if result.status != MatchStatus.FOUND:
        return None
    text = f"\n✓ MATCH: {path}"
    if result.snippet is not None:
        text += f"\n    {result.snippet}"
    return text


def print_summary(summary: ScanSummary, list_assets: bool):
    print(f"\n{RULE}")
    if summary.interrupted:
        print("Search interrupted by user (partial results):")
    else:
        print("Search complete!")
    print(f"Files processed: {summary.files_processed}")
    if list_assets:
        print(f"Projects with listed assets: {summary.files_matched}")
        print(f"Total assets listed: {summary.total_assets}")
    else:
        print(f"Matches found: {summary.files_matched}")
    if summary.skipped > 0:
        print(f"Files skipped (too large): {summary.skipped}")
    if summary.errors > 0:
        print(f"Files skipped (errors): {summary.errors}")
    print(RULE)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config_status = load_config(args.config)
    if config_status["status"] == "ERROR":
        print(f"Error loading config file: {config_status['error']}", file=sys.stderr)
        return 1
    config = config_status["data"]

    settings = resolve_settings(
        config,
        search_text=args.search_text,
        paths=args.paths,
        threads=args.threads,
        auto_drives=args.auto_drives,
        list_assets=args.list_assets,
        show_snippets=args.show_snippets,
        snippet_chars=args.snippet_chars,
    )
    setup_logging("DEBUG" if args.verbose else settings.log_level)

    if not settings.list_assets and not settings.search_text:
        settings.search_text = prompt_search_text()
        if not settings.search_text:
            print("Error: Search text cannot be empty", file=sys.stderr)
            return 1

    request = settings.build_request()
    print_header(settings)

    cancel = threading.Event()
    previous_handler = install_interrupt_handler(cancel)
    try:
        files = discover_files(
            settings.paths,
            settings.extensions,
            exclude_dirs=settings.exclude_dirs,
            follow_links=settings.follow_links,
            max_bytes=settings.max_file_size_bytes,
            cancel=cancel,
        )
        print(f"Found {len(files)} files to search\n")

        if cancel.is_set():
            print(f"Interrupted during file discovery. Found {len(files)} files so far.", file=sys.stderr)
            print(f"\n{RULE}")
            print("Search interrupted by user before processing.")
            print(f"Files discovered: {len(files)}")
            print(RULE)
            return EXIT_INTERRUPTED

        if not files:
            print("No files found.")
            return 0

        engine = ScanEngine(AssetExtractor(separator=settings.asset_path_separator))
        service = ScanService(threads=settings.threads, max_bytes=settings.max_file_size_bytes, engine=engine)

        with tqdm(total=len(files), unit="files", leave=False) as progress:
            def on_result(path: str, result: ScanResult):
                text = format_result(path, result)
                if text is not None:
                    tqdm.write(text)
                progress.update(1)

            summary = service.run(files, request, cancel=cancel, on_result=on_result)
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGINT, previous_handler)

    print_summary(summary, settings.list_assets)
    return EXIT_INTERRUPTED if summary.interrupted else 0


if __name__ == "__main__":
    raise SystemExit(main())
