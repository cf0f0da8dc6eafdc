import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from premiere_hunter.core.models import DEFAULT_MAX_FILE_SIZE_MB, DEFAULT_SNIPPET_CHARS
from premiere_hunter.core.requests import ContainsRequest, ListAssetsRequest, ScanRequest, SnippetRequest

DEFAULT_EXTENSIONS = ["prproj"]
DEFAULT_DRIVES = ["C:\\", "D:\\"]


@dataclass
class ScanSettings:
    search_text: Optional[str] = None
    paths: List[str] = field(default_factory=list)
    path_source: str = "unknown"
    threads: Optional[int] = None
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    follow_links: bool = False
    max_file_size_mb: Optional[int] = DEFAULT_MAX_FILE_SIZE_MB
    exclude_dirs: Optional[List[str]] = None
    list_assets: bool = False
    show_snippets: bool = False
    snippet_chars: int = DEFAULT_SNIPPET_CHARS
    asset_path_separator: str = "\\"
    log_level: str = "WARNING"

    @property
    def max_file_size_bytes(self) -> Optional[int]:
        if self.max_file_size_mb is None:
            return None
        return self.max_file_size_mb * 1024 * 1024

    def build_request(self) -> ScanRequest:
        """
        Maps the mode flags to a scan request. In asset mode the search text is
        an optional filter; in search mode it is required.
        """
        if self.list_assets:
            return ListAssetsRequest(filter_term=self.search_text or None)
        if not self.search_text:
            raise ValueError("Search text must be set in search mode")
        if self.show_snippets:
            return SnippetRequest(self.search_text, self.snippet_chars)
        return ContainsRequest(self.search_text)


def dedupe_paths(paths: Sequence[str]) -> List[str]:
    # Case-insensitive, first occurrence wins
    seen = set()
    result = []
    for p in paths:
        key = str(p).lower()
        if key not in seen:
            seen.add(key)
            result.append(str(p))
    return result


def resolve_settings(
    config: Optional[Dict[str, Any]] = None,
    search_text: Optional[str] = None,
    paths: Optional[Sequence[str]] = None,
    threads: Optional[int] = None,
    auto_drives: bool = False,
    list_assets: bool = False,
    show_snippets: bool = False,
    snippet_chars: Optional[int] = None,
    drive_candidates: Sequence[str] = DEFAULT_DRIVES,
) -> ScanSettings:
    """
    Merges CLI values over config values.
    Scalars: CLI wins. Paths: config and CLI roots are concatenated, plus
    existing drives when auto_drives is on; with no roots at all the default
    drives are used.
    """
    config = config or {}

    search_paths: List[str] = []
    source_parts: List[str] = []

    cfg_paths = config.get("paths") or []
    if cfg_paths:
        search_paths.extend(cfg_paths)
        source_parts.append("config")
    if paths:
        search_paths.extend(paths)
        source_parts.append("CLI")

    if auto_drives or config.get("auto_drives", False):
        existing = [d for d in drive_candidates if os.path.exists(d)]
        if existing:
            search_paths.extend(existing)
            source_parts.append("auto")

    if not search_paths:
        search_paths = list(drive_candidates)
        source_parts.append("defaults")

    if len(source_parts) > 1:
        path_source = f"{'+'.join(source_parts)} (merged)"
    else:
        path_source = source_parts[0]

    # 0 disables the limit; missing means the default
    max_mb = config.get("max_file_size_mb")
    if max_mb is None:
        max_mb = DEFAULT_MAX_FILE_SIZE_MB
    elif max_mb == 0:
        max_mb = None

    logging_cfg = config.get("logging") or {}

    return ScanSettings(
        search_text=search_text if search_text is not None else config.get("search_text"),
        paths=dedupe_paths(search_paths),
        path_source=path_source,
        threads=threads if threads is not None else config.get("threads"),
        extensions=list(config.get("extensions") or DEFAULT_EXTENSIONS),
        follow_links=bool(config.get("follow_links", False)),
        max_file_size_mb=max_mb,
        exclude_dirs=config.get("exclude_dirs"),
        list_assets=list_assets,
        show_snippets=show_snippets and not list_assets,
        snippet_chars=snippet_chars if snippet_chars is not None else config.get("snippet_chars", DEFAULT_SNIPPET_CHARS),
        asset_path_separator=config.get("asset_path_separator", "\\"),
        log_level=str(logging_cfg.get("level", "WARNING")).upper(),
    )
