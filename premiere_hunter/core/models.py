from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

# Video, audio, image and graphics-template formats referenced by project files
ASSET_EXTENSIONS = frozenset([
    "mp4", "mov", "mxf", "mts", "m2ts", "avi", "mkv", "wmv", "m4v", "3gp",
    "wav", "mp3", "aac", "m4a", "aif", "aiff", "flac", "ogg",
    "png", "jpg", "jpeg", "tif", "tiff", "bmp", "gif", "psd", "ai", "svg", "dng", "cr2", "nef", "arw",
    "prfpset", "mogrt",
])

DEFAULT_SNIPPET_CHARS = 120
DEFAULT_MAX_FILE_SIZE_MB = 100


class MatchStatus(str, Enum):
    NOT_FOUND = "not_found"
    FOUND = "found"
    SKIPPED = "skipped"  # over the size threshold
    ERROR = "error"


class AssetStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    ERROR = "error"


class ErrorKind(str, Enum):
    IO = "io"
    DECODE = "decode"


@dataclass(frozen=True)
class ScanTarget:
    path: str
    max_bytes: Optional[int] = None


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of a contains/snippet scan of one file.
    snippet, line_number and offset are only set for snippet matches.
    """
    status: MatchStatus
    snippet: Optional[str] = None
    line_number: Optional[int] = None
    offset: Optional[int] = None
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.status == MatchStatus.FOUND


@dataclass(frozen=True)
class AssetListResult:
    """
    Outcome of an asset listing of one file.
    partial is True when the XML parse stopped early on malformed input.
    """
    status: AssetStatus
    assets: Tuple[str, ...] = field(default_factory=tuple)
    partial: bool = False
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None


def not_found() -> MatchResult:
    return MatchResult(status=MatchStatus.NOT_FOUND)


def skipped_match() -> MatchResult:
    return MatchResult(status=MatchStatus.SKIPPED)


def error_match(kind: ErrorKind, error: str) -> MatchResult:
    return MatchResult(status=MatchStatus.ERROR, error_kind=kind, error=error)
