from dataclasses import dataclass
from typing import Optional, Union

from .models import DEFAULT_SNIPPET_CHARS


def _require_term(term: str):
    if not term:
        raise ValueError("Search text cannot be empty")


@dataclass(frozen=True)
class ContainsRequest:
    term: str

    def __post_init__(self):
        _require_term(self.term)


@dataclass(frozen=True)
class SnippetRequest:
    term: str
    window_chars: int = DEFAULT_SNIPPET_CHARS

    def __post_init__(self):
        _require_term(self.term)
        if self.window_chars < 0:
            raise ValueError(f"window_chars must be >= 0, got {self.window_chars}")


@dataclass(frozen=True)
class ListAssetsRequest:
    filter_term: Optional[str] = None


# Exactly one of these per file scan
ScanRequest = Union[ContainsRequest, SnippetRequest, ListAssetsRequest]
