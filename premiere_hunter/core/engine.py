import os
import zlib
import logging
from typing import Optional, Union

from .assets import AssetExtractor, filter_assets
from .decoder import open_decoded, read_decoded
from .matcher import LineMatcher, iter_decoded_lines
from .models import (
    AssetListResult,
    AssetStatus,
    ErrorKind,
    MatchResult,
    MatchStatus,
    ScanTarget,
    error_match,
    not_found,
    skipped_match,
)
from .requests import ContainsRequest, ListAssetsRequest, ScanRequest, SnippetRequest

logger = logging.getLogger(__name__)

# Failures while opening, reading or decompressing a file
IO_ERRORS = (OSError, EOFError, zlib.error)

ScanResult = Union[MatchResult, AssetListResult]


def exceeds_threshold(target: ScanTarget) -> bool:
    """
    True when the on-disk size is over target.max_bytes. Only stats the file.
    """
    if target.max_bytes is None:
        return False
    return os.stat(target.path).st_size > target.max_bytes


class ScanEngine:
    """
    Runs exactly one request against one file and returns an immutable result.
    Per-file failures are returned as ERROR results, never raised.
    """

    def __init__(self, extractor: Optional[AssetExtractor] = None):
        self.extractor = extractor or AssetExtractor()

    def scan(self, target: ScanTarget, request: ScanRequest) -> ScanResult:
        if isinstance(request, ContainsRequest):
            return self.contains(target, request)
        if isinstance(request, SnippetRequest):
            return self.snippet(target, request)
        if isinstance(request, ListAssetsRequest):
            return self.list_assets(target, request)
        raise TypeError(f"Unsupported scan request: {type(request).__name__}")

    def contains(self, target: ScanTarget, request: ContainsRequest) -> MatchResult:
        try:
            if exceeds_threshold(target):
                return skipped_match()
            matcher = LineMatcher(request.term)
            with open_decoded(target.path) as stream:
                found = matcher.contains(iter_decoded_lines(stream))
        except UnicodeDecodeError as e:
            return self._match_error(target, ErrorKind.DECODE, e)
        except IO_ERRORS as e:
            return self._match_error(target, ErrorKind.IO, e)

        return MatchResult(status=MatchStatus.FOUND) if found else not_found()

    def snippet(self, target: ScanTarget, request: SnippetRequest) -> MatchResult:
        try:
            if exceeds_threshold(target):
                return skipped_match()
            matcher = LineMatcher(request.term)
            with open_decoded(target.path) as stream:
                hit = matcher.snippet(iter_decoded_lines(stream), request.window_chars)
        except UnicodeDecodeError as e:
            return self._match_error(target, ErrorKind.DECODE, e)
        except IO_ERRORS as e:
            return self._match_error(target, ErrorKind.IO, e)

        if hit is None:
            return not_found()
        return MatchResult(
            status=MatchStatus.FOUND,
            snippet=hit.text,
            line_number=hit.line_number,
            offset=hit.offset,
        )

    def list_assets(self, target: ScanTarget, request: ListAssetsRequest) -> AssetListResult:
        try:
            if exceeds_threshold(target):
                return AssetListResult(status=AssetStatus.SKIPPED)
            data = read_decoded(target.path)
        except IO_ERRORS as e:
            logger.debug(f"Asset scan failed for {target.path}: {e}")
            return AssetListResult(status=AssetStatus.ERROR, error_kind=ErrorKind.IO, error=str(e))

        assets, partial = self.extractor.extract(data)
        if partial:
            logger.debug(f"Partial asset list for {target.path} ({len(assets)} assets)")
        assets = filter_assets(assets, request.filter_term)
        return AssetListResult(status=AssetStatus.OK, assets=tuple(assets), partial=partial)

    @staticmethod
    def _match_error(target: ScanTarget, kind: ErrorKind, e: Exception) -> MatchResult:
        logger.debug(f"Scan failed for {target.path} ({kind.value}): {e}")
        return error_match(kind, str(e))


def scan_file(target: ScanTarget, request: ScanRequest) -> ScanResult:
    return ScanEngine().scan(target, request)
