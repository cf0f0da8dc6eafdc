import os
import logging
import threading
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .engine import ScanEngine, ScanResult
from .models import AssetListResult, AssetStatus, MatchStatus, ScanTarget
from .requests import ListAssetsRequest, ScanRequest

logger = logging.getLogger(__name__)

ResultCallback = Callable[[str, ScanResult], None]


@dataclass
class ScanSummary:
    files_total: int = 0
    files_processed: int = 0
    files_matched: int = 0  # in asset mode: projects with at least one listed asset
    total_assets: int = 0
    errors: int = 0
    skipped: int = 0
    interrupted: bool = False

    def record(self, result: ScanResult):
        self.files_processed += 1
        if isinstance(result, AssetListResult):
            if result.status == AssetStatus.ERROR:
                self.errors += 1
            elif result.status == AssetStatus.SKIPPED:
                self.skipped += 1
            elif result.assets:
                self.files_matched += 1
                self.total_assets += len(result.assets)
        else:
            if result.status == MatchStatus.ERROR:
                self.errors += 1
            elif result.status == MatchStatus.SKIPPED:
                self.skipped += 1
            elif result.status == MatchStatus.FOUND:
                self.files_matched += 1


class ScanService:
    """
    Scans a pre-enumerated list of files on a thread pool.

    Results are counted on the calling thread as tasks complete, so workers
    share nothing but the cancel flag. Once cancel is set no further file is
    started; scans already running finish and are counted.
    """

    def __init__(self, threads: Optional[int] = None, max_bytes: Optional[int] = None,
                 engine: Optional[ScanEngine] = None):
        self.threads = threads or os.cpu_count() or 1
        self.max_bytes = max_bytes
        self.engine = engine or ScanEngine()

    def _scan_one(self, path: str, request: ScanRequest, cancel: threading.Event) -> Optional[ScanResult]:
        if cancel.is_set():
            return None
        return self.engine.scan(ScanTarget(path, self.max_bytes), request)

    def run(self, files: Iterable[str], request: ScanRequest,
            cancel: Optional[threading.Event] = None,
            on_result: Optional[ResultCallback] = None) -> ScanSummary:
        files = list(files)
        cancel = cancel or threading.Event()
        summary = ScanSummary(files_total=len(files))
        mode = "assets" if isinstance(request, ListAssetsRequest) else "search"
        logger.info(f"Scanning {len(files)} files ({mode}) with {self.threads} threads")

        pending_paths = iter(files)
        with ThreadPoolExecutor(max_workers=self.threads) as pool:
            in_flight = {}

            def submit_next() -> bool:
                if cancel.is_set():
                    return False
                path = next(pending_paths, None)
                if path is None:
                    return False
                in_flight[pool.submit(self._scan_one, path, request, cancel)] = path
                return True

            # Keep a bounded window of queued work so cancellation stops dispatch promptly
            for _ in range(self.threads * 2):
                if not submit_next():
                    break

            while in_flight:
                done, _ = wait(in_flight, return_when=FIRST_COMPLETED)
                for future in done:
                    path = in_flight.pop(future)
                    result = future.result()
                    if result is not None:
                        summary.record(result)
                        if on_result is not None:
                            on_result(path, result)
                    submit_next()

        summary.interrupted = cancel.is_set()
        logger.info(
            f"Scan finished: processed={summary.files_processed} matched={summary.files_matched} "
            f"errors={summary.errors} skipped={summary.skipped} interrupted={summary.interrupted}"
        )
        return summary
