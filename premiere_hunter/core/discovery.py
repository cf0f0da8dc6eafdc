import os
import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)


def is_excluded_dir(name: str, exclude_dirs: Optional[Iterable[str]]) -> bool:
    if not exclude_dirs:
        return False
    return any(name.lower() == exc.lower() for exc in exclude_dirs)


def has_extension(name: str, extensions: Iterable[str]) -> bool:
    suffix = Path(name).suffix
    if not suffix:
        return False
    ext = suffix[1:].lower()
    return any(ext == e.lower().lstrip(".") for e in extensions)


def discover_files(
    roots: Iterable[str],
    extensions: Iterable[str],
    exclude_dirs: Optional[Iterable[str]] = None,
    follow_links: bool = False,
    max_bytes: Optional[int] = None,
    cancel: Optional[threading.Event] = None,
) -> List[str]:
    """
    Walks roots and returns absolute paths of regular files with a matching
    extension. Excluded directory names are pruned case-insensitively and
    files over max_bytes are left out. Stops early when cancel is set.
    """
    extensions = list(extensions)
    exclude_dirs = list(exclude_dirs or [])
    found = []

    for root in roots:
        if cancel is not None and cancel.is_set():
            break
        if not os.path.exists(root):
            logger.warning(f"Path does not exist: {root}")
            continue

        for dirpath, dirnames, filenames in os.walk(root, followlinks=follow_links):
            if cancel is not None and cancel.is_set():
                break
            dirnames[:] = [d for d in dirnames if not is_excluded_dir(d, exclude_dirs)]

            for name in filenames:
                if not has_extension(name, extensions):
                    continue
                path = os.path.join(dirpath, name)
                if not os.path.isfile(path):
                    continue
                if max_bytes is not None:
                    try:
                        if os.path.getsize(path) > max_bytes:
                            continue
                    except OSError as e:
                        # Left in; the scan itself reports the failure
                        logger.debug(f"Cannot stat {path}: {e}")
                found.append(os.path.abspath(path))

    logger.info(f"Discovered {len(found)} files")
    return found
