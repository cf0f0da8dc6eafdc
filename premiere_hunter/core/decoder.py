import gzip
import logging
from contextlib import contextmanager
from typing import BinaryIO, Iterator

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def is_gzip_magic(prefix: bytes) -> bool:
    return len(prefix) == 2 and prefix == GZIP_MAGIC


def wrap_decoded(raw: BinaryIO) -> BinaryIO:
    """
    Peeks the first two bytes of a seekable binary stream and rewinds.
    Returns a gzip-decompressing reader when the gzip magic is present,
    otherwise the raw stream itself.
    """
    prefix = raw.read(2)
    raw.seek(0)
    if is_gzip_magic(prefix):
        return gzip.GzipFile(fileobj=raw, mode="rb")
    return raw


@contextmanager
def open_decoded(path: str) -> Iterator[BinaryIO]:
    """
    Opens path and yields a single-pass binary reader over its decoded content.
    Decompression errors surface from whichever read call hits them.
    """
    with open(path, "rb") as raw:
        stream = wrap_decoded(raw)
        try:
            yield stream
        finally:
            if stream is not raw:
                stream.close()


def read_decoded(path: str) -> bytes:
    """
    Returns the whole decoded content of path (used by the asset extractor).
    """
    with open_decoded(path) as stream:
        data = stream.read()
    logger.debug(f"Decoded {len(data)} bytes from {path}")
    return data
