"""Asset reference harvesting for project XML documents.

Project files point at their media through path-bearing names, either as
element text (``<FilePath>C:/Media/a.mp4</FilePath>``) or as attributes
(``<Media absolutePath="file:///D:/a.png"/>``). Both forms are collected in
one pass over the parser callbacks, normalized to a single path style, filtered
by extension, and deduplicated case-insensitively.

Parsing is best-effort: a malformed or truncated document ends the pass and
whatever was harvested up to that point is returned.
"""

import logging
from pathlib import PureWindowsPath
from typing import Callable, Iterable, List, Optional, Set, Tuple

from defusedxml import ElementTree as DefusedET
from defusedxml.common import DefusedXmlException

from .models import ASSET_EXTENSIONS

logger = logging.getLogger(__name__)

PATH_NAMES = frozenset(["absolutepath", "filepath", "path", "relativepath", "relpath"])

FILE_URL_PREFIXES = ("file:///", "file://")

# &amp; goes first so "&amp;lt;" ends up as "<"
XML_ENTITIES = (
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)

DEFAULT_SEPARATOR = "\\"


def local_name(name: str) -> str:
    # "{namespace}Tag" -> "Tag"
    if name.startswith("{"):
        return name.rsplit("}", 1)[-1]
    return name


def is_path_name(name: str) -> bool:
    return local_name(name).lower() in PATH_NAMES


def xml_unescape(value: str) -> str:
    for entity, char in XML_ENTITIES:
        value = value.replace(entity, char)
    return value


def normalize_asset_path(raw: str, separator: str = DEFAULT_SEPARATOR) -> str:
    value = raw.strip()
    lowered = value.lower()
    for prefix in FILE_URL_PREFIXES:
        if lowered.startswith(prefix):
            value = value[len(prefix):]
            break
    value = value.replace("/", separator)
    return xml_unescape(value)


def asset_extension(path: str) -> Optional[str]:
    """
    Lower-cased extension of the last path component, without the dot.
    Either slash style is accepted as a separator.
    """
    suffix = PureWindowsPath(path).suffix
    if not suffix:
        return None
    return suffix[1:].lower()


def filter_assets(assets: Iterable[str], term: Optional[str]) -> List[str]:
    if not term:
        return list(assets)
    needle = term.lower()
    return [a for a in assets if needle in a.lower()]


class PathHarvester:
    """
    Parser target that reports every path-bearing value as soon as it is known.

    Attribute values are reported on the element's start tag. Text directly
    inside a path-named element is buffered and reported when the element
    closes or a child opens, or through flush() when the document breaks off
    in the middle of it.
    """

    def __init__(self, collect: Callable[[str], None]):
        self.collect = collect
        self.open_is_path: List[bool] = []
        self.text: List[str] = []

    def start(self, tag, attrib):
        self.flush()
        for key, value in attrib.items():
            if is_path_name(key):
                self.collect(value)
        self.open_is_path.append(is_path_name(tag))

    def data(self, text):
        if self.open_is_path and self.open_is_path[-1]:
            self.text.append(text)

    def end(self, tag):
        self.flush()
        if self.open_is_path:
            self.open_is_path.pop()

    def flush(self):
        if self.text:
            raw = "".join(self.text)
            self.text = []
            self.collect(raw)

    def close(self):
        self.flush()


class AssetExtractor:
    def __init__(self, extensions: Iterable[str] = ASSET_EXTENSIONS, separator: str = DEFAULT_SEPARATOR):
        self.extensions = frozenset(e.lower().lstrip(".") for e in extensions)
        self.separator = separator

    def extract(self, data: bytes) -> Tuple[List[str], bool]:
        """
        Returns (sorted assets, partial). partial is True when parsing stopped
        on malformed XML; the assets found before that point are still returned,
        including the text of a path element the document broke off inside.
        """
        seen: Set[str] = set()
        assets: List[str] = []
        partial = False

        harvester = PathHarvester(lambda raw: self._collect(raw, seen, assets))
        parser = DefusedET.XMLParser(target=harvester)
        try:
            parser.feed(data)
            parser.close()
        except (DefusedET.ParseError, DefusedXmlException) as e:
            harvester.flush()
            partial = True
            logger.debug(f"XML parse stopped early after {len(assets)} assets: {e}")

        assets.sort()
        return assets, partial

    def _collect(self, raw: str, seen: Set[str], assets: List[str]):
        norm = normalize_asset_path(raw, self.separator)
        ext = asset_extension(norm)
        if ext is None or ext not in self.extensions:
            return
        key = norm.lower()
        if key not in seen:
            seen.add(key)
            assets.append(norm)
