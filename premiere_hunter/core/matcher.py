from dataclasses import dataclass
from typing import BinaryIO, Iterable, Iterator, Optional, Tuple

from .models import DEFAULT_SNIPPET_CHARS

ELLIPSIS = "..."


@dataclass(frozen=True)
class SnippetMatch:
    text: str
    line_number: int
    offset: int  # position of the match within the combined (carry-over + line) text


def iter_decoded_lines(stream: BinaryIO) -> Iterator[str]:
    """
    Yields UTF-8 lines from a binary stream without their line terminator.
    Invalid UTF-8 raises UnicodeDecodeError; the caller treats it as fatal for the file.
    """
    for raw in stream:
        if raw.endswith(b"\n"):
            raw = raw[:-1]
            if raw.endswith(b"\r"):
                raw = raw[:-1]
        yield raw.decode("utf-8")


def fold_case(text: str) -> str:
    """
    Lower-cases text without changing its length, so offsets found in the
    folded text index the original text. Characters whose lower-case form
    expands (e.g. U+0130) are left as they are.

    Known limitation: because U+0130 stays unfolded, a term containing "İ"
    does not match its two-character lower-case form (i + U+0307) in the
    text, and vice versa.
    """
    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered
    return "".join(ch.lower() if len(ch.lower()) == 1 else ch for ch in text)


def build_snippet(text: str, pos: int, match_len: int, window_chars: int = DEFAULT_SNIPPET_CHARS) -> str:
    """
    Cuts a window of at most window_chars characters around text[pos:pos + match_len].
    Context is split evenly before and after the match; when one side runs into
    the start or end of text the other side gets the rest of the budget.
    "..." marks a side where the window stops short of the text boundary.
    """
    budget = window_chars or DEFAULT_SNIPPET_CHARS
    context = max(0, budget - match_len)

    start = max(0, pos - context // 2)
    end = min(len(text), start + budget)
    start = max(0, end - budget)

    snippet = text[start:end].replace("\t", " ")
    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(text) else ""
    return f"{prefix}{snippet}{suffix}"


class LineMatcher:
    """
    Case-insensitive substring search over a stream of lines.

    Each line is tested together with a carry-over of at most len(term) - 1
    characters from the previous test, so a term split by a line break is
    still found. Folding happens per test; the whole file is never held in memory.
    """

    def __init__(self, term: str):
        if not term:
            raise ValueError("Search text cannot be empty")
        self.term = term
        self.needle = fold_case(term)

    def carry_over(self, combined: str) -> str:
        if len(combined) < len(self.needle):
            return combined
        keep = len(self.needle) - 1
        return combined[len(combined) - keep:]

    def find_first(self, lines: Iterable[str]) -> Optional[Tuple[int, str, int]]:
        """
        Returns (line_number, combined_text, offset) for the first match, or None.
        A started search always runs to the first match or the end of input.
        """
        overlap = ""
        for line_number, line in enumerate(lines, start=1):
            combined = overlap + line
            pos = fold_case(combined).find(self.needle)
            if pos >= 0:
                return line_number, combined, pos

            overlap = self.carry_over(combined)
        return None

    def contains(self, lines: Iterable[str]) -> bool:
        return self.find_first(lines) is not None

    def snippet(self, lines: Iterable[str], window_chars: int = DEFAULT_SNIPPET_CHARS) -> Optional[SnippetMatch]:
        hit = self.find_first(lines)
        if hit is None:
            return None
        line_number, combined, pos = hit
        text = build_snippet(combined, pos, len(self.needle), window_chars)
        return SnippetMatch(text=text, line_number=line_number, offset=pos)
