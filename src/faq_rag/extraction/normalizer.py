"""Raw document text → cleaned candidate lines."""

from __future__ import annotations

from collections.abc import Iterator

MIN_LINE_LENGTH = 3


class NormalizedLines:
    """Lazy, restartable view over the non-noise lines of *text*.

    Each iteration re-scans the source text, so the sequence can be
    consumed any number of times.  Lines are trimmed; blank lines and
    lines shorter than :data:`MIN_LINE_LENGTH` (page numbers, stray
    bullets) are dropped.
    """

    def __init__(self, text: str | None) -> None:
        self._text = text or ""

    def __iter__(self) -> Iterator[str]:
        for raw in self._text.splitlines():
            line = raw.strip()
            if len(line) >= MIN_LINE_LENGTH:
                yield line

    def __bool__(self) -> bool:
        return next(iter(self), None) is not None

    def __repr__(self) -> str:
        return f"NormalizedLines({len(self._text)} chars)"


def normalize_lines(text: str | None) -> NormalizedLines:
    """Return the candidate lines of *text* (empty for blank input)."""
    return NormalizedLines(text)
