"""Fixed-width table records measured in terminal display columns."""

from __future__ import annotations

import unicodedata
from typing import TextIO

# Zero-width joiner and emoji variation selector
_ZERO_WIDTH = ('\u200d', '\ufe0f')


def display_width(text: str) -> int:
    """Terminal columns taken by ``text``: wide and fullwidth characters count two."""
    width = 0
    for ch in text:
        if unicodedata.combining(ch) or ch in _ZERO_WIDTH:
            continue
        width += 2 if unicodedata.east_asian_width(ch) in ('W', 'F') else 1
    return width


def pad(text: str, width: int, center: bool = False) -> str:
    """Pad ``text`` with spaces to ``width`` display columns."""
    fill = max(0, width - display_width(text))
    if center:
        left = fill // 2
        return ' ' * left + text + ' ' * (fill - left)
    return text + ' ' * fill


class Record:
    """Row buffer: append cells padded to their column widths, one blank between cells."""

    def __init__(self, widths: list[int]) -> None:
        self._widths = widths
        self._parts: list[str] = []

    def init(self) -> None:
        """Clear the record."""
        self._parts = []

    def append(self, text: str, center: bool = False) -> None:
        """Append the next cell, padded to its column's width."""
        width = self._widths[len(self._parts)] if len(self._parts) < len(self._widths) else 0
        self._parts.append(pad(text, width, center))

    def append_span(self, text: str) -> None:
        """Fill every remaining column with one cell (e.g. an error message)."""
        remaining = self._widths[len(self._parts):]
        width = sum(remaining) + max(0, len(remaining) - 1)
        self._parts.append(pad(text, width))

    def get_line(self) -> str:
        """Current record without trailing blanks."""
        return ' '.join(self._parts).rstrip()

    def write(self, stream: TextIO) -> None:
        """Write the current record line and re-initialize."""
        stream.write(self.get_line() + '\n')
        self.init()
