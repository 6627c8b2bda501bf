"""Text coordinate entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Cursor position with 1-based line and column."""

    line: int
    column: int = 1


@dataclass(frozen=True)
class TextRange:
    """Single or multi-line text span; the end column is exclusive."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int


@dataclass(frozen=True)
class Location:
    """Start of a located node and the number of characters it covers."""

    line: int
    column: int
    length: int

    def to_range(self) -> TextRange:
        return TextRange(
            start_line=self.line,
            start_column=self.column,
            end_line=self.line,
            end_column=self.column + (self.length or 1),
        )


FALLBACK_LOCATION = Location(line=1, column=1, length=1)
