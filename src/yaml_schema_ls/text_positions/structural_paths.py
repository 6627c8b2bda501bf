"""Indentation based mapping between text coordinates and structural key paths.

No parse tree is built: every lookup rescans the raw text line by line and
infers nesting from the indentation of ``key:`` lines, assuming two spaces per
level.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .position_models import FALLBACK_LOCATION, Location, Position, TextRange

INDENT_WIDTH = 2
WILDCARD = "*"

_KEY_PATTERN = re.compile(r"^(\s*)(\w+):")
_SEQUENCE_ITEM_PATTERN = re.compile(r"^(\s*)-")
_WORD_CHARACTER = re.compile(r"[\w-]")


def key_at_line(text: str, line: int) -> tuple[str, str] | None:
    """Return ``(indent, key)`` for a ``key:`` line, or None for any other line."""
    lines = text.split("\n")
    if line < 1 or line > len(lines):
        return None
    match = _KEY_PATTERN.match(lines[line - 1])
    if not match:
        return None
    return match.group(1), match.group(2)


def path_at_position(text: str, position: Position) -> list[str]:
    """Return the key path in effect at ``position.line``, the line itself included."""
    current: list[str] = []
    for line in text.split("\n")[: max(position.line, 0)]:
        match = _KEY_PATTERN.match(line)
        if match:
            indent, key = match.groups()
            current = _assign_level(current, len(indent) // INDENT_WIDTH, key)
    return [segment for segment in current if segment]


def location_of_path(text: str, path: Sequence[str | int]) -> Location:
    """Locate the key or sequence item addressed by ``path``.

    Array indices in ``path`` are matched against ``-`` items counted per
    indentation level. Falls back to the first character of the document when
    nothing matches.
    """
    target = [str(segment) for segment in path]
    current: list[str] = []
    array_level: int | None = None
    array_index = 0

    for number, line in enumerate(text.split("\n"), start=1):
        item = _SEQUENCE_ITEM_PATTERN.match(line)
        if item:
            indent = item.group(1)
            level = len(indent) // INDENT_WIDTH
            if array_level != level:
                array_level = level
                array_index = 0
            else:
                array_index += 1
            if _is_item_match(current, target, level, array_index):
                return Location(line=number, column=len(indent) + 1, length=len(line) - len(indent))
            continue

        match = _KEY_PATTERN.match(line)
        if not match:
            continue
        indent, key = match.groups()
        level = len(indent) // INDENT_WIDTH
        if array_level is not None and level <= array_level:
            array_level = None
            array_index = 0
        current = _assign_level(current, level, key)
        if _covers(current, target):
            return Location(line=number, column=len(indent) + 1, length=len(key))

    return FALLBACK_LOCATION


def possible_paths(path: Sequence[str]) -> list[str]:
    """Return index lookup candidates, most specific first.

    The exact path comes first, then one candidate per segment (deepest first,
    root segment excluded) with only that segment replaced by ``*``, then the
    bare root wildcard.
    """
    segments = list(path)
    candidates: list[str] = []
    if segments:
        candidates.append("/".join(segments))
    for index in range(len(segments) - 1, 0, -1):
        candidates.append("/".join([*segments[:index], WILDCARD, *segments[index + 1 :]]))
    candidates.append(WILDCARD)
    return candidates


def word_range_at(text: str, position: Position) -> TextRange:
    """Return the range of the word that ends at the cursor (empty when none)."""
    lines = text.split("\n")
    line_text = lines[position.line - 1] if 0 < position.line <= len(lines) else ""
    end = min(max(position.column - 1, 0), len(line_text))
    start = end
    while start > 0 and _WORD_CHARACTER.match(line_text[start - 1]):
        start -= 1
    return TextRange(
        start_line=position.line,
        start_column=start + 1,
        end_line=position.line,
        end_column=end + 1,
    )


def _assign_level(current: list[str], level: int, key: str) -> list[str]:
    updated = current[:level]
    updated.extend("" for _ in range(level - len(updated)))
    updated.append(key)
    return updated


def _covers(current: Sequence[str], target: Sequence[str]) -> bool:
    return all(
        index < len(current) and current[index] == segment for index, segment in enumerate(target)
    )


def _is_item_match(current: Sequence[str], target: Sequence[str], level: int, index: int) -> bool:
    if level >= len(target) or not target[level].isdigit():
        return False
    if int(target[level]) != index:
        return False
    return _covers(current, target[:level])
