"""Indentation and whitespace normalization for YAML documents."""

from __future__ import annotations

import logging
import re
from typing import Any

import yaml

from yaml_schema_ls.diagnostics.yaml_documents import parse_yaml, problem_message, problem_position
from yaml_schema_ls.text_positions.structural_paths import INDENT_WIDTH

_LOGGER = logging.getLogger(__name__)

_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")
_BLOCK_SCALAR_HEADER = re.compile(r"(?:^|\s)[|>][-+0-9]*(?:\s+#.*)?$")
_SEQUENCE_DASHES = re.compile(r"(?:-\s+)*")


class FormatError(Exception):
    """Raised when a document cannot be formatted because it does not parse."""

    def __init__(self, message: str, line: int = 1, column: int = 1) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


def format_document(text: str) -> str:
    """Re-indent a YAML document to two spaces per level and tidy its whitespace.

    Lines are shifted rather than re-serialized, so comments, quoting and key
    order survive. Trailing whitespace is dropped and runs of blank lines
    collapse to one. When re-indenting would change the parsed content, only
    the whitespace is tidied.

    Raises:
      FormatError: If the text is not valid YAML.
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    try:
        parse_yaml(normalized)
    except yaml.YAMLError as exc:
        line, column = problem_position(exc) or (1, 1)
        raise FormatError(
            f"Failed to format: {problem_message(exc)} at line {line}, column {column}",
            line=line,
            column=column,
        ) from exc

    tidied = _tidy(normalized)
    reindented = _tidy(_reindent(normalized))
    if reindented == tidied or not _same_content(reindented, parse_yaml(tidied)):
        return tidied
    return reindented


def _reindent(text: str) -> str:
    """Shift every line so each nesting level is indented by two spaces.

    Nesting is inferred from the original indentation. Sequence items keep
    their dash one level below the owning key, block scalar bodies move as a
    whole, and comment lines follow the level of the surrounding content.
    """
    levels: list[tuple[int, int]] = []
    block: tuple[int, int] | None = None
    block_shift: int | None = None
    output: list[str] = []

    for line in text.split("\n"):
        stripped = line.lstrip(" ")
        indent = len(line) - len(stripped)
        if not stripped.strip():
            output.append("")
            continue

        if block is not None:
            owner_indent, body_indent = block
            if indent > owner_indent:
                if block_shift is None:
                    block_shift = body_indent - indent
                output.append(" " * (indent + block_shift) + stripped)
                continue
            block = None

        if stripped.startswith("#"):
            output.append(" " * _comment_indent(levels, indent) + stripped)
            continue

        while levels and levels[-1][0] > indent:
            levels.pop()
        if levels and levels[-1][0] == indent:
            new_indent = levels[-1][1]
        else:
            new_indent = levels[-1][1] + INDENT_WIDTH if levels else 0
            levels.append((indent, new_indent))
        output.append(" " * new_indent + stripped)

        if _BLOCK_SCALAR_HEADER.search(stripped.rstrip()):
            dashes = _SEQUENCE_DASHES.match(stripped)
            offset = dashes.end() if dashes else 0
            block = (indent + offset, new_indent + offset + INDENT_WIDTH)
            block_shift = None

    return "\n".join(output)


def _comment_indent(levels: list[tuple[int, int]], indent: int) -> int:
    for original, normalized in reversed(levels):
        if original == indent:
            return normalized
        if original < indent:
            return normalized + INDENT_WIDTH
    return 0


def _tidy(text: str) -> str:
    lines = [line.rstrip() for line in text.split("\n")]
    formatted = _EXCESS_BLANK_LINES.sub("\n\n", "\n".join(lines)).strip("\n")
    return f"{formatted}\n" if formatted else ""


def _same_content(text: str, expected: Any) -> bool:
    try:
        return bool(parse_yaml(text) == expected)
    except yaml.YAMLError as exc:
        _LOGGER.debug("Re-indented document no longer parses, keeping layout: %s", exc)
        return False
