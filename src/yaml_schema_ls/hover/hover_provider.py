"""Hover documentation for the key under the cursor."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import yaml

from yaml_schema_ls.schema_management.schema_models import SchemaEntry, SchemaIndex, display_value
from yaml_schema_ls.text_positions.position_models import Position, TextRange
from yaml_schema_ls.text_positions.structural_paths import key_at_line, path_at_position

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class HoverInfo:
    """Ordered markdown blocks plus the key range they describe."""

    contents: tuple[str, ...]
    range: TextRange


def hover(text: str, position: Position, index: SchemaIndex) -> HoverInfo | None:
    """Return documentation for the key on the cursor line, or None; never raises."""
    try:
        return _hover(text, position, index)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        _LOGGER.error("Hover failed: %s", exc, exc_info=True)
        return None


def render_entry(key: str, entry: SchemaEntry) -> list[str]:
    """Render an index entry as markdown blocks in display order."""
    contents: list[str] = []
    if entry.description:
        contents.append(entry.description)
    if entry.type_label:
        contents.append(f"Type: {entry.type_label}")
    if entry.pattern:
        contents.append(f"Pattern: {entry.pattern}")
    if entry.enum:
        contents.append(f"Allowed values: {', '.join(display_value(v) for v in entry.enum)}")
    if entry.has_default:
        contents.append("Default:")
        contents.append(_yaml_block(key, entry.default))
    if entry.examples:
        contents.append("Examples:")
        contents.extend(_yaml_block(key, example) for example in entry.examples)
    if entry.one_of:
        contents.append("Possible Formats:")
        for number, option in enumerate(entry.one_of, start=1):
            if isinstance(option, Mapping) and option.get("description"):
                contents.append(f"{number}. {option['description']}")
    return contents


def format_example(key: str, example: Any) -> str:
    """Render ``example`` as a YAML fragment assigned to ``key``."""
    try:
        return yaml.safe_dump(
            {key: example}, default_flow_style=False, sort_keys=False, allow_unicode=True
        ).strip()
    except yaml.YAMLError as exc:
        _LOGGER.debug("Falling back to JSON rendering for example of %s: %s", key, exc)
        return f"{key}: {json.dumps(example)}"


def _hover(text: str, position: Position, index: SchemaIndex) -> HoverInfo | None:
    key_match = key_at_line(text, position.line)
    if key_match is None:
        return None
    indent, key = key_match

    path = path_at_position(text, position)
    found = index.find(path)
    if found is None:
        _LOGGER.debug("No schema entry for path: %s", "/".join(path))
        return None
    schema_path, entry = found
    _LOGGER.debug("Hover for %s uses schema path %s", "/".join(path), schema_path)

    return HoverInfo(
        contents=tuple(render_entry(key, entry)),
        range=TextRange(
            start_line=position.line,
            start_column=len(indent) + 1,
            end_line=position.line,
            end_column=len(indent) + len(key) + 1,
        ),
    )


def _yaml_block(key: str, value: Any) -> str:
    return f"```yaml\n{format_example(key, value)}\n```"
