"""Schema driven completion suggestions."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from yaml_schema_ls.schema_management.schema_models import display_value
from yaml_schema_ls.schema_management.schema_projection import (
    SchemaError,
    resolve_node,
    schema_at_path,
)
from yaml_schema_ls.text_positions.position_models import Position, TextRange
from yaml_schema_ls.text_positions.structural_paths import path_at_position, word_range_at

from .suggestion_models import (
    DEFAULT_VALUE_BUCKET,
    ENUM_VALUE_BUCKET,
    EXAMPLE_VALUE_BUCKET,
    PATTERN_EXAMPLE_BUCKET,
    PROPERTY_BUCKET,
    Suggestion,
    SuggestionKind,
)

_LOGGER = logging.getLogger(__name__)


def complete(text: str, position: Position, schema: Mapping[str, Any]) -> list[Suggestion]:
    """Return suggestions for the cursor position; never raises."""
    try:
        return _complete(text, position, schema)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        _LOGGER.error("Completion failed: %s", exc, exc_info=True)
        return []


def create_insert_text(key: str, prop: Mapping[str, Any]) -> str:
    """Return snippet text inserting ``key`` with a placeholder for its value."""
    if prop.get("type") == "object":
        return f"{key}:\n  ${{1}}"
    examples = prop.get("examples") or []
    enum_values = prop.get("enum") or []
    if examples:
        placeholder = f"${{1:{_snippet_escape(display_value(examples[0]))}}}"
    elif enum_values:
        placeholder = f"${{1:{_snippet_escape(display_value(enum_values[0]))}}}"
    elif "default" in prop:
        placeholder = f"${{1:{_snippet_escape(display_value(prop['default']))}}}"
    else:
        placeholder = "${1}"
    return f"{key}: {placeholder}\n"


def format_property_docs(prop: Mapping[str, Any]) -> str:
    """Render markdown documentation for a property suggestion."""
    parts: list[str] = []
    if prop.get("description"):
        parts.append(str(prop["description"]))
    if prop.get("type"):
        parts.append(f"**Type:** {_type_label(prop['type'])}")
    enum_values = prop.get("enum") or []
    if enum_values:
        bullets = "\n- ".join(display_value(value) for value in enum_values)
        parts.append(f"**Allowed values:**\n- {bullets}")
    if "default" in prop:
        parts.append(f"**Default:** {json.dumps(prop['default'])}")
    examples = prop.get("examples") or []
    if examples:
        rendered = "\n".join(json.dumps(example) for example in examples)
        parts.append(f"**Examples:**\n```yaml\n{rendered}\n```")
    return "\n\n".join(parts)


def _complete(text: str, position: Position, schema: Mapping[str, Any]) -> list[Suggestion]:
    text_range = word_range_at(text, position)
    lines = text.split("\n")
    line_text = lines[position.line - 1] if 0 < position.line <= len(lines) else ""

    if not line_text[:1].isspace():
        return _root_suggestions(schema, text_range)

    path = path_at_position(text, position)
    node = schema_at_path(schema, path)
    if node is None:
        _LOGGER.debug("No schema found for path: %s", "/".join(path))
        return []
    return _node_suggestions(node, schema, text_range)


def _root_suggestions(schema: Mapping[str, Any], text_range: TextRange) -> list[Suggestion]:
    properties = schema.get("properties")
    if not isinstance(properties, Mapping):
        return []
    return [
        _property_suggestion(key, _resolved(prop, schema), PROPERTY_BUCKET, text_range)
        for key, prop in sorted(properties.items())
    ]


def _node_suggestions(
    node: Mapping[str, Any], root: Mapping[str, Any], text_range: TextRange
) -> list[Suggestion]:
    candidates = [node]
    for alternative in node.get("oneOf") or []:
        if isinstance(alternative, Mapping):
            candidates.append(_resolved(alternative, root))

    suggestions: list[Suggestion] = []
    for candidate in candidates:
        suggestions.extend(_candidate_suggestions(candidate, root, text_range))

    seen: set[tuple[str, SuggestionKind]] = set()
    unique: list[Suggestion] = []
    for suggestion in suggestions:
        identity = (suggestion.label, suggestion.kind)
        if identity in seen:
            continue
        seen.add(identity)
        unique.append(suggestion)
    return sorted(unique, key=lambda suggestion: (suggestion.sort_bucket, suggestion.label))


def _candidate_suggestions(
    candidate: Mapping[str, Any], root: Mapping[str, Any], text_range: TextRange
) -> Iterator[Suggestion]:
    for value in candidate.get("enum") or []:
        yield _value_suggestion(value, "Allowed value", ENUM_VALUE_BUCKET, text_range)

    for example in candidate.get("examples") or []:
        yield _value_suggestion(example, "Example value", EXAMPLE_VALUE_BUCKET, text_range)

    properties = candidate.get("properties")
    if isinstance(properties, Mapping):
        for key, prop in properties.items():
            yield _property_suggestion(key, _resolved(prop, root), PROPERTY_BUCKET, text_range)

    pattern_properties = candidate.get("patternProperties")
    if isinstance(pattern_properties, Mapping):
        for prop in pattern_properties.values():
            resolved = _resolved(prop, root)
            for example in resolved.get("examples") or []:
                yield _property_suggestion(
                    display_value(example), resolved, PATTERN_EXAMPLE_BUCKET, text_range
                )

    if "default" in candidate:
        yield _value_suggestion(
            candidate["default"], "Default value", DEFAULT_VALUE_BUCKET, text_range
        )


def _property_suggestion(
    key: str, prop: Mapping[str, Any], bucket: int, text_range: TextRange
) -> Suggestion:
    return Suggestion(
        label=key,
        kind=SuggestionKind.FIELD,
        documentation=format_property_docs(prop),
        insert_text=create_insert_text(key, prop),
        sort_bucket=bucket,
        is_snippet=True,
        range=text_range,
    )


def _value_suggestion(
    value: Any, documentation: str, bucket: int, text_range: TextRange
) -> Suggestion:
    label = display_value(value)
    return Suggestion(
        label=label,
        kind=SuggestionKind.VALUE,
        documentation=documentation,
        insert_text=label,
        sort_bucket=bucket,
        range=text_range,
    )


def _resolved(prop: Any, root: Mapping[str, Any]) -> Mapping[str, Any]:
    if not isinstance(prop, Mapping):
        return {}
    try:
        return resolve_node(prop, root)
    except SchemaError as exc:
        _LOGGER.debug("Using unresolved schema node: %s", exc)
        return prop


def _type_label(node_type: Any) -> str:
    if isinstance(node_type, list):
        return ", ".join(str(item) for item in node_type)
    return str(node_type)


def _snippet_escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace("$", "\\$").replace("}", "\\}")
