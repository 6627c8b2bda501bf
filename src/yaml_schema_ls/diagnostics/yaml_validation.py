"""Schema validation of YAML text with diagnostics mapped back to text ranges."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

import yaml
from jsonschema.exceptions import ValidationError
from jsonschema.protocols import Validator

from yaml_schema_ls.schema_management.schema_loading import ValidatorCache
from yaml_schema_ls.text_positions.position_models import Position, TextRange
from yaml_schema_ls.text_positions.structural_paths import location_of_path, path_at_position

from .diagnostic_models import (
    SOURCE_SCHEMA_LOADER,
    SOURCE_YAML_PARSER,
    Diagnostic,
    Severity,
)
from .yaml_documents import parse_yaml, problem_message, problem_position

_LOGGER = logging.getLogger(__name__)

_STUB_KEY_PATTERN = re.compile(r"^(\s*)(\w+):\s*$")

SCHEMA_UNAVAILABLE_MESSAGE = "Schema validation unavailable - schema failed to load"


def validate(
    text: str, schema: Mapping[str, Any], validators: ValidatorCache | None = None
) -> list[Diagnostic]:
    """Validate YAML ``text`` against ``schema``.

    Never raises: parse failures produce a single parser diagnostic and any
    unexpected failure produces one diagnostic spanning the whole document.
    """
    if not text.strip():
        return []
    try:
        try:
            parsed = parse_yaml(text)
        except yaml.YAMLError as exc:
            _LOGGER.debug("YAML parsing failed: %s", exc)
            return [_parse_failure_diagnostic(text, exc)]

        instance = normalize_stub_keys(text, parsed)
        cache = validators if validators is not None else ValidatorCache()
        validator = cache.get(schema)
        return _schema_diagnostics(text, instance, validator)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        _LOGGER.error("Validation failed unexpectedly: %s", exc, exc_info=True)
        return [_whole_document_diagnostic(text, str(exc) or type(exc).__name__)]


def normalize_stub_keys(text: str, parsed: Any) -> Any:
    """Replace values of keys with nothing after the colon by empty mappings.

    A key the user is still typing parses as null; treating it as an empty
    mapping keeps type errors quiet while required children still get reported.
    """
    for number, line in enumerate(text.split("\n"), start=1):
        if not _STUB_KEY_PATTERN.match(line):
            continue
        if parsed is None:
            parsed = {}
        _ensure_mapping_at(parsed, path_at_position(text, Position(line=number)))
    return parsed


def schema_unavailable_diagnostic() -> Diagnostic:
    """Warning marker shown while validation is disabled for a failed schema load."""
    return Diagnostic(
        start_line=1,
        start_column=1,
        end_line=1,
        end_column=1,
        message=SCHEMA_UNAVAILABLE_MESSAGE,
        severity=Severity.WARNING,
        source=SOURCE_SCHEMA_LOADER,
    )


def _ensure_mapping_at(root: Any, path: Sequence[str]) -> None:
    current = root
    for segment in path:
        if not isinstance(current, dict):
            return
        if current.get(segment) is None:
            current[segment] = {}
        current = current[segment]


def _schema_diagnostics(text: str, instance: Any, validator: Validator) -> list[Diagnostic]:
    diagnostics_by_location: dict[str, Diagnostic] = {}
    for error in validator.iter_errors(instance):
        for diagnostic in _error_diagnostics(text, error):
            location_key = f"{diagnostic.start_line}:{diagnostic.start_column}"
            if location_key not in diagnostics_by_location:
                diagnostics_by_location[location_key] = diagnostic
    return list(diagnostics_by_location.values())


def _error_diagnostics(text: str, error: ValidationError) -> list[Diagnostic]:
    path = [str(segment) for segment in error.absolute_path]
    if error.validator == "additionalProperties":
        names = _unexpected_properties(error)
        if names:
            return [_unexpected_property_diagnostic(text, path, name) for name in names]

    location = location_of_path(text, path)
    instance_path = "/" + "/".join(path) if path else "root"
    subject = path[-1] if path else "root"
    message = f"{subject} {error.message} at {instance_path}"
    return [Diagnostic.from_range(location.to_range(), message)]


def _unexpected_property_diagnostic(text: str, path: list[str], name: str) -> Diagnostic:
    location = location_of_path(text, [*path, name])
    text_range = TextRange(
        start_line=location.line,
        start_column=location.column,
        end_line=location.line,
        end_column=location.column + len(name),
    )
    return Diagnostic.from_range(text_range, f'Unexpected property "{name}"')


def _unexpected_properties(error: ValidationError) -> list[str]:
    if not isinstance(error.instance, Mapping) or not isinstance(error.schema, Mapping):
        return []
    properties = error.schema.get("properties") or {}
    patterns = list((error.schema.get("patternProperties") or {}).keys())
    return [
        str(name)
        for name in error.instance
        if name not in properties
        and not any(_safe_search(pattern, str(name)) for pattern in patterns)
    ]


def _safe_search(pattern: str, value: str) -> bool:
    try:
        return re.search(pattern, value) is not None
    except re.error:
        return False


def _parse_failure_diagnostic(text: str, exc: yaml.YAMLError) -> Diagnostic:
    position = problem_position(exc)
    if position is None:
        return _whole_document_diagnostic(text, problem_message(exc), source=SOURCE_YAML_PARSER)
    line, column = position
    lines = text.split("\n")
    line_length = len(lines[line - 1]) if line <= len(lines) else 0
    return Diagnostic(
        start_line=line,
        start_column=column,
        end_line=line,
        end_column=max(column + 1, line_length + 1),
        message=problem_message(exc),
        severity=Severity.ERROR,
        source=SOURCE_YAML_PARSER,
    )


def _whole_document_diagnostic(
    text: str, message: str, *, source: str = SOURCE_YAML_PARSER
) -> Diagnostic:
    lines = text.split("\n")
    return Diagnostic(
        start_line=1,
        start_column=1,
        end_line=len(lines),
        end_column=len(lines[-1]) + 1,
        message=message,
        severity=Severity.ERROR,
        source=source,
    )

