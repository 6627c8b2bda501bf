"""Schema acquisition, compilation and indexing."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests
from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError as JsonSchemaDefinitionError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from .schema_models import SchemaIndex
from .schema_projection import flatten_schema

_LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10


class SchemaLoadError(Exception):
    """Raised when a schema cannot be fetched, parsed or compiled."""


class ValidatorCache:
    """Compiled validators keyed by schema instance.

    One cache belongs to one loaded schema and lives exactly as long as it.
    """

    def __init__(self) -> None:
        self._validators: dict[int, tuple[Mapping[str, Any], Validator]] = {}

    def get(self, schema: Mapping[str, Any]) -> Validator:
        cached = self._validators.get(id(schema))
        if cached is not None and cached[0] is schema:
            return cached[1]
        validator = compile_validator(schema)
        self._validators[id(schema)] = (schema, validator)
        return validator

    def __len__(self) -> int:
        return len(self._validators)


@dataclass(frozen=True)
class LoadedSchema:
    """A schema ready for validation, completion and hover lookups."""

    schema: Mapping[str, Any]
    index: SchemaIndex
    validators: ValidatorCache
    source: str | None = None


def compile_validator(schema: Mapping[str, Any]) -> Validator:
    """Build a validator for ``schema`` with its ``$id`` removed.

    Raises:
      jsonschema.exceptions.SchemaError: If the schema itself is invalid.
    """
    schema_to_compile = {key: value for key, value in schema.items() if key != "$id"}
    validator_cls = validator_for(schema_to_compile, default=Draft202012Validator)
    validator_cls.check_schema(schema_to_compile)
    return validator_cls(schema_to_compile)


def load_schema(
    source: str | Path, *, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
) -> LoadedSchema:
    """Read a schema from a local path or an http(s) URL and prepare it.

    Args:
      source: File path or URL of the JSON schema document.
      timeout_seconds: Network timeout for URL sources.

    Returns:
      The loaded schema with its flattened index and validator cache.

    Raises:
      SchemaLoadError: If fetching, parsing or compiling the schema fails.
    """
    text = _read_schema_text(source, timeout_seconds)
    return build_loaded_schema(parse_schema_text(text), source=str(source))


def parse_schema_text(text: str) -> dict[str, Any]:
    """Parse schema JSON text into a mapping."""
    try:
        schema = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(f"Invalid JSON schema: {exc}") from exc
    if not isinstance(schema, dict):
        raise SchemaLoadError("Schema root must be a JSON object.")
    return schema


def build_loaded_schema(schema: Mapping[str, Any], source: str | None = None) -> LoadedSchema:
    """Compile ``schema`` once and flatten it for position based lookups."""
    validators = ValidatorCache()
    try:
        validators.get(schema)
    except JsonSchemaDefinitionError as exc:
        raise SchemaLoadError(f"Schema compilation failed: {exc.message}") from exc
    index = SchemaIndex.from_entries(flatten_schema(schema))
    _LOGGER.debug("Indexed %d schema paths from %s", len(index), source or "<inline schema>")
    return LoadedSchema(schema=schema, index=index, validators=validators, source=source)


def _read_schema_text(source: str | Path, timeout_seconds: float) -> str:
    if isinstance(source, str) and source.startswith(("http://", "https://")):
        _LOGGER.debug("Fetching schema from %s", source)
        try:
            response = requests.get(source, timeout=timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise SchemaLoadError(f"Schema fetch failed for {source}: {exc}") from exc
        return response.text

    path = Path(source)
    if not path.exists():
        raise SchemaLoadError(f"Schema file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaLoadError(f"Failed to read schema file {path}: {exc}") from exc
