"""Diagnostics exports."""

from .diagnostic_models import (
    SOURCE_JSON_SCHEMA,
    SOURCE_SCHEMA_LOADER,
    SOURCE_YAML_PARSER,
    Diagnostic,
    Severity,
)
from .yaml_documents import parse_yaml
from .yaml_validation import (
    SCHEMA_UNAVAILABLE_MESSAGE,
    normalize_stub_keys,
    schema_unavailable_diagnostic,
    validate,
)

__all__ = [
    "Diagnostic",
    "SCHEMA_UNAVAILABLE_MESSAGE",
    "SOURCE_JSON_SCHEMA",
    "SOURCE_SCHEMA_LOADER",
    "SOURCE_YAML_PARSER",
    "Severity",
    "normalize_stub_keys",
    "parse_yaml",
    "schema_unavailable_diagnostic",
    "validate",
]
