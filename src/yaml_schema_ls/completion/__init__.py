"""Completion exports."""

from .completion_provider import complete, create_insert_text, format_property_docs
from .suggestion_models import (
    DEFAULT_VALUE_BUCKET,
    ENUM_VALUE_BUCKET,
    EXAMPLE_VALUE_BUCKET,
    PATTERN_EXAMPLE_BUCKET,
    PROPERTY_BUCKET,
    Suggestion,
    SuggestionKind,
)

__all__ = [
    "DEFAULT_VALUE_BUCKET",
    "ENUM_VALUE_BUCKET",
    "EXAMPLE_VALUE_BUCKET",
    "PATTERN_EXAMPLE_BUCKET",
    "PROPERTY_BUCKET",
    "Suggestion",
    "SuggestionKind",
    "complete",
    "create_insert_text",
    "format_property_docs",
]
