"""Diagnostic entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from yaml_schema_ls.text_positions.position_models import TextRange

SOURCE_JSON_SCHEMA = "JSON Schema"
SOURCE_YAML_PARSER = "YAML Parser"
SOURCE_SCHEMA_LOADER = "Schema Loader"


class Severity(str, Enum):
    """Marker severities understood by editor hosts."""

    HINT = "hint"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:  # pylint: disable=too-many-instance-attributes
    """One validation marker with a 1-based text range (end column exclusive)."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    message: str
    severity: Severity = Severity.ERROR
    source: str = SOURCE_JSON_SCHEMA

    @classmethod
    def from_range(
        cls,
        text_range: TextRange,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        source: str = SOURCE_JSON_SCHEMA,
    ) -> Diagnostic:
        return cls(
            start_line=text_range.start_line,
            start_column=text_range.start_column,
            end_line=text_range.end_line,
            end_column=text_range.end_column,
            message=message,
            severity=severity,
            source=source,
        )

    @property
    def range(self) -> TextRange:
        return TextRange(
            start_line=self.start_line,
            start_column=self.start_column,
            end_line=self.end_line,
            end_column=self.end_column,
        )
