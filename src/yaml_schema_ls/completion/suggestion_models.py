"""Completion entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from yaml_schema_ls.text_positions.position_models import TextRange

DEFAULT_VALUE_BUCKET = 0
ENUM_VALUE_BUCKET = 1
EXAMPLE_VALUE_BUCKET = 2
PROPERTY_BUCKET = 3
PATTERN_EXAMPLE_BUCKET = 4


class SuggestionKind(str, Enum):
    """What a suggestion inserts."""

    FIELD = "field"
    VALUE = "value"


@dataclass(frozen=True)
class Suggestion:  # pylint: disable=too-many-instance-attributes
    """One completion item; lower sort buckets are listed first."""

    label: str
    kind: SuggestionKind
    documentation: str
    insert_text: str
    sort_bucket: int
    is_snippet: bool = False
    range: TextRange | None = None

    @property
    def sort_text(self) -> str:
        return f"{self.sort_bucket}{self.label}"
