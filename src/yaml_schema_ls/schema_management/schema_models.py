"""Schema management entities."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from yaml_schema_ls.text_positions.structural_paths import possible_paths


@dataclass(frozen=True)
class SchemaEntry:  # pylint: disable=too-many-instance-attributes
    """Documentation and validation metadata flattened from one schema node."""

    description: str = ""
    schema_type: str | tuple[str, ...] = ""
    enum: tuple[Any, ...] = ()
    examples: tuple[Any, ...] = ()
    default: Any = None
    has_default: bool = False
    one_of: tuple[Any, ...] = ()
    pattern: str | None = None
    additional_properties: Any = None

    @property
    def type_label(self) -> str:
        if isinstance(self.schema_type, tuple):
            return ", ".join(str(item) for item in self.schema_type)
        return str(self.schema_type)


@dataclass(frozen=True)
class SchemaIndex:
    """Read-only map from structural path to flattened schema entry."""

    entries: Mapping[str, SchemaEntry] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_entries(cls, entries: Mapping[str, SchemaEntry]) -> SchemaIndex:
        return cls(entries=MappingProxyType(dict(entries)))

    def find(self, path: Sequence[str]) -> tuple[str, SchemaEntry] | None:
        """Return the first wildcard candidate of ``path`` present in the index."""
        for candidate in possible_paths(path):
            entry = self.entries.get(candidate)
            if entry is not None:
                return candidate, entry
        return None

    def __contains__(self, path: object) -> bool:
        return path in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def display_value(value: Any) -> str:
    """Render a schema value the way it would be typed in YAML."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value)
