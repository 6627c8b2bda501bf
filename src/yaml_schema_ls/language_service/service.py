"""Language service bound to one loaded schema."""

from __future__ import annotations

import logging
from pathlib import Path

from yaml_schema_ls.completion.completion_provider import complete
from yaml_schema_ls.completion.suggestion_models import Suggestion
from yaml_schema_ls.diagnostics.diagnostic_models import Diagnostic
from yaml_schema_ls.diagnostics.yaml_validation import schema_unavailable_diagnostic, validate
from yaml_schema_ls.hover.hover_provider import HoverInfo, hover
from yaml_schema_ls.schema_management.schema_loading import (
    DEFAULT_TIMEOUT_SECONDS,
    LoadedSchema,
    SchemaLoadError,
    load_schema,
)
from yaml_schema_ls.text_positions.position_models import Position

_LOGGER = logging.getLogger(__name__)


class LanguageService:
    """Validation, completion and hover for YAML text against one schema.

    Without a loaded schema the service runs degraded: validation reports a
    single warning, completion and hover return nothing.
    """

    def __init__(self, loaded: LoadedSchema | None = None) -> None:
        self._loaded = loaded

    @classmethod
    def from_source(
        cls, source: str | Path | None, *, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    ) -> LanguageService:
        """Load the schema at ``source``; a failed load yields a degraded service."""
        if source is None:
            _LOGGER.warning("No schema source configured; validation is disabled")
            return cls(None)
        try:
            return cls(load_schema(source, timeout_seconds=timeout_seconds))
        except SchemaLoadError as exc:
            _LOGGER.warning("Schema failed to load, continuing without validation: %s", exc)
            return cls(None)

    @property
    def schema_available(self) -> bool:
        return self._loaded is not None

    @property
    def loaded_schema(self) -> LoadedSchema | None:
        return self._loaded

    def validate(self, text: str) -> list[Diagnostic]:
        if self._loaded is None:
            return [schema_unavailable_diagnostic()]
        return validate(text, self._loaded.schema, self._loaded.validators)

    def complete(self, text: str, position: Position) -> list[Suggestion]:
        if self._loaded is None:
            return []
        return complete(text, position, self._loaded.schema)

    def hover(self, text: str, position: Position) -> HoverInfo | None:
        if self._loaded is None:
            return None
        return hover(text, position, self._loaded.index)
