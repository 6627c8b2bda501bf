"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_SCHEMA_URL = "https://4lando.github.io/lando-spec/landofile-spec.json"
DEFAULT_SCHEMA_TIMEOUT_SECONDS = 10


@dataclass(frozen=True)
class SchemaSettings:
    """Where the JSON schema is read from."""

    path: Path | None = None
    url: str | None = DEFAULT_SCHEMA_URL
    timeout_seconds: int = DEFAULT_SCHEMA_TIMEOUT_SECONDS

    @property
    def source(self) -> str | None:
        """Local path when configured, otherwise the URL."""
        if self.path is not None:
            return str(self.path)
        return self.url


@dataclass(frozen=True)
class LoggingSettings:
    """Diagnostic logging switches."""

    debug: bool = False


@dataclass(frozen=True)
class ServiceSettings:
    """Top-level configuration aggregate."""

    path: Path | None = None
    schema: SchemaSettings = field(default_factory=SchemaSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
