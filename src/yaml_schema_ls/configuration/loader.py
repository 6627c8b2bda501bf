"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_SCHEMA_TIMEOUT_SECONDS,
    DEFAULT_SCHEMA_URL,
    LoggingSettings,
    SchemaSettings,
    ServiceSettings,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> ServiceSettings:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    schema = _parse_schema_section(parsed.get("schema"), path.parent)
    logging_settings = _parse_logging_section(parsed.get("logging"))
    return ServiceSettings(path=path, schema=schema, logging=logging_settings)


def _parse_schema_section(value: Any, base_path: Path) -> SchemaSettings:
    section = _optional_mapping(value, "schema")
    path_value = _optional_string(section.get("path"), "schema.path")
    url = _optional_string(section.get("url", DEFAULT_SCHEMA_URL), "schema.url")
    if url is not None and not url.startswith(("http://", "https://")):
        raise ConfigurationError("schema.url must start with http:// or https://.")
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", DEFAULT_SCHEMA_TIMEOUT_SECONDS), "schema.timeout_seconds"
    )
    schema_path = _resolve_path(base_path, path_value) if path_value else None
    if schema_path is None and url is None:
        raise ConfigurationError("Configuration section 'schema' requires either path or url.")
    return SchemaSettings(path=schema_path, url=url, timeout_seconds=timeout_seconds)


def _parse_logging_section(value: Any) -> LoggingSettings:
    section = _optional_mapping(value, "logging")
    debug = section.get("debug", False)
    if not isinstance(debug, bool):
        raise ConfigurationError("logging.debug must be a boolean.")
    return LoggingSettings(debug=debug)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
