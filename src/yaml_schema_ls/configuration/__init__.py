"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
    DEFAULT_SCHEMA_TIMEOUT_SECONDS,
    DEFAULT_SCHEMA_URL,
    LoggingSettings,
    SchemaSettings,
    ServiceSettings,
)

__all__ = [
    "ConfigurationError",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_SCHEMA_TIMEOUT_SECONDS",
    "DEFAULT_SCHEMA_URL",
    "LoggingSettings",
    "SchemaSettings",
    "ServiceSettings",
    "build_placeholder_configuration",
    "load_configuration",
    "write_placeholder_configuration",
]
