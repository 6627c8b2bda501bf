"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "yaml-schema-ls.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Settings for yaml-schema-ls.
# Remove or replace <OPTIONAL> placeholders; every key may be omitted.

schema:
  # A local schema file wins over the URL. Relative paths resolve against this file.
  # path: "<OPTIONAL>"
  url: "https://4lando.github.io/lando-spec/landofile-spec.json"
  timeout_seconds: 10

logging:
  # Log schema lookups and validation details to stderr.
  debug: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML settings template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the settings template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
