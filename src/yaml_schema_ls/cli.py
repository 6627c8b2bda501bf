"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from yaml_schema_ls.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    ServiceSettings,
    load_configuration,
    write_placeholder_configuration,
)
from yaml_schema_ls.diagnostics import Severity
from yaml_schema_ls.formatting import FormatError, format_document
from yaml_schema_ls.language_service import LanguageService
from yaml_schema_ls.text_positions import Position

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="yaml-schema-ls")
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log schema lookups and validation details to stderr.",
)
def cli(debug: bool) -> None:
    """Schema-aware validation, completion and hover for YAML files."""
    if debug:
        _configure_logging()


def _schema_options(command: Callable[..., Any]) -> Callable[..., Any]:
    command = click.option(
        "--config",
        "config_path",
        required=False,
        type=click.Path(path_type=str),
        help="Path to the YAML settings file",
    )(command)
    return click.option(
        "--schema",
        "schema_source",
        required=False,
        type=click.STRING,
        help="Path or http(s) URL of the JSON schema (overrides the settings file)",
    )(command)


def _position_options(command: Callable[..., Any]) -> Callable[..., Any]:
    command = click.option(
        "--column", required=True, type=click.IntRange(min=1), help="1-based cursor column"
    )(command)
    return click.option(
        "--line", required=True, type=click.IntRange(min=1), help="1-based cursor line"
    )(command)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML settings template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML settings file with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="validate")
@click.argument("file_path", type=click.Path(path_type=str))
@_schema_options
def validate_file(file_path: str, schema_source: str | None, config_path: str | None) -> None:
    """Report schema and syntax problems in a YAML file."""
    text = _read_text(file_path)
    service = _build_service(schema_source, config_path)
    diagnostics = service.validate(text)
    for diagnostic in diagnostics:
        click.echo(
            f"{file_path}:{diagnostic.start_line}:{diagnostic.start_column}: "
            f"{diagnostic.severity.value}: {diagnostic.message} [{diagnostic.source}]"
        )
    if any(diagnostic.severity is Severity.ERROR for diagnostic in diagnostics):
        click.get_current_context().exit(1)


@cli.command(name="complete")
@click.argument("file_path", type=click.Path(path_type=str))
@_position_options
@_schema_options
def complete_position(
    file_path: str, line: int, column: int, schema_source: str | None, config_path: str | None
) -> None:
    """List completion suggestions for a cursor position."""
    text = _read_text(file_path)
    service = _build_service(schema_source, config_path)
    for suggestion in service.complete(text, Position(line=line, column=column)):
        click.echo(
            f"{suggestion.label}\t{suggestion.kind.value}\t{json.dumps(suggestion.insert_text)}"
        )


@cli.command(name="hover")
@click.argument("file_path", type=click.Path(path_type=str))
@_position_options
@_schema_options
def hover_position(
    file_path: str, line: int, column: int, schema_source: str | None, config_path: str | None
) -> None:
    """Show documentation for the key at a cursor position."""
    text = _read_text(file_path)
    service = _build_service(schema_source, config_path)
    info = service.hover(text, Position(line=line, column=column))
    if info is not None:
        click.echo("\n\n".join(info.contents))


@cli.command(name="format")
@click.argument("file_path", type=click.Path(path_type=str))
@click.option(
    "--write",
    is_flag=True,
    default=False,
    help="Rewrite the file in place instead of printing the result.",
)
def format_file(file_path: str, write: bool) -> None:
    """Normalize whitespace and blank lines of a YAML file."""
    text = _read_text(file_path)
    try:
        formatted = format_document(text)
    except FormatError as exc:
        raise CliError(str(exc)) from exc
    if not write:
        click.echo(formatted, nl=False)
        return
    try:
        Path(file_path).write_text(formatted, encoding="utf-8")
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(Path(file_path).resolve()))


def _build_service(schema_source: str | None, config_path: str | None) -> LanguageService:
    try:
        settings = load_configuration(config_path) if config_path else ServiceSettings()
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    if settings.logging.debug:
        _configure_logging()
    return LanguageService.from_source(
        schema_source or settings.schema.source,
        timeout_seconds=settings.schema.timeout_seconds,
    )


def _read_text(file_path: str) -> str:
    try:
        return Path(file_path).read_text(encoding="utf-8")
    except OSError as exc:
        raise CliError(f"Cannot read {file_path}: {exc}") from exc


def _configure_logging() -> None:
    logging.basicConfig(level=logging.DEBUG, format=_LOG_FORMAT, stream=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        exit_code = cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return exit_code if isinstance(exit_code, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
