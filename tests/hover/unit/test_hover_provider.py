"""Hover provider tests."""

from __future__ import annotations

from pathlib import Path

from yaml_schema_ls.hover import format_example, hover, render_entry
from yaml_schema_ls.schema_management import SchemaEntry, SchemaIndex, load_schema
from yaml_schema_ls.text_positions import Position, TextRange


def _sample_index() -> SchemaIndex:
    sample_path = (
        Path(__file__).resolve().parents[3] / "samples" / "sample-landofile-schema.json"
    )
    return load_schema(sample_path).index


LANDOFILE = """name: myapp
recipe: lamp
config:
  ssl: true
services:
  web:
    type: php:8.2
    portforward: 8080
"""


def test_hover_resolves_pattern_children_through_wildcard() -> None:
    info = hover(LANDOFILE, Position(line=7, column=6), _sample_index())

    assert info is not None
    assert info.contents == (
        "Service type and version.",
        "Type: string",
        "Allowed values: php:8.2, mysql:8.0",
    )
    assert info.range == TextRange(start_line=7, start_column=5, end_line=7, end_column=9)


def test_hover_on_pattern_key_shows_pattern() -> None:
    info = hover(LANDOFILE, Position(line=6, column=3), _sample_index())

    assert info is not None
    assert info.contents == ("A single service.", "Type: object", "Pattern: ^[a-z][a-z0-9-]*$")


def test_hover_renders_default_and_examples_as_yaml() -> None:
    index = _sample_index()

    recipe = hover(LANDOFILE, Position(line=2, column=1), index)
    name = hover(LANDOFILE, Position(line=1, column=1), index)

    assert recipe is not None
    assert recipe.contents[-2:] == ("Default:", "```yaml\nrecipe: lamp\n```")
    assert name is not None
    assert name.contents == (
        "The name of the app.",
        "Type: string",
        "Examples:",
        "```yaml\nname: myapp\n```",
    )


def test_hover_numbers_one_of_formats_from_one() -> None:
    info = hover(LANDOFILE, Position(line=4, column=3), _sample_index())

    assert info is not None
    assert info.contents == (
        "SSL settings.",
        "Possible Formats:",
        "1. Enable or disable SSL.",
        "2. Custom certificate.",
    )


def test_hover_lists_union_types() -> None:
    info = hover(LANDOFILE, Position(line=8, column=5), _sample_index())

    assert info is not None
    assert "Type: boolean, integer" in info.contents


def test_hover_returns_none_without_key_or_schema_entry() -> None:
    index = _sample_index()

    assert hover("# just a comment\n", Position(line=1, column=3), index) is None
    assert hover("unknown: 1\n", Position(line=1, column=2), index) is None
    assert hover(LANDOFILE, Position(line=42, column=1), index) is None


def test_render_entry_orders_sections() -> None:
    entry = SchemaEntry(
        description="Port to expose.",
        schema_type="integer",
        enum=(80, 443),
        examples=(8080,),
        default=80,
        has_default=True,
    )

    assert render_entry("port", entry) == [
        "Port to expose.",
        "Type: integer",
        "Allowed values: 80, 443",
        "Default:",
        "```yaml\nport: 80\n```",
        "Examples:",
        "```yaml\nport: 8080\n```",
    ]


def test_format_example_renders_nested_values_as_block_yaml() -> None:
    rendered = format_example("services", {"web": {"type": "php:8.2"}})

    assert rendered == "services:\n  web:\n    type: php:8.2"


def test_hover_falls_back_to_wildcard_entry() -> None:
    index = SchemaIndex.from_entries(
        {"services/*/type": SchemaEntry(description="Service type.", schema_type="string")}
    )
    text = "services:\n  node:\n    type: node:20\n"

    info = hover(text, Position(line=3, column=5), index)

    assert info is not None
    assert info.contents == ("Service type.", "Type: string")


def test_one_of_numbering_keeps_positions_of_undescribed_alternatives() -> None:
    entry = SchemaEntry(
        one_of=(
            {"type": "boolean", "description": "Enable or disable SSL."},
            {"type": "string"},
            {"type": "object", "description": "Custom certificate."},
        )
    )

    assert render_entry("ssl", entry) == [
        "Possible Formats:",
        "1. Enable or disable SSL.",
        "3. Custom certificate.",
    ]
