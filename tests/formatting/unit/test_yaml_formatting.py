"""YAML formatting tests."""

from __future__ import annotations

import pytest
from yaml_schema_ls.formatting import FormatError, format_document
from yaml_schema_ls.text_positions import location_of_path


def test_format_document_normalizes_whitespace() -> None:
    text = "name: app  \r\n\r\n\r\n\r\nservices:\r\n  web:   \n    type: php:8.2\r\n\n\n"

    assert format_document(text) == "name: app\n\nservices:\n  web:\n    type: php:8.2\n"


def test_format_document_keeps_comments_and_key_order() -> None:
    text = "# app settings\nrecipe: lamp\nname: app # inline\n"

    assert format_document(text) == text


def test_format_document_is_idempotent() -> None:
    once = format_document("\n\nname: app\n\n\n\nrecipe: lamp   \n")

    assert once == "name: app\n\nrecipe: lamp\n"
    assert format_document(once) == once


@pytest.mark.parametrize("text", ["", "\n\n", "  \n"])
def test_format_document_returns_empty_text_for_blank_documents(text: str) -> None:
    assert format_document(text) == ""


def test_format_document_rejects_invalid_yaml() -> None:
    with pytest.raises(FormatError) as exc_info:
        format_document("a: b: c\n")

    assert str(exc_info.value).startswith(
        "Failed to format: mapping values are not allowed here at line 1, column 5"
    )
    assert (exc_info.value.line, exc_info.value.column) == (1, 5)


def test_format_document_reindents_to_two_spaces() -> None:
    formatted = format_document("services:\n    web:\n        type: 1\n")

    assert formatted == "services:\n  web:\n    type: 1\n"
    assert location_of_path(formatted, ["services", "web", "type"]).line == 3


def test_format_document_reindents_sequences_comments_and_block_scalars() -> None:
    text = (
        "config:\n"
        "    # web server\n"
        "    via: nginx\n"
        "    excludes:\n"
        "        - vendor\n"
        "        - node_modules\n"
        "    motd: |\n"
        "        Welcome\n"
        "          indented\n"
        "name: app\n"
    )

    assert format_document(text) == (
        "config:\n"
        "  # web server\n"
        "  via: nginx\n"
        "  excludes:\n"
        "    - vendor\n"
        "    - node_modules\n"
        "  motd: |\n"
        "    Welcome\n"
        "      indented\n"
        "name: app\n"
    )


def test_format_document_reindents_mappings_inside_sequences() -> None:
    text = "items:\n    - name: a\n      value: 1\n    - name: b\n"

    assert format_document(text) == "items:\n  - name: a\n    value: 1\n  - name: b\n"
