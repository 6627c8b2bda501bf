"""Language service tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from yaml_schema_ls.diagnostics import SCHEMA_UNAVAILABLE_MESSAGE, Severity
from yaml_schema_ls.language_service import LanguageService
from yaml_schema_ls.schema_management import build_loaded_schema
from yaml_schema_ls.text_positions import Position


def _sample_path() -> Path:
    return Path(__file__).resolve().parents[3] / "samples" / "sample-landofile-schema.json"


def test_service_runs_all_operations_against_loaded_schema() -> None:
    service = LanguageService.from_source(_sample_path())

    assert service.schema_available is True
    assert service.loaded_schema is not None
    assert service.validate("name: myapp\n") == []
    assert [d.message for d in service.validate("name: 1\n")] == [
        "name 1 is not of type 'string' at /name"
    ]
    assert "recipe" in [s.label for s in service.complete("", Position(line=1, column=1))]
    info = service.hover("name: myapp\n", Position(line=1, column=2))
    assert info is not None
    assert info.contents[0] == "The name of the app."


def test_service_accepts_prebuilt_schema() -> None:
    schema = json.loads(_sample_path().read_text(encoding="utf-8"))
    service = LanguageService(build_loaded_schema(schema))

    service.validate("name: 1\n")
    service.validate("name: 2\n")

    assert len(service.loaded_schema.validators) == 1


def test_failed_schema_load_degrades_service(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        service = LanguageService.from_source(tmp_path / "missing.json")

    assert service.schema_available is False
    assert "Schema failed to load" in caplog.text
    diagnostics = service.validate("name: app\n")
    assert len(diagnostics) == 1
    assert diagnostics[0].message == SCHEMA_UNAVAILABLE_MESSAGE
    assert diagnostics[0].severity is Severity.WARNING
    assert service.complete("", Position(line=1, column=1)) == []
    assert service.hover("name: app\n", Position(line=1, column=1)) is None


def test_missing_schema_source_degrades_service() -> None:
    service = LanguageService.from_source(None)

    assert service.schema_available is False
    assert service.loaded_schema is None
