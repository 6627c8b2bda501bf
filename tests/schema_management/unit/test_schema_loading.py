"""Schema loading tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests
from yaml_schema_ls.schema_management import (
    SchemaLoadError,
    ValidatorCache,
    build_loaded_schema,
    compile_validator,
    load_schema,
    parse_schema_text,
)
from yaml_schema_ls.schema_management import schema_loading


def _sample_path() -> Path:
    return Path(__file__).resolve().parents[3] / "samples" / "sample-landofile-schema.json"


class _FakeResponse:
    def __init__(self, text: str, status_error: Exception | None = None) -> None:
        self.text = text
        self._status_error = status_error

    def raise_for_status(self) -> None:
        if self._status_error is not None:
            raise self._status_error


def test_load_schema_from_file_builds_index_and_validator() -> None:
    loaded = load_schema(str(_sample_path()))

    assert loaded.source == str(_sample_path())
    assert "services/*/type" in loaded.index
    assert len(loaded.validators) == 1
    assert loaded.schema["title"] == "Sample Landofile"


def test_load_schema_fetches_url_with_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    schema_text = _sample_path().read_text(encoding="utf-8")

    def _fake_get(url: str, timeout: float) -> _FakeResponse:
        captured["url"] = url
        captured["timeout"] = timeout
        return _FakeResponse(schema_text)

    monkeypatch.setattr(schema_loading.requests, "get", _fake_get)

    loaded = load_schema("https://example.com/landofile-schema.json", timeout_seconds=3)

    assert captured == {"url": "https://example.com/landofile-schema.json", "timeout": 3}
    assert "name" in loaded.index


def test_load_schema_wraps_network_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_get(url: str, timeout: float) -> _FakeResponse:
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(schema_loading.requests, "get", _fake_get)

    with pytest.raises(SchemaLoadError, match="Schema fetch failed"):
        load_schema("https://example.com/landofile-schema.json")


def test_load_schema_wraps_http_status_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fake_get(url: str, timeout: float) -> _FakeResponse:
        return _FakeResponse("", status_error=requests.HTTPError("404 Client Error"))

    monkeypatch.setattr(schema_loading.requests, "get", _fake_get)

    with pytest.raises(SchemaLoadError, match="404 Client Error"):
        load_schema("https://example.com/missing.json")


def test_load_schema_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SchemaLoadError, match="Schema file not found"):
        load_schema(tmp_path / "missing.json")


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("{not json", "Invalid JSON schema"),
        ("[]", "Schema root must be a JSON object."),
    ],
)
def test_parse_schema_text_rejects_invalid_documents(text: str, message: str) -> None:
    with pytest.raises(SchemaLoadError, match=message):
        parse_schema_text(text)


def test_build_loaded_schema_rejects_invalid_schema() -> None:
    with pytest.raises(SchemaLoadError, match="Schema compilation failed"):
        build_loaded_schema({"type": 12})


def test_compile_validator_ignores_schema_id() -> None:
    schema = {"$id": "https://example.com/schema.json", "type": "object"}

    validator = compile_validator(schema)

    assert "$id" not in validator.schema
    assert "$id" in schema
    assert validator.is_valid({"name": "app"})
    assert not validator.is_valid(["app"])


def test_validator_cache_compiles_each_schema_once() -> None:
    cache = ValidatorCache()
    schema = json.loads(_sample_path().read_text(encoding="utf-8"))

    first = cache.get(schema)
    second = cache.get(schema)

    assert first is second
    assert len(cache) == 1
