"""Boundary tests for provider module dependencies."""

from __future__ import annotations

from pathlib import Path


def _package_dir() -> Path:
    return Path(__file__).resolve().parents[3] / "src" / "yaml_schema_ls"


def test_providers_do_not_import_each_other_or_outer_layers() -> None:
    package_dir = _package_dir()
    provider_modules = {
        "completion": package_dir / "completion" / "completion_provider.py",
        "hover": package_dir / "hover" / "hover_provider.py",
        "diagnostics": package_dir / "diagnostics" / "yaml_validation.py",
    }
    outer_fragments = ("yaml_schema_ls.language_service", "yaml_schema_ls.cli")

    for name, module_path in provider_modules.items():
        text = module_path.read_text(encoding="utf-8")
        forbidden = outer_fragments + tuple(
            f"yaml_schema_ls.{other}" for other in provider_modules if other != name
        )
        for fragment in forbidden:
            assert fragment not in text, f"Forbidden dependency in {module_path}: {fragment}"


def test_text_positions_do_not_depend_on_schema_handling() -> None:
    positions_dir = _package_dir() / "text_positions"

    for module_path in positions_dir.glob("*.py"):
        text = module_path.read_text(encoding="utf-8")
        assert "yaml_schema_ls.schema_management" not in text
        assert "jsonschema" not in text
