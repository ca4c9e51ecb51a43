"""Tests for packaging metadata."""

from __future__ import annotations

import importlib
import tomllib
from pathlib import Path
from typing import Any, cast


def _load_pyproject() -> dict[str, Any]:
    path = Path(__file__).resolve().parents[1] / "pyproject.toml"
    with path.open("rb") as fh:
        return tomllib.load(fh)


def _extras(pyproject: dict[str, Any]) -> dict[str, list[str]]:
    return cast(dict[str, list[str]], pyproject.get("project", {}).get("optional-dependencies", {}))


def test_optional_dependency_groups() -> None:
    extras = _extras(_load_pyproject())
    assert {"dev", "test"}.issubset(extras)
    assert any(dep.startswith("pytest") for dep in extras["test"])


def test_runtime_dependencies() -> None:
    deps = _load_pyproject()["project"]["dependencies"]
    names = {d.split(">")[0].split("=")[0].strip().lower() for d in deps}
    assert {"pydantic", "pyyaml", "typer"} <= names


def test_console_script_entrypoint() -> None:
    scripts = _load_pyproject().get("project", {}).get("scripts", {})
    assert scripts.get("sceneintel") == "sceneintel.cli:app"


def test_defaults_shipped_as_package_data() -> None:
    package_data = _load_pyproject()["tool"]["setuptools"]["package-data"]
    assert "defaults.yml" in package_data["sceneintel.config"]


def test_readme_exists() -> None:
    pyproject = _load_pyproject()
    readme = pyproject["project"]["readme"]
    assert (Path(__file__).resolve().parents[1] / readme).exists()


def test_import_smoke() -> None:
    importlib.import_module("sceneintel")
    importlib.import_module("sceneintel.cli")
