"""Shared fixtures for generator tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def petstore_path() -> Path:
    """Path to the sample petstore document (YAML)."""
    return FIXTURES_DIR / "petstore.yaml"


@pytest.fixture
def petstore_expected() -> str:
    """Rust source expected for the petstore document with default options."""
    return (FIXTURES_DIR / "petstore.rs").read_text(encoding="utf-8")


@pytest.fixture
def write_spec(tmp_path: Path) -> Callable[..., Path]:
    """Return a callable that writes a spec dict to a file in tmp_path.

    Usage::

        path = write_spec({"components": {...}}, "api.yaml")
    """
    def _write(spec: dict[str, Any], filename: str = "openapi.json") -> Path:
        path = tmp_path / filename
        if path.suffix in (".yaml", ".yml"):
            path.write_text(yaml.safe_dump(spec), encoding="utf-8")
        else:
            path.write_text(json.dumps(spec), encoding="utf-8")
        return path
    return _write
