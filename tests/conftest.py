"""
Shared fixtures for llm_contracts tests.
"""

import json
from pathlib import Path

import pytest

from llm_contracts.core.logging import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep test output clean; tests that check logging reconfigure it."""
    configure_logging(level="silent", force=True)
    yield
    configure_logging(level="silent", force=True)


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON fixture file and return its path."""
    def _write(name: str, value) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(value, indent=2))
        return path
    return _write


@pytest.fixture
def basic_contract() -> dict:
    return {
        "contract": "people",
        "version": 1,
        "inputs": ["prompt"],
        "output_type": "array",
        "rules": [
            {"rule": "required_field", "field": "id"},
            {"rule": "field_type", "field": "id", "expected": "number"},
            {"rule": "no_empty_rows"},
        ],
    }
