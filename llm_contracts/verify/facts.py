"""
Facts — Decoding and inspecting the JSON document under evaluation.

Facts are plain decoded JSON (dict, list, str, int, float, bool, None).
Nothing in this package mutates them.
"""

import json
from typing import Any

from llm_contracts.core.errors import FactsError

SCALAR_TYPES = ("string", "number", "boolean", "null")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_facts(text: str) -> Any:
    """
    Decode facts as strict JSON.

    NaN, Infinity and -Infinity are rejected even though Python's json
    module would accept them.

    Raises:
        FactsError: If the text is not a valid JSON document
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise FactsError(f"Invalid facts JSON: {e}") from e


def json_type_name(value: Any) -> str:
    """Name the JSON type of a decoded value. Booleans are never numbers."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "unknown"


def is_scalar(value: Any) -> bool:
    return json_type_name(value) in SCALAR_TYPES


def json_equal(left: Any, right: Any) -> bool:
    """Compare two scalars by JSON type and value (so `true` != `1`)."""
    return json_type_name(left) == json_type_name(right) and left == right


def is_empty_row(value: Any) -> bool:
    """An empty object, an empty array, or null."""
    if value is None:
        return True
    if isinstance(value, (dict, list)):
        return len(value) == 0
    return False
