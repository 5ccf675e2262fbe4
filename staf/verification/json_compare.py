"""
================================================================================
JSON Comparison
================================================================================

Structural comparison of JSON documents with ignore placeholders.

    expected = to_jsonable(BoardStorage.x_wins_horizontal())
    add_ignores(expected, "board")
    assert compare_json(actual, expected) == []

Rules:
    - Objects must have the same keys; values are compared recursively
    - Arrays must have the same length; items are compared by position
    - Numbers compare by value (1 == 1.0); booleans are not numbers
    - The IGNORE placeholder matches any value that is present

================================================================================
"""

from __future__ import annotations

import json
from typing import Any, Dict, List


IGNORE = "${ignore}"


def add_ignore(document: Dict[str, Any], field_name: str) -> None:
    """
    Replace a top-level field value with the IGNORE placeholder.

    Fields that are not present are left untouched.
    """
    if field_name in document:
        document[field_name] = IGNORE


def add_ignores(document: Dict[str, Any], *field_names: str) -> None:
    """Apply add_ignore for several fields."""
    for field_name in field_names:
        add_ignore(document, field_name)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _render(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def compare_json(actual: Any, expected: Any, path: str = "$") -> List[str]:
    """
    Compare two JSON-compatible values.

    Returns:
        List of human-readable differences (empty when equal)
    """
    if expected == IGNORE:
        return []

    if isinstance(expected, dict):
        if not isinstance(actual, dict):
            return [f"{path}: expected object, got {_render(actual)}"]
        differences: List[str] = []
        for key in expected:
            if key not in actual:
                differences.append(f"{path}.{key}: missing in actual")
        for key in actual:
            if key not in expected:
                differences.append(f"{path}.{key}: unexpected field with value {_render(actual[key])}")
        for key in expected:
            if key in actual:
                differences.extend(compare_json(actual[key], expected[key], f"{path}.{key}"))
        return differences

    if isinstance(expected, list):
        if not isinstance(actual, list):
            return [f"{path}: expected array, got {_render(actual)}"]
        if len(actual) != len(expected):
            return [
                f"{path}: expected array of length {len(expected)}, got {len(actual)}"
            ]
        differences = []
        for index, (actual_item, expected_item) in enumerate(zip(actual, expected)):
            differences.extend(compare_json(actual_item, expected_item, f"{path}[{index}]"))
        return differences

    if _is_number(expected) and _is_number(actual):
        if actual != expected:
            return [f"{path}: expected {_render(expected)}, got {_render(actual)}"]
        return []

    if type(actual) is not type(expected) or actual != expected:
        return [f"{path}: expected {_render(expected)}, got {_render(actual)}"]
    return []


__all__ = [
    "IGNORE",
    "add_ignore",
    "add_ignores",
    "compare_json",
]
