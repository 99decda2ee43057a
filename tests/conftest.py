"""Shared test fixtures and configuration."""

import json
from typing import Any, Callable

import pytest


def _parse(text: str, label: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        pytest.fail(f"failed to parse {label} json: {e}")


@pytest.fixture
def assert_json_equal() -> Callable[[str, str], None]:
    """Compare two JSON texts structurally.

    Object key order and whitespace are ignored; array order is not.
    """

    def check(actual: str, expected: str) -> None:
        parsed_actual = _parse(actual, "actual")
        parsed_expected = _parse(expected, "expected")
        assert parsed_actual == parsed_expected, (
            f"JSON contents do not match:\n  actual:   {parsed_actual!r}\n"
            f"  expected: {parsed_expected!r}"
        )

    return check


@pytest.fixture
def knights_json() -> str:
    """Return a small document with a nested array of objects."""
    return json.dumps(
        {
            "name": "Perceval",
            "manager": {"name": "Arthur", "home": {"type": "Castle"}},
            "knights": [
                {"name": "Lancelot", "aka": "Le Chevalier du Lac"},
                {"name": "Karadoc"},
            ],
        }
    )
