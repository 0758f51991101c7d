"""
JSON Validator - Strict parsing of raw JSON text supplied by users.

validate_json() never raises. Malformed input returns the INVALID sentinel,
which is distinct from every JSON value (including null -> None), so callers
can tell "absent/empty" apart from "malformed".
"""

import json
from typing import Any


class _Invalid:
    """Sentinel type for unparseable JSON."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "INVALID"

    def __bool__(self):
        return False


INVALID = _Invalid()


def _reject_constant(name: str):
    # json.loads accepts NaN/Infinity by default; strict JSON does not
    raise ValueError(f"Invalid JSON constant: {name}")


def validate_json(text: Any) -> Any:
    """Parse text as JSON.

    Returns:
        The parsed value, or INVALID if text is not a string or not valid JSON.
    """
    if not isinstance(text, (str, bytes, bytearray)):
        return INVALID
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return INVALID


def is_valid_json(text: Any) -> bool:
    return validate_json(text) is not INVALID
