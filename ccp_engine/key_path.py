"""
Dotted key paths over JSON documents.

A key path such as "env.ANTHROPIC_BASE_URL" addresses nested object keys.
'.' is always a separator, so keys that contain a literal dot cannot be
addressed. Arrays are never indexed; any non-object node on the way simply
ends the walk.
"""

from __future__ import annotations

import copy
import json
from typing import Any, Dict, List

from .profile_errors import InvalidKeyPath, TypeMismatch


class _Missing:
    """Marker for "no value at this path" (distinct from JSON null)."""

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def split_key(key: str) -> List[str]:
    """Split a key path on '.'; an empty key has no segments."""
    if not key:
        return []
    return key.split(".")


def json_type_name(value: Any) -> str:
    """JSON type name for error messages ("string", "array", ...)."""
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
    return type(value).__name__


# ---------------------------------------------------------------------------
# get / set / unset
# ---------------------------------------------------------------------------


def get_value(doc: Any, key: str) -> Any:
    """
    Return a deep copy of the value at `key`, or MISSING.

    Never raises for absent keys or non-object intermediates.
    """
    parts = split_key(key)
    if not parts:
        return MISSING

    current = doc
    for part in parts:
        if not isinstance(current, dict) or part not in current:
            return MISSING
        current = current[part]

    return copy.deepcopy(current)


def set_value(doc: Any, key: str, value: Any) -> None:
    """
    Set `key` to `value` in place, creating empty objects for absent
    intermediate keys.

    Raises TypeMismatch when an existing intermediate is not an object.
    Objects created before the failing segment are left in place.
    """
    parts = split_key(key)
    if not parts:
        raise InvalidKeyPath("Key path must not be empty")

    if not isinstance(doc, dict):
        raise TypeMismatch(key, "", json_type_name(doc))

    current: Dict[str, Any] = doc
    for idx, part in enumerate(parts[:-1]):
        if part not in current:
            current[part] = {}
        nxt = current[part]
        if not isinstance(nxt, dict):
            raise TypeMismatch(key, ".".join(parts[: idx + 1]), json_type_name(nxt))
        current = nxt

    current[parts[-1]] = value


def unset_value(doc: Any, key: str) -> bool:
    """
    Remove `key` if present. Returns True only when something was removed.

    Missing intermediates (or non-object ones) are not an error.
    """
    parts = split_key(key)
    if not parts:
        return False

    current = doc
    for part in parts[:-1]:
        if not isinstance(current, dict) or part not in current:
            return False
        current = current[part]

    if not isinstance(current, dict) or parts[-1] not in current:
        return False

    del current[parts[-1]]
    return True


def parse_cli_value(text: str) -> Any:
    """
    Interpret a command-line value: JSON if it parses, else a plain string.

        "3"        -> 3
        "true"     -> True
        '{"a": 1}' -> {"a": 1}
        "opus"     -> "opus"
    """
    try:
        return json.loads(text)
    except ValueError:
        return text
