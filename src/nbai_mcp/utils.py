"""
Utility functions for the NBAI MCP server.
"""

import json
from typing import Any


def parse_string_or_array(value: Any) -> list | None:
    """
    Coerce a list argument that may have arrived as a string.

    Some MCP clients send arrays as JSON-encoded strings, and a single value
    is sometimes sent bare instead of wrapped in a list.

    Args:
        value: A list, a JSON-stringified list, a single string, or None

    Returns:
        The value as a list, or None if no value was given
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith("["):
            try:
                parsed = json.loads(stripped)
            except json.JSONDecodeError:
                return [value]
            if isinstance(parsed, list):
                return parsed
        return [value]
    return [value]


def dig(data: Any, *path: str | int, default: Any = None) -> Any:
    """
    Follow a chain of keys and indexes into nested JSON data.

    Returns `default` the first time a segment is missing, out of range or
    applied to the wrong kind of container.

    Example:
        dig(item, "contacts", 0, "phone", 0, "value")
    """
    current = data
    for segment in path:
        if isinstance(segment, int):
            if not isinstance(current, list) or not -len(current) <= segment < len(current):
                return default
            current = current[segment]
        else:
            if not isinstance(current, dict) or segment not in current:
                return default
            current = current[segment]
    return current


def format_number(value: int | float) -> str:
    """
    Render a number as query-string text.

    Integral floats drop their fractional part so 5000.0 is sent as "5000".
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_bool(value: bool) -> str:
    """Render a boolean as the lowercase literal the upstream expects"""
    return "true" if value else "false"
