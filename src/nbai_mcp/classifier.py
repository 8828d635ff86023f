"""
Failure detection for raw NextBillion.ai responses.

The upstream API does not signal errors uniformly. Place endpoints report a
`title`, routing endpoints report a `msg`, and both may carry a `status` that
arrives either as a number or as a numeric string.
"""

from typing import Any

from .models import Classification

FAILURE_STATUS = 400


def parse_status(value: Any) -> int | None:
    """
    Leniently parse a `status` field as an integer.

    Args:
        value: Raw status value from the response

    Returns:
        The integer status, or None if the value is not an integer
        (non-numeric strings, fractional numbers, booleans, missing)
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _status_failed(data: dict) -> bool:
    status = parse_status(data.get("status"))
    return status is not None and status >= FAILURE_STATUS


def classify_place_response(data: Any) -> Classification:
    """
    Classify a response from /geocode, /revgeocode, /discover or /lookup.

    Failure iff the response has a non-empty `title` or an integer
    `status` >= 400.
    """
    if not isinstance(data, dict):
        return Classification(is_error=False)

    title = data.get("title")
    if title or _status_failed(data):
        return Classification(
            is_error=True,
            message=f"{title or ''}, status code: {_text(data.get('status'))}",
        )
    return Classification(is_error=False)


def classify_routing_response(data: Any) -> Classification:
    """
    Classify a response from the distance matrix, directions or navigation
    endpoints.

    Failure iff the response has a non-empty `msg` or an integer
    `status` >= 400. The message is `msg` when present, otherwise the status.
    """
    if not isinstance(data, dict):
        return Classification(is_error=False)

    msg = data.get("msg")
    if msg or _status_failed(data):
        return Classification(is_error=True, message=str(msg or data.get("status")))
    return Classification(is_error=False)
