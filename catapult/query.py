"""
Query string encoding for Catapult API requests.

Query objects are dataclasses whose fields enumerate the options a
resource recognizes, in the order they are sent. Plain mappings are
accepted too and keep their insertion order.
"""

import dataclasses
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple
from urllib.parse import quote


def lower_camel_case(name: str) -> str:
    """
    Convert a field name to the API's lowerCamelCase.

    ``created_date`` -> ``createdDate``, ``CreatedDate`` -> ``createdDate``.
    A trailing underscore (``from_``) is dropped.
    """
    name = name.rstrip("_")
    if not name:
        return name
    head, *rest = name.split("_")
    camel = head[:1].lower() + head[1:]
    for part in rest:
        if part:
            camel += part[:1].upper() + part[1:]
    return camel


def format_datetime(value: datetime) -> str:
    """UTC ISO-8601 with seven fractional digits, e.g. ``2023-01-01T00:00:00.0000000Z``."""
    # Naive datetimes are interpreted as local time
    utc = value.astimezone(timezone.utc)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond:06d}0Z"


def format_query_value(value: Any) -> str:
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _iter_items(query: Any) -> Iterable[Tuple[str, Any]]:
    """Yield ``(parameter name, value)`` pairs in the order they are sent."""
    if dataclasses.is_dataclass(query) and not isinstance(query, type):
        for f in dataclasses.fields(query):
            yield lower_camel_case(f.name), getattr(query, f.name)
    elif isinstance(query, Mapping):
        # Mapping keys are already API names; only the first character is lowered
        for key, value in query.items():
            key = str(key)
            yield key[:1].lower() + key[1:], value
    else:
        raise TypeError(
            f"Query must be a dataclass instance or a mapping, not {type(query).__name__}"
        )


def encode_query(query: Optional[Any]) -> str:
    """
    Encode a query object as a url query string.

    None values, values that format to an empty string and unnamed
    parameters are omitted.
    Values are percent-encoded, leaving only unreserved characters.

    Returns:
        The encoded query (without leading ``?``), or ``""`` for None.
    """
    if query is None:
        return ""
    pairs = []
    for name, value in _iter_items(query):
        if not name or value is None:
            continue
        text = format_query_value(value)
        if not text:
            continue
        pairs.append(f"{name}={quote(text, safe='')}")
    return "&".join(pairs)
