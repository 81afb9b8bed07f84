"""
Base class for API resource models.

Models are dataclasses with snake_case fields. ``from_dict`` accepts the
camelCase JSON the API sends, ``to_dict`` produces the JSON it expects.
"""

from __future__ import annotations

import dataclasses
import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Type, TypeVar, Union, get_args, get_origin, get_type_hints

from catapult.exceptions import SerializationError
from catapult.query import format_datetime, lower_camel_case

M = TypeVar("M", bound="ApiModel")

_FRACTION_RE = re.compile(r"\.(\d{6})\d+")


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp as sent by the API (``Z`` suffix, up to 7 fraction digits)."""
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(r".\1", text)
    return datetime.fromisoformat(text)


def _coerce(tp: Any, value: Any) -> Any:
    if value is None:
        return None
    origin = get_origin(tp)
    if origin is Union:
        args = [a for a in get_args(tp) if a is not type(None)]
        return _coerce(args[0], value) if len(args) == 1 else value
    if origin in (list, List):
        args = get_args(tp)
        return [_coerce(args[0], v) for v in value] if args else list(value)
    if tp is datetime:
        return parse_datetime(value)
    if isinstance(tp, type):
        if issubclass(tp, ApiModel):
            return tp.from_dict(value)
        if issubclass(tp, Enum):
            try:
                return tp(value)
            except ValueError:
                # States added server-side after this release stay as plain strings
                return value
        if tp is bool:
            return value if isinstance(value, bool) else str(value).lower() == "true"
        if tp in (int, float, str):
            return tp(value)
    return value


def to_json_value(value: Any) -> Any:
    """Convert models, datetimes and enums (also nested in lists and dicts) to JSON-ready values."""
    if isinstance(value, ApiModel):
        return value.to_dict()
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    if isinstance(value, dict):
        return {k: to_json_value(v) for k, v in value.items()}
    return value


@dataclasses.dataclass
class ApiModel:
    """Base for all resource dataclasses."""

    @classmethod
    def from_dict(cls: Type[M], data: Dict[str, Any]) -> M:
        """Create a model from a decoded JSON object; unknown keys are ignored."""
        if not isinstance(data, dict):
            raise SerializationError(
                f"Expected a JSON object for {cls.__name__}, got {type(data).__name__}"
            )
        hints = get_type_hints(cls)
        by_json_name = {lower_camel_case(f.name): f for f in dataclasses.fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, raw in data.items():
            f = by_json_name.get(lower_camel_case(key))
            if f is None:
                continue
            try:
                kwargs[f.name] = _coerce(hints.get(f.name, Any), raw)
            except (TypeError, ValueError) as e:
                raise SerializationError(
                    f"Invalid value for {cls.__name__}.{f.name}: {raw!r}"
                ) from e
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the API's JSON shape, omitting unset (None) fields."""
        data: Dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            data[lower_camel_case(f.name)] = to_json_value(value)
        return data
