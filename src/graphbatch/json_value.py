"""Generic JSON values and strict parsing.

Values are plain Python containers; shape decisions are made with ``match``
statements over the six RFC 8259 kinds rather than ad hoc downcasts.
"""

from __future__ import annotations

import json
import math
from typing import Any, Literal, TypeAlias

from graphbatch.errors import MalformedResponseError

JSONValue: TypeAlias = (
    "dict[str, JSONValue] | list[JSONValue] | str | int | float | bool | None"
)
JSONObject: TypeAlias = "dict[str, JSONValue]"

JSONKind = Literal["object", "array", "string", "number", "boolean", "null"]

_MAX_CODE_DIGITS = 10


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard JSON constant {token!r}")


def parse_json(text: str, *, allow_nan: bool = False) -> JSONValue:
    """Parse *text* as a single JSON value.

    Raises:
        MalformedResponseError: On syntax errors, empty input, or (unless
            ``allow_nan``) the ``NaN``/``Infinity`` extensions.
    """
    if not text.strip():
        raise MalformedResponseError("empty response body")
    try:
        if allow_nan:
            return json.loads(text)
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise MalformedResponseError(f"invalid JSON: {e}") from e


def parse_top_level(text: str, *, allow_nan: bool = False) -> JSONValue:
    """Parse a whole response body.

    A bare ``true``/``false`` body has no defined meaning and is reported the
    same way as a syntax error.
    """
    value = parse_json(text, allow_nan=allow_nan)
    match value:
        case bool():
            raise MalformedResponseError(
                f"unsupported top-level boolean response: {text.strip()}"
            )
        case _:
            return value


def kind_of(value: Any) -> JSONKind:
    """Return the JSON kind name of a parsed value."""
    match value:
        case None:
            return "null"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case list():
            return "array"
        case dict():
            return "object"
        case _:
            raise TypeError(f"not a JSON value: {type(value).__name__}")


def as_status_code(value: Any) -> int | None:
    """Coerce an envelope ``code`` field to an int, or None if unreadable."""
    match value:
        case bool():
            return None
        case int():
            return value
        case float() if math.isfinite(value):
            return int(value)
        case str() if value.strip().isdecimal():
            digits = value.strip()
            # Longer strings are not status codes and may exceed the int
            # conversion limit.
            if len(digits) > _MAX_CODE_DIGITS:
                return None
            return int(digits)
        case _:
            return None
