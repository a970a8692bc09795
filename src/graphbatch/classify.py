"""Per-item classification of one request's JSON answer.

Rules run in a fixed order and the first match wins:

1. Not a JSON object: ``MalformedResponseError``.
2. Any error-indicator key (``error``, ``error_code``, ``error_msg``,
   ``error_reason``): ``ServiceError``, even if a ``code`` is also present.
3. A ``code`` outside [200, 300): ``TransportError``.
4. Otherwise the payload is ``body`` (re-parsed when it is a string) or the
   item itself, handed to the decoder.

Classification returns a ``Result``; data-driven failures are never raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from graphbatch._http import BODY_KEY, CODE_KEY, ERROR_KEYS, is_success_status
from graphbatch.decoding import default_decoder
from graphbatch.errors import MalformedResponseError, ServiceError, TransportError
from graphbatch.json_value import JSONObject, as_status_code, kind_of, parse_json
from graphbatch.result import Failure, Success

if TYPE_CHECKING:
    from graphbatch.decoding import ObjectDecoder
    from graphbatch.result import Result


def status_error(item: JSONObject) -> TransportError | None:
    """Return a ``TransportError`` when *item* carries a non-2xx ``code``.

    A missing or unreadable ``code`` is not an error.
    """
    if CODE_KEY not in item:
        return None
    code = as_status_code(item[CODE_KEY])
    if code is None or is_success_status(code):
        return None
    return TransportError(code, body=item.get(BODY_KEY))


def service_error(item: JSONObject) -> ServiceError | None:
    """Return a ``ServiceError`` when *item* has any error-indicator key."""
    flagged = {key: item[key] for key in ERROR_KEYS if key in item}
    if not flagged:
        return None
    return ServiceError(flagged)


def _resolve_payload(
    item: JSONObject, *, allow_nan: bool
) -> JSONObject | MalformedResponseError:
    if BODY_KEY not in item:
        return item

    match item[BODY_KEY]:
        case dict() as body:
            return body
        case str() as text:
            try:
                parsed = parse_json(text, allow_nan=allow_nan)
            except MalformedResponseError as e:
                return e
            match parsed:
                case dict():
                    return parsed
                case _:
                    return MalformedResponseError(
                        f"unexpected {kind_of(parsed)} in encoded response body"
                    )
        case other:
            return MalformedResponseError(f"unexpected {kind_of(other)} in response body")


def classify_item(
    item: Any,
    decoder: ObjectDecoder[Any] = default_decoder,
    *,
    status_code: int | None = None,
    allow_nan: bool = False,
) -> Result:
    """Classify one request's answer into a ``Success`` or ``Failure``.

    Args:
        item: Parsed JSON value for a single request.
        decoder: Turns the resolved JSON object into a domain object.
        status_code: HTTP status recorded on the returned result.
        allow_nan: Accept ``NaN``/``Infinity`` when re-parsing string bodies.
    """
    match item:
        case dict():
            pass
        case _:
            return Failure(
                MalformedResponseError(
                    f"expected a JSON object, got {kind_of(item)}"
                ),
                status_code=status_code,
            )

    error = service_error(item) or status_error(item)
    if error is not None:
        return Failure(error, status_code=status_code)

    payload = _resolve_payload(item, allow_nan=allow_nan)
    if isinstance(payload, MalformedResponseError):
        return Failure(payload, status_code=status_code)

    try:
        decoded = decoder(payload)
    except Exception as e:
        failure = MalformedResponseError(f"could not decode response object: {e}")
        failure.__cause__ = e
        return Failure(failure, status_code=status_code)
    return Success(decoded, status_code=status_code)
