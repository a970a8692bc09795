"""Split one (possibly batched) response into a result per issued request.

A single request treats the whole body as its answer. A batch of ``N``
requests expects a JSON array of exactly ``N`` items and classifies each item
independently, so one failed item never disturbs its siblings. Structural
failures (unparseable body, wrong shape, HTTP error, read failure) are
reported identically at every position.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from graphbatch._debug_preview import preview_text
from graphbatch._http import BODY_KEY
from graphbatch.classify import classify_item
from graphbatch.config import Config
from graphbatch.decoding import default_decoder
from graphbatch.errors import ClassifiedError, MalformedResponseError
from graphbatch.json_value import kind_of, parse_top_level
from graphbatch.reader import read_body
from graphbatch.result import Failure, broadcast_failure

if TYPE_CHECKING:
    from graphbatch.decoding import ObjectDecoder
    from graphbatch.result import Result

log = logging.getLogger(__name__)


def _check_request_count(request_count: int) -> None:
    if request_count < 1:
        raise ValueError(f"request_count must be >= 1, got {request_count}")


def _broadcast(
    error: ClassifiedError,
    request_count: int,
    *,
    status_code: int | None,
    text: str = "",
    preview_chars: int = 0,
) -> list[Result]:
    preview = preview_text(text, preview_chars)
    log.warning(
        "Failing all %d request(s): %s%s",
        request_count,
        error,
        f" | body: {preview}" if preview else "",
    )
    return broadcast_failure(error, request_count, status_code=status_code)


def _log_item_failure(index: int, result: Result) -> None:
    if isinstance(result, Failure):
        log.debug(
            "Request %d failed: %s: %s", index, type(result.error).__name__, result.error
        )


def demultiplex(
    text: str,
    request_count: int,
    decoder: ObjectDecoder[Any] = default_decoder,
    *,
    status_code: int | None = None,
    config: Config | None = None,
) -> list[Result]:
    """Decode response *text* into exactly ``request_count`` results.

    Args:
        text: Raw response body.
        request_count: Number of requests the response answers (>= 1).
        decoder: Turns each resolved JSON object into a domain object.
        status_code: HTTP status recorded on every result, when known.
        config: Parsing and logging settings.

    Returns:
        Results in original request order.

    Raises:
        ValueError: If ``request_count`` is less than 1.
    """
    _check_request_count(request_count)
    cfg = config or Config()

    try:
        value = parse_top_level(text, allow_nan=cfg.allow_nan)
    except MalformedResponseError as e:
        return _broadcast(
            e,
            request_count,
            status_code=status_code,
            text=text,
            preview_chars=cfg.preview_chars,
        )

    if request_count == 1:
        # The entire body is the one answer; wrap it like a batch item.
        result = classify_item(
            {BODY_KEY: value},
            decoder,
            status_code=status_code,
            allow_nan=cfg.allow_nan,
        )
        _log_item_failure(0, result)
        return [result]

    match value:
        case list() if len(value) == request_count:
            items = value
        case list():
            return _broadcast(
                MalformedResponseError(
                    f"expected {request_count} results, got {len(value)}"
                ),
                request_count,
                status_code=status_code,
                text=text,
                preview_chars=cfg.preview_chars,
            )
        case _:
            return _broadcast(
                MalformedResponseError(
                    f"expected an array of {request_count} results, got {kind_of(value)}"
                ),
                request_count,
                status_code=status_code,
                text=text,
                preview_chars=cfg.preview_chars,
            )

    results: list[Result] = []
    for index, item in enumerate(items):
        result = classify_item(
            item, decoder, status_code=status_code, allow_nan=cfg.allow_nan
        )
        _log_item_failure(index, result)
        results.append(result)
    return results


def decode_response(
    response: httpx.Response,
    request_count: int,
    decoder: ObjectDecoder[Any] = default_decoder,
    *,
    config: Config | None = None,
) -> list[Result]:
    """Read *response* and decode it into one result per issued request.

    HTTP errors and read failures are reported at every position; the
    response is always closed.

    Example:
        with httpx.Client() as client:
            response = client.send(request, stream=True)
            results = decode_response(response, request_count=3)
        for result in results:
            print(result)
    """
    if request_count < 1:
        response.close()
    _check_request_count(request_count)
    cfg = config or Config()
    status = response.status_code

    try:
        text = read_body(response, config=cfg)
    except ClassifiedError as e:
        return _broadcast(e, request_count, status_code=status)
    except (httpx.HTTPError, OSError) as e:
        error = MalformedResponseError(
            f"failed to read response: {e}",
            hint="The connection may have been reset; the request can be retried.",
        )
        error.__cause__ = e
        return _broadcast(error, request_count, status_code=status)

    return demultiplex(text, request_count, decoder, status_code=status, config=cfg)
