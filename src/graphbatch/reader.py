"""Read an HTTP response body into text.

Error statuses are wrapped in the same ``{code, body}`` envelope used by batch
items, so one status check serves both the outer response and inner items.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graphbatch._http import BODY_KEY, CODE_KEY, ERROR_STATUS_THRESHOLD
from graphbatch.classify import status_error
from graphbatch.config import Config
from graphbatch.errors import MalformedResponseError

if TYPE_CHECKING:
    import httpx

log = logging.getLogger(__name__)


def _read_bytes(response: httpx.Response, limit: int | None) -> bytes:
    chunks: list[bytes] = []
    total = 0
    for chunk in response.iter_bytes():
        total += len(chunk)
        if limit is not None and total > limit:
            raise MalformedResponseError(
                f"response body exceeds {limit} bytes",
                hint="Raise Config.max_body_bytes or GRAPHBATCH_MAX_BODY_BYTES.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


def read_body(response: httpx.Response, *, config: Config | None = None) -> str:
    """Read *response* fully and return its text.

    The response is closed on every exit path.

    Raises:
        TransportError: If the HTTP status is 400 or above.
        MalformedResponseError: If the body exceeds ``config.max_body_bytes``.
        httpx.HTTPError: If the stream fails mid-read.
    """
    cfg = config or Config()
    status = response.status_code
    try:
        raw = _read_bytes(response, cfg.max_body_bytes)
    finally:
        response.close()

    text = raw.decode(cfg.encoding, errors="replace")
    log.debug("Read %d bytes (status=%d)", len(raw), status)

    if status >= ERROR_STATUS_THRESHOLD:
        error = status_error({CODE_KEY: status, BODY_KEY: text})
        if error is not None:
            raise error
    return text
