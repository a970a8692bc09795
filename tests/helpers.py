"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: it exists so reader and end-to-end
tests share one way of faking HTTP response streams.
"""

from __future__ import annotations

from collections.abc import Iterator

import httpx


class ScriptedStream(httpx.SyncByteStream):
    """Byte stream yielding scripted chunks, optionally failing mid-read.

    Records whether it was closed so tests can assert release on every path.
    """

    def __init__(self, chunks: list[bytes], *, fail_after: int | None = None) -> None:
        self.chunks = chunks
        self.fail_after = fail_after
        self.closed = False
        self.chunks_read = 0

    def __iter__(self) -> Iterator[bytes]:
        for index, chunk in enumerate(self.chunks):
            if self.fail_after is not None and index >= self.fail_after:
                raise httpx.ReadError("connection reset by peer")
            self.chunks_read += 1
            yield chunk
        if self.fail_after is not None and self.fail_after >= len(self.chunks):
            raise httpx.ReadError("connection reset by peer")

    def close(self) -> None:
        self.closed = True


def make_response(
    status_code: int,
    body: str | bytes = b"",
    *,
    chunk_size: int | None = None,
    fail_after: int | None = None,
) -> tuple[httpx.Response, ScriptedStream]:
    """Build an unread streaming response and return it with its stream."""
    raw = body.encode("utf-8") if isinstance(body, str) else body
    if chunk_size:
        chunks = [raw[i : i + chunk_size] for i in range(0, len(raw), chunk_size)]
    else:
        chunks = [raw] if raw else []
    stream = ScriptedStream(chunks, fail_after=fail_after)
    return httpx.Response(status_code, stream=stream), stream
