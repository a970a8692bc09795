"""Configuration: frozen Config with validation and environment resolution."""

from __future__ import annotations

import codecs
from dataclasses import dataclass
import os
from typing import Any

from graphbatch.errors import ConfigurationError

_ENV_PREFIX = "GRAPHBATCH_"
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class Config:
    """Immutable settings for reading and demultiplexing responses.

    Defaults match the remote service's conventions, so most callers never
    construct one explicitly.

    Example:
        config = Config.from_env(max_body_bytes=10_000_000)
        # GRAPHBATCH_* environment variables fill the remaining fields
    """

    #: Text encoding used to decode response bytes; undecodable bytes are replaced.
    encoding: str = "utf-8"
    #: Upper bound on bytes read from one response; *None* means unbounded.
    max_body_bytes: int | None = None
    #: Accept the non-standard ``NaN``/``Infinity`` tokens when parsing.
    allow_nan: bool = False
    #: Characters of response body included in log previews; 0 disables them.
    preview_chars: int = 200

    def __post_init__(self) -> None:
        """Validate configuration values."""
        try:
            codec = codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigurationError(
                f"Unknown encoding: {self.encoding!r}",
                hint="Use a Python codec name such as 'utf-8'.",
            ) from e
        if not getattr(codec, "_is_text_encoding", True):
            raise ConfigurationError(
                f"Not a text encoding: {self.encoding!r}",
                hint="Codecs such as 'base64' or 'rot13' cannot decode bytes to text.",
            )

        if self.max_body_bytes is not None and self.max_body_bytes < 1:
            raise ConfigurationError(
                f"max_body_bytes must be ≥ 1 or None, got {self.max_body_bytes}",
                hint="Pass None to read response bodies without a size limit.",
            )
        if self.preview_chars < 0:
            raise ConfigurationError(
                f"preview_chars must be ≥ 0, got {self.preview_chars}",
                hint="This controls how much of a body is logged (0 disables previews).",
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> Config:
        """Build a Config from ``GRAPHBATCH_*`` variables, then apply *overrides*.

        A project ``.env`` file is loaded first without overriding variables
        already present in the process environment.
        """
        from dotenv import load_dotenv

        load_dotenv()

        values: dict[str, Any] = {}
        encoding = os.environ.get(f"{_ENV_PREFIX}ENCODING")
        if encoding:
            values["encoding"] = encoding.strip()
        max_body = os.environ.get(f"{_ENV_PREFIX}MAX_BODY_BYTES")
        if max_body is not None and max_body.strip():
            values["max_body_bytes"] = _parse_int("MAX_BODY_BYTES", max_body)
        allow_nan = os.environ.get(f"{_ENV_PREFIX}ALLOW_NAN")
        if allow_nan is not None:
            values["allow_nan"] = _parse_bool("ALLOW_NAN", allow_nan)
        preview = os.environ.get(f"{_ENV_PREFIX}PREVIEW_CHARS")
        if preview is not None and preview.strip():
            values["preview_chars"] = _parse_int("PREVIEW_CHARS", preview)

        values.update(overrides)
        return cls(**values)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ConfigurationError(
            f"{_ENV_PREFIX}{name} must be an integer, got {raw!r}",
            hint=f"Unset {_ENV_PREFIX}{name} or set it to a whole number.",
        ) from e


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"{_ENV_PREFIX}{name} must be a boolean, got {raw!r}",
        hint="Use one of: 1/0, true/false, yes/no, on/off.",
    )
