"""graphbatch: decode batched API responses into one result per request.

Public API:
    - decode_response(): Read an httpx response and demultiplex it
    - demultiplex(): Demultiplex raw response text
    - Success / Failure: Per-request results
    - Config: Reader and parser settings
"""

from __future__ import annotations

import logging

from graphbatch.classify import classify_item
from graphbatch.config import Config
from graphbatch.decoding import GraphObject, ObjectDecoder, model_decoder
from graphbatch.demux import decode_response, demultiplex
from graphbatch.errors import (
    ClassifiedError,
    ConfigurationError,
    GraphBatchError,
    MalformedResponseError,
    ServiceError,
    TransportError,
)
from graphbatch.reader import read_body
from graphbatch.result import Failure, Result, Success, broadcast_failure

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("graphbatch")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("graphbatch").addHandler(logging.NullHandler())

__all__ = [
    "ClassifiedError",
    "Config",
    "ConfigurationError",
    "Failure",
    "GraphBatchError",
    "GraphObject",
    "MalformedResponseError",
    "ObjectDecoder",
    "Result",
    "ServiceError",
    "Success",
    "TransportError",
    "broadcast_failure",
    "classify_item",
    "decode_response",
    "demultiplex",
    "model_decoder",
    "read_body",
]
