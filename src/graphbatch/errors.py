"""Exception hierarchy for graphbatch."""

from __future__ import annotations

from typing import Any


class GraphBatchError(Exception):
    """Base exception for all graphbatch errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(GraphBatchError):
    """Configuration validation or resolution failed."""


class ClassifiedError(GraphBatchError):
    """A response (or one slot of a batch response) was classified as failed.

    Instances are carried as data inside ``Failure`` results rather than
    raised out of the decoder. Two errors compare equal when their kind,
    message and diagnostic fields match.
    """

    def _identity(self) -> tuple[Any, ...]:
        return (type(self), self.args, self.hint)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClassifiedError):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class TransportError(ClassifiedError):
    """HTTP status >= 400, or an envelope ``code`` outside [200, 300)."""

    def __init__(
        self,
        status_code: int,
        *,
        body: Any = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(f"request failed with status {status_code}", hint=hint)
        self.status_code = status_code
        #: Raw envelope body, kept for diagnostics only.
        self.body = body

    def _identity(self) -> tuple[Any, ...]:
        return (*super()._identity(), self.status_code, self.body)


class ServiceError(ClassifiedError):
    """The service flagged the item as failed via an error-indicator key."""

    def __init__(
        self,
        payload: dict[str, Any] | None = None,
        *,
        hint: str | None = None,
    ) -> None:
        keys = ", ".join(sorted(payload)) if payload else "unknown"
        super().__init__(f"service reported an error ({keys})", hint=hint)
        #: Error-indicator subset of the item; not interpreted further.
        self.payload = payload or {}

    def _identity(self) -> tuple[Any, ...]:
        return (*super()._identity(), self.payload)


class MalformedResponseError(ClassifiedError):
    """Response text could not be parsed or had an unexpected shape."""
