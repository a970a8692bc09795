"""Per-request results: a ``Success`` or ``Failure`` for every issued request."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, Literal, TypeAlias, TypeVar

from pydantic import BaseModel, ValidationError

from graphbatch.decoding import GraphObject
from graphbatch.errors import ClassifiedError, MalformedResponseError

if TYPE_CHECKING:
    from typing import Never

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


def _status_text(status_code: int | None) -> str:
    return "unknown" if status_code is None else str(status_code)


@dataclass(frozen=True)
class Success(Generic[T]):
    """One request decoded successfully."""

    payload: T
    #: HTTP status of the response this result came from, when known.
    status_code: int | None = None

    ok: Literal[True] = field(default=True, init=False)

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        """Return the decoded payload."""
        return self.payload

    def payload_as(self, model: type[M]) -> M:
        """Cast the payload to a pydantic model class.

        Raises:
            MalformedResponseError: If the payload does not validate.
        """
        if isinstance(self.payload, model):
            return self.payload
        data: Any = self.payload
        if isinstance(data, GraphObject):
            data = data.as_dict()
        elif isinstance(data, BaseModel):
            data = data.model_dump()
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(
                f"payload does not match {model.__name__}",
                hint="Check the requested fields against the model definition.",
            ) from e

    def describe(self) -> str:
        return (
            f"{{Result: status_code: {_status_text(self.status_code)}, "
            f"payload: {self.payload!r}, error: None}}"
        )

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class Failure:
    """One request failed; ``error`` says how."""

    error: ClassifiedError
    status_code: int | None = None

    ok: Literal[False] = field(default=False, init=False)

    @property
    def payload(self) -> None:
        return None

    def unwrap(self) -> Never:
        """Raise the carried error."""
        raise self.error

    def payload_as(self, model: type[BaseModel]) -> None:  # noqa: ARG002
        return None

    def describe(self) -> str:
        hint = f" ({self.error.hint})" if self.error.hint else ""
        return (
            f"{{Result: status_code: {_status_text(self.status_code)}, "
            f"payload: None, error: {type(self.error).__name__}: {self.error}{hint}}}"
        )

    def __str__(self) -> str:
        return self.describe()


Result: TypeAlias = "Success[Any] | Failure"


def broadcast_failure(
    error: ClassifiedError, request_count: int, *, status_code: int | None = None
) -> list[Result]:
    """Report one structural failure identically at every request position."""
    return [Failure(error, status_code=status_code) for _ in range(request_count)]
