"""Decode capability: turn one resolved JSON object into a domain object."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

#: Any callable accepting a JSON object; exceptions it raises are reported as
#: malformed responses for that slot.
ObjectDecoder = Callable[[dict[str, Any]], T]


class GraphObject(BaseModel):
    """Schema-less domain object wrapping one decoded JSON object.

    Every key is preserved as an extra field, so ``GraphObject`` compares equal
    to another built from the same JSON content.

    Example:
        obj = GraphObject.from_json({"id": "123", "name": "Alice"})
        obj.as_dict()["name"]  # "Alice"
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    @classmethod
    def from_json(cls, obj: dict[str, Any]) -> GraphObject:
        """Build a ``GraphObject`` from a parsed JSON object."""
        return cls.model_validate(obj)

    def as_dict(self) -> dict[str, Any]:
        """Return the JSON content as a plain dict."""
        return dict(self.__pydantic_extra__ or {})

    def get(self, key: str, default: Any = None) -> Any:
        return (self.__pydantic_extra__ or {}).get(key, default)


def model_decoder(model: type[M]) -> ObjectDecoder[M]:
    """Return a decoder validating each payload against *model*."""
    return model.model_validate


default_decoder: ObjectDecoder[GraphObject] = GraphObject.from_json
