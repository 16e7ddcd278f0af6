from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, PlainSerializer
from pydantic.config import ConfigDict


def to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class BaseSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenSchema(BaseSchema):
    """Derived values that callers must not mutate after calculation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# Decimal inside, number outside: serialize to a JSON number instead of a string.
DecimalNumber = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
