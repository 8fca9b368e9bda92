"""Shared schema pieces: camelCase base model, pagination envelope, input parsing."""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from app.domain.exceptions import FieldError, ValidationException

ModelT = TypeVar("ModelT", bound=BaseModel)


class CamelModel(BaseModel):
    """API models use camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationResponse(CamelModel):
    current: int
    limit: int
    total: int
    pages: int


def _api_field(model: type[BaseModel], loc: tuple[Any, ...]) -> str:
    if not loc:
        return "body"
    key = str(loc[0])
    field = model.model_fields.get(key)
    if field is not None and field.alias:
        return field.alias
    return key


def _message(error: Any) -> str:
    msg = str(error.get("msg", "Invalid value"))
    return msg.removeprefix("Value error, ")


def parse_input(model: type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """Validate request data; raise ValidationException listing every failed field."""
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        errors = [
            FieldError(field=_api_field(model, tuple(e["loc"])), message=_message(e))
            for e in exc.errors()
        ]
        raise ValidationException("Data yang dimasukkan tidak valid", errors=errors) from exc
