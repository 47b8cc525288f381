# app/core/validation.py
"""
Fail-fast payload validation.

Schemas are pydantic models whose fields are declared in the order they are
checked. Each schema carries a ``MESSAGES`` table mapping a wire field name to
``{error type: message}``; only the first failing field's message is reported.
"""
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound="Schema")


class Schema(BaseModel):
    MESSAGES: ClassVar[dict[str, dict[str, str]]] = {}

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


def message_for(schema: type[Schema], error: dict[str, Any]) -> str:
    """Pick the user-facing message for one pydantic error entry."""
    field = error["loc"][0] if error.get("loc") else None
    messages = schema.MESSAGES.get(field, {})
    err_type = error["type"]
    if err_type == "extra_forbidden":
        return f'"{field}" is not allowed'
    if err_type in messages:
        return messages[err_type]
    # families such as datetime_parsing / datetime_type share one message
    for prefix, message in messages.items():
        if err_type.startswith(prefix):
            return message
    return error["msg"].removeprefix("Value error, ")


def parse_payload(schema: type[SchemaT], data: Any) -> SchemaT:
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        errors = exc.errors()
        raise ValidationError(message_for(schema, errors[0])) from None
