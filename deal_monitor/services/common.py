"""
Helpers shared by the entity services: payload validation, id parsing and
search argument checks.
"""

from collections.abc import Mapping
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel as PydanticModel
from pydantic import ValidationError as PydanticValidationError

from deal_monitor.core.exceptions import InvalidIdError, InvalidInputError, ValidationError
from deal_monitor.schemas.common import MAX_PAGE_SIZE, SEARCH_MAX_LENGTH

SchemaT = TypeVar("SchemaT", bound=PydanticModel)


def validate_payload(schema: Type[SchemaT], data: Any) -> SchemaT:
    """
    Validate ``data`` against ``schema``.

    Raises ``ValidationError`` naming the first offending field.
    """
    if isinstance(data, schema):
        return data
    if isinstance(data, PydanticModel):
        data = data.model_dump(exclude_unset=True)
    if data is None:
        data = {}

    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        message = first.get("msg", "invalid value")
        # pydantic prefixes custom validator messages
        message = message.removeprefix("Value error, ")
        raise ValidationError(field, message) from e


def parse_id(value: Any, entity: str) -> int:
    """Coerce a path/argument id to a positive int or raise ``InvalidIdError``."""
    if value is None or isinstance(value, bool):
        raise InvalidIdError(entity, value)

    if isinstance(value, int):
        entity_id = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdecimal():
        entity_id = int(value.strip())
    else:
        raise InvalidIdError(entity, value)

    if entity_id < 1:
        raise InvalidIdError(entity, value)
    return entity_id


def require_search_text(text: Any) -> str:
    """Trimmed search text; blank or oversized text is rejected."""
    if not isinstance(text, str) or not text.strip():
        raise InvalidInputError("q", "Search text is required")
    text = text.strip()
    if len(text) > SEARCH_MAX_LENGTH:
        raise InvalidInputError(
            "q", f"Search text must be at most {SEARCH_MAX_LENGTH} characters"
        )
    return text


def parse_limit(value: Any, default: int) -> int:
    """Result cap for searches, between 1 and ``MAX_PAGE_SIZE``."""
    if value is None or value == "":
        return default
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise InvalidInputError("limit", f"Invalid limit: {value!r}") from None
    if isinstance(value, bool) or limit < 1 or limit > MAX_PAGE_SIZE:
        raise InvalidInputError("limit", f"Limit must be between 1 and {MAX_PAGE_SIZE}")
    return limit


def optional_fields(data: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Copy of ``data`` without ``None`` values (unset query parameters)."""
    return {key: value for key, value in (data or {}).items() if value is not None}
