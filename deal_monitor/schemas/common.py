"""
Shared schema building blocks.

Request models accept both ``snake_case`` and ``camelCase`` field names and
reject unknown fields. Response models serialize with camelCase aliases.
"""

from typing import Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
SEARCH_MAX_LENGTH = 255

SortOrder = Literal["asc", "desc"]

T = TypeVar("T")


class RequestSchema(BaseModel):
    """Base for create/update/query payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class ResponseSchema(BaseModel):
    """Base for API responses."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PageQuery(RequestSchema):
    """Pagination and free-text search shared by every list endpoint."""

    page: int = Field(DEFAULT_PAGE, ge=1, description="Page number (1-based)")
    limit: int = Field(
        DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Items per page"
    )
    search: Optional[str] = Field(
        None,
        max_length=SEARCH_MAX_LENGTH,
        description="Case-insensitive substring filter"
    )


class PageResponse(ResponseSchema, Generic[T]):
    """One page of results plus totals for the whole filtered set."""

    items: List[T] = Field(..., description="Items on this page")
    total: int = Field(..., description="Total matching items")
    page: int = Field(..., description="Current page number")
    limit: int = Field(..., description="Items per page")
    pages: int = Field(..., description="Total number of pages")


class MessageResponse(ResponseSchema):
    """Generic message response."""

    message: str
    success: bool = True


class ErrorDetail(ResponseSchema):
    code: str
    message: str


class ErrorResponse(ResponseSchema):
    """Standard error response body."""

    error: ErrorDetail
