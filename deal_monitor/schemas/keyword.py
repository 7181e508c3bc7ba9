"""
Pydantic schemas for keywords.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from deal_monitor.models.keyword import KEYWORD_MAX_LENGTH
from deal_monitor.schemas.common import (
    PageQuery,
    PageResponse,
    RequestSchema,
    ResponseSchema,
    SortOrder,
)


# ========================================
# Request Schemas
# ========================================


class KeywordCreate(RequestSchema):
    """Payload for creating a keyword."""

    keyword: str = Field(
        ...,
        min_length=1,
        max_length=KEYWORD_MAX_LENGTH,
        description="Keyword to watch for",
        examples=["gaming laptop", "rtx 4090"]
    )

    is_active: bool = Field(True, description="Whether the keyword is watched")

    @field_validator("keyword")
    @classmethod
    def validate_keyword(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Keyword cannot be empty")
        return v


class KeywordUpdate(RequestSchema):
    """Payload for updating a keyword. Only ``id`` is required."""

    id: int = Field(..., description="Keyword ID")

    keyword: Optional[str] = Field(
        None,
        min_length=1,
        max_length=KEYWORD_MAX_LENGTH
    )

    is_active: Optional[bool] = None

    @field_validator("keyword")
    @classmethod
    def validate_keyword(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Keyword cannot be empty")
        return v


class KeywordQuery(PageQuery):
    """List options for keywords."""

    sort_by: Literal["keyword", "created_at", "updated_at"] = "created_at"
    sort_order: SortOrder = "desc"


# ========================================
# Response Schemas
# ========================================


class KeywordResponse(ResponseSchema):
    id: int
    keyword: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class KeywordListResponse(PageResponse[KeywordResponse]):
    pass


class KeywordStatistics(ResponseSchema):
    total_keywords: int = Field(..., description="Number of stored keywords")
    active_keywords: int = Field(..., description="Keywords currently watched")
    inactive_keywords: int = Field(..., description="Paused keywords")
