"""
Pydantic schemas for subreddits.

Names may be given in any case and with or without ``r/``; the service
normalizes them after validation.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from deal_monitor.models.subreddit import SUBREDDIT_NAME_MAX_LENGTH
from deal_monitor.schemas.common import (
    PageQuery,
    PageResponse,
    RequestSchema,
    ResponseSchema,
    SortOrder,
)

SUBREDDIT_SEARCH_MAX_LENGTH = 50


class SubredditCreate(RequestSchema):
    """Payload for adding a subreddit to monitor."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=SUBREDDIT_NAME_MAX_LENGTH,
        description="Subreddit name, with or without r/",
        examples=["buildapcsales", "r/GameDeals"]
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name cannot be empty")
        return v


class SubredditUpdate(RequestSchema):
    """Payload for renaming a subreddit."""

    id: int = Field(..., description="Subreddit ID")

    name: Optional[str] = Field(
        None,
        min_length=1,
        max_length=SUBREDDIT_NAME_MAX_LENGTH
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("name cannot be empty")
        return v


class SubredditQuery(PageQuery):
    """List options for subreddits."""

    search: Optional[str] = Field(None, max_length=SUBREDDIT_SEARCH_MAX_LENGTH)
    sort_by: Literal["name", "created_at", "updated_at"] = "name"
    sort_order: SortOrder = "asc"


class SubredditResponse(ResponseSchema):
    id: int
    name: str
    display_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SubredditListResponse(PageResponse[SubredditResponse]):
    pass


class SubredditStatistics(ResponseSchema):
    total_subreddits: int = Field(..., description="Number of monitored subreddits")
