"""
Pydantic schemas for posts.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from deal_monitor.models.post import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    is_valid_link,
)
from deal_monitor.schemas.common import (
    PageQuery,
    PageResponse,
    RequestSchema,
    ResponseSchema,
)


def _check_links(links: Optional[List[str]]) -> Optional[List[str]]:
    if links is None:
        return None
    for link in links:
        if not is_valid_link(link):
            raise ValueError(f"Invalid URL format for link: {link!r}")
    return links


# ========================================
# Request Schemas
# ========================================


class PostCreate(RequestSchema):
    """Payload for storing a post."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        examples=["[GPU] RTX 4070 Super - $549"]
    )

    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)

    links: List[str] = Field(
        default_factory=list,
        description="URLs found in the post",
        examples=[["https://example.com/deal"]]
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v

    @field_validator("links")
    @classmethod
    def validate_links(cls, v: List[str]) -> List[str]:
        return _check_links(v)


class PostUpdate(RequestSchema):
    """Payload for updating a post. Only ``id`` is required."""

    id: int = Field(..., description="Post ID")
    title: Optional[str] = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    links: Optional[List[str]] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v

    @field_validator("links")
    @classmethod
    def validate_links(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _check_links(v)


class PostQuery(PageQuery):
    """List options for posts. Results are always newest first."""

    has_links: Optional[bool] = Field(
        None,
        description="True: only posts with links, False: only posts without"
    )


# ========================================
# Response Schemas
# ========================================


class PostResponse(ResponseSchema):
    id: int
    title: str
    description: Optional[str] = None
    links: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    has_links: bool
    link_count: int
    preview_text: str


class PostListResponse(PageResponse[PostResponse]):
    pass


class PostStatistics(ResponseSchema):
    total_posts: int
    posts_with_links: int
    posts_without_links: int
    average_description_length: int = Field(
        ...,
        description="Mean description length in characters, rounded"
    )
