"""
Pydantic schemas for request/response validation.

Import all schemas here for easy access.
"""

from deal_monitor.schemas.common import (
    ErrorResponse,
    MessageResponse,
    PageQuery,
    PageResponse,
)
from deal_monitor.schemas.keyword import (
    KeywordCreate,
    KeywordListResponse,
    KeywordQuery,
    KeywordResponse,
    KeywordStatistics,
    KeywordUpdate,
)
from deal_monitor.schemas.post import (
    PostCreate,
    PostListResponse,
    PostQuery,
    PostResponse,
    PostStatistics,
    PostUpdate,
)
from deal_monitor.schemas.subreddit import (
    SubredditCreate,
    SubredditListResponse,
    SubredditQuery,
    SubredditResponse,
    SubredditStatistics,
    SubredditUpdate,
)

__all__ = [
    # Shared
    "ErrorResponse",
    "MessageResponse",
    "PageQuery",
    "PageResponse",
    # Keywords
    "KeywordCreate",
    "KeywordUpdate",
    "KeywordQuery",
    "KeywordResponse",
    "KeywordListResponse",
    "KeywordStatistics",
    # Subreddits
    "SubredditCreate",
    "SubredditUpdate",
    "SubredditQuery",
    "SubredditResponse",
    "SubredditListResponse",
    "SubredditStatistics",
    # Posts
    "PostCreate",
    "PostUpdate",
    "PostQuery",
    "PostResponse",
    "PostListResponse",
    "PostStatistics",
]
