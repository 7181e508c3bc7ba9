"""Business logic services."""

from sqlalchemy.ext.asyncio import AsyncSession

from deal_monitor.repositories import KeywordRepository, PostRepository, SubredditRepository
from deal_monitor.services.keyword_service import KeywordService
from deal_monitor.services.post_service import PostService
from deal_monitor.services.subreddit_service import SubredditService, normalize_subreddit_name


def get_keyword_service(db: AsyncSession) -> KeywordService:
    """Build a KeywordService bound to ``db``."""
    return KeywordService(KeywordRepository(db))


def get_subreddit_service(db: AsyncSession) -> SubredditService:
    """Build a SubredditService bound to ``db``."""
    return SubredditService(SubredditRepository(db))


def get_post_service(db: AsyncSession) -> PostService:
    """Build a PostService bound to ``db``."""
    return PostService(PostRepository(db))


__all__ = [
    "KeywordService",
    "SubredditService",
    "PostService",
    "normalize_subreddit_name",
    "get_keyword_service",
    "get_subreddit_service",
    "get_post_service",
]
