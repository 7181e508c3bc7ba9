"""
Data access layer. One repository per table, all sharing the request's
``AsyncSession``.
"""

from deal_monitor.repositories.base import BaseRepository, Page
from deal_monitor.repositories.keyword_repository import KeywordRepository
from deal_monitor.repositories.post_repository import PostRepository
from deal_monitor.repositories.subreddit_repository import SubredditRepository

__all__ = [
    "BaseRepository",
    "Page",
    "KeywordRepository",
    "SubredditRepository",
    "PostRepository",
]
