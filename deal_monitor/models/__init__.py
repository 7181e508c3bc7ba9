"""
Database Models

Importing this package registers every table on ``Base.metadata``, which
``init_db()`` and Alembic rely on:

    from deal_monitor.models import Keyword, Post, Subreddit
"""

from deal_monitor.models.keyword import Keyword
from deal_monitor.models.post import LinkList, Post
from deal_monitor.models.subreddit import Subreddit

__all__ = [
    "Keyword",
    "Subreddit",
    "Post",
    "LinkList",
]
