"""
Service dependencies for the API routes.

Each request gets services bound to its own database session:

    @router.get("/{keyword_id}")
    async def get_keyword(keyword_id: str, service: KeywordServiceDep):
        ...
"""

from typing import Annotated

from fastapi import Depends

from deal_monitor.db.deps import DBSession
from deal_monitor.services import (
    KeywordService,
    PostService,
    SubredditService,
    get_keyword_service,
    get_post_service,
    get_subreddit_service,
)


def keyword_service(db: DBSession) -> KeywordService:
    return get_keyword_service(db)


def subreddit_service(db: DBSession) -> SubredditService:
    return get_subreddit_service(db)


def post_service(db: DBSession) -> PostService:
    return get_post_service(db)


KeywordServiceDep = Annotated[KeywordService, Depends(keyword_service)]
SubredditServiceDep = Annotated[SubredditService, Depends(subreddit_service)]
PostServiceDep = Annotated[PostService, Depends(post_service)]
