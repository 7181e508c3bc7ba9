"""
Post service.

Titles are trimmed and must be unique across posts. Descriptions are trimmed
and a blank description is stored as ``NULL``.
"""

from typing import Any, List, Mapping, Optional

from deal_monitor.core.config import settings
from deal_monitor.core.exceptions import DeletionFailedError, DuplicateError, NotFoundError
from deal_monitor.core.logging import get_logger
from deal_monitor.models.post import Post
from deal_monitor.repositories.base import Page
from deal_monitor.repositories.post_repository import PostRepository
from deal_monitor.schemas.post import PostCreate, PostQuery, PostStatistics, PostUpdate
from deal_monitor.services.common import (
    parse_id,
    parse_limit,
    require_search_text,
    validate_payload,
)

logger = get_logger(__name__)

DEFAULT_SEARCH_LIMIT = settings.DEFAULT_SEARCH_LIMIT


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    return description.strip() or None


class PostService:
    """Store and query posts that matched the monitoring rules."""

    def __init__(self, repository: PostRepository):
        self.repository = repository

    async def create_post(self, data: Mapping[str, Any] | PostCreate) -> Post:
        try:
            payload = validate_payload(PostCreate, data)
            title = payload.title.strip()

            if await self.repository.exists_by_title(title):
                raise DuplicateError("post", "title", title)

            created = await self.repository.create(
                {
                    "title": title,
                    "description": _clean_description(payload.description),
                    "links": list(payload.links),
                }
            )
            logger.info("post_created", post_id=created.id, link_count=created.link_count)
            return created
        except Exception as e:
            logger.error("post_create_failed", error=str(e))
            raise

    async def get_all_posts(self, options: Optional[Mapping[str, Any]] = None) -> Page[Post]:
        try:
            query = validate_payload(PostQuery, options)
            return await self.repository.find_all(**query.model_dump())
        except Exception as e:
            logger.error("post_list_failed", error=str(e))
            raise

    async def get_post_by_id(self, post_id: Any) -> Post:
        try:
            entity_id = parse_id(post_id, "post")
            post = await self.repository.find_by_id(entity_id)
            if post is None:
                raise NotFoundError("post", entity_id)
            return post
        except Exception as e:
            logger.error("post_get_failed", post_id=post_id, error=str(e))
            raise

    async def update_post(self, post_id: Any, data: Mapping[str, Any]) -> Post:
        """
        Apply a partial update.

        ``description`` may be set to ``null`` to clear it; ``links`` replaces
        the whole list.
        """
        try:
            entity_id = parse_id(post_id, "post")
            payload = validate_payload(PostUpdate, {**dict(data or {}), "id": entity_id})

            existing = await self.repository.find_by_id(entity_id)
            if existing is None:
                raise NotFoundError("post", entity_id)

            patch = payload.model_dump(exclude_unset=True, exclude={"id"})

            if patch.get("title") is not None:
                title = patch["title"].strip()
                if title != existing.title and await self.repository.exists_by_title(title):
                    raise DuplicateError("post", "title", title)
                patch["title"] = title
            else:
                patch.pop("title", None)

            if "description" in patch:
                patch["description"] = _clean_description(patch["description"])

            if "links" in patch:
                patch["links"] = list(patch["links"] or [])

            updated = await self.repository.update(entity_id, patch)
            if updated is None:
                raise NotFoundError("post", entity_id)

            logger.info("post_updated", post_id=entity_id, fields=sorted(patch))
            return updated
        except Exception as e:
            logger.error("post_update_failed", post_id=post_id, error=str(e))
            raise

    async def delete_post(self, post_id: Any) -> bool:
        try:
            entity_id = parse_id(post_id, "post")
            existing = await self.repository.find_by_id(entity_id)
            if existing is None:
                raise NotFoundError("post", entity_id)

            if not await self.repository.delete(entity_id):
                raise DeletionFailedError("post", entity_id)

            logger.info("post_deleted", post_id=entity_id)
            return True
        except Exception as e:
            logger.error("post_delete_failed", post_id=post_id, error=str(e))
            raise

    async def search_posts(self, text: Any, limit: Any = DEFAULT_SEARCH_LIMIT) -> List[Post]:
        """Substring search over title and description, newest first."""
        try:
            search_text = require_search_text(text)
            return await self.repository.search_by_text(
                search_text, parse_limit(limit, DEFAULT_SEARCH_LIMIT)
            )
        except Exception as e:
            logger.error("post_search_failed", error=str(e))
            raise

    async def get_posts_with_links(self, limit: Any = DEFAULT_SEARCH_LIMIT) -> List[Post]:
        try:
            posts = await self.repository.find_posts_with_links(
                parse_limit(limit, DEFAULT_SEARCH_LIMIT)
            )
            logger.info("posts_with_links_found", count=len(posts))
            return posts
        except Exception as e:
            logger.error("posts_with_links_failed", error=str(e))
            raise

    async def get_statistics(self) -> PostStatistics:
        try:
            return await self.repository.get_statistics()
        except Exception as e:
            logger.error("post_statistics_failed", error=str(e))
            raise
