"""
Subreddit service.

Names are normalized before every uniqueness check, lookup and write:
trimmed, lowercased, and with any leading ``r/`` removed. Normalizing an
already normalized name returns it unchanged.
"""

from typing import Any, List, Mapping, Optional

from deal_monitor.core.exceptions import (
    DeletionFailedError,
    DuplicateError,
    InvalidInputError,
    NotFoundError,
    ValidationError,
)
from deal_monitor.core.logging import get_logger
from deal_monitor.models.subreddit import Subreddit
from deal_monitor.repositories.base import Page
from deal_monitor.repositories.subreddit_repository import SubredditRepository
from deal_monitor.schemas.subreddit import (
    SubredditCreate,
    SubredditQuery,
    SubredditStatistics,
    SubredditUpdate,
)
from deal_monitor.services.common import (
    parse_id,
    parse_limit,
    require_search_text,
    validate_payload,
)

logger = get_logger(__name__)

DEFAULT_SEARCH_LIMIT = 50
SUBREDDIT_PREFIX = "r/"


def normalize_subreddit_name(name: str) -> str:
    """
    Canonical subreddit name.

    >>> normalize_subreddit_name("  r/GameDeals ")
    'gamedeals'
    """
    normalized = name.strip().lower()
    while normalized.startswith(SUBREDDIT_PREFIX):
        normalized = normalized[len(SUBREDDIT_PREFIX):].strip()
    return normalized


class SubredditService:
    """Manage the set of monitored subreddits."""

    def __init__(self, repository: SubredditRepository):
        self.repository = repository

    async def create_subreddit(self, data: Mapping[str, Any] | SubredditCreate) -> Subreddit:
        try:
            payload = validate_payload(SubredditCreate, data)
            name = normalize_subreddit_name(payload.name)
            if not name:
                raise ValidationError("name", "name cannot be empty")

            if await self.repository.exists(name):
                raise DuplicateError("subreddit", "name", name)

            created = await self.repository.create({"name": name})
            logger.info("subreddit_created", subreddit_id=created.id, name=created.name)
            return created
        except Exception as e:
            logger.error("subreddit_create_failed", error=str(e))
            raise

    async def get_all_subreddits(
        self,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Page[Subreddit]:
        try:
            query = validate_payload(SubredditQuery, options).model_dump()
            if query["search"] is not None:
                query["search"] = normalize_subreddit_name(query["search"]) or None
            return await self.repository.find_all(**query)
        except Exception as e:
            logger.error("subreddit_list_failed", error=str(e))
            raise

    async def get_subreddit_by_id(self, subreddit_id: Any) -> Subreddit:
        try:
            entity_id = parse_id(subreddit_id, "subreddit")
            subreddit = await self.repository.find_by_id(entity_id)
            if subreddit is None:
                raise NotFoundError("subreddit", entity_id)
            return subreddit
        except Exception as e:
            logger.error("subreddit_get_failed", subreddit_id=subreddit_id, error=str(e))
            raise

    async def get_subreddit_by_name(self, name: Any) -> Subreddit:
        """Look up a subreddit by any spelling of its name (``r/Deals``, ``deals``)."""
        try:
            if not isinstance(name, str):
                raise InvalidInputError("name", "Invalid subreddit name")
            normalized = normalize_subreddit_name(name)
            if not normalized:
                raise InvalidInputError("name", "Invalid subreddit name")

            subreddit = await self.repository.find_by_name(normalized)
            if subreddit is None:
                raise NotFoundError("subreddit", name, key="name")
            return subreddit
        except Exception as e:
            logger.error("subreddit_get_by_name_failed", name=name, error=str(e))
            raise

    async def update_subreddit(
        self,
        subreddit_id: Any,
        data: Mapping[str, Any],
    ) -> Subreddit:
        try:
            entity_id = parse_id(subreddit_id, "subreddit")
            payload = validate_payload(SubredditUpdate, {**dict(data or {}), "id": entity_id})

            existing = await self.repository.find_by_id(entity_id)
            if existing is None:
                raise NotFoundError("subreddit", entity_id)

            patch: dict[str, Any] = {}
            if payload.name is not None:
                name = normalize_subreddit_name(payload.name)
                if not name:
                    raise ValidationError("name", "name cannot be empty")
                if name != existing.name and await self.repository.exists(name):
                    raise DuplicateError("subreddit", "name", name)
                patch["name"] = name

            updated = await self.repository.update(entity_id, patch)
            if updated is None:
                raise NotFoundError("subreddit", entity_id)

            logger.info("subreddit_updated", subreddit_id=entity_id, name=updated.name)
            return updated
        except Exception as e:
            logger.error("subreddit_update_failed", subreddit_id=subreddit_id, error=str(e))
            raise

    async def delete_subreddit(self, subreddit_id: Any) -> bool:
        try:
            entity_id = parse_id(subreddit_id, "subreddit")
            existing = await self.repository.find_by_id(entity_id)
            if existing is None:
                raise NotFoundError("subreddit", entity_id)

            if not await self.repository.delete(entity_id):
                raise DeletionFailedError("subreddit", entity_id)

            logger.info("subreddit_deleted", subreddit_id=entity_id, name=existing.name)
            return True
        except Exception as e:
            logger.error("subreddit_delete_failed", subreddit_id=subreddit_id, error=str(e))
            raise

    async def search_subreddits(
        self,
        text: Any,
        limit: Any = DEFAULT_SEARCH_LIMIT,
    ) -> List[Subreddit]:
        """Substring search on normalized names. No match is an empty list."""
        try:
            search_text = normalize_subreddit_name(require_search_text(text))
            if not search_text:
                raise InvalidInputError("q", "Search text is required")
            return await self.repository.search_by_name(
                search_text, parse_limit(limit, DEFAULT_SEARCH_LIMIT)
            )
        except Exception as e:
            logger.error("subreddit_search_failed", error=str(e))
            raise

    async def get_statistics(self) -> SubredditStatistics:
        try:
            return await self.repository.get_statistics()
        except Exception as e:
            logger.error("subreddit_statistics_failed", error=str(e))
            raise
