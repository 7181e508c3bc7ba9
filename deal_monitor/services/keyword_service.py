"""
Keyword service.

Keywords are trimmed before they are checked for uniqueness or stored, so
``"  gaming laptop "`` and ``"gaming laptop"`` are the same keyword.
"""

from typing import Any, List, Mapping, Optional

from deal_monitor.core.config import settings
from deal_monitor.core.exceptions import DeletionFailedError, DuplicateError, NotFoundError
from deal_monitor.core.logging import get_logger
from deal_monitor.models.keyword import Keyword
from deal_monitor.repositories.base import Page
from deal_monitor.repositories.keyword_repository import KeywordRepository
from deal_monitor.schemas.keyword import (
    KeywordCreate,
    KeywordQuery,
    KeywordStatistics,
    KeywordUpdate,
)
from deal_monitor.services.common import (
    parse_id,
    parse_limit,
    require_search_text,
    validate_payload,
)

logger = get_logger(__name__)

DEFAULT_SEARCH_LIMIT = settings.DEFAULT_SEARCH_LIMIT


class KeywordService:
    """
    Create, list, update and delete watched keywords.

    Example:
        >>> service = KeywordService(KeywordRepository(session))
        >>> keyword = await service.create_keyword({"keyword": "  rtx 4090 "})
        >>> keyword.keyword
        'rtx 4090'
    """

    def __init__(self, repository: KeywordRepository):
        self.repository = repository

    async def create_keyword(self, data: Mapping[str, Any] | KeywordCreate) -> Keyword:
        """
        Store a new keyword.

        Raises:
            ValidationError: payload is malformed
            DuplicateError: the trimmed keyword already exists
        """
        try:
            payload = validate_payload(KeywordCreate, data)
            keyword = payload.keyword.strip()

            if await self.repository.exists(keyword):
                raise DuplicateError("keyword", "keyword", keyword)

            created = await self.repository.create(
                {"keyword": keyword, "is_active": payload.is_active}
            )
            logger.info("keyword_created", keyword_id=created.id, keyword=created.keyword)
            return created
        except Exception as e:
            logger.error("keyword_create_failed", error=str(e))
            raise

    async def get_all_keywords(self, options: Optional[Mapping[str, Any]] = None) -> Page[Keyword]:
        try:
            query = validate_payload(KeywordQuery, options)
            return await self.repository.find_all(**query.model_dump())
        except Exception as e:
            logger.error("keyword_list_failed", error=str(e))
            raise

    async def get_keyword_by_id(self, keyword_id: Any) -> Keyword:
        try:
            entity_id = parse_id(keyword_id, "keyword")
            keyword = await self.repository.find_by_id(entity_id)
            if keyword is None:
                raise NotFoundError("keyword", entity_id)
            return keyword
        except Exception as e:
            logger.error("keyword_get_failed", keyword_id=keyword_id, error=str(e))
            raise

    async def update_keyword(
        self,
        keyword_id: Any,
        data: Mapping[str, Any],
    ) -> Keyword:
        """
        Apply a partial update.

        The duplicate check only runs when the trimmed keyword differs from
        the stored one.
        """
        try:
            entity_id = parse_id(keyword_id, "keyword")
            payload = validate_payload(KeywordUpdate, {**dict(data or {}), "id": entity_id})

            existing = await self.repository.find_by_id(entity_id)
            if existing is None:
                raise NotFoundError("keyword", entity_id)

            patch = payload.model_dump(exclude_unset=True, exclude={"id"})
            if patch.get("keyword") is not None:
                keyword = patch["keyword"].strip()
                if keyword != existing.keyword and await self.repository.exists(keyword):
                    raise DuplicateError("keyword", "keyword", keyword)
                patch["keyword"] = keyword
            else:
                patch.pop("keyword", None)

            if patch.get("is_active") is None:
                patch.pop("is_active", None)

            updated = await self.repository.update(entity_id, patch)
            if updated is None:
                raise NotFoundError("keyword", entity_id)

            logger.info("keyword_updated", keyword_id=entity_id, fields=sorted(patch))
            return updated
        except Exception as e:
            logger.error("keyword_update_failed", keyword_id=keyword_id, error=str(e))
            raise

    async def delete_keyword(self, keyword_id: Any) -> bool:
        try:
            entity_id = parse_id(keyword_id, "keyword")
            existing = await self.repository.find_by_id(entity_id)
            if existing is None:
                raise NotFoundError("keyword", entity_id)

            if not await self.repository.delete(entity_id):
                raise DeletionFailedError("keyword", entity_id)

            logger.info("keyword_deleted", keyword_id=entity_id)
            return True
        except Exception as e:
            logger.error("keyword_delete_failed", keyword_id=keyword_id, error=str(e))
            raise

    async def search_keywords(self, text: Any, limit: Any = DEFAULT_SEARCH_LIMIT) -> List[Keyword]:
        try:
            search_text = require_search_text(text)
            return await self.repository.search_by_text(
                search_text, parse_limit(limit, DEFAULT_SEARCH_LIMIT)
            )
        except Exception as e:
            logger.error("keyword_search_failed", error=str(e))
            raise

    async def get_statistics(self) -> KeywordStatistics:
        try:
            return await self.repository.get_statistics()
        except Exception as e:
            logger.error("keyword_statistics_failed", error=str(e))
            raise
