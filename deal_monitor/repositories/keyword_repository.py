"""
Keyword repository.
"""

from typing import List, Optional

from sqlalchemy import case, func, select

from deal_monitor.models.keyword import Keyword
from deal_monitor.repositories.base import LIKE_ESCAPE, BaseRepository, Page, like_pattern
from deal_monitor.schemas.keyword import KeywordStatistics


class KeywordRepository(BaseRepository[Keyword]):
    model = Keyword
    entity_name = "keyword"
    unique_field = "keyword"

    async def find_by_keyword(self, keyword: str) -> Optional[Keyword]:
        """Exact (case-sensitive) lookup."""
        return await self._find_one_by(Keyword.keyword, keyword, "find keyword by text")

    async def exists(self, keyword: str) -> bool:
        return await self._exists_by(Keyword.keyword, keyword)

    async def search_by_text(self, text: str, limit: int = 20) -> List[Keyword]:
        """Case-insensitive substring match, newest first."""
        return await self._search(
            Keyword.keyword.ilike(like_pattern(text), escape=LIKE_ESCAPE),
            [Keyword.created_at.desc(), Keyword.id.desc()],
            limit,
        )

    async def find_all(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Page[Keyword]:
        filters = []
        search = (search or "").strip()
        if search:
            filters.append(Keyword.keyword.ilike(like_pattern(search), escape=LIKE_ESCAPE))
        return await self._paginate(filters, self._order_by(sort_by, sort_order), page, limit)

    async def get_statistics(self) -> KeywordStatistics:
        async with self._storage_errors("get keyword statistics"):
            result = await self.db.execute(
                select(
                    func.count(Keyword.id),
                    func.count(case((Keyword.is_active.is_(True), 1))),
                )
            )
            total, active = result.one()

        total = int(total or 0)
        active = int(active or 0)
        return KeywordStatistics(
            total_keywords=total,
            active_keywords=active,
            inactive_keywords=total - active,
        )
