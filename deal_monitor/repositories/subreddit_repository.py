"""
Subreddit repository. Names are stored already normalized, so every lookup
here is an exact match.
"""

from typing import List, Optional

from sqlalchemy import func, select

from deal_monitor.models.subreddit import Subreddit
from deal_monitor.repositories.base import LIKE_ESCAPE, BaseRepository, Page, like_pattern
from deal_monitor.schemas.subreddit import SubredditStatistics


class SubredditRepository(BaseRepository[Subreddit]):
    model = Subreddit
    entity_name = "subreddit"
    unique_field = "name"

    async def find_by_name(self, name: str) -> Optional[Subreddit]:
        return await self._find_one_by(Subreddit.name, name, "find subreddit by name")

    async def exists(self, name: str) -> bool:
        return await self._exists_by(Subreddit.name, name)

    async def search_by_name(self, text: str, limit: int = 50) -> List[Subreddit]:
        return await self._search(
            Subreddit.name.ilike(like_pattern(text), escape=LIKE_ESCAPE),
            [Subreddit.name.asc(), Subreddit.id.asc()],
            limit,
        )

    async def find_all(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> Page[Subreddit]:
        filters = []
        search = (search or "").strip()
        if search:
            filters.append(Subreddit.name.ilike(like_pattern(search), escape=LIKE_ESCAPE))
        return await self._paginate(filters, self._order_by(sort_by, sort_order), page, limit)

    async def get_statistics(self) -> SubredditStatistics:
        async with self._storage_errors("get subreddit statistics"):
            total = (await self.db.execute(select(func.count(Subreddit.id)))).scalar_one()
        return SubredditStatistics(total_subreddits=int(total or 0))
