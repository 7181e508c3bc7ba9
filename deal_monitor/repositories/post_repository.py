"""
Post repository.

A post has links when its stored ``links`` text parses to a non-empty list.
Link filters classify rows with the same parser the ``links`` column uses on
read, so NULL, ``[]`` and unparsable text all count as "no links".
"""

import math
from typing import List, Optional

from sqlalchemy import ColumnElement, Text, func, or_, select, type_coerce

from deal_monitor.models.post import Post, parse_links
from deal_monitor.repositories.base import LIKE_ESCAPE, BaseRepository, Page, like_pattern
from deal_monitor.schemas.post import PostStatistics

_raw_links = type_coerce(Post.links, Text)

NEWEST_FIRST = [Post.created_at.desc(), Post.id.desc()]


def _round_half_up(value) -> int:
    if value is None:
        return 0
    return int(math.floor(float(value) + 0.5))


class PostRepository(BaseRepository[Post]):
    model = Post
    entity_name = "post"
    unique_field = "title"

    async def _ids_with_links(self) -> List[int]:
        """IDs of posts whose stored links read back as a non-empty list."""
        async with self._storage_errors("classify post links"):
            result = await self.db.execute(
                select(Post.id, _raw_links).where(_raw_links.isnot(None), _raw_links != "")
            )
            rows = result.all()
        return [post_id for post_id, raw in rows if parse_links(raw)]

    async def _links_filter(self, has_links: bool) -> ColumnElement:
        ids = await self._ids_with_links()
        return Post.id.in_(ids) if has_links else Post.id.not_in(ids)

    async def find_by_title(self, title: str) -> Optional[Post]:
        return await self._find_one_by(Post.title, title, "find post by title")

    async def exists_by_title(self, title: str) -> bool:
        return await self._exists_by(Post.title, title)

    async def search_by_text(self, text: str, limit: int = 20) -> List[Post]:
        """Substring match on title or description, newest first."""
        pattern = like_pattern(text)
        return await self._search(
            or_(
                Post.title.ilike(pattern, escape=LIKE_ESCAPE),
                Post.description.ilike(pattern, escape=LIKE_ESCAPE),
            ),
            NEWEST_FIRST,
            limit,
        )

    async def find_posts_with_links(self, limit: int = 20) -> List[Post]:
        return await self._search(await self._links_filter(True), NEWEST_FIRST, limit)

    async def find_all(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        has_links: Optional[bool] = None,
    ) -> Page[Post]:
        filters = []
        search = (search or "").strip()
        if search:
            pattern = like_pattern(search)
            filters.append(
                or_(
                    Post.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Post.description.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        if has_links is not None:
            filters.append(await self._links_filter(has_links))
        return await self._paginate(filters, NEWEST_FIRST, page, limit)

    async def get_statistics(self) -> PostStatistics:
        async with self._storage_errors("get post statistics"):
            result = await self.db.execute(
                select(
                    func.count(Post.id),
                    func.avg(func.length(Post.description)),
                )
            )
            total, avg_length = result.one()

        total = int(total or 0)
        with_links = len(await self._ids_with_links())
        return PostStatistics(
            total_posts=total,
            posts_with_links=with_links,
            posts_without_links=total - with_links,
            average_description_length=_round_half_up(avg_length),
        )
