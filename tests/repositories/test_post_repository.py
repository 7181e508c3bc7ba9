"""
Post repository tests against an in-memory SQLite database.
"""

import pytest
from sqlalchemy import text

from deal_monitor.repositories.post_repository import PostRepository


async def seed_posts(repository: PostRepository) -> dict:
    posts = {
        "two_links": await repository.create(
            {
                "title": "SSD sale",
                "description": "Two retailers",
                "links": ["https://a.example/ssd", "https://b.example/ssd"],
            }
        ),
        "no_links": await repository.create(
            {"title": "Monitor sale", "description": "Ask in store", "links": []}
        ),
        "no_description": await repository.create(
            {"title": "GPU restock", "links": ["https://c.example/gpu"]}
        ),
    }
    return posts


class TestPostRepository:

    @pytest.mark.asyncio
    async def test_links_round_trip_as_list(self, post_repository, db_session):
        created = await post_repository.create(
            {"title": "Deal", "links": ["https://a.example", "https://b.example"]}
        )

        raw = (
            await db_session.execute(text("SELECT links FROM posts WHERE id = :id"), {"id": created.id})
        ).scalar_one()

        assert raw == '["https://a.example","https://b.example"]'
        assert created.links == ["https://a.example", "https://b.example"]
        assert created.has_links is True

    @pytest.mark.asyncio
    async def test_unparsable_links_read_as_empty(self, post_repository, db_session):
        created = await post_repository.create({"title": "Broken", "links": []})
        await db_session.execute(
            text("UPDATE posts SET links = 'not json, at all' WHERE id = :id"), {"id": created.id}
        )
        await db_session.commit()

        post = await post_repository.find_by_id(created.id)

        assert post.links == []

    @pytest.mark.asyncio
    async def test_comma_separated_urls_are_recovered(self, post_repository, db_session):
        created = await post_repository.create({"title": "Legacy", "links": []})
        await db_session.execute(
            text("UPDATE posts SET links = 'https://a.example, https://b.example' WHERE id = :id"),
            {"id": created.id},
        )
        await db_session.commit()

        post = await post_repository.find_by_id(created.id)

        assert post.links == ["https://a.example", "https://b.example"]

    @pytest.mark.asyncio
    async def test_find_by_title_and_exists(self, post_repository):
        created = await post_repository.create({"title": "Exact Title"})

        assert (await post_repository.find_by_title("Exact Title")).id == created.id
        assert await post_repository.find_by_title("exact title") is None
        assert await post_repository.exists_by_title("Exact Title") is True
        assert await post_repository.exists_by_title("Other") is False

    @pytest.mark.asyncio
    async def test_search_matches_title_or_description(self, post_repository):
        await seed_posts(post_repository)

        by_title = await post_repository.search_by_text("sale")
        by_description = await post_repository.search_by_text("RETAILERS")

        assert sorted(p.title for p in by_title) == ["Monitor sale", "SSD sale"]
        assert [p.title for p in by_description] == ["SSD sale"]

    @pytest.mark.asyncio
    async def test_find_all_has_links_filter(self, post_repository, db_session):
        await seed_posts(post_repository)
        null_links = await post_repository.create({"title": "Null links"})
        await db_session.execute(
            text("UPDATE posts SET links = NULL WHERE id = :id"), {"id": null_links.id}
        )
        await db_session.commit()

        with_links = await post_repository.find_all(has_links=True)
        without_links = await post_repository.find_all(has_links=False)
        everything = await post_repository.find_all()

        assert sorted(p.title for p in with_links.items) == ["GPU restock", "SSD sale"]
        assert all(p.link_count > 0 for p in with_links.items)
        assert sorted(p.title for p in without_links.items) == ["Monitor sale", "Null links"]
        assert everything.total == 4

    @pytest.mark.asyncio
    async def test_find_all_is_newest_first(self, post_repository):
        first = await post_repository.create({"title": "First"})
        second = await post_repository.create({"title": "Second"})

        page = await post_repository.find_all()

        assert [p.id for p in page.items] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_find_posts_with_links(self, post_repository):
        await seed_posts(post_repository)

        posts = await post_repository.find_posts_with_links(limit=1)

        assert len(posts) == 1
        assert posts[0].has_links

    @pytest.mark.asyncio
    async def test_update_keeps_unpatched_fields(self, post_repository):
        created = await post_repository.create(
            {"title": "Keep", "description": "body", "links": ["https://a.example"]}
        )

        updated = await post_repository.update(created.id, {"links": []})

        assert updated.title == "Keep"
        assert updated.description == "body"
        assert updated.links == []
        assert updated.has_links is False

    @pytest.mark.asyncio
    async def test_get_statistics(self, post_repository):
        await seed_posts(post_repository)

        stats = await post_repository.get_statistics()

        assert stats.total_posts == 3
        assert stats.posts_with_links == 2
        assert stats.posts_without_links == 1
        # "Two retailers" (13) and "Ask in store" (12), NULL ignored
        assert stats.average_description_length == 13

    @pytest.mark.asyncio
    async def test_get_statistics_empty_table(self, post_repository):
        stats = await post_repository.get_statistics()

        assert stats.total_posts == 0
        assert stats.average_description_length == 0

    @pytest.mark.asyncio
    async def test_link_filters_follow_parsed_links(self, post_repository, db_session):
        await seed_posts(post_repository)
        stored = {
            "Garbage links": "not json, at all",
            "Null json": "null",
            "Comma urls": "https://a.example, https://b.example",
        }
        for title, raw in stored.items():
            created = await post_repository.create({"title": title})
            await db_session.execute(
                text("UPDATE posts SET links = :raw WHERE id = :id"),
                {"raw": raw, "id": created.id},
            )
        await db_session.commit()

        with_links = await post_repository.find_all(has_links=True)
        without_links = await post_repository.find_all(has_links=False)
        linked = await post_repository.find_posts_with_links()
        stats = await post_repository.get_statistics()

        assert sorted(p.title for p in with_links.items) == ["Comma urls", "GPU restock", "SSD sale"]
        assert with_links.total == 3
        assert all(p.has_links for p in with_links.items)
        assert sorted(p.title for p in without_links.items) == [
            "Garbage links",
            "Monitor sale",
            "Null json",
        ]
        assert all(p.links == [] for p in without_links.items)
        assert sorted(p.title for p in linked) == ["Comma urls", "GPU restock", "SSD sale"]
        assert stats.total_posts == 6
        assert stats.posts_with_links == 3
        assert stats.posts_without_links == 3
