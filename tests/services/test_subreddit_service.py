"""
Unit tests for SubredditService and subreddit name normalization.
"""

from unittest.mock import AsyncMock

import pytest

from deal_monitor.core.exceptions import (
    DuplicateError,
    InvalidInputError,
    NotFoundError,
    ValidationError,
)
from deal_monitor.models.subreddit import Subreddit
from deal_monitor.repositories.base import Page
from deal_monitor.repositories.subreddit_repository import SubredditRepository
from deal_monitor.services.subreddit_service import SubredditService, normalize_subreddit_name


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("gaming", "gaming"),
        ("r/Gaming", "gaming"),
        ("  R/GameDeals  ", "gamedeals"),
        ("r/ buildapcsales", "buildapcsales"),
        ("r/r/deals", "deals"),
        ("BuildAPCSales", "buildapcsales"),
        ("r/", ""),
    ],
)
def test_normalize_subreddit_name(raw, expected):
    assert normalize_subreddit_name(raw) == expected


@pytest.mark.parametrize("raw", ["r/Gaming", "  r/ r/Deals ", "buildapcsales", "R/"])
def test_normalize_subreddit_name_is_idempotent(raw):
    once = normalize_subreddit_name(raw)
    assert normalize_subreddit_name(once) == once


class TestSubredditService:
    """Test suite for SubredditService."""

    @pytest.fixture
    def repository(self):
        return AsyncMock(spec=SubredditRepository)

    @pytest.fixture
    def service(self, repository):
        return SubredditService(repository)

    @pytest.mark.asyncio
    async def test_create_subreddit_normalizes_name(self, service, repository):
        repository.exists.return_value = False
        repository.create.return_value = Subreddit(id=1, name="gaming")

        result = await service.create_subreddit({"name": "r/Gaming"})

        assert result.name == "gaming"
        repository.exists.assert_awaited_once_with("gaming")
        repository.create.assert_awaited_once_with({"name": "gaming"})

    @pytest.mark.asyncio
    async def test_create_duplicate_subreddit(self, service, repository):
        repository.exists.return_value = True

        with pytest.raises(DuplicateError) as exc_info:
            await service.create_subreddit({"name": "  R/GAMING "})

        assert exc_info.value.value == "gaming"
        repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"name": ""}, {"name": "   "}, {"name": "r/"}])
    async def test_create_subreddit_rejects_empty_name(self, service, repository, payload):
        with pytest.raises(ValidationError):
            await service.create_subreddit(payload)

        assert repository.mock_calls == []

    @pytest.mark.asyncio
    async def test_get_all_subreddits_defaults_to_name_ascending(self, service, repository):
        repository.find_all.return_value = Page(items=[], total=0, page=1, limit=20)

        await service.get_all_subreddits({})

        repository.find_all.assert_awaited_once_with(
            page=1, limit=20, search=None, sort_by="name", sort_order="asc"
        )

    @pytest.mark.asyncio
    async def test_get_all_subreddits_limits_search_length(self, service, repository):
        with pytest.raises(ValidationError):
            await service.get_all_subreddits({"search": "x" * 51})

        repository.find_all.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_all_subreddits_normalizes_search(self, service, repository):
        await service.get_all_subreddits({"search": "  r/Deals "})

        repository.find_all.assert_awaited_once_with(
            page=1, limit=20, search="deals", sort_by="name", sort_order="asc"
        )

    @pytest.mark.asyncio
    async def test_get_subreddit_by_name_normalizes(self, service, repository):
        repository.find_by_name.return_value = Subreddit(id=3, name="gamedeals")

        result = await service.get_subreddit_by_name("r/GameDeals")

        assert result.id == 3
        repository.find_by_name.assert_awaited_once_with("gamedeals")

    @pytest.mark.asyncio
    async def test_get_subreddit_by_name_not_found(self, service, repository):
        repository.find_by_name.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_subreddit_by_name("r/Missing")

        assert exc_info.value.key == "name"
        assert exc_info.value.message == "Subreddit with name 'r/Missing' not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "  ", "r/", None])
    async def test_get_subreddit_by_name_rejects_blank(self, service, repository, name):
        with pytest.raises(InvalidInputError):
            await service.get_subreddit_by_name(name)

        repository.find_by_name.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_subreddit_same_normalized_name_skips_check(self, service, repository):
        stored = Subreddit(id=1, name="gaming")
        repository.find_by_id.return_value = stored
        repository.update.return_value = stored

        await service.update_subreddit(1, {"name": "R/Gaming"})

        repository.exists.assert_not_awaited()
        repository.update.assert_awaited_once_with(1, {"name": "gaming"})

    @pytest.mark.asyncio
    async def test_update_subreddit_to_taken_name(self, service, repository):
        repository.find_by_id.return_value = Subreddit(id=1, name="gaming")
        repository.exists.return_value = True

        with pytest.raises(DuplicateError):
            await service.update_subreddit(1, {"name": "r/deals"})

        repository.exists.assert_awaited_once_with("deals")
        repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_missing_subreddit(self, service, repository):
        repository.find_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.delete_subreddit(999)

        repository.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_subreddits_normalizes_text(self, service, repository):
        repository.search_by_name.return_value = []

        result = await service.search_subreddits("  r/Deals ")

        assert result == []
        repository.search_by_name.assert_awaited_once_with("deals", 50)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "  ", "r/"])
    async def test_search_subreddits_requires_text(self, service, repository, text):
        with pytest.raises(InvalidInputError):
            await service.search_subreddits(text)

        repository.search_by_name.assert_not_awaited()
