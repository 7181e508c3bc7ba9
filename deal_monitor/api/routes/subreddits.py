"""
Subreddit API endpoints.

Names can be sent as ``r/Name`` or ``name``; they are stored lowercased
without the prefix.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Query, status

from deal_monitor.api.deps import SubredditServiceDep
from deal_monitor.schemas.common import MessageResponse
from deal_monitor.schemas.subreddit import (
    SubredditCreate,
    SubredditListResponse,
    SubredditResponse,
    SubredditStatistics,
)
from deal_monitor.services.common import optional_fields

router = APIRouter(prefix="/subreddits", tags=["Subreddits"])


@router.post(
    "",
    response_model=SubredditResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Monitor a subreddit",
)
async def create_subreddit(
    payload: SubredditCreate,
    service: SubredditServiceDep,
) -> SubredditResponse:
    subreddit = await service.create_subreddit(payload)
    return SubredditResponse.model_validate(subreddit.to_api())


@router.get("", response_model=SubredditListResponse, summary="List subreddits")
async def list_subreddits(
    service: SubredditServiceDep,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
) -> SubredditListResponse:
    result = await service.get_all_subreddits(
        optional_fields(
            {
                "page": page,
                "limit": limit,
                "search": search,
                "sort_by": sort_by,
                "sort_order": sort_order,
            }
        )
    )
    return SubredditListResponse.model_validate(result.to_api())


@router.get("/search", response_model=List[SubredditResponse], summary="Search subreddits")
async def search_subreddits(
    service: SubredditServiceDep,
    q: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
) -> List[SubredditResponse]:
    subreddits = await service.search_subreddits(q, limit)
    return [SubredditResponse.model_validate(subreddit.to_api()) for subreddit in subreddits]


@router.get("/statistics", response_model=SubredditStatistics, summary="Subreddit statistics")
async def get_subreddit_statistics(service: SubredditServiceDep) -> SubredditStatistics:
    return await service.get_statistics()


@router.get(
    "/by-name/{name:path}",
    response_model=SubredditResponse,
    summary="Get a subreddit by name",
)
async def get_subreddit_by_name(name: str, service: SubredditServiceDep) -> SubredditResponse:
    subreddit = await service.get_subreddit_by_name(name)
    return SubredditResponse.model_validate(subreddit.to_api())


@router.get("/{subreddit_id}", response_model=SubredditResponse, summary="Get a subreddit")
async def get_subreddit(subreddit_id: str, service: SubredditServiceDep) -> SubredditResponse:
    subreddit = await service.get_subreddit_by_id(subreddit_id)
    return SubredditResponse.model_validate(subreddit.to_api())


@router.put("/{subreddit_id}", response_model=SubredditResponse, summary="Rename a subreddit")
async def update_subreddit(
    subreddit_id: str,
    service: SubredditServiceDep,
    payload: Dict[str, Any] = Body(..., examples=[{"name": "r/GameDeals"}]),
) -> SubredditResponse:
    subreddit = await service.update_subreddit(subreddit_id, payload)
    return SubredditResponse.model_validate(subreddit.to_api())


@router.delete("/{subreddit_id}", response_model=MessageResponse, summary="Stop monitoring")
async def delete_subreddit(subreddit_id: str, service: SubredditServiceDep) -> MessageResponse:
    await service.delete_subreddit(subreddit_id)
    return MessageResponse(message="Subreddit deleted successfully")
