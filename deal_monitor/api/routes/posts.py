"""
Post API endpoints.

Posts are always listed newest first. ``hasLinks`` narrows a listing to
posts with (``true``) or without (``false``) links.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Query, status

from deal_monitor.api.deps import PostServiceDep
from deal_monitor.schemas.common import MessageResponse
from deal_monitor.schemas.post import (
    PostCreate,
    PostListResponse,
    PostResponse,
    PostStatistics,
)
from deal_monitor.services.common import optional_fields

router = APIRouter(prefix="/posts", tags=["Posts"])


def _to_response(post) -> PostResponse:
    return PostResponse.model_validate(post.to_api())


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Store a post",
)
async def create_post(payload: PostCreate, service: PostServiceDep) -> PostResponse:
    return _to_response(await service.create_post(payload))


@router.get("", response_model=PostListResponse, summary="List posts")
async def list_posts(
    service: PostServiceDep,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches title or description"),
    has_links: Optional[str] = Query(None, alias="hasLinks", description="true or false"),
) -> PostListResponse:
    result = await service.get_all_posts(
        optional_fields(
            {"page": page, "limit": limit, "search": search, "has_links": has_links}
        )
    )
    return PostListResponse.model_validate(result.to_api())


@router.get("/search", response_model=List[PostResponse], summary="Search posts")
async def search_posts(
    service: PostServiceDep,
    q: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
) -> List[PostResponse]:
    return [_to_response(post) for post in await service.search_posts(q, limit)]


@router.get("/with-links", response_model=List[PostResponse], summary="Newest posts with links")
async def get_posts_with_links(
    service: PostServiceDep,
    limit: Optional[str] = Query(None),
) -> List[PostResponse]:
    return [_to_response(post) for post in await service.get_posts_with_links(limit)]


@router.get("/statistics", response_model=PostStatistics, summary="Post statistics")
async def get_post_statistics(service: PostServiceDep) -> PostStatistics:
    return await service.get_statistics()


@router.get("/{post_id}", response_model=PostResponse, summary="Get a post")
async def get_post(post_id: str, service: PostServiceDep) -> PostResponse:
    return _to_response(await service.get_post_by_id(post_id))


@router.put("/{post_id}", response_model=PostResponse, summary="Update a post")
async def update_post(
    post_id: str,
    service: PostServiceDep,
    payload: Dict[str, Any] = Body(
        ...,
        examples=[{"title": "[GPU] RTX 4070 Super - $529", "links": ["https://example.com/deal"]}],
    ),
) -> PostResponse:
    return _to_response(await service.update_post(post_id, payload))


@router.delete("/{post_id}", response_model=MessageResponse, summary="Delete a post")
async def delete_post(post_id: str, service: PostServiceDep) -> MessageResponse:
    await service.delete_post(post_id)
    return MessageResponse(message="Post deleted successfully")
