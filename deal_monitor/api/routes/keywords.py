"""
Keyword API endpoints.

CRUD, paginated listing, search and statistics for watched keywords.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Query, status

from deal_monitor.api.deps import KeywordServiceDep
from deal_monitor.schemas.common import MessageResponse
from deal_monitor.schemas.keyword import (
    KeywordCreate,
    KeywordListResponse,
    KeywordResponse,
    KeywordStatistics,
)
from deal_monitor.services.common import optional_fields

router = APIRouter(prefix="/keywords", tags=["Keywords"])


@router.post(
    "",
    response_model=KeywordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a keyword",
)
async def create_keyword(payload: KeywordCreate, service: KeywordServiceDep) -> KeywordResponse:
    keyword = await service.create_keyword(payload)
    return KeywordResponse.model_validate(keyword.to_api())


@router.get(
    "",
    response_model=KeywordListResponse,
    summary="List keywords",
    description="Paginated keyword list with optional substring search and sorting",
)
async def list_keywords(
    service: KeywordServiceDep,
    page: Optional[str] = Query(None, description="Page number (1-based)"),
    limit: Optional[str] = Query(None, description="Items per page (1-100)"),
    search: Optional[str] = Query(None, description="Substring filter"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="keyword, created_at or updated_at"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc"),
) -> KeywordListResponse:
    result = await service.get_all_keywords(
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
    return KeywordListResponse.model_validate(result.to_api())


@router.get("/search", response_model=List[KeywordResponse], summary="Search keywords")
async def search_keywords(
    service: KeywordServiceDep,
    q: Optional[str] = Query(None, description="Text to search for"),
    limit: Optional[str] = Query(None, description="Maximum number of results"),
) -> List[KeywordResponse]:
    keywords = await service.search_keywords(q, limit)
    return [KeywordResponse.model_validate(keyword.to_api()) for keyword in keywords]


@router.get("/statistics", response_model=KeywordStatistics, summary="Keyword statistics")
async def get_keyword_statistics(service: KeywordServiceDep) -> KeywordStatistics:
    return await service.get_statistics()


@router.get("/{keyword_id}", response_model=KeywordResponse, summary="Get a keyword")
async def get_keyword(keyword_id: str, service: KeywordServiceDep) -> KeywordResponse:
    keyword = await service.get_keyword_by_id(keyword_id)
    return KeywordResponse.model_validate(keyword.to_api())


@router.put("/{keyword_id}", response_model=KeywordResponse, summary="Update a keyword")
async def update_keyword(
    keyword_id: str,
    service: KeywordServiceDep,
    payload: Dict[str, Any] = Body(..., examples=[{"keyword": "rtx 4080", "isActive": False}]),
) -> KeywordResponse:
    keyword = await service.update_keyword(keyword_id, payload)
    return KeywordResponse.model_validate(keyword.to_api())


@router.delete("/{keyword_id}", response_model=MessageResponse, summary="Delete a keyword")
async def delete_keyword(keyword_id: str, service: KeywordServiceDep) -> MessageResponse:
    await service.delete_keyword(keyword_id)
    return MessageResponse(message="Keyword deleted successfully")
