"""
API routes initialization.

This module aggregates all API routers and provides a single router
to include in the main application.
"""

from fastapi import APIRouter

from deal_monitor.api.routes import keywords, posts, subreddits
from deal_monitor.schemas.common import ErrorResponse

# Error bodies share one shape, see deal_monitor.main
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    404: {"model": ErrorResponse, "description": "Not found"},
    409: {"model": ErrorResponse, "description": "Duplicate"},
    500: {"model": ErrorResponse, "description": "Internal error"},
}

# Create main API router
api_router = APIRouter(responses=ERROR_RESPONSES)

api_router.include_router(keywords.router)
api_router.include_router(subreddits.router)
api_router.include_router(posts.router)
