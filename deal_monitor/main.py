"""
Main FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from deal_monitor.api import api_router
from deal_monitor.core.config import settings
from deal_monitor.core.exceptions import (
    DealMonitorError,
    DeletionFailedError,
    DuplicateError,
    InvalidIdError,
    InvalidInputError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from deal_monitor.core.logging import get_logger, setup_logging
from deal_monitor.db.session import check_db_health, close_db, init_db
from deal_monitor.schemas.common import ErrorDetail, ErrorResponse

# Setup logging
setup_logging()
logger = get_logger(__name__)

ERROR_STATUS_CODES: dict[type[DealMonitorError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidIdError: status.HTTP_400_BAD_REQUEST,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateError: status.HTTP_409_CONFLICT,
    DeletionFailedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    RepositoryError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan events.
    Opens the database pool on startup and disposes it on shutdown.
    """
    logger.info(
        "starting_application",
        app_name=settings.APP_NAME,
        environment=settings.APP_ENV,
        version=settings.APP_VERSION,
    )

    await init_db()

    yield

    logger.info("shutting_down_application")

    await close_db()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Deal Monitor - keyword, subreddit and post tracking API",
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Health check endpoint
@app.get("/health", tags=["health"])
async def health_check() -> JSONResponse:
    """
    Health check endpoint for monitoring.
    Includes database connectivity check.
    """
    db_healthy = await check_db_health()

    return JSONResponse(
        status_code=200 if db_healthy else 503,
        content={
            "status": "healthy" if db_healthy else "unhealthy",
            "app_name": settings.APP_NAME,
            "environment": settings.APP_ENV,
            "version": settings.APP_VERSION,
            "database": "connected" if db_healthy else "disconnected",
        }
    )


@app.get("/", tags=["root"])
async def root() -> JSONResponse:
    """
    Root endpoint.
    """
    return JSONResponse(
        content={
            "message": f"Welcome to {settings.APP_NAME} API",
            "version": settings.APP_VERSION,
            "docs": "/docs" if settings.DEBUG else "Documentation disabled in production",
        }
    )


# Include API routers
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.exception_handler(DealMonitorError)
async def deal_monitor_exception_handler(request: Request, exc: DealMonitorError) -> JSONResponse:
    """Map service and repository errors to HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)

    if status_code >= 500:
        logger.error(
            "request_failed",
            code=exc.code,
            error=exc.message,
            path=request.url.path,
            method=request.method,
        )
        if isinstance(exc, RepositoryError):
            # Storage details stay in the logs
            return error_response(status_code, exc.code, "A database error occurred.")

    return error_response(status_code, exc.code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request bodies the same way as service validation errors."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    # Drop the "body" location prefix
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    message = str(first.get("msg", "invalid request")).removeprefix("Value error, ")
    error = ValidationError(".".join(location) or None, message)
    return error_response(status.HTTP_400_BAD_REQUEST, error.code, error.message)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for unhandled errors.
    """
    logger.error(
        "unhandled_exception",
        error=str(exc),
        path=request.url.path,
        method=request.method,
        exc_info=True,
    )

    return error_response(
        500,
        "internal_server_error",
        "An unexpected error occurred. Please try again later.",
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "deal_monitor.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
