"""
Database Dependencies for FastAPI Routes

Routes declare the session they need and FastAPI provides it:

    @router.get("/keywords/{keyword_id}")
    async def get_keyword(keyword_id: str, db: DBSession):
        ...

The session is closed (and rolled back on error) after the response.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from deal_monitor.db.session import get_session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides a database session."""
    async for session in get_session():
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db)]


def get_db_override(session: AsyncSession) -> Callable[[], AsyncGenerator[AsyncSession, None]]:
    """
    Build a ``get_db`` replacement that always yields ``session``.

    Usage in tests:
        app.dependency_overrides[get_db] = get_db_override(test_session)
    """
    async def _override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    return _override


__all__ = [
    "get_db",
    "DBSession",
    "get_db_override",
]
