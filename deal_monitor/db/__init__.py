"""Database utilities and session management."""

from deal_monitor.db.base import Base, BaseModel, String500
from deal_monitor.db.deps import DBSession, get_db, get_db_override
from deal_monitor.db.session import (
    AsyncSessionLocal,
    check_db_health,
    close_db,
    engine,
    get_session,
    init_db,
)

__all__ = [
    # Base classes
    "Base",
    "BaseModel",
    # String type
    "String500",
    # Session management
    "engine",
    "AsyncSessionLocal",
    "get_session",
    "init_db",
    "close_db",
    "check_db_health",
    # Dependencies
    "get_db",
    "DBSession",
    "get_db_override",
]
