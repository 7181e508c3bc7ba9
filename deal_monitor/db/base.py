"""
Declarative base and shared columns for the deal monitor tables.

Every table gets an auto-increment ``id`` plus UTC ``created_at`` /
``updated_at`` timestamps through :class:`BaseModel`.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime, MetaData, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ================================
# Naming Convention for Constraints
# ================================
# ix_keywords_keyword, uq_keywords_keyword, pk_posts, ...
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    metadata = metadata

    __tablename__: str


class CommonTableAttributes:
    """
    Mixin providing ``id``, ``created_at`` and ``updated_at``.

    Timestamps are timezone-aware and always stored in UTC. ``updated_at``
    is refreshed by the ORM on every UPDATE; repositories also stamp it
    explicitly when they issue bulk updates.
    """

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing primary key"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when record was created (UTC)"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp when record was last updated (UTC)"
    )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"

    def to_database(self) -> dict[str, Any]:
        """
        Column name to value mapping, ready to be written back.

        Values are the Python side representation; column types (for example
        the JSON encoded ``posts.links``) take care of serialization on bind.
        """
        return {
            column.name: getattr(self, column.key)
            for column in self.__table__.columns
        }

    @classmethod
    def from_row(cls, row: Any) -> Optional["CommonTableAttributes"]:
        """
        Build an instance from a persisted row.

        Accepts an ORM instance of this class (returned as is), a mapping of
        column values, or ``None`` which yields ``None``.
        """
        if row is None:
            return None
        if isinstance(row, cls):
            return row
        data = dict(row._mapping) if hasattr(row, "_mapping") else dict(row)
        columns = {column.key for column in cls.__table__.columns}
        return cls(**{key: value for key, value in data.items() if key in columns})


class BaseModel(Base, CommonTableAttributes):
    """Abstract base for every table in the application."""

    __abstract__ = True


# ================================
# String Length Constraints
# ================================
String500 = String(500)
