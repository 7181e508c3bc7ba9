"""
Keyword model - a search term to watch for in monitored posts.

Table: keywords
---------------
- keyword: unique, trimmed text (case-sensitive as stored)
- is_active: paused keywords stay stored but are reported as inactive
"""

from typing import Any

from sqlalchemy import Boolean, true
from sqlalchemy.orm import Mapped, mapped_column

from deal_monitor.db.base import BaseModel, String500

KEYWORD_MAX_LENGTH = 500


class Keyword(BaseModel):
    """A watched keyword."""

    __tablename__ = "keywords"

    keyword: Mapped[str] = mapped_column(
        String500,
        nullable=False,
        unique=True,
        comment="Trimmed keyword text"
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
        comment="Whether the keyword is currently watched"
    )

    def to_api(self) -> dict[str, Any]:
        """API representation (camelCase keys)."""
        return {
            "id": self.id,
            "keyword": self.keyword,
            "isActive": self.is_active if self.is_active is not None else True,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @staticmethod
    def is_valid_keyword(keyword: Any) -> bool:
        """True for a non-blank string of at most 500 characters."""
        return (
            isinstance(keyword, str)
            and len(keyword.strip()) > 0
            and len(keyword) <= KEYWORD_MAX_LENGTH
        )
