"""
Subreddit model - a community whose posts are monitored.

Names are stored normalized: lowercase, trimmed, without the ``r/`` prefix.
Normalization itself is done by the service layer before any write or
lookup, so ``name`` here is always the canonical key.
"""

from typing import Any

from sqlalchemy.orm import Mapped, mapped_column

from deal_monitor.db.base import BaseModel, String500

SUBREDDIT_NAME_MAX_LENGTH = 500


class Subreddit(BaseModel):
    """A monitored subreddit."""

    __tablename__ = "subreddits"

    name: Mapped[str] = mapped_column(
        String500,
        nullable=False,
        unique=True,
        comment="Normalized subreddit name (lowercase, no r/ prefix)"
    )

    @property
    def display_name(self) -> str:
        """Name as Reddit shows it, e.g. ``r/buildapcsales``."""
        return f"r/{self.name}"

    def to_api(self) -> dict[str, Any]:
        """API representation (camelCase keys)."""
        return {
            "id": self.id,
            "name": self.name,
            "displayName": self.display_name,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @staticmethod
    def is_valid_name(name: Any) -> bool:
        """True for a non-blank string of at most 500 characters."""
        return (
            isinstance(name, str)
            and len(name.strip()) > 0
            and len(name) <= SUBREDDIT_NAME_MAX_LENGTH
        )
