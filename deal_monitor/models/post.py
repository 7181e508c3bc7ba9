"""
Post model - a social media post that matched the monitoring criteria.

Links Storage:
--------------
``links`` is an ordered list of URLs kept in a single TEXT column as a JSON
array (``["https://a.example","https://b.example"]``). The :class:`LinkList`
column type serializes on write and parses on read:

- NULL / empty text → ``[]``
- valid JSON array → its string entries
- anything else → comma separated URLs if *every* piece is a valid URL,
  otherwise ``[]`` with a ``post_links_unparsable`` warning

Derived Fields:
---------------
``has_links``, ``link_count`` and ``preview_text`` are computed, never
persisted.
"""

import json
from typing import Any, List, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError as PydanticValidationError
from sqlalchemy import Index, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from deal_monitor.core.logging import get_logger
from deal_monitor.db.base import BaseModel, String500

logger = get_logger(__name__)

TITLE_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 10000
PREVIEW_MAX_LENGTH = 150

_url_adapter = TypeAdapter(AnyUrl)


def is_valid_link(link: Any) -> bool:
    """True if ``link`` is an absolute URI string."""
    if not isinstance(link, str) or not link.strip():
        return False
    try:
        _url_adapter.validate_python(link)
    except PydanticValidationError:
        return False
    return True


def serialize_links(links: Optional[List[str]]) -> Optional[str]:
    """Compact JSON text for the ``links`` column."""
    if links is None:
        return None
    return json.dumps(list(links), separators=(",", ":"))


def parse_links(raw: Any) -> List[str]:
    """Parse a stored ``links`` value back into a list of URLs."""
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(link) for link in raw]
    if not isinstance(raw, str) or not raw.strip():
        return []

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        pieces = [piece.strip() for piece in raw.split(",") if piece.strip()]
        if pieces and all(is_valid_link(piece) for piece in pieces):
            return pieces
        logger.warning("post_links_unparsable", raw_links=raw[:200])
        return []

    if isinstance(parsed, list):
        return [link for link in parsed if isinstance(link, str)]
    if isinstance(parsed, str) and is_valid_link(parsed):
        return [parsed]

    logger.warning("post_links_unparsable", raw_links=raw[:200])
    return []


class LinkList(TypeDecorator):
    """TEXT column holding a JSON encoded list of URLs."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Optional[List[str]], dialect) -> Optional[str]:
        return serialize_links(value)

    def process_result_value(self, value: Optional[str], dialect) -> List[str]:
        return parse_links(value)


class Post(BaseModel):
    """A tracked deal post."""

    __tablename__ = "posts"
    __table_args__ = (
        # Listings and searches are newest first
        Index("ix_posts_created_at", "created_at"),
    )

    title: Mapped[str] = mapped_column(
        String500,
        nullable=False,
        index=True,
        comment="Trimmed post title, unique across posts"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Optional post body (max 10000 characters)"
    )

    links: Mapped[List[str]] = mapped_column(
        LinkList,
        nullable=True,
        default=list,
        comment="JSON array of URLs found in the post"
    )

    def __init__(self, **kwargs: Any):
        kwargs["links"] = parse_links(kwargs.get("links"))
        super().__init__(**kwargs)

    # ================================
    # Derived Fields
    # ================================

    @property
    def has_links(self) -> bool:
        return len(self.links or []) > 0

    @property
    def link_count(self) -> int:
        return len(self.links or [])

    def get_preview_text(self, max_length: int = PREVIEW_MAX_LENGTH) -> str:
        """Description (or title if there is none) cut to ``max_length``."""
        text = self.description or self.title
        if not text:
            return ""
        if len(text) <= max_length:
            return text
        return text[:max_length].strip() + "..."

    @property
    def preview_text(self) -> str:
        return self.get_preview_text()

    # ================================
    # Link Helpers
    # ================================

    def add_link(self, link: str) -> None:
        """Append ``link`` if it is a valid URL and not already present."""
        current = list(self.links or [])
        if is_valid_link(link) and link not in current:
            # Reassign so the ORM sees the change
            self.links = current + [link]

    def remove_link(self, link: str) -> None:
        self.links = [existing for existing in (self.links or []) if existing != link]

    # ================================
    # Conversions
    # ================================

    def to_api(self) -> dict[str, Any]:
        """API representation (camelCase keys plus computed fields)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "links": list(self.links or []),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "hasLinks": self.has_links,
            "linkCount": self.link_count,
            "previewText": self.preview_text,
        }

    @staticmethod
    def is_valid_title(title: Any) -> bool:
        """True for a non-blank string of at most 500 characters."""
        return (
            isinstance(title, str)
            and len(title.strip()) > 0
            and len(title) <= TITLE_MAX_LENGTH
        )

    @staticmethod
    def is_valid_link(link: Any) -> bool:
        return is_valid_link(link)
