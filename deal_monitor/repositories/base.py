"""
Repository base class.

A repository is the only place that talks SQL for its table. It receives an
``AsyncSession`` from the caller (request scope) and never normalizes input:
lookups and existence checks are exact matches on what the service passes in.

Shared behaviour:
-----------------
- ``create``: drops ``id``/timestamps, inserts, commits, returns the reloaded row
- ``find_by_id``: entity or ``None``
- ``update``: merges a patch onto the stored row, stamps ``updated_at``,
  returns the reloaded row or ``None``
- ``delete``: ``True`` if a row was removed
- ``_paginate``: count + ORDER BY/LIMIT/OFFSET into a :class:`Page`

Storage failures surface as ``RepositoryError``; a unique constraint
violation from the database surfaces as ``DuplicateError``.
"""

import math
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, List, Optional, Sequence, TypeVar

from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from deal_monitor.core.exceptions import DuplicateError, RepositoryError
from deal_monitor.core.logging import get_logger
from deal_monitor.db.base import BaseModel, utcnow

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

LIKE_ESCAPE = "\\"


def like_pattern(text: str) -> str:
    """``%text%`` with LIKE wildcards in ``text`` escaped."""
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


@dataclass
class Page(Generic[ModelT]):
    """A page of entities plus the size of the whole filtered set."""

    items: List[ModelT] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_api(self) -> dict[str, Any]:
        return {
            "items": [item.to_api() for item in self.items],
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "pages": self.pages,
        }


class BaseRepository(Generic[ModelT]):
    """CRUD and pagination shared by all entity repositories."""

    model: ClassVar[type[BaseModel]]
    entity_name: ClassVar[str]
    unique_field: ClassVar[str]

    PROTECTED_FIELDS = ("id", "created_at", "updated_at")

    def __init__(self, db: AsyncSession):
        self.db = db

    # ========================================
    # Helpers
    # ========================================

    @property
    def _columns(self) -> set[str]:
        return {column.key for column in self.model.__table__.columns}

    @asynccontextmanager
    async def _storage_errors(
        self,
        operation: str,
        unique_value: Any = None,
    ) -> AsyncIterator[None]:
        """Roll back and translate SQLAlchemy errors raised inside the block."""
        try:
            yield
        except IntegrityError as e:
            await self.db.rollback()
            if unique_value is not None:
                logger.warning(
                    "unique_constraint_violation",
                    entity=self.entity_name,
                    field=self.unique_field,
                    value=unique_value,
                )
                raise DuplicateError(self.entity_name, self.unique_field, unique_value) from e
            raise RepositoryError(operation, e) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RepositoryError(operation, e) from e

    def _order_by(self, sort_by: str, sort_order: str) -> list[ColumnElement]:
        column = getattr(self.model, sort_by)
        if sort_order == "asc":
            return [column.asc(), self.model.id.asc()]
        return [column.desc(), self.model.id.desc()]

    async def _find_one_by(self, column: Any, value: Any, operation: str) -> Optional[ModelT]:
        async with self._storage_errors(operation):
            result = await self.db.execute(
                select(self.model)
                .where(column == value)
                .limit(1)
                .execution_options(populate_existing=True)
            )
            return self.model.from_row(result.scalars().first())

    async def _exists_by(self, column: Any, value: Any) -> bool:
        async with self._storage_errors(f"check {self.entity_name} existence"):
            result = await self.db.execute(
                select(self.model.id).where(column == value).limit(1)
            )
            return result.scalar() is not None

    async def _search(
        self,
        condition: ColumnElement,
        order_by: Sequence[ColumnElement],
        limit: int,
    ) -> List[ModelT]:
        async with self._storage_errors(f"search {self.entity_name}s"):
            result = await self.db.execute(
                select(self.model).where(condition).order_by(*order_by).limit(limit)
            )
            return list(result.scalars().all())

    async def _paginate(
        self,
        filters: Sequence[ColumnElement],
        order_by: Sequence[ColumnElement],
        page: int,
        limit: int,
    ) -> Page[ModelT]:
        """Count the filtered rows, then fetch one page of them."""
        count_stmt = select(func.count(self.model.id))
        stmt = select(self.model)
        if filters:
            count_stmt = count_stmt.where(*filters)
            stmt = stmt.where(*filters)

        async with self._storage_errors(f"find {self.entity_name}s"):
            total = (await self.db.execute(count_stmt)).scalar_one()
            result = await self.db.execute(
                stmt.order_by(*order_by).limit(limit).offset((page - 1) * limit)
            )
            items = list(result.scalars().all())

        return Page(items=items, total=int(total), page=page, limit=limit)

    # ========================================
    # CRUD
    # ========================================

    async def create(self, data: Mapping[str, Any]) -> ModelT:
        """Insert a new row and return it freshly loaded."""
        values = {
            key: value for key, value in data.items()
            if key in self._columns and key not in self.PROTECTED_FIELDS
        }

        async with self._storage_errors(
            f"create {self.entity_name}",
            unique_value=values.get(self.unique_field),
        ):
            entity = self.model(**values)
            self.db.add(entity)
            await self.db.commit()

        return await self.find_by_id(entity.id)

    async def find_by_id(self, entity_id: int) -> Optional[ModelT]:
        async with self._storage_errors(f"find {self.entity_name} by ID"):
            result = await self.db.execute(
                select(self.model)
                .where(self.model.id == entity_id)
                .execution_options(populate_existing=True)
            )
            return self.model.from_row(result.scalar_one_or_none())

    async def update(self, entity_id: int, patch: Mapping[str, Any]) -> Optional[ModelT]:
        """
        Merge ``patch`` onto the stored row.

        Returns ``None`` if the row does not exist or nothing was updated;
        turning that into a not-found error is the service's job.
        """
        existing = await self.find_by_id(entity_id)
        if existing is None:
            return None

        values = existing.to_database()
        values.update({key: value for key, value in patch.items() if key in self._columns})
        values.pop("id", None)
        values.pop("created_at", None)
        values["updated_at"] = utcnow()

        unique_value = patch.get(self.unique_field)
        async with self._storage_errors(f"update {self.entity_name}", unique_value=unique_value):
            result = await self.db.execute(
                update(self.model)
                .where(self.model.id == entity_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()

        if result.rowcount == 0:
            return None

        return await self.find_by_id(entity_id)

    async def delete(self, entity_id: int) -> bool:
        async with self._storage_errors(f"delete {self.entity_name}"):
            result = await self.db.execute(
                delete(self.model)
                .where(self.model.id == entity_id)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()

        return result.rowcount > 0
