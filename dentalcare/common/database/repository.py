# dentalcare/common/database/repository.py
"""Generic store operations used by the lifecycle managers.

A ``Repository`` wraps one model and exposes the small surface the managers rely
on: lookup by id, filtered finds, counts, sums, and single-row writes. Driver
failures never leak out as SQLAlchemy exceptions: unique-index violations become
``Conflict``, values the column types cannot hold become ``ValidationFailed``
and everything else becomes ``StoreUnavailable``.
"""

import logging
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dentalcare.common.errors import Conflict, NotFound, StoreUnavailable, ValidationFailed

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):

    def __init__(self, session: AsyncSession, model: Type[ModelT]):
        self.session = session
        self.model = model

    @asynccontextmanager
    async def _guard(self, conflict_message: Optional[str] = None):
        try:
            yield
        except IntegrityError as exc:
            await self.session.rollback()
            raise Conflict(conflict_message) from exc
        except DataError as exc:
            await self.session.rollback()
            raise ValidationFailed(f"A value is out of range for {self.model.__tablename__}.") from exc
        except DBAPIError as exc:
            await self.session.rollback()
            logger.error("Store failure on %s: %s", self.model.__name__, exc)
            raise StoreUnavailable() from exc

    def _filtered(self, query, criteria, filters: Dict[str, Any]):
        for clause in criteria:
            query = query.where(clause)
        for field, value in filters.items():
            query = query.where(getattr(self.model, field) == value)
        return query

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def find_by_id(self, record_id: UUID) -> Optional[ModelT]:
        async with self._guard():
            return await self.session.get(self.model, record_id)

    async def get_by_id(self, record_id: UUID, message: Optional[str] = None) -> ModelT:
        """Like ``find_by_id`` but raises ``NotFound`` when the row is missing."""
        record = await self.find_by_id(record_id)
        if record is None:
            raise NotFound(message)
        return record

    async def find_one(self, *criteria, **filters) -> Optional[ModelT]:
        query = self._filtered(select(self.model), criteria, filters).limit(1)
        async with self._guard():
            result = await self.session.execute(query)
            return result.scalars().first()

    async def find_many(
        self,
        *criteria,
        order_by: Any = None,
        limit: Optional[int] = None,
        **filters
    ) -> List[ModelT]:
        query = self._filtered(select(self.model), criteria, filters)
        if order_by is not None:
            query = query.order_by(order_by)
        if limit is not None:
            query = query.limit(limit)
        async with self._guard():
            result = await self.session.execute(query)
            return list(result.scalars().all())

    async def count(self, *criteria, **filters) -> int:
        query = self._filtered(select(func.count()).select_from(self.model), criteria, filters)
        async with self._guard():
            return await self.session.scalar(query) or 0

    async def aggregate_sum(self, field: str, *criteria, **filters) -> Decimal:
        """Sum a numeric column over the matching rows; zero when nothing matches."""
        column = getattr(self.model, field)
        query = self._filtered(
            select(func.coalesce(func.sum(column), 0)).select_from(self.model),
            criteria,
            filters
        )
        async with self._guard():
            total = await self.session.scalar(query)
        return Decimal(str(total or 0))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def insert(self, conflict_message: Optional[str] = None, **values) -> ModelT:
        record = self.model(**values)
        async with self._guard(conflict_message):
            self.session.add(record)
            await self.session.commit()
            await self.session.refresh(record)
        return record

    async def update(
        self,
        record: ModelT,
        patch: Dict[str, Any],
        conflict_message: Optional[str] = None
    ) -> ModelT:
        for key, value in patch.items():
            setattr(record, key, value)
        async with self._guard(conflict_message):
            await self.session.commit()
            await self.session.refresh(record)
        return record

    async def update_by_id(
        self,
        record_id: UUID,
        patch: Dict[str, Any],
        conflict_message: Optional[str] = None
    ) -> ModelT:
        record = await self.get_by_id(record_id)
        return await self.update(record, patch, conflict_message)

    async def delete(self, record: ModelT) -> None:
        async with self._guard():
            await self.session.delete(record)
            await self.session.commit()

    async def delete_by_id(self, record_id: UUID) -> None:
        record = await self.get_by_id(record_id)
        await self.delete(record)
