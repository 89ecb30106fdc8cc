"""Base repository with common CRUD operations."""

from abc import ABC
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import asc, desc

from sunboard.core.database.base import Base
from sunboard.utils.exceptions import ConflictError

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class BaseRepository(ABC, Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Base repository with common CRUD operations."""

    def __init__(self, session: AsyncSession, model: type[ModelType]) -> None:
        self._session = session
        self._model = model

    async def _commit(self) -> None:
        """Commit, translating constraint violations into ConflictError."""
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise ConflictError(
                f"{self._model.__name__} violates a uniqueness or reference constraint"
            ) from exc

    async def create(self, obj_in: CreateSchemaType, **extra: Any) -> ModelType:
        """Create a new record. ``extra`` overrides or adds column values."""
        obj_data = obj_in.model_dump(exclude_unset=True)
        obj_data.update(extra)
        db_obj = self._model(**obj_data)
        self._session.add(db_obj)
        await self._commit()
        await self._session.refresh(db_obj)
        return db_obj

    async def get_by_id(self, id: UUID) -> ModelType | None:
        stmt = select(self._model).where(self._model.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _apply_sorting(self, stmt, sort_by: str | None, sort_order: str = "desc"):
        """Order by a real column, defaulting to created_at desc."""
        order_fn = desc if sort_order == "desc" else asc

        if sort_by and sort_by in self._model.__table__.columns:
            stmt = stmt.order_by(order_fn(getattr(self._model, sort_by)), self._model.id)
        else:
            stmt = stmt.order_by(desc(self._model.created_at), self._model.id)

        return stmt

    async def get_all(
        self,
        limit: int | None = None,
        offset: int | None = None,
        sort_by: str | None = None,
        sort_order: str = "desc",
    ) -> list[ModelType]:
        stmt = select(self._model)
        stmt = self._apply_sorting(stmt, sort_by, sort_order)
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, id: UUID, obj_in: UpdateSchemaType) -> ModelType | None:
        db_obj = await self.get_by_id(id)
        if not db_obj:
            return None

        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await self._commit()
        await self._session.refresh(db_obj)
        return db_obj

    async def delete(self, id: UUID) -> bool:
        stmt = delete(self._model).where(self._model.id == id)
        result = await self._session.execute(stmt)
        await self._session.commit()
        return result.rowcount > 0

    async def exists(self, id: UUID) -> bool:
        stmt = select(self._model.id).where(self._model.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        stmt = select(func.count()).select_from(self._model)
        result = await self._session.execute(stmt)
        return result.scalar() or 0


class SlugRepositoryMixin:
    """Lookup by unique slug for models that carry one."""

    async def get_by_slug(self, slug: str):
        stmt = select(self._model).where(self._model.slug == slug)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()
