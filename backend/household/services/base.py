"""Shared CRUD plumbing for household resources."""

import builtins
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel as Schema
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from household.models.base import BaseModel
from household.models.user import User

ModelT = TypeVar("ModelT", bound=BaseModel)


class UnknownAccountError(ValueError):
    """Record would be attributed to an account that no longer exists."""


class ResourceService(Generic[ModelT]):
    """Create/read/update/delete for one table.

    Subclasses set ``model`` and list columns stored as JSON in
    ``json_fields`` so nested schema values are serialized before storing.
    """

    model: ClassVar[type[BaseModel]]
    json_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, db: AsyncSession):
        self.db = db

    def _column_values(self, data: Schema, exclude_unset: bool = False) -> dict[str, Any]:
        values = data.model_dump(exclude_unset=exclude_unset)
        if exclude_unset:
            # An explicit null only clears nullable columns
            columns = self.model.__table__.c
            values = {k: v for k, v in values.items() if v is not None or columns[k].nullable}
        json_keys = set(self.json_fields) & values.keys()
        if json_keys:
            values.update(data.model_dump(mode="json", include=json_keys))
        return values

    async def _check_account(self, user_id: UUID) -> None:
        result = await self.db.execute(select(User.id).where(User.id == user_id))
        if result.scalar_one_or_none() is None:
            raise UnknownAccountError(f"Account {user_id} no longer exists")

    def _scope(self) -> list[ColumnElement[bool]]:
        """Extra WHERE clauses applied to every lookup."""
        return []

    async def create(self, data: Schema, **extra: Any) -> ModelT:
        obj = self.model(**self._column_values(data), **extra)
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj  # type: ignore[return-value]

    async def get(self, obj_id: UUID) -> ModelT | None:
        result = await self.db.execute(
            select(self.model).where(self.model.id == obj_id, *self._scope())
        )
        return result.scalar_one_or_none()

    async def list(self) -> builtins.list[ModelT]:
        # Secondary sort by id for deterministic ordering when timestamps are identical
        result = await self.db.execute(
            select(self.model)
            .where(*self._scope())
            .order_by(self.model.created_at, self.model.id)
        )
        return list(result.scalars().all())

    async def update(self, obj_id: UUID, data: Schema) -> ModelT | None:
        obj = await self.get(obj_id)
        if obj is None:
            return None

        for field, value in self._column_values(data, exclude_unset=True).items():
            setattr(obj, field, value)

        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj_id: UUID) -> bool:
        obj = await self.get(obj_id)
        if obj is None:
            return False

        await self.db.delete(obj)
        await self.db.flush()
        return True
