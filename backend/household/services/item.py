"""Pantry item service."""

from uuid import UUID

from sqlalchemy import select

from household.models import Item, Store
from household.schemas.item import ItemCreate, ItemUpdate
from household.services.base import ResourceService


class UnknownStoreError(ValueError):
    """Item references a store that does not exist."""


class ItemService(ResourceService[Item]):
    """Service for managing pantry items."""

    model = Item
    json_fields = ("barcodes",)

    async def _check_store(self, store_id: UUID | None) -> None:
        if store_id is None:
            return
        result = await self.db.execute(select(Store.id).where(Store.id == store_id))
        if result.scalar_one_or_none() is None:
            raise UnknownStoreError(f"Store {store_id} not found")

    async def create(self, data: ItemCreate) -> Item:  # type: ignore[override]
        await self._check_store(data.store_id)
        return await super().create(data)

    async def update(self, obj_id: UUID, data: ItemUpdate) -> Item | None:  # type: ignore[override]
        await self._check_store(data.store_id)
        return await super().update(obj_id, data)
