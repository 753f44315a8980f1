"""Store service."""

from uuid import UUID

from sqlalchemy import update

from household.models import Item, Store
from household.services.base import ResourceService


class StoreService(ResourceService[Store]):
    """Service for managing stores."""

    model = Store

    async def delete(self, obj_id: UUID) -> bool:
        """Delete a store; items bought there are kept and lose the reference."""
        store = await self.get(obj_id)
        if store is None:
            return False

        await self.db.execute(update(Item).where(Item.store_id == obj_id).values(store_id=None))
        await self.db.delete(store)
        await self.db.flush()
        return True
