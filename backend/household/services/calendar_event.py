"""Calendar event service - events are private to their owner."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from household.models import CalendarEvent
from household.schemas.calendar_event import CalendarEventCreate
from household.services.base import ResourceService


class CalendarEventService(ResourceService[CalendarEvent]):
    """Service for one user's calendar.

    Every lookup is restricted to ``owner_id``, so another user's event
    id behaves as not found.
    """

    model = CalendarEvent

    def __init__(self, db: AsyncSession, owner_id: UUID):
        super().__init__(db)
        self.owner_id = owner_id

    def _scope(self) -> list[ColumnElement[bool]]:
        return [CalendarEvent.owner_id == self.owner_id]

    async def create(self, data: CalendarEventCreate) -> CalendarEvent:  # type: ignore[override]
        await self._check_account(self.owner_id)
        return await super().create(data, owner_id=self.owner_id)
