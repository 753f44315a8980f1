"""Calendar API endpoints.

Events belong to the authenticated caller; other users' events are not
visible and behave as not found.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from household.core import get_db
from household.middleware import get_current_identity
from household.schemas.auth import MessageResponse
from household.schemas.calendar_event import (
    CalendarEventCreate,
    CalendarEventResponse,
    CalendarEventUpdate,
)
from household.services.auth import Identity
from household.services.base import UnknownAccountError
from household.services.calendar_event import CalendarEventService

router = APIRouter(prefix="/calendar", tags=["calendar"])


def get_calendar_service(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> CalendarEventService:
    """Dependency to get the caller's calendar service."""
    return CalendarEventService(db, owner_id=identity.subject_id)


def _not_found(event_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Event {event_id} not found",
    )


@router.get("", response_model=list[CalendarEventResponse])
async def list_events(
    service: CalendarEventService = Depends(get_calendar_service),
) -> list[CalendarEventResponse]:
    """List the caller's events."""
    return [CalendarEventResponse.model_validate(e) for e in await service.list()]


@router.post("", response_model=CalendarEventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: CalendarEventCreate,
    service: CalendarEventService = Depends(get_calendar_service),
) -> CalendarEventResponse:
    try:
        event = await service.create(data)
    except UnknownAccountError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account no longer exists",
        ) from e
    return CalendarEventResponse.model_validate(event)


@router.get("/{event_id}", response_model=CalendarEventResponse)
async def get_event(
    event_id: UUID,
    service: CalendarEventService = Depends(get_calendar_service),
) -> CalendarEventResponse:
    event = await service.get(event_id)
    if not event:
        raise _not_found(event_id)
    return CalendarEventResponse.model_validate(event)


@router.put("/{event_id}", response_model=CalendarEventResponse)
async def update_event(
    event_id: UUID,
    data: CalendarEventUpdate,
    service: CalendarEventService = Depends(get_calendar_service),
) -> CalendarEventResponse:
    event = await service.update(event_id, data)
    if not event:
        raise _not_found(event_id)
    return CalendarEventResponse.model_validate(event)


@router.delete(
    "/{event_id}", response_model=MessageResponse, status_code=status.HTTP_202_ACCEPTED
)
async def delete_event(
    event_id: UUID,
    service: CalendarEventService = Depends(get_calendar_service),
) -> MessageResponse:
    if not await service.delete(event_id):
        raise _not_found(event_id)
    return MessageResponse(message="Event deleted successfully")
