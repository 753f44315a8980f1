"""Store API endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from household.core import get_db
from household.middleware import get_current_identity, require_roles
from household.models.user import UserRole
from household.schemas.auth import MessageResponse
from household.schemas.store import StoreCreate, StoreResponse, StoreUpdate
from household.services.store import StoreService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/stores",
    tags=["stores"],
    dependencies=[Depends(get_current_identity)],
)


def get_store_service(db: AsyncSession = Depends(get_db)) -> StoreService:
    """Dependency to get store service."""
    return StoreService(db)


def _not_found(store_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Store {store_id} not found",
    )


@router.get("/all", response_model=list[StoreResponse])
async def list_stores(
    service: StoreService = Depends(get_store_service),
) -> list[StoreResponse]:
    """List all stores."""
    return [StoreResponse.model_validate(s) for s in await service.list()]


@router.post("/new", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
async def create_store(
    data: StoreCreate,
    service: StoreService = Depends(get_store_service),
) -> StoreResponse:
    """Create a new store."""
    store = await service.create(data)
    logger.info(f"Created store: {store.name} ({store.id})")
    return StoreResponse.model_validate(store)


@router.get("/{store_id}", response_model=StoreResponse)
async def get_store(
    store_id: UUID,
    service: StoreService = Depends(get_store_service),
) -> StoreResponse:
    """Get a store by ID."""
    store = await service.get(store_id)
    if not store:
        raise _not_found(store_id)
    return StoreResponse.model_validate(store)


@router.put("/{store_id}", response_model=StoreResponse)
async def update_store(
    store_id: UUID,
    data: StoreUpdate,
    service: StoreService = Depends(get_store_service),
) -> StoreResponse:
    """Update a store."""
    store = await service.update(store_id, data)
    if not store:
        raise _not_found(store_id)
    return StoreResponse.model_validate(store)


@router.delete(
    "/{store_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def delete_store(
    store_id: UUID,
    service: StoreService = Depends(get_store_service),
) -> MessageResponse:
    """Delete a store. Admin only; items keep existing without a store."""
    if not await service.delete(store_id):
        raise _not_found(store_id)
    logger.info(f"Deleted store: {store_id}")
    return MessageResponse(message="Store deleted successfully")
