"""Pantry item API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from household.core import get_db
from household.middleware import get_current_identity
from household.schemas.auth import MessageResponse
from household.schemas.item import ItemCreate, ItemResponse, ItemUpdate
from household.services.item import ItemService, UnknownStoreError

router = APIRouter(
    prefix="/items",
    tags=["items"],
    dependencies=[Depends(get_current_identity)],
)


def get_item_service(db: AsyncSession = Depends(get_db)) -> ItemService:
    """Dependency to get item service."""
    return ItemService(db)


@router.get("", response_model=list[ItemResponse])
async def list_items(
    service: ItemService = Depends(get_item_service),
) -> list[ItemResponse]:
    return [ItemResponse.model_validate(i) for i in await service.list()]


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    data: ItemCreate,
    service: ItemService = Depends(get_item_service),
) -> ItemResponse:
    """Add an item to the pantry."""
    try:
        item = await service.create(data)
    except UnknownStoreError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return ItemResponse.model_validate(item)


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(
    item_id: UUID,
    service: ItemService = Depends(get_item_service),
) -> ItemResponse:
    item = await service.get(item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Item {item_id} not found",
        )
    return ItemResponse.model_validate(item)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: UUID,
    data: ItemUpdate,
    service: ItemService = Depends(get_item_service),
) -> ItemResponse:
    try:
        item = await service.update(item_id, data)
    except UnknownStoreError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Item {item_id} not found",
        )
    return ItemResponse.model_validate(item)


@router.delete("/{item_id}", response_model=MessageResponse, status_code=status.HTTP_202_ACCEPTED)
async def delete_item(
    item_id: UUID,
    service: ItemService = Depends(get_item_service),
) -> MessageResponse:
    if not await service.delete(item_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Item {item_id} not found",
        )
    return MessageResponse(message="Item deleted successfully")
