"""Pydantic schemas for pantry Item API."""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

ItemCategory = Literal["Dairy", "Vegetables", "Fruits", "Meat", "Grains", "Snacks", "Drinks", "Other"]
ItemUnit = Literal["pcs", "kg", "g", "liters", "ml", "pack", "bottle", "can", "box", "other"]
StorageLocation = Literal["Fridge", "Pantry", "Freezer"]


class Barcode(BaseModel):
    code: str = Field(..., min_length=1, max_length=128)
    store_id: UUID | None = None


class ItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: ItemCategory
    quantity: int = Field(..., ge=1)
    unit: ItemUnit
    storage_location: StorageLocation
    price: float = Field(..., ge=0)
    expiry_date: date | None = None
    date_purchased: date | None = None
    store_id: UUID | None = None
    barcodes: list[Barcode] = []


class ItemCreate(ItemBase):
    """Schema for creating an item."""


class ItemUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    category: ItemCategory | None = None
    quantity: int | None = Field(None, ge=1)
    unit: ItemUnit | None = None
    storage_location: StorageLocation | None = None
    price: float | None = Field(None, ge=0)
    expiry_date: date | None = None
    date_purchased: date | None = None
    store_id: UUID | None = None
    barcodes: list[Barcode] | None = None


class ItemResponse(ItemBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime
