"""Pantry item model."""

import uuid
from datetime import date
from typing import Any

from sqlalchemy import JSON, Date, Enum, Float, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from household.models.base import BaseModel

ITEM_CATEGORIES = ("Dairy", "Vegetables", "Fruits", "Meat", "Grains", "Snacks", "Drinks", "Other")
ITEM_UNITS = ("pcs", "kg", "g", "liters", "ml", "pack", "bottle", "can", "box", "other")
STORAGE_LOCATIONS = ("Fridge", "Pantry", "Freezer")


class Item(BaseModel):
    """A pantry item.

    ``barcodes`` is a JSON list of ``{"code": str, "store_id": str | None}``.
    """

    __tablename__ = "items"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(
        Enum(*ITEM_CATEGORIES, name="item_category", create_constraint=True), nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit: Mapped[str] = mapped_column(
        Enum(*ITEM_UNITS, name="item_unit", create_constraint=True), nullable=False
    )
    storage_location: Mapped[str] = mapped_column(
        Enum(*STORAGE_LOCATIONS, name="storage_location", create_constraint=True),
        nullable=False,
    )
    price: Mapped[float] = mapped_column(Float, nullable=False)
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    date_purchased: Mapped[date | None] = mapped_column(Date, nullable=True)
    store_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("stores.id", ondelete="SET NULL"), nullable=True
    )
    barcodes: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<Item {self.name}>"
