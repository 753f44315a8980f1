"""Pydantic schemas for Store API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StoreBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=500)
    contact_number: str | None = Field(None, max_length=50)
    website: str | None = Field(None, max_length=500)

    @field_validator("name", "location")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class StoreCreate(StoreBase):
    """Schema for creating a store."""


class StoreUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    location: str | None = Field(None, min_length=1, max_length=500)
    contact_number: str | None = Field(None, max_length=50)
    website: str | None = Field(None, max_length=500)


class StoreResponse(StoreBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime
