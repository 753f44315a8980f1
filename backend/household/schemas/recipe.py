"""Pydantic schemas for Recipe API."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

Difficulty = Literal["Easy", "Medium", "Hard"]


class Ingredient(BaseModel):
    item_id: UUID
    quantity: float = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=50)
    notes: str | None = None


class Step(BaseModel):
    step_number: int = Field(..., ge=1)
    description: str = Field(..., min_length=1)
    duration: int | None = Field(None, ge=0, description="Minutes")


class RecipeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    servings: int = Field(..., ge=1)
    prep_time: int = Field(..., ge=0, description="Minutes")
    cook_time: int = Field(..., ge=0, description="Minutes")
    ingredients: list[Ingredient] = Field(..., min_length=1)
    steps: list[Step] = Field(..., min_length=1)
    category: list[str] = Field(..., min_length=1, description='e.g. ["Italian", "Vegetarian"]')
    difficulty: Difficulty
    image_url: str | None = Field(None, max_length=1000)
    rating: int | None = Field(None, ge=1, le=5)
    notes: str | None = None


class RecipeCreate(RecipeBase):
    """Schema for creating a recipe."""


class RecipeUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    servings: int | None = Field(None, ge=1)
    prep_time: int | None = Field(None, ge=0)
    cook_time: int | None = Field(None, ge=0)
    ingredients: list[Ingredient] | None = Field(None, min_length=1)
    steps: list[Step] | None = Field(None, min_length=1)
    category: list[str] | None = Field(None, min_length=1)
    difficulty: Difficulty | None = None
    image_url: str | None = Field(None, max_length=1000)
    rating: int | None = Field(None, ge=1, le=5)
    notes: str | None = None


class RecipeResponse(RecipeBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime
