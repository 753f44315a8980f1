"""Recipe model."""

import uuid
from typing import Any

from sqlalchemy import JSON, Enum, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from household.models.base import BaseModel

DIFFICULTIES = ("Easy", "Medium", "Hard")


class Recipe(BaseModel):
    """A recipe.

    Ingredients and steps are stored as JSON lists; ingredient entries
    reference items by id without a foreign key.
    """

    __tablename__ = "recipes"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    servings: Mapped[int] = mapped_column(Integer, nullable=False)
    prep_time: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    cook_time: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    ingredients: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    steps: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    category: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    difficulty: Mapped[str] = mapped_column(
        Enum(*DIFFICULTIES, name="recipe_difficulty", create_constraint=True), nullable=False
    )
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    def __repr__(self) -> str:
        return f"<Recipe {self.name}>"
