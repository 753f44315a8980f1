"""Recipe service."""

from uuid import UUID

from household.models import Recipe
from household.schemas.recipe import RecipeCreate
from household.services.base import ResourceService


class RecipeService(ResourceService[Recipe]):
    """Service for managing recipes."""

    model = Recipe
    json_fields = ("ingredients", "steps", "category")

    async def create(self, data: RecipeCreate, created_by: UUID | None = None) -> Recipe:  # type: ignore[override]
        """Create a recipe attributed to its author."""
        if created_by is not None:
            await self._check_account(created_by)
        return await super().create(data, created_by=created_by)
