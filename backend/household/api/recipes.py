"""Recipe API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from household.core import get_db
from household.middleware import get_current_identity
from household.schemas.auth import MessageResponse
from household.schemas.recipe import RecipeCreate, RecipeResponse, RecipeUpdate
from household.services.auth import Identity
from household.services.base import UnknownAccountError
from household.services.recipe import RecipeService

router = APIRouter(prefix="/recipes", tags=["recipes"])


def get_recipe_service(db: AsyncSession = Depends(get_db)) -> RecipeService:
    """Dependency to get recipe service."""
    return RecipeService(db)


def _not_found(recipe_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Recipe {recipe_id} not found",
    )


@router.get("", response_model=list[RecipeResponse])
async def list_recipes(
    _identity: Identity = Depends(get_current_identity),
    service: RecipeService = Depends(get_recipe_service),
) -> list[RecipeResponse]:
    return [RecipeResponse.model_validate(r) for r in await service.list()]


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    data: RecipeCreate,
    identity: Identity = Depends(get_current_identity),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    """Create a recipe owned by the caller."""
    try:
        recipe = await service.create(data, created_by=identity.subject_id)
    except UnknownAccountError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account no longer exists",
        ) from e
    return RecipeResponse.model_validate(recipe)


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: UUID,
    _identity: Identity = Depends(get_current_identity),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    recipe = await service.get(recipe_id)
    if not recipe:
        raise _not_found(recipe_id)
    return RecipeResponse.model_validate(recipe)


@router.put("/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(
    recipe_id: UUID,
    data: RecipeUpdate,
    _identity: Identity = Depends(get_current_identity),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    recipe = await service.update(recipe_id, data)
    if not recipe:
        raise _not_found(recipe_id)
    return RecipeResponse.model_validate(recipe)


@router.delete(
    "/{recipe_id}", response_model=MessageResponse, status_code=status.HTTP_202_ACCEPTED
)
async def delete_recipe(
    recipe_id: UUID,
    _identity: Identity = Depends(get_current_identity),
    service: RecipeService = Depends(get_recipe_service),
) -> MessageResponse:
    if not await service.delete(recipe_id):
        raise _not_found(recipe_id)
    return MessageResponse(message="Recipe deleted successfully")
