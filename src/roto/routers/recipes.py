"""API routes for recipe generation."""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from roto.api.base import NetworkError
from roto.dependencies import get_profile_state, get_recipe_service
from roto.logging_config import get_logger
from roto.profile.state import ProfileStateCoordinator
from roto.recipes.service import EmptyIngredientsError, GenerationCancelledError, RecipeService
from roto.routers.errors import network_error
from roto.schemas import ProfileData, Recipe

logger = get_logger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])


class GenerateRecipesRequest(BaseModel):
    """Input collected on the recipe request screen."""

    ingredients: list[str] = Field(default_factory=list)
    dislikes: list[str] = Field(default_factory=list)
    notes: str = ""
    use_profile: bool = Field(
        default=True, description="Merge pantry staples and dislikes from the saved profile"
    )


class RecipeListResponse(BaseModel):
    recipes: list[Recipe]
    total: int


class CancelResponse(BaseModel):
    cancelled: int


@router.post("/generate", response_model=RecipeListResponse)
async def generate_recipes(
    body: GenerateRecipesRequest,
    service: RecipeService = Depends(get_recipe_service),
    profile_state: ProfileStateCoordinator = Depends(get_profile_state),
) -> RecipeListResponse:
    """
    Generate recipes from the given ingredients.

    With ``use_profile`` the cached profile's pantry items and dislikes are
    merged into the request.
    """
    profile = profile_state.snapshot if body.use_profile else ProfileData.empty()

    try:
        recipes = await service.generate_for_profile(
            profile, body.ingredients, body.dislikes, body.notes
        )
    except EmptyIngredientsError as e:
        raise HTTPException(
            status_code=422,
            detail={"kind": "empty_ingredients", "message": str(e)},
        )
    except GenerationCancelledError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"kind": "cancelled", "message": str(e)},
        )
    except NetworkError as e:
        logger.warning(f"Recipe generation failed ({e.kind.value}): {e}")
        raise network_error(e)

    return RecipeListResponse(recipes=recipes, total=len(recipes))


@router.post("/cancel", response_model=CancelResponse)
async def cancel_generation(
    service: RecipeService = Depends(get_recipe_service),
) -> CancelResponse:
    """Cancel any outstanding generation request."""
    return CancelResponse(cancelled=service.cancel())
