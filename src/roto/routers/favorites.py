"""API routes for favorite recipes."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from roto.dependencies import get_favorites_store
from roto.favorites.store import FavoritesStore
from roto.logging_config import get_logger
from roto.routers.errors import storage_error
from roto.routers.recipes import RecipeListResponse
from roto.schemas import Recipe
from roto.storage import StorageError

logger = get_logger(__name__)

router = APIRouter(prefix="/favorites", tags=["favorites"])


class FavoriteStatusResponse(BaseModel):
    name: str
    is_favorite: bool


@router.get("", response_model=RecipeListResponse)
def list_favorites(
    store: FavoritesStore = Depends(get_favorites_store),
) -> RecipeListResponse:
    """Saved recipes, most recently favorited first."""
    try:
        recipes = store.favorite_recipes()
    except StorageError as e:
        raise storage_error(e)
    return RecipeListResponse(recipes=recipes, total=len(recipes))


@router.post("/toggle", response_model=FavoriteStatusResponse)
def toggle_favorite(
    recipe: Recipe,
    store: FavoritesStore = Depends(get_favorites_store),
) -> FavoriteStatusResponse:
    """Save the recipe as a favorite, or remove it if already saved."""
    try:
        is_favorite = store.toggle_favorite(recipe)
    except StorageError as e:
        raise storage_error(e)
    return FavoriteStatusResponse(name=recipe.name, is_favorite=is_favorite)


@router.post("/status", response_model=FavoriteStatusResponse)
def favorite_status(
    recipe: Recipe,
    store: FavoritesStore = Depends(get_favorites_store),
) -> FavoriteStatusResponse:
    try:
        is_favorite = store.is_favorite(recipe)
    except StorageError as e:
        raise storage_error(e)
    return FavoriteStatusResponse(name=recipe.name, is_favorite=is_favorite)
