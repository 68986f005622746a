"""Persistence for favorite recipes."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, sessionmaker

from roto.logging_config import get_logger
from roto.models import FavoriteRecipe
from roto.schemas import Recipe
from roto.storage import StorageError

logger = get_logger(__name__)


class FavoritesStore:
    """Saved recipes, identified by recipe name."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def toggle_favorite(self, recipe: Recipe) -> bool:
        """
        Remove the favorite named like ``recipe`` or save ``recipe`` as one.

        Lookup and delete/insert share one transaction.

        Returns:
            True if the recipe is a favorite afterwards.

        Raises:
            StorageError: The toggle was not committed.
        """
        try:
            with self.session_factory.begin() as session:
                existing = session.get(FavoriteRecipe, recipe.name)
                if existing is not None:
                    session.delete(existing)
                    is_favorite = False
                else:
                    session.add(FavoriteRecipe.from_recipe(recipe))
                    is_favorite = True
        except SQLAlchemyError as e:
            logger.error(f"Failed to toggle favorite '{recipe.name}': {e}")
            raise StorageError(
                f"Failed to toggle favorite: {e}", operation="toggle_favorite"
            ) from e

        logger.info(f"{'Added' if is_favorite else 'Removed'} favorite: {recipe.name}")
        return is_favorite

    def is_favorite(self, recipe: Recipe) -> bool:
        """Check whether a favorite with the recipe's name exists."""
        try:
            with self.session_factory() as session:
                found = session.scalar(
                    select(FavoriteRecipe.id).where(FavoriteRecipe.id == recipe.name)
                )
        except SQLAlchemyError as e:
            logger.error(f"Failed to check favorite status for '{recipe.name}': {e}")
            raise StorageError(
                f"Failed to check favorite status: {e}", operation="is_favorite"
            ) from e
        return found is not None

    def get_all_favorites(self) -> list[FavoriteRecipe]:
        """
        Fetch every stored favorite, in no particular order.

        Steps and ingredients are loaded eagerly so the returned objects
        can be used after the session has closed.
        """
        try:
            with self.session_factory() as session:
                favorites = session.scalars(
                    select(FavoriteRecipe).options(
                        selectinload(FavoriteRecipe.instructions),
                        selectinload(FavoriteRecipe.ingredients),
                    )
                ).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch favorites: {e}")
            raise StorageError(
                f"Failed to fetch favorites: {e}", operation="get_all_favorites"
            ) from e

        logger.debug(f"Fetched {len(favorites)} favorites")
        return list(favorites)

    def favorite_recipes(self) -> list[Recipe]:
        """Favorites as recipes, most recently favorited first."""
        favorites = sorted(
            self.get_all_favorites(), key=lambda f: f.favorited_date, reverse=True
        )
        return [favorite.to_recipe() for favorite in favorites]
