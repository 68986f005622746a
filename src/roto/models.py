"""SQLAlchemy database models."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roto.database import Base
from roto.logging_config import get_logger
from roto.profile.fields import decode_profile_field, encode_profile_field
from roto.schemas import (
    DietCategory,
    Instruction,
    ProfileData,
    Recipe,
    RecipeIngredient,
)

logger = get_logger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class UserProfile(Base):
    """The installation's single user profile. List fields are stored delimited."""

    __tablename__ = "user_profiles"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    base_ingredients_string: Mapped[str] = mapped_column(Text, default="", nullable=False)
    dislikes_string: Mapped[str] = mapped_column(Text, default="", nullable=False)
    diet_categories_string: Mapped[str] = mapped_column(Text, default="", nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    @property
    def base_ingredients(self) -> list[str]:
        return decode_profile_field(self.base_ingredients_string)

    @base_ingredients.setter
    def base_ingredients(self, value: list[str]) -> None:
        self.base_ingredients_string = encode_profile_field(value)

    @property
    def dislikes(self) -> list[str]:
        return decode_profile_field(self.dislikes_string)

    @dislikes.setter
    def dislikes(self, value: list[str]) -> None:
        self.dislikes_string = encode_profile_field(value)

    @property
    def diet_categories(self) -> list[DietCategory]:
        categories = []
        for raw in decode_profile_field(self.diet_categories_string):
            try:
                categories.append(DietCategory(raw))
            except ValueError:
                logger.warning(f"Skipping unknown diet category in stored profile: {raw!r}")
        return categories

    @diet_categories.setter
    def diet_categories(self, value: list[DietCategory]) -> None:
        self.diet_categories_string = encode_profile_field(c.value for c in value)

    @classmethod
    def from_data(cls, data: ProfileData) -> "UserProfile":
        profile = cls(id=_new_id())
        profile.base_ingredients = data.base_ingredients
        profile.dislikes = data.dislikes
        profile.diet_categories = data.diet_categories
        return profile

    def to_data(self) -> ProfileData:
        return ProfileData(
            base_ingredients=self.base_ingredients,
            dislikes=self.dislikes,
            diet_categories=self.diet_categories,
        )


class FavoriteRecipe(Base):
    """A saved copy of a generated recipe, keyed by recipe name."""

    __tablename__ = "favorite_recipes"

    id: Mapped[str] = mapped_column(String, primary_key=True)  # recipe name
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    time_estimate: Mapped[str | None] = mapped_column(String(100), nullable=True)
    favorited_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    instructions: Mapped[list["SavedInstruction"]] = relationship(
        "SavedInstruction",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="SavedInstruction.order",
    )
    ingredients: Mapped[list["SavedIngredient"]] = relationship(
        "SavedIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (Index("idx_favorite_recipes_favorited_date", "favorited_date"),)

    @classmethod
    def from_recipe(
        cls, recipe: Recipe, favorited_date: datetime | None = None
    ) -> "FavoriteRecipe":
        """Copy a recipe, keeping each step's order."""
        return cls(
            id=recipe.name,
            name=recipe.name,
            description=recipe.description,
            time_estimate=recipe.time_estimate,
            favorited_date=favorited_date or datetime.utcnow(),
            instructions=[
                SavedInstruction(step=i.step, order=i.order) for i in recipe.instructions
            ],
            ingredients=[
                SavedIngredient(name=i.name, quantity=i.quantity) for i in recipe.ingredients
            ],
        )

    def to_recipe(self) -> Recipe:
        """Project back to a recipe with steps re-sorted by stored order."""
        return Recipe(
            name=self.name,
            description=self.description,
            time_estimate=self.time_estimate,
            instructions=[
                Instruction(step=i.step, order=i.order)
                for i in sorted(self.instructions, key=lambda i: i.order)
            ],
            ingredients=[
                RecipeIngredient(name=i.name, quantity=i.quantity) for i in self.ingredients
            ],
        )


class SavedInstruction(Base):
    """Step of a favorite recipe."""

    __tablename__ = "saved_instructions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[str] = mapped_column(
        String, ForeignKey("favorite_recipes.id", ondelete="CASCADE"), nullable=False
    )
    step: Mapped[str] = mapped_column(Text, nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False)

    recipe: Mapped["FavoriteRecipe"] = relationship("FavoriteRecipe", back_populates="instructions")

    __table_args__ = (Index("idx_saved_instructions_recipe_id", "recipe_id"),)


class SavedIngredient(Base):
    """Ingredient line of a favorite recipe."""

    __tablename__ = "saved_ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[str] = mapped_column(
        String, ForeignKey("favorite_recipes.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    quantity: Mapped[str] = mapped_column(String, nullable=False)

    recipe: Mapped["FavoriteRecipe"] = relationship("FavoriteRecipe", back_populates="ingredients")

    __table_args__ = (Index("idx_saved_ingredients_recipe_id", "recipe_id"),)


class Device(Base):
    """Per-install identifier sent with every request."""

    __tablename__ = "devices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    device_id: Mapped[str] = mapped_column(String(36), nullable=False, default=_new_id)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
