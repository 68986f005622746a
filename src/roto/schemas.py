"""Recipe, profile and wire-format schemas."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class DietCategory(str, Enum):
    """Fixed set of dietary restrictions a profile can select."""

    VEGAN = "Vegan"
    VEGETARIAN = "Vegetarian"
    PESCATARIAN = "Pescatarian"
    GLUTEN_FREE = "Gluten Free"
    KOSHER = "Kosher"


class RecipeDecodeError(ValueError):
    """Server recipe JSON could not be decoded as a whole."""


# =============================================================================
# Domain model
# =============================================================================


class Instruction(BaseModel):
    """One recipe step and its position."""

    step: str
    order: int


class RecipeIngredient(BaseModel):
    """Ingredient line of a recipe."""

    name: str
    quantity: str


class Recipe(BaseModel):
    """
    A generated recipe.

    Two recipes are equal when name, description and time estimate match.
    Steps and ingredients do not take part in equality or hashing.
    """

    name: str
    description: str | None = None
    time_estimate: str | None = None
    instructions: list[Instruction] = Field(default_factory=list)
    ingredients: list[RecipeIngredient] = Field(default_factory=list)

    @property
    def identity(self) -> tuple[str, str | None, str | None]:
        return (self.name, self.description, self.time_estimate)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    def sorted_instructions(self) -> list[Instruction]:
        """Instructions in step order, regardless of list order."""
        return sorted(self.instructions, key=lambda i: i.order)

    def to_wire(self) -> dict[str, Any]:
        """Encode into the server's JSON shape."""
        return RecipeDTO.from_model(self).model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Wire format (server JSON)
# =============================================================================


class IngredientDTO(BaseModel):
    """Ingredient as sent by the server."""

    model_config = ConfigDict(populate_by_name=True)

    ingredient_name: str = Field(alias="IngredientName")
    ingredient_quantity: str = Field(alias="IngredientQuantity")


class InstructionsDTO(BaseModel):
    """Ordered step list; order is the array position."""

    model_config = ConfigDict(populate_by_name=True)

    step: list[str] = Field(alias="Step")


class ListOfIngredientsDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ingredient: list[IngredientDTO] = Field(alias="Ingredient")


class RecipeDTO(BaseModel):
    """Recipe object as sent by the server."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str | None = None
    time_estimate: str | None = Field(default=None, alias="TimeEstimate")
    instructions: InstructionsDTO = Field(alias="Instructions")
    list_of_ingredients: ListOfIngredientsDTO = Field(alias="ListOfIngredients")

    def to_model(self) -> Recipe:
        """Convert to the domain recipe, numbering steps by position."""
        return Recipe(
            name=self.name,
            description=self.description,
            time_estimate=self.time_estimate,
            instructions=[
                Instruction(step=step, order=index)
                for index, step in enumerate(self.instructions.step)
            ],
            ingredients=[
                RecipeIngredient(name=i.ingredient_name, quantity=i.ingredient_quantity)
                for i in self.list_of_ingredients.ingredient
            ],
        )

    @classmethod
    def from_model(cls, recipe: Recipe) -> "RecipeDTO":
        """Build the wire object from a domain recipe."""
        return cls(
            name=recipe.name,
            description=recipe.description,
            time_estimate=recipe.time_estimate,
            instructions=InstructionsDTO(step=[i.step for i in recipe.sorted_instructions()]),
            list_of_ingredients=ListOfIngredientsDTO(
                ingredient=[
                    IngredientDTO(ingredient_name=i.name, ingredient_quantity=i.quantity)
                    for i in recipe.ingredients
                ]
            ),
        )


class RecipeResponse(BaseModel):
    """Envelope of a successful generation response."""

    recipe: list[RecipeDTO]

    def to_models(self) -> list[Recipe]:
        return [dto.to_model() for dto in self.recipe]


class GenerateRecipePayload(BaseModel):
    """Request body for the generation endpoint."""

    ingredients: list[str]
    dislikes: list[str]
    notes: str = ""


def decode_recipes(payload: str | bytes) -> list[Recipe]:
    """
    Decode a generation response body into recipes.

    All-or-nothing: any invalid element fails the whole body.

    Raises:
        RecipeDecodeError: Body is not UTF-8, not JSON, lacks ``recipe`` or
            contains an element missing a required key.
    """
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RecipeDecodeError(f"Response body is not valid UTF-8: {e}") from e

    try:
        response = RecipeResponse.model_validate_json(payload)
    except ValidationError as e:
        raise RecipeDecodeError(f"Response body does not match recipe schema: {e}") from e

    return response.to_models()


def encode_recipes(recipes: list[Recipe]) -> dict[str, Any]:
    """Encode recipes into the response envelope shape."""
    return {"recipe": [recipe.to_wire() for recipe in recipes]}


# =============================================================================
# Profile
# =============================================================================


def _clean_items(items: list[str]) -> list[str]:
    return [item.strip() for item in items if item and item.strip()]


class ProfileData(BaseModel):
    """Snapshot of the user's profile as passed between layers."""

    model_config = ConfigDict(frozen=True)

    base_ingredients: list[str] = Field(default_factory=list)
    dislikes: list[str] = Field(default_factory=list)
    diet_categories: list[DietCategory] = Field(default_factory=list)

    @field_validator("base_ingredients", mode="after")
    @classmethod
    def unique_base_ingredients(cls, v: list[str]) -> list[str]:
        """Pantry items behave like an ordered set."""
        return list(dict.fromkeys(_clean_items(v)))

    @field_validator("dislikes", mode="after")
    @classmethod
    def clean_dislikes(cls, v: list[str]) -> list[str]:
        return _clean_items(v)

    @field_validator("diet_categories", mode="after")
    @classmethod
    def unique_diet_categories(cls, v: list[DietCategory]) -> list[DietCategory]:
        return list(dict.fromkeys(v))

    @classmethod
    def empty(cls) -> "ProfileData":
        return cls()
