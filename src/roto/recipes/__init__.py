"""Recipe generation service."""

from roto.recipes.service import (
    EmptyIngredientsError,
    GenerationCancelledError,
    RecipeService,
    merge_request_inputs,
)

__all__ = [
    "EmptyIngredientsError",
    "GenerationCancelledError",
    "RecipeService",
    "merge_request_inputs",
]
