"""Recipe generation: payload assembly, one backend call, DTO mapping."""

import asyncio
from collections.abc import Iterable

from roto.api.client import APIClient
from roto.config import get_settings
from roto.logging_config import get_logger
from roto.schemas import GenerateRecipePayload, ProfileData, Recipe, RecipeResponse

logger = get_logger(__name__)


class GenerationCancelledError(Exception):
    """The in-flight generation was cancelled through ``RecipeService.cancel``."""


class EmptyIngredientsError(ValueError):
    """No ingredients were left to send after merging request and profile."""


def _merge_unique(*groups: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for item in group:
            item = item.strip()
            key = item.casefold()
            if item and key not in seen:
                seen.add(key)
                merged.append(item)
    return merged


def merge_request_inputs(
    profile: ProfileData,
    ingredients: Iterable[str],
    dislikes: Iterable[str] = (),
) -> tuple[list[str], list[str]]:
    """
    Combine per-request input with the stored profile.

    Ingredients are the request items followed by the pantry staples.
    Dislikes are the profile dislikes followed by the request dislikes.
    Both lists drop blanks and case-insensitive duplicates, keeping the
    first occurrence.
    """
    return (
        _merge_unique(ingredients, profile.base_ingredients),
        _merge_unique(profile.dislikes, dislikes),
    )


class RecipeService:
    """Generates recipes through the backend. Holds no state besides in-flight tasks."""

    def __init__(self, api_client: APIClient, endpoint: str | None = None):
        self.api_client = api_client
        self.endpoint = endpoint or get_settings().generate_endpoint
        self._in_flight: set[asyncio.Task] = set()
        self._cancelled: set[asyncio.Task] = set()

    @property
    def in_flight(self) -> bool:
        """Whether a generation request is outstanding."""
        return bool(self._in_flight)

    def cancel(self) -> int:
        """
        Cancel every outstanding generation.

        Returns:
            Number of requests cancelled.
        """
        count = 0
        for task in list(self._in_flight):
            if not task.done():
                self._cancelled.add(task)
                task.cancel()
                count += 1
        if count:
            logger.info(f"Cancelled {count} in-flight generation request(s)")
        return count

    async def generate_recipes(
        self,
        ingredients: list[str],
        dislikes: list[str],
        notes: str = "",
    ) -> list[Recipe]:
        """
        Request a fresh set of recipes.

        Exactly one backend call per invocation, no retries, no caching.

        Raises:
            NetworkError: Any failure of the backend call, unchanged.
            GenerationCancelledError: ``cancel()`` was called while waiting.
        """
        payload = GenerateRecipePayload(
            ingredients=list(ingredients), dislikes=list(dislikes), notes=notes
        )
        logger.info(
            f"Generating recipes for {len(payload.ingredients)} ingredients, "
            f"{len(payload.dislikes)} dislikes"
        )

        task = asyncio.ensure_future(
            self.api_client.post(self.endpoint, payload, RecipeResponse)
        )
        self._in_flight.add(task)
        try:
            response = await task
        except asyncio.CancelledError:
            if task in self._cancelled:
                raise GenerationCancelledError("Recipe generation was cancelled") from None
            raise
        finally:
            self._in_flight.discard(task)
            self._cancelled.discard(task)

        recipes = response.to_models()
        logger.info(f"Received {len(recipes)} recipes")
        return recipes

    async def generate_for_profile(
        self,
        profile: ProfileData,
        ingredients: Iterable[str],
        dislikes: Iterable[str] = (),
        notes: str = "",
    ) -> list[Recipe]:
        """
        Generate recipes for request input merged with the profile.

        Raises:
            EmptyIngredientsError: Neither the request nor the pantry has
                any ingredient. Nothing is sent.
        """
        merged_ingredients, merged_dislikes = merge_request_inputs(profile, ingredients, dislikes)
        if not merged_ingredients:
            raise EmptyIngredientsError("Please add at least one ingredient")
        return await self.generate_recipes(merged_ingredients, merged_dislikes, notes)
