"""Pytest configuration and shared fixtures."""

import json

import httpx
import pytest

from roto.api.client import APIClient
from roto.database import create_db_engine, create_session_factory, init_db
from roto.favorites.store import FavoritesStore
from roto.profile.store import ProfileStore
from roto.schemas import Instruction, Recipe, RecipeIngredient

TEST_DEVICE_ID = "7f9c2ba4-e88f-4d2c-9c3e-0c6f1d5f2a11"
TEST_BASE_URL = "https://recipes.test/api"


# =============================================================================
# Backend Response Fixtures
# =============================================================================


@pytest.fixture
def pancakes_response():
    """Single-recipe generation response."""
    return {
        "recipe": [
            {
                "name": "Pancakes",
                "TimeEstimate": "20 min",
                "Instructions": {"Step": ["Mix", "Cook"]},
                "ListOfIngredients": {
                    "Ingredient": [{"IngredientName": "eggs", "IngredientQuantity": "2"}]
                },
            }
        ]
    }


@pytest.fixture
def multi_recipe_response():
    """Generation response with several complete recipes."""
    return {
        "recipe": [
            {
                "name": "Shakshuka",
                "description": "Eggs poached in a spiced tomato sauce.",
                "TimeEstimate": "30 min",
                "Instructions": {
                    "Step": [
                        "Saute onion and pepper",
                        "Add tomatoes and spices",
                        "Crack in the eggs",
                        "Cover and simmer",
                    ]
                },
                "ListOfIngredients": {
                    "Ingredient": [
                        {"IngredientName": "eggs", "IngredientQuantity": "4"},
                        {"IngredientName": "canned tomatoes", "IngredientQuantity": "1 can"},
                        {"IngredientName": "onion", "IngredientQuantity": "1"},
                    ]
                },
            },
            {
                "name": "Garlic Fried Rice",
                "description": "Quick fried rice, crispy garlic.",
                "Instructions": {"Step": ["Fry garlic", "Add rice", "Season"]},
                "ListOfIngredients": {
                    "Ingredient": [
                        {"IngredientName": "rice", "IngredientQuantity": "2 cups"},
                        {"IngredientName": "garlic", "IngredientQuantity": "6 cloves"},
                    ]
                },
            },
        ]
    }


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def sample_recipe():
    """A recipe with several ordered steps."""
    return Recipe(
        name="Homemade Pizza",
        description="Classic homemade pizza with a crispy crust.",
        time_estimate="45 min",
        instructions=[
            Instruction(step="Make the pizza dough", order=0),
            Instruction(step="Prepare toppings", order=1),
            Instruction(step="Spread sauce and add toppings", order=2),
            Instruction(step="Bake at 450F for 15 minutes", order=3),
        ],
        ingredients=[
            RecipeIngredient(name="Flour", quantity="2 cups"),
            RecipeIngredient(name="Yeast", quantity="1 packet"),
            RecipeIngredient(name="Tomato Sauce", quantity="1 cup"),
            RecipeIngredient(name="Mozzarella", quantity="2 cups"),
        ],
    )


@pytest.fixture
def other_recipe():
    return Recipe(
        name="Garlic Fried Rice",
        instructions=[
            Instruction(step="Fry garlic", order=0),
            Instruction(step="Add rice", order=1),
        ],
        ingredients=[RecipeIngredient(name="rice", quantity="2 cups")],
    )


# =============================================================================
# Local Store Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def test_db_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_db_engine("sqlite://")
    init_db(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def session_factory(test_db_engine):
    return create_session_factory(test_db_engine)


@pytest.fixture
def profile_store(session_factory):
    return ProfileStore(session_factory)


@pytest.fixture
def favorites_store(session_factory):
    return FavoritesStore(session_factory)


# =============================================================================
# HTTP Fixtures
# =============================================================================


class RecordingBackend:
    """httpx handler that records requests and replies with a canned response."""

    def __init__(self, status_code: int = 200, body: object = None, content: bytes | None = None):
        self.status_code = status_code
        self.body = body
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> object:
        return json.loads(self.last_request.content)


@pytest.fixture
def make_backend():
    """Factory for recording backends."""
    return RecordingBackend


@pytest.fixture
def make_api_client():
    """Factory for API clients wired to an httpx handler."""

    def _make(handler, base_url: str = TEST_BASE_URL, device_id_provider=None) -> APIClient:
        return APIClient(
            device_id_provider=device_id_provider or (lambda: TEST_DEVICE_ID),
            base_url=base_url,
            timeout=5.0,
            transport=httpx.MockTransport(handler),
        )

    return _make
