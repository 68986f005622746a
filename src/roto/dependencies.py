"""Wiring of the core collaborators and FastAPI dependencies."""

from dataclasses import dataclass

import httpx
from fastapi import Request
from sqlalchemy import Engine

from roto.api.client import APIClient
from roto.api.device import DeviceIdentity
from roto.config import Settings, get_settings
from roto.database import create_db_engine, create_session_factory, init_db
from roto.favorites.store import FavoritesStore
from roto.logging_config import get_logger
from roto.profile.state import ProfileStateCoordinator
from roto.profile.store import ProfileStore
from roto.recipes.service import RecipeService
from roto.storage import StorageError

logger = get_logger(__name__)


@dataclass
class AppContainer:
    """Every long-lived collaborator, built once and passed explicitly."""

    settings: Settings
    engine: Engine
    profile_store: ProfileStore
    profile_state: ProfileStateCoordinator
    favorites: FavoritesStore
    device: DeviceIdentity
    api_client: APIClient
    recipe_service: RecipeService

    async def close(self) -> None:
        await self.api_client.close()
        self.engine.dispose()


def build_container(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppContainer:
    """
    Create the local store and every service on top of it.

    Raises:
        StorageInitializationError: The schema could not be created.
    """
    settings = settings or get_settings()

    engine = create_db_engine(settings.database_url)
    init_db(engine)
    session_factory = create_session_factory(engine)

    profile_store = ProfileStore(session_factory)
    profile_state = ProfileStateCoordinator(profile_store)
    profile_state.refresh()

    device = DeviceIdentity(session_factory)
    try:
        device.get()
    except StorageError as e:
        logger.warning(f"Device id unavailable at startup: {e}")
    api_client = APIClient(
        device_id_provider=device.get,
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
        transport=transport,
    )

    logger.info(f"Core services ready (database={settings.database_url})")
    return AppContainer(
        settings=settings,
        engine=engine,
        profile_store=profile_store,
        profile_state=profile_state,
        favorites=FavoritesStore(session_factory),
        device=device,
        api_client=api_client,
        recipe_service=RecipeService(api_client, endpoint=settings.generate_endpoint),
    )


def get_container(request: Request) -> AppContainer:
    """Container attached to the running application."""
    return request.app.state.container


def get_recipe_service(request: Request) -> RecipeService:
    return get_container(request).recipe_service


def get_favorites_store(request: Request) -> FavoritesStore:
    return get_container(request).favorites


def get_profile_state(request: Request) -> ProfileStateCoordinator:
    return get_container(request).profile_state
