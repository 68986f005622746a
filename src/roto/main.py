"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roto import __version__
from roto.config import get_settings
from roto.dependencies import AppContainer, build_container
from roto.logging_config import configure_logging, get_logger
from roto.routers import favorites_router, profile_router, recipes_router

# Configure logging on module load
configure_logging(get_settings().log_level)
logger = get_logger(__name__)


def create_app(container: AppContainer | None = None) -> FastAPI:
    """
    Build the application.

    An injected container is used as-is and left open on shutdown. Without
    one, the lifespan builds it from settings; a failure to create the local
    schema aborts startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting Roto API")
        owned = container is None
        if owned:
            app.state.container = build_container()

        yield

        logger.info("Shutting down Roto API")
        if owned:
            await app.state.container.close()

    settings = get_settings()
    app = FastAPI(
        title="Roto API",
        description="Recipe generation from pantry ingredients",
        version=__version__,
        lifespan=lifespan,
    )
    if container is not None:
        app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(recipes_router)
    app.include_router(favorites_router)
    app.include_router(profile_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Basic health check endpoint."""
        return {"status": "ok", "service": "roto-api"}

    @app.get("/")
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": "Roto API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


def run() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("roto.main:app", host="127.0.0.1", port=8000, reload=settings.is_development)
