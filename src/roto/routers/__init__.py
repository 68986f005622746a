"""API routers for the roto application."""

from roto.routers.favorites import router as favorites_router
from roto.routers.profile import router as profile_router
from roto.routers.recipes import router as recipes_router

__all__ = [
    "favorites_router",
    "profile_router",
    "recipes_router",
]
