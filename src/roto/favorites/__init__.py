"""Favorite recipes persistence."""

from roto.favorites.store import FavoritesStore

__all__ = ["FavoritesStore"]
