"""Roto - recipe generation core: recipes, favorites and user profile."""

__version__ = "0.1.0"
