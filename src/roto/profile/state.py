"""In-memory profile cache kept consistent with the profile store."""

import threading
from enum import Enum

from roto.logging_config import get_logger
from roto.profile.store import ProfileStore
from roto.schemas import DietCategory, ProfileData
from roto.storage import StorageError

logger = get_logger(__name__)


class ProfileState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"


class ProfileStateCoordinator:
    """
    Cached copy of the stored profile shared by the screens that need it.

    The store owns the profile. The cache only changes on ``refresh()`` or on
    a successful ``save()``, and always by swapping in a complete snapshot,
    so readers see either the old profile or the new one.
    """

    def __init__(self, store: ProfileStore):
        self.store = store
        self._snapshot = ProfileData.empty()
        self._state = ProfileState.UNINITIALIZED
        self._lock = threading.Lock()
        self.last_error: StorageError | None = None

    @property
    def state(self) -> ProfileState:
        return self._state

    @property
    def snapshot(self) -> ProfileData:
        return self._snapshot

    @property
    def base_ingredients(self) -> list[str]:
        return list(self._snapshot.base_ingredients)

    @property
    def dislikes(self) -> list[str]:
        return list(self._snapshot.dislikes)

    @property
    def diet_categories(self) -> list[DietCategory]:
        return list(self._snapshot.diet_categories)

    def refresh(self) -> ProfileData:
        """
        Reload the cache from the store.

        A missing profile or a read failure leaves the cache loaded with
        empty lists; the failure is kept in ``last_error``. The read and the
        swap hold the same lock as ``save()``, so a concurrent save is never
        overwritten by an older read.
        """
        with self._lock:
            try:
                profile = self.store.load_profile()
                self.last_error = None
            except StorageError as e:
                logger.warning(f"Profile refresh failed, falling back to empty profile: {e}")
                self.last_error = e
                profile = None

            self._snapshot = profile or ProfileData.empty()
            self._state = ProfileState.LOADED
            return self._snapshot

    def save(
        self,
        base_ingredients: list[str],
        dislikes: list[str],
        diet_categories: list[DietCategory],
    ) -> ProfileData:
        """
        Write the profile through to the store, then update the cache.

        Raises:
            StorageError: Nothing was saved; the cache still holds the
                previous profile.
        """
        profile = ProfileData(
            base_ingredients=base_ingredients,
            dislikes=dislikes,
            diet_categories=diet_categories,
        )

        with self._lock:
            try:
                self.store.save_profile(profile)
            except StorageError as e:
                logger.warning(f"Profile save failed, keeping cached profile: {e}")
                self.last_error = e
                raise
            self.last_error = None
            self._snapshot = profile
            self._state = ProfileState.LOADED
        return profile
