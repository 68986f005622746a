"""Persistence for the singleton user profile."""

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from roto.logging_config import get_logger
from roto.models import UserProfile
from roto.schemas import ProfileData
from roto.storage import StorageError

logger = get_logger(__name__)


class ProfileStore:
    """Reads and replaces the one profile record of this installation."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def save_profile(self, profile: ProfileData) -> None:
        """
        Replace the stored profile.

        Delete and insert run in the same transaction, so a failure leaves
        the previous profile in place.

        Raises:
            StorageError: The transaction could not be committed.
        """
        try:
            with self.session_factory.begin() as session:
                result = session.execute(delete(UserProfile))
                if result.rowcount:
                    logger.debug(f"Replacing {result.rowcount} existing profile(s)")
                session.add(UserProfile.from_data(profile))
        except SQLAlchemyError as e:
            logger.error(f"Failed to save profile: {e}")
            raise StorageError(f"Failed to save profile: {e}", operation="save_profile") from e

        logger.info(
            f"Profile saved: {len(profile.base_ingredients)} pantry items, "
            f"{len(profile.dislikes)} dislikes, {len(profile.diet_categories)} diet categories"
        )

    def load_profile(self) -> ProfileData | None:
        """
        Load the stored profile, or None if there is none.

        More than one record should never exist; if it does the first one
        is returned.

        Raises:
            StorageError: The profile table could not be read.
        """
        try:
            with self.session_factory() as session:
                profiles = session.scalars(select(UserProfile)).all()
                if not profiles:
                    logger.debug("No stored profile found")
                    return None
                if len(profiles) > 1:
                    logger.warning(f"Found {len(profiles)} profiles, returning first")
                return profiles[0].to_data()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load profile: {e}")
            raise StorageError(f"Failed to load profile: {e}", operation="load_profile") from e
