"""Tests for profile persistence."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from roto.models import UserProfile
from roto.profile.store import ProfileStore
from roto.schemas import DietCategory, ProfileData
from roto.storage import StorageError


def _profile_count(session_factory) -> int:
    with session_factory() as session:
        return session.scalar(select(func.count()).select_from(UserProfile))


class TestProfileStore:
    """Tests for saving and loading the singleton profile."""

    def test_load_without_profile(self, profile_store):
        """Test that an empty store loads as None."""
        assert profile_store.load_profile() is None

    def test_save_and_load(self, profile_store):
        """Test a full profile round trip through storage."""
        profile = ProfileData(
            base_ingredients=["salt", "olive oil", "garlic, minced"],
            dislikes=["cilantro"],
            diet_categories=[DietCategory.VEGETARIAN, DietCategory.GLUTEN_FREE],
        )

        profile_store.save_profile(profile)

        assert profile_store.load_profile() == profile

    def test_save_replaces_existing(self, profile_store, session_factory):
        """Test that saving keeps exactly one record."""
        profile_store.save_profile(ProfileData(base_ingredients=["salt"]))
        profile_store.save_profile(ProfileData(base_ingredients=["pepper"], dislikes=["olives"]))

        assert _profile_count(session_factory) == 1
        loaded = profile_store.load_profile()
        assert loaded.base_ingredients == ["pepper"]
        assert loaded.dislikes == ["olives"]

    def test_empty_lists_stored_as_empty_strings(self, profile_store, session_factory):
        """Test that empty fields never come back as ['']."""
        profile_store.save_profile(ProfileData())

        with session_factory() as session:
            row = session.scalars(select(UserProfile)).one()
            assert row.base_ingredients_string == ""
            assert row.dislikes_string == ""
            assert row.diet_categories_string == ""

        assert profile_store.load_profile() == ProfileData()

    def test_load_tolerates_multiple_records(self, profile_store, session_factory):
        """Test that extra records are tolerated rather than raising."""
        with session_factory.begin() as session:
            session.add(UserProfile(id="a", base_ingredients_string="rice"))
            session.add(UserProfile(id="b", base_ingredients_string="beans"))

        loaded = profile_store.load_profile()

        assert loaded is not None
        assert loaded.base_ingredients in (["rice"], ["beans"])

    def test_unknown_diet_category_skipped(self, profile_store, session_factory):
        """Test that unrecognized stored categories are dropped on load."""
        with session_factory.begin() as session:
            session.add(UserProfile(id="a", diet_categories_string="Vegan,Paleo,Kosher"))

        loaded = profile_store.load_profile()

        assert loaded.diet_categories == [DietCategory.VEGAN, DietCategory.KOSHER]

    def test_failed_insert_keeps_previous_profile(self, profile_store, session_factory):
        """Test that delete and insert commit together or not at all."""
        previous = ProfileData(base_ingredients=["salt"], dislikes=["olives"])
        profile_store.save_profile(previous)

        def reject_profile_insert(session, flush_context, instances):
            if any(isinstance(obj, UserProfile) for obj in session.new):
                raise IntegrityError("INSERT INTO user_profiles", {}, Exception("disk full"))

        event.listen(Session, "before_flush", reject_profile_insert)
        try:
            with pytest.raises(StorageError) as exc_info:
                profile_store.save_profile(ProfileData(base_ingredients=["pepper"]))
        finally:
            event.remove(Session, "before_flush", reject_profile_insert)

        assert exc_info.value.operation == "save_profile"
        assert _profile_count(session_factory) == 1
        assert profile_store.load_profile() == previous

    def test_load_failure_raises_storage_error(self):
        """Test that read failures surface as StorageError."""
        session_factory = MagicMock(
            side_effect=OperationalError("SELECT", {}, Exception("disk I/O error"))
        )
        store = ProfileStore(session_factory)

        with pytest.raises(StorageError) as exc_info:
            store.load_profile()

        assert exc_info.value.operation == "load_profile"
