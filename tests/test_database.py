"""Tests for local store setup and the device identifier."""

import uuid
from unittest.mock import patch

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from roto.api.device import DeviceIdentity
from roto.database import Base, create_db_engine, create_session_factory, init_db
from roto.storage import StorageInitializationError


class TestDatabaseSetup:
    """Tests for engine creation and schema initialization."""

    def test_tables_created(self, test_db_engine):
        tables = set(Base.metadata.tables)

        assert {
            "user_profiles",
            "favorite_recipes",
            "saved_instructions",
            "saved_ingredients",
            "devices",
        } <= tables

    def test_sqlite_foreign_keys_enabled(self, test_db_engine):
        """Test that cascades are enforced by the database too."""
        with test_db_engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_init_failure_is_fatal(self):
        """Test that schema creation errors become StorageInitializationError."""
        engine = create_db_engine("sqlite://")
        error = OperationalError("CREATE TABLE", {}, Exception("read-only file system"))

        with patch.object(Base.metadata, "create_all", side_effect=error):
            with pytest.raises(StorageInitializationError) as exc_info:
                init_db(engine)

        assert exc_info.value.operation == "init_db"
        engine.dispose()


class TestDeviceIdentity:
    """Tests for the persisted per-install device id."""

    def test_generated_once(self, session_factory):
        device = DeviceIdentity(session_factory)

        device_id = device.get()

        assert uuid.UUID(device_id)
        assert device.get() == device_id

    def test_persisted_across_instances(self, session_factory):
        """Test that a new instance reads the stored id instead of generating one."""
        first = DeviceIdentity(session_factory).get()

        second = DeviceIdentity(session_factory).get()

        assert first == second

    def test_survives_reopen(self, tmp_path):
        """Test that the id lives as long as the database file."""
        url = f"sqlite:///{tmp_path / 'roto.db'}"
        engine = create_db_engine(url)
        init_db(engine)
        first = DeviceIdentity(create_session_factory(engine)).get()
        engine.dispose()

        engine = create_db_engine(url)
        second = DeviceIdentity(create_session_factory(engine)).get()
        engine.dispose()

        assert first == second
