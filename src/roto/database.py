"""Database configuration and session management."""

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from roto.logging_config import get_logger
from roto.storage import StorageInitializationError

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the engine for local persistence.

    SQLite connections get foreign key enforcement so child rows of a
    favorite are removed by the database as well as by the ORM. In-memory
    databases share one connection, otherwise every session would see an
    empty schema.
    """
    kwargs: dict = {"echo": echo}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory whose objects stay readable after commit."""
    return sessionmaker(engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create all tables. Failure here is an unrecoverable startup error."""
    # Register the mapped classes on Base.metadata
    import roto.models  # noqa: F401

    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as e:
        logger.critical(f"Failed to initialize local store: {e}")
        raise StorageInitializationError(
            f"Could not create local schema: {e}", operation="init_db"
        ) from e
    logger.info("Local store initialized")
