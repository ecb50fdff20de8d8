"""Database engine setup for ProWriter.

SQLite transactions are started with ``BEGIN IMMEDIATE`` so that the
read-then-write sequence of an artifact upsert holds the write lock from its
first statement. A second writer waits up to ``busy_timeout`` seconds.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

if TYPE_CHECKING:
    from prowriter.config import Settings

# Lazy engine initialization - engine created on first use
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _on_connect(dbapi_conn: object, connection_record: object) -> None:
    """Enable foreign keys and hand transaction control to SQLAlchemy."""
    # pysqlite otherwise defers BEGIN until the first write
    dbapi_conn.isolation_level = None  # type: ignore[attr-defined]
    cursor = dbapi_conn.cursor()  # type: ignore[attr-defined]
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _on_begin(conn: object) -> None:
    """Take the write lock at transaction start."""
    conn.exec_driver_sql("BEGIN IMMEDIATE")  # type: ignore[attr-defined]


def _create_engine_for_url(url: str, busy_timeout: float) -> Engine:
    """Create an engine with proper configuration."""
    if not url.startswith("sqlite"):
        return create_engine(url, echo=False, pool_pre_ping=True)

    engine = create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        connect_args={"timeout": busy_timeout, "check_same_thread": False},
    )
    event.listen(engine, "connect", _on_connect)
    event.listen(engine, "begin", _on_begin)
    return engine


def get_engine(settings: "Settings | None" = None) -> Engine:
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        if settings is None:
            from prowriter.config import get_settings

            settings = get_settings()
        if settings.database_url is None:
            settings.ensure_storage_dir()
        _engine = _create_engine_for_url(settings.db_url, settings.busy_timeout)
    return _engine


def get_session_factory(settings: "Settings | None" = None) -> sessionmaker[Session]:
    """Get or create the session factory."""
    global _session_factory
    if _session_factory is None:
        engine = get_engine(settings)
        _session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    return _session_factory


@contextmanager
def get_session(settings: "Settings | None" = None) -> Generator[Session, None, None]:
    """Yield a database session; the whole block is one transaction."""
    factory = get_session_factory(settings)
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_database(settings: "Settings | None" = None) -> None:
    """Create all tables if they don't exist."""
    from prowriter.db.models import Base

    engine = get_engine(settings)
    Base.metadata.create_all(engine)


def reset_engine() -> None:
    """Reset the engine cache (useful for testing)."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
        _engine = None
    _session_factory = None
