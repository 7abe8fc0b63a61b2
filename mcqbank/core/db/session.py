"""Engine and session factories.

Nothing connects at import time: callers build an engine from a URL (or the
configured settings) and open sessions through ``session_scope``.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from mcqbank.core.config_file import get_settings

Base = declarative_base()


def _enable_sqlite_transactions(engine: Engine) -> None:
    """Turn on foreign keys and let SQLAlchemy own BEGIN so SAVEPOINTs work.

    pysqlite starts transactions lazily on its own, which breaks
    ``Session.begin_nested``. The driver is put in autocommit mode and the
    engine emits BEGIN itself.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # noqa: ARG001
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for ``database_url``.

    Args:
        database_url: SQLAlchemy database URL
        echo: Log emitted SQL

    Returns:
        Configured engine
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, echo=echo)
        _enable_sqlite_transactions(engine)
        return engine

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Build a session factory bound to ``engine``."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@lru_cache
def get_engine() -> Engine:
    """Engine for the configured ``DATABASE_URL`` (created on first use)."""
    settings = get_settings()
    return create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def get_session_factory() -> sessionmaker[Session]:
    """Session factory for the configured database."""
    return create_session_factory(get_engine())


@contextmanager
def session_scope(factory: sessionmaker[Session] | None = None) -> Iterator[Session]:
    """Open a session and always close it.

    Transactions are committed or rolled back by the code using the session;
    anything left open on exit is rolled back by ``close``.
    """
    if factory is None:
        factory = get_session_factory()
    db = factory()
    try:
        yield db
    finally:
        db.close()
