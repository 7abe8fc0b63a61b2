"""Database engine and session helpers."""

from mcqbank.core.db.session import (
    Base,
    create_db_engine,
    create_session_factory,
    get_engine,
    get_session_factory,
    session_scope,
)

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "get_engine",
    "get_session_factory",
    "session_scope",
]
