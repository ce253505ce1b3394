"""Database engine and session lifecycle."""

from blog_api.db.database import (
    async_session_maker,
    check_database,
    close_db,
    engine,
    get_session,
    init_db,
    transaction,
)

__all__ = [
    "engine",
    "async_session_maker",
    "check_database",
    "get_session",
    "init_db",
    "close_db",
    "transaction",
]
