"""
Database Engine Module

Creates the asynchronous engine used by the database document store,
supporting SQLite and PostgreSQL.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create asynchronous database engine

    Args:
        database_url: SQLAlchemy async URL (sqlite+aiosqlite:// or postgresql+asyncpg://)
        echo: Print SQL statements

    Returns:
        AsyncEngine: Engine owning the connection pool
    """
    is_sqlite = database_url.startswith("sqlite")
    engine = create_async_engine(
        database_url,
        echo=echo,
        # SQLite specific configuration
        connect_args={"check_same_thread": False} if is_sqlite else {},
    )

    # WAL lets readers proceed while a write is in progress
    if is_sqlite and ":memory:" not in database_url:
        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    return engine
