"""Database engine and helpers.

This module wraps the async SQLModel/SQLAlchemy engine in a small
`Database` object. The application factory creates one per app and keeps
it on `app.state`; request handlers receive a session through the
`get_session` dependency instead of reaching for a module-level engine.
"""

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record):
    # SQLite ignores REFERENCES clauses unless this is set per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one store."""

    def __init__(self, url: str, echo: bool = False):
        self.engine: AsyncEngine = create_async_engine(url, echo=echo)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_tables(self) -> None:
        """Create database tables using SQLModel metadata.

        Intended for local development and first-run bootstrapping;
        schema changes on a long-lived store need a migration tool.
        """
        # models must be imported so their tables are registered on the metadata
        from . import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield an `AsyncSession` for FastAPI dependency injection.

    The session is bound to the store handle of the running app and is
    closed when the request scope finishes.
    """
    db: Database = request.app.state.db
    async with db.session() as session:
        yield session
