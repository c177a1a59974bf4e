"""Database Session Manager: async connection pool, isolated transactions, health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - run_transaction(fn) runs fn inside exactly one transaction: commit on return,
      rollback on any exception
    - PostgreSQL transactions run at the configured isolation level (SERIALIZABLE by default)
    - SQLite transactions start with BEGIN IMMEDIATE, so writers are serialized
      and a read inside a transaction is never stale by commit time
    - All SQLAlchemy exceptions mapped to StoreUnavailableError (core/errors.py)

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - SQLite hooks follow the SQLAlchemy "serializable isolation" recipe: driver-level
      transaction handling disabled, BEGIN emitted from the engine "begin" event
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Awaitable, Callable, TypeVar

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)

from gameshop.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_STORE_FAILURES: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
)


def _classify(exc: SQLAlchemyError) -> tuple[str, str]:
    for exc_type, message, operation in _STORE_FAILURES:
        if isinstance(exc, exc_type):
            return message, operation
    return "Database operation failed", "unknown"


def _install_sqlite_hooks(engine: AsyncEngine) -> None:
    """Enable foreign keys and IMMEDIATE transactions on every SQLite connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        isolation_level: str = "SERIALIZABLE",
    ):
        if database_url.startswith("sqlite"):
            self.engine = create_async_engine(database_url)
            _install_sqlite_hooks(self.engine)
        else:
            self.engine = create_async_engine(
                database_url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
                pool_recycle=3600,
                isolation_level=isolation_level,
            )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session that rolls back and raises StoreUnavailableError on any SQLAlchemy failure."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            message, operation = _classify(e)
            logger.error(f"Store {operation} failed: {type(e).__name__}: {e}")
            raise StoreUnavailableError(message, operation) from e
        finally:
            await session.close()

    async def run_transaction(
        self, fn: Callable[[AsyncSession], Awaitable[T]],
    ) -> T:
        """Run fn(session) inside one transaction and return its result."""
        async with self.session() as db:
            async with db.begin():
                return await fn(db)

    async def health_check(self) -> bool:
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (StoreUnavailableError, OSError) as e:
            logger.warning(f"Store health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs: Any) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def get_store() -> DatabaseSessionManager:
    """FastAPI dependency for the entity store."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager
