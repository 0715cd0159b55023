"""
Embedded SQLite storage: declarative base, flag codec and the Database handle.
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional
import logging

from sqlalchemy import Integer, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from sqlalchemy.types import TypeDecorator

from gonext.config.settings import DatabaseSettings, StorageBackend
from gonext.core.exceptions import StorageError
from gonext.core.ids import bool_to_int, int_to_bool

logger = logging.getLogger(__name__)

# SQLAlchemy declarative base for models
Base = declarative_base()


class IntFlag(TypeDecorator):
    """Boolean persisted as INTEGER 0/1."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return bool_to_int(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int_to_bool(value)


def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the async engine and hands out sessions."""

    def __init__(self, db_settings: DatabaseSettings):
        self.settings = db_settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StorageError("Database is not initialized. Call initialize() first.")
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    async def initialize(self) -> None:
        """Open the database and create the schema if it does not exist."""
        if self._engine is not None:
            return

        kwargs = {"echo": self.settings.echo, "future": True}
        if self.settings.backend == StorageBackend.MEMORY:
            # single shared connection so every session sees the same in-memory database
            kwargs.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
        else:
            Path(self.settings.directory).mkdir(parents=True, exist_ok=True)

        engine = create_async_engine(self.settings.url, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_foreign_keys)

        # register tables on Base.metadata
        import gonext.models  # noqa: F401

        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            await engine.dispose()
            raise StorageError.from_db_error(exc) from exc

        self._engine = engine
        self._session_factory = async_sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False
        )
        logger.info(
            "Database initialized (backend=%s, schema version=%s)",
            self.settings.backend.value,
            self.settings.version,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session; storage failures roll back and surface as StorageError."""
        if self._session_factory is None:
            raise StorageError("Database is not initialized. Call initialize() first.")

        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            await session.rollback()
            raise StorageError.from_db_error(exc) from exc
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database closed")
