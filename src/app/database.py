# src/app/database.py
"""
Database Configuration and Session Management
Uses SQLAlchemy with async support
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.app.config import get_config
from src.app.models import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Owns the async engine and session factory

    Each request gets its own session from session(); nothing is shared
    between requests except the connection pool.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Open a session; roll back on error, always close

        Usage:
            async with db_manager.session() as session:
                ...
        """
        session = self.session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create all tables defined by models"""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("✅ Database tables created successfully")

    async def drop_tables(self) -> None:
        """Drop all tables (development/testing only)"""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.warning("⚠️  All tables dropped")

    async def ping(self) -> bool:
        """Check connectivity with SELECT 1"""
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("🔌 Database connections closed")


def create_db_manager(url: Optional[str] = None) -> DatabaseManager:
    """Build a DatabaseManager from configuration"""
    config = get_config()
    url = url or config.database.url

    engine_kwargs = {}
    if not url.startswith("sqlite"):
        engine_kwargs["pool_size"] = config.database.pool_size
        engine_kwargs["max_overflow"] = config.database.max_overflow
        engine_kwargs["pool_pre_ping"] = True

    return DatabaseManager(url, echo=config.database.echo, **engine_kwargs)


db_manager = create_db_manager()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting database session

    Usage in FastAPI:
        @router.get("/videos")
        async def get_videos(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with db_manager.session() as session:
        yield session


async def reset_database(manager: Optional[DatabaseManager] = None) -> None:
    """Drop and recreate all tables (development/testing only)"""
    manager = manager or db_manager
    logger.warning("⚠️  Resetting database...")
    await manager.drop_tables()
    await manager.create_tables()
    logger.info("✅ Database reset complete")
