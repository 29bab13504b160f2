# src/infrastructure/repositories/base.py
"""
Base Repository Pattern
Provides generic reads, creation and counter updates for all entities
"""

from typing import Generic, TypeVar, Type, Optional, Any, cast
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, case
from sqlalchemy.orm import InstrumentedAttribute
import logging

logger = logging.getLogger(__name__)

# Generic type for models
ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """
    Repository with generic CRUD operations

    Methods that mutate counters or fact rows only flush; committing is
    the caller's job so a fact write and its counter update share one
    transaction. create() is standalone and commits.

    Usage:
        class VideoRepository(BaseRepository[Video]):
            def __init__(self, session: AsyncSession):
                super().__init__(session, Video)
    """

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        """
        Initialize repository

        Args:
            session: Database session
            model: SQLAlchemy model class
        """
        self.session = session
        self.model = model

    def _id_col(self) -> InstrumentedAttribute:
        return cast(InstrumentedAttribute, getattr(self.model, "id"))

    def _column(self, name: str) -> InstrumentedAttribute:
        if not hasattr(self.model, name):
            raise AttributeError(f"{self.model.__name__} has no column {name!r}")
        return cast(InstrumentedAttribute, getattr(self.model, name))

    # ========================================================================
    # CREATE Operations
    # ========================================================================

    async def create(self, **kwargs) -> ModelType:
        """
        Create new entity and commit

        Args:
            **kwargs: Model attributes

        Returns:
            Created model instance
        """
        try:
            instance: ModelType = cast(Any, self.model)(**kwargs)
            self.session.add(instance)
            await self.session.commit()
            await self.session.refresh(instance)
            logger.info(f"✅ Created {self.model.__name__}: {getattr(instance, 'id', 'N/A')}")
            return instance
        except Exception as e:
            await self.session.rollback()
            logger.error(f"❌ Failed to create {self.model.__name__}: {e}")
            raise

    # ========================================================================
    # READ Operations
    # ========================================================================

    async def get_by_id(self, id: str) -> Optional[ModelType]:
        """
        Get entity by ID

        Args:
            id: Entity ID

        Returns:
            Model instance or None
        """
        try:
            # counters may have moved via bulk UPDATE since the row was loaded
            result = await self.session.get(self.model, id, populate_existing=True)
            return cast(Optional[ModelType], result)
        except Exception as e:
            logger.error(f"❌ Failed to get {self.model.__name__} by ID: {e}")
            raise

    async def exists(self, id: str) -> bool:
        """
        Check if entity exists

        Args:
            id: Entity ID

        Returns:
            True if exists, False otherwise
        """
        try:
            stmt = select(self._id_col()).where(self._id_col() == id).limit(1)
            result = await self.session.execute(stmt)
            return result.first() is not None
        except Exception as e:
            logger.error(f"❌ Failed to check existence: {e}")
            raise

    async def find_one_by(self, **filters) -> Optional[ModelType]:
        """
        Find single entity by filters

        Args:
            **filters: Field-value pairs to filter by

        Returns:
            First matching model instance or None
        """
        try:
            query = select(self.model)
            for key, value in filters.items():
                query = query.where(self._column(key) == value)

            result = await self.session.execute(query.limit(1))
            return result.scalars().first()
        except Exception as e:
            logger.error(f"❌ Failed to find one {self.model.__name__}: {e}")
            raise

    async def get_column(self, id: str, column_name: str) -> Optional[Any]:
        """
        Read one column straight from the database

        Bypasses the identity map, so the value is fresh even if the
        entity was loaded earlier in the same session.
        """
        try:
            result = await self.session.execute(
                select(self._column(column_name)).where(self._id_col() == id)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"❌ Failed to read {self.model.__name__}.{column_name}: {e}")
            raise

    # ========================================================================
    # Counter Operations (no commit)
    # ========================================================================

    async def increment_counter(self, id: str, column_name: str, amount: int = 1) -> bool:
        """
        Atomically add to a counter column: SET col = col + amount

        Returns:
            True if a row was updated
        """
        column = self._column(column_name)
        try:
            result = await self.session.execute(
                update(self.model)
                .where(self._id_col() == id)
                .values({column_name: column + amount})
                .execution_options(synchronize_session=False)
            )
            return int(result.rowcount or 0) > 0
        except Exception as e:
            logger.error(f"❌ Failed to increment {self.model.__name__}.{column_name}: {e}")
            raise

    async def decrement_counter(self, id: str, column_name: str, amount: int = 1) -> bool:
        """
        Atomically subtract from a counter column, never going below zero

        Returns:
            True if a row was updated
        """
        column = self._column(column_name)
        try:
            result = await self.session.execute(
                update(self.model)
                .where(self._id_col() == id)
                .values({column_name: case((column > amount, column - amount), else_=0)})
                .execution_options(synchronize_session=False)
            )
            return int(result.rowcount or 0) > 0
        except Exception as e:
            logger.error(f"❌ Failed to decrement {self.model.__name__}.{column_name}: {e}")
            raise
