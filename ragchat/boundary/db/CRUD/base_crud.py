"""
Base CRUD operations for SQLAlchemy models.

Provides generic Create, Read, Update, Delete operations that can be
inherited and extended by model-specific CRUD classes.

Dependencies: sqlalchemy, uuid
System role: Foundation for all database CRUD operations
"""

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Operations flush but never commit; transaction boundaries belong to
    the calling service.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record in the database.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """
        Retrieve a single record by primary key.

        Args:
            session: Async database session
            id: UUID primary key

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, session: AsyncSession, instance: ModelT, **kwargs) -> ModelT:
        """
        Apply field values to a loaded instance and flush.

        Args:
            session: Async database session
            instance: Persistent model instance
            **kwargs: Fields to update with new values

        Returns:
            The updated instance
        """
        for field, value in kwargs.items():
            setattr(instance, field, value)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def delete(self, session: AsyncSession, instance: ModelT) -> None:
        """
        Delete a loaded instance, following ORM relationship cascades.

        Args:
            session: Async database session
            instance: Persistent model instance
        """
        await session.delete(instance)
        await session.flush()
