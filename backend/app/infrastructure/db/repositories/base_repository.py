"""
Base Repository for Team Billing

Generic async repository implementing the data access shared by every
table: lookup by primary key, listing, insert and field updates.
Concrete repositories add the queries specific to their table.
"""

from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel


# Type variable for generic repository
ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic async repository with CRUD operations.

    Repositories never commit: the session belongs to the caller, which
    commits once per unit of work.

    Args:
        model: The SQLModel class to operate on
        session: Async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self._model = model
        self._session = session

    @property
    def session(self) -> AsyncSession:
        """Get the current session."""
        return self._session

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        Get a single record by its primary key.

        Args:
            id: Integer primary key

        Returns:
            Model instance or None if not found
        """
        return await self._session.get(self._model, id)

    async def get_all(
        self,
        skip: int = 0,
        limit: int = 100
    ) -> List[ModelType]:
        """
        Get all records with pagination, oldest first.

        Args:
            skip: Number of records to skip
            limit: Maximum records to return

        Returns:
            List of model instances
        """
        stmt = (
            select(self._model)
            .order_by(self._model.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, **values: Any) -> ModelType:
        """
        Insert a new record and return it with its generated ID.

        Args:
            values: Column values for the new row

        Returns:
            Created model instance
        """
        db_obj = self._model(**values)
        self._session.add(db_obj)
        await self._session.flush()
        await self._session.refresh(db_obj)
        return db_obj

    async def update(self, id: int, **values: Any) -> Optional[ModelType]:
        """
        Update fields of an existing record.

        Args:
            id: Integer primary key
            values: Fields to modify

        Returns:
            Updated model instance or None if not found
        """
        db_obj = await self.get_by_id(id)
        if not db_obj:
            return None

        for field, value in values.items():
            setattr(db_obj, field, value)

        self._session.add(db_obj)
        await self._session.flush()
        await self._session.refresh(db_obj)
        return db_obj
