"""Base repository for database operations."""

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from quillblog.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
)

ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseRepository(Generic[ModelT]):
    """
    Base repository implementing common lookups and inserts.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
    """

    model: type[ModelT]
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_by_id(self, record_id: UUID | str) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record primary key

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).where(id_column == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        skip: int = 0,
        limit: int | None = None,
        order_by: str | None = None,
    ) -> list[ModelT]:
        """
        Get all records with optional pagination.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return (no limit if None)
            order_by: Optional field name to order by

        Returns:
            list[ModelT]: List of records
        """
        statement = select(self.model)
        if order_by:
            statement = statement.order_by(getattr(self.model, order_by))
        statement = statement.offset(skip)
        if limit is not None:
            statement = statement.limit(limit)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count(self) -> int:
        """Count total records."""
        statement = select(func.count()).select_from(self.model)
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record inside a savepoint and refresh it from the database.

        A failed insert only rolls back its own savepoint, so the surrounding
        request transaction stays usable.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other integrity errors
            DatabaseConnectionError: For other database failures
        """
        try:
            async with self.session.begin_nested():
                self.session.add(record)
                await self.session.flush()
        except IntegrityError as e:
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError(detail=error_msg) from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(detail=f"Failed to save record: {e}") from e

        await self.session.refresh(record)
        return record
