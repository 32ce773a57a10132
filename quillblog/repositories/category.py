"""Category repository for database operations."""

from sqlalchemy import func, select

from quillblog.models.category import CategoryDB
from quillblog.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[CategoryDB]):
    """Repository for Category database operations."""

    model = CategoryDB

    async def get_by_name(self, name: str) -> CategoryDB | None:
        """
        Get a category by case-insensitive exact match on its name.

        Args:
            name: Category name (any case)

        Returns:
            CategoryDB | None: Category if found, None otherwise
        """
        result = await self.session.execute(
            # pyrefly: ignore [bad-argument-type]
            select(CategoryDB).where(func.lower(CategoryDB.name) == name.lower()),
        )
        return result.scalar_one_or_none()

    async def create(self, name: str, display_name: str) -> CategoryDB:
        """
        Insert a new category.

        Args:
            name: Normalized category key
            display_name: Human readable label

        Returns:
            CategoryDB: Created category

        Raises:
            DuplicateEntryError: If the name already exists
        """
        return await self._add_and_refresh(CategoryDB(name=name, display_name=display_name))

    async def list_all(self) -> list[CategoryDB]:
        """Return every category ordered by name."""
        return await self.get_all(order_by="name")
