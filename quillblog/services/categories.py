"""Category registry: resolve free-text category names to stored categories."""

from dataclasses import dataclass
from enum import StrEnum

from sqlalchemy.ext.asyncio import AsyncSession

from quillblog.errors.blog import ConflictError, ValidationError, translate_storage_errors
from quillblog.errors.database import DuplicateEntryError
from quillblog.models.category import CategoryDB
from quillblog.monitoring.logging import get_logger
from quillblog.repositories.category import CategoryRepository
from quillblog.utils.helpers import normalize_category_name

logger = get_logger(__name__)


class ResolutionOutcome(StrEnum):
    CREATED = "created"
    EXISTING = "existing"
    RECOVERED = "recovered"


@dataclass(frozen=True, slots=True)
class CategoryResolution:
    category: CategoryDB
    outcome: ResolutionOutcome


class CategoryRegistry:
    """
    Resolves category names case-insensitively, creating them on first use.

    Resolution is idempotent: "Tech", "tech" and " TECH " all yield the same
    category. Two callers racing to create the same name both end up with the
    single stored row.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.repository = CategoryRepository(session)

    async def resolve(self, raw_name: str) -> CategoryResolution:
        """
        Return the category for a name, creating it if absent.

        Args:
            raw_name: Category name as typed by the user

        Returns:
            CategoryResolution: The category and how it was obtained

        Raises:
            ValidationError: If the name is empty after trimming
            ConflictError: If a concurrent insert won but its row cannot be read
            StorageError: For other persistence failures
        """
        name = normalize_category_name(raw_name)
        if not name:
            raise ValidationError("Category name cannot be empty", field="category_name")

        with translate_storage_errors("resolve_category", category=name):
            if existing := await self.repository.get_by_name(name):
                return CategoryResolution(existing, ResolutionOutcome.EXISTING)

            try:
                created = await self.repository.create(name, display_name=name.upper())
            except DuplicateEntryError as e:
                # Lost the insert race; the savepoint is already rolled back
                recovered = await self.repository.get_by_name(name)
                if recovered is None:
                    logger.warning("Category vanished after unique violation", category=name)
                    raise ConflictError(f"Category '{name}' could not be resolved") from e
                logger.info("Category recovered after concurrent insert", category=name)
                return CategoryResolution(recovered, ResolutionOutcome.RECOVERED)

        logger.info("Category created", category=name)
        return CategoryResolution(created, ResolutionOutcome.CREATED)

    async def list_all(self) -> list[CategoryDB]:
        """Return every category ordered by name."""
        with translate_storage_errors("list_categories"):
            return await self.repository.list_all()
