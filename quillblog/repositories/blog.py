"""Blog repository for database operations."""

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from quillblog.configs import settings
from quillblog.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
)
from quillblog.models.blog import BlogDB
from quillblog.models.category import CategoryDB
from quillblog.monitoring.logging import get_logger
from quillblog.schemas.blog import BlogFilters, BlogRecord
from quillblog.utils.helpers import normalize_category_name, slugify_title

logger = get_logger(__name__)


def _with_relations(statement: Select) -> Select:
    """Eager-load category and author on a blog query."""
    return statement.options(
        # pyrefly: ignore [bad-argument-type]
        selectinload(BlogDB.category),
        # pyrefly: ignore [bad-argument-type]
        selectinload(BlogDB.author),
    )


def _make_slug(title: str) -> str:
    slug = slugify_title(title)
    if not slug:
        mssg = "Could not generate valid slug from title"
        raise ValueError(mssg)
    return slug


class BlogRepository:
    """
    Repository for Blog database operations.

    Posts are addressed by slug. The slug is never supplied by callers: it is
    computed from the title on create and on every update.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def create(self, record: BlogRecord, author_id: str) -> BlogDB:
        """
        Create a new blog post in the database.

        Args:
            record: Full post record
            author_id: Identity of the blog author

        Returns:
            BlogDB: Created blog with category and author loaded

        Raises:
            DuplicateEntryError: If the slug generated from the title already exists
            DatabaseError: For other database errors
        """
        slug = _make_slug(record.title)
        if await self.slug_exists(slug):
            raise DuplicateEntryError(detail=f"Blog with slug '{slug}' already exists")

        now = datetime.now(tz=UTC)
        db_blog = BlogDB(
            author_id=author_id,
            slug=slug,
            created_at=now,
            updated_at=now,
            **record.model_dump(),
        )

        await self._flush(slug, lambda: self.session.add(db_blog))
        return await self._reload(db_blog.id)

    async def get_by_slug(self, slug: str) -> BlogDB | None:
        """
        Get blog by slug, with category and author.

        Args:
            slug: Blog slug

        Returns:
            BlogDB | None: Blog if found, None otherwise
        """
        result = await self.session.execute(
            # pyrefly: ignore [bad-argument-type]
            _with_relations(select(BlogDB).where(BlogDB.slug == slug)),
        )
        return result.scalar_one_or_none()

    async def get_all(self, filters: BlogFilters | None = None) -> list[BlogDB]:
        """
        Get blogs, most recently updated first.

        Args:
            filters: Optional status, author and category filters plus page size.
                The page size is capped at `BLOG_LIST_MAX_LIMIT`.

        Returns:
            list[BlogDB]: Blogs with category and author loaded
        """
        filters = filters or BlogFilters()
        query = select(BlogDB)

        if filters.status is not None:
            # pyrefly: ignore [bad-argument-type]
            query = query.where(BlogDB.status == filters.status)
        if filters.author_id:
            # pyrefly: ignore [bad-argument-type]
            query = query.where(BlogDB.author_id == filters.author_id)
        if filters.category:
            query = query.join(CategoryDB, CategoryDB.id == BlogDB.category_id).where(
                # pyrefly: ignore [bad-argument-type]
                CategoryDB.name == normalize_category_name(filters.category),
            )

        limit = min(filters.limit, settings.BLOG_LIST_MAX_LIMIT)
        query = _with_relations(
            # pyrefly: ignore [bad-argument-type]
            query.order_by(desc(BlogDB.updated_at), desc(BlogDB.created_at)).limit(limit),
        )

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update(self, slug: str, record: BlogRecord) -> BlogDB:
        """
        Overwrite every writable field of a blog.

        Fields absent from the caller's intent must already be merged into
        `record`; nothing here is treated as "unchanged". The slug is
        recomputed from the resulting title.

        Args:
            slug: Current blog slug
            record: Full post record

        Returns:
            BlogDB: Updated blog with category and author loaded

        Raises:
            RecordNotFoundError: If no blog has this slug
            DuplicateEntryError: If the new slug belongs to another blog
        """
        db_blog = await self.get_by_slug(slug)
        if not db_blog:
            raise RecordNotFoundError(detail=f"Blog with slug '{slug}' not found")

        new_slug = _make_slug(record.title)
        if new_slug != db_blog.slug and await self.slug_exists(new_slug, exclude_id=db_blog.id):
            raise DuplicateEntryError(detail=f"Blog with slug '{new_slug}' already exists")

        def apply() -> None:
            for key, value in record.model_dump().items():
                setattr(db_blog, key, value)
            db_blog.slug = new_slug
            db_blog.updated_at = datetime.now(tz=UTC)

        await self._flush(new_slug, apply)
        return await self._reload(db_blog.id)

    async def delete(self, slug: str) -> bool:
        """
        Delete blog by slug.

        Args:
            slug: Blog slug

        Returns:
            bool: True once the blog is deleted

        Raises:
            RecordNotFoundError: If no blog has this slug
        """
        db_blog = await self.get_by_slug(slug)
        if not db_blog:
            raise RecordNotFoundError(detail=f"Blog with slug '{slug}' not found")

        await self.session.delete(db_blog)
        await self.session.flush()
        return True

    async def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        """
        Check whether a slug is already taken.

        Args:
            slug: Slug to check
            exclude_id: Optional blog ID to ignore (the blog being updated)

        Returns:
            bool: True if another blog uses the slug
        """
        # pyrefly: ignore [bad-argument-type]
        statement = select(BlogDB.id).where(BlogDB.slug == slug)
        if exclude_id is not None:
            # pyrefly: ignore [bad-argument-type]
            statement = statement.where(BlogDB.id != exclude_id)
        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None

    async def _flush(self, slug: str, change: Callable[[], None]) -> None:
        """Apply a change and flush it inside a savepoint, mapping integrity errors."""
        try:
            async with self.session.begin_nested():
                change()
                await self.session.flush()
        except IntegrityError as e:
            error_msg = str(e.orig) if e.orig else str(e)
            if "slug" in error_msg.lower():
                raise DuplicateEntryError(
                    detail=f"Blog with slug '{slug}' already exists",
                ) from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        except SQLAlchemyError as e:
            logger.exception("Failed to save blog", slug=slug)
            raise DatabaseConnectionError(detail=f"Failed to save blog: {e}") from e

    async def _reload(self, blog_id: UUID) -> BlogDB:
        """Re-read a blog with fresh relations after a write."""
        result = await self.session.execute(
            _with_relations(
                # pyrefly: ignore [bad-argument-type]
                select(BlogDB).where(BlogDB.id == blog_id),
            ).execution_options(populate_existing=True),
        )
        return result.scalar_one()
