# tests/repositories/test_blog_repository.py
"""Tests for BlogRepository against an in-memory database."""

from unittest.mock import patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from quillblog.configs import settings
from quillblog.errors.database import DuplicateEntryError, RecordNotFoundError
from quillblog.models import CategoryDB
from quillblog.repositories import BlogRepository, CategoryRepository, UserRepository
from quillblog.schemas.blog import BlogFilters, BlogRecord


@pytest.fixture
def repo(session: AsyncSession) -> BlogRepository:
    return BlogRepository(session)


@pytest.fixture
async def tech(session: AsyncSession) -> CategoryDB:
    await UserRepository(session).ensure("u1", username="alice")
    await UserRepository(session).ensure("u2", username="bob")
    return await CategoryRepository(session).create("tech", display_name="TECH")


def record(category: CategoryDB, title: str = "Hello World", **overrides: object) -> BlogRecord:
    values: dict[str, object] = {
        "title": title,
        "content": "Body text long enough to pass.",
        "status": False,
        "category_id": category.id,
        **overrides,
    }
    return BlogRecord.model_validate(values)


class TestCreate:
    async def test_slug_comes_from_title(self, repo: BlogRepository, tech: CategoryDB) -> None:
        blog = await repo.create(record(tech, "  Hello, World!  "), author_id="u1")

        assert blog.slug == "hello-world"
        assert blog.category is not None
        assert blog.category.name == "tech"
        assert blog.author is not None
        assert blog.author.username == "alice"
        assert blog.created_at == blog.updated_at

    async def test_duplicate_slug(self, repo: BlogRepository, tech: CategoryDB) -> None:
        await repo.create(record(tech), author_id="u1")

        with pytest.raises(DuplicateEntryError, match="hello-world"):
            await repo.create(record(tech, "hello world"), author_id="u2")

    async def test_title_without_slug_characters(self, repo: BlogRepository, tech: CategoryDB) -> None:
        with pytest.raises(ValueError, match="slug"):
            await repo.create(record(tech, "!!!"), author_id="u1")


class TestUpdate:
    async def test_overwrites_fields_and_slug(self, repo: BlogRepository, tech: CategoryDB) -> None:
        created = await repo.create(record(tech), author_id="u1")
        created_at = created.created_at

        updated = await repo.update(
            "hello-world",
            record(tech, "Fresh Title", status=True, featured_image="https://x.test/a.jpg", image_id="a"),
        )

        assert updated.id == created.id
        assert updated.slug == "fresh-title"
        assert updated.status is True
        assert (updated.featured_image, updated.image_id) == ("https://x.test/a.jpg", "a")
        assert updated.created_at == created_at
        assert updated.updated_at >= created_at
        assert await repo.get_by_slug("hello-world") is None

    async def test_missing(self, repo: BlogRepository, tech: CategoryDB) -> None:
        with pytest.raises(RecordNotFoundError):
            await repo.update("missing", record(tech))

    async def test_collision_with_other_post(self, repo: BlogRepository, tech: CategoryDB) -> None:
        await repo.create(record(tech), author_id="u1")
        await repo.create(record(tech, "Other Post"), author_id="u1")

        with pytest.raises(DuplicateEntryError):
            await repo.update("other-post", record(tech, "Hello World"))

    async def test_same_slug_is_not_a_collision(self, repo: BlogRepository, tech: CategoryDB) -> None:
        await repo.create(record(tech), author_id="u1")

        updated = await repo.update("hello-world", record(tech, "HELLO  WORLD"))

        assert updated.slug == "hello-world"


class TestDelete:
    async def test_delete(self, repo: BlogRepository, tech: CategoryDB) -> None:
        await repo.create(record(tech), author_id="u1")

        assert await repo.delete("hello-world") is True
        assert await repo.get_by_slug("hello-world") is None

    async def test_missing(self, repo: BlogRepository) -> None:
        with pytest.raises(RecordNotFoundError):
            await repo.delete("missing")


class TestGetAll:
    async def test_filters(self, repo: BlogRepository, session: AsyncSession, tech: CategoryDB) -> None:
        travel = await CategoryRepository(session).create("travel", display_name="TRAVEL")
        await repo.create(record(tech, "Draft One"), author_id="u1")
        await repo.create(record(tech, "Live One", status=True), author_id="u2")
        await repo.create(record(travel, "Trip Notes", status=True), author_id="u1")

        published = await repo.get_all(BlogFilters(status=True))
        by_author = await repo.get_all(BlogFilters(author_id="u1"))
        by_category = await repo.get_all(BlogFilters(category="Travel"))
        combined = await repo.get_all(BlogFilters(status=True, author_id="u1"))

        assert {b.slug for b in published} == {"live-one", "trip-notes"}
        assert {b.slug for b in by_author} == {"draft-one", "trip-notes"}
        assert [b.slug for b in by_category] == ["trip-notes"]
        assert [b.slug for b in combined] == ["trip-notes"]

    async def test_newest_first(self, repo: BlogRepository, tech: CategoryDB) -> None:
        await repo.create(record(tech, "Older"), author_id="u1")
        await repo.create(record(tech, "Newer"), author_id="u1")

        assert [b.slug for b in await repo.get_all()] == ["newer", "older"]

    async def test_limit_is_capped(self, repo: BlogRepository, tech: CategoryDB) -> None:
        for title in ("One", "Two", "Three"):
            await repo.create(record(tech, title), author_id="u1")

        with patch.object(settings, "BLOG_LIST_MAX_LIMIT", 2):
            blogs = await repo.get_all(BlogFilters(limit=50))

        assert len(blogs) == 2

    async def test_requested_limit_below_cap(self, repo: BlogRepository, tech: CategoryDB) -> None:
        for title in ("One", "Two", "Three"):
            await repo.create(record(tech, title), author_id="u1")

        assert len(await repo.get_all(BlogFilters(limit=1))) == 1

    async def test_slug_exists_excludes_self(self, repo: BlogRepository, tech: CategoryDB) -> None:
        blog = await repo.create(record(tech), author_id="u1")

        assert await repo.slug_exists("hello-world") is True
        assert await repo.slug_exists("hello-world", exclude_id=blog.id) is False
