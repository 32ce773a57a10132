# tests/repositories/test_user_repository.py
"""Tests for author provisioning."""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from quillblog.errors.database import DuplicateEntryError
from quillblog.models import UserDB
from quillblog.repositories import CategoryRepository, UserRepository


@pytest.mark.asyncio
async def test_ensure_creates_then_reuses(session: AsyncSession) -> None:
    repo = UserRepository(session)

    first, created = await repo.ensure("u1", email="alice@example.com", username="alice")
    second, created_again = await repo.ensure("u1", email="other@example.com")

    assert created is True
    assert created_again is False
    assert second.id == first.id == "u1"
    assert second.email == "alice@example.com"
    assert await repo.count() == 1


@pytest.mark.asyncio
async def test_ensure_absorbs_concurrent_insert(session: AsyncSession) -> None:
    repo = UserRepository(session)
    winner = UserDB(id="u1", username="alice")

    with (
        patch.object(repo, "get_by_id", AsyncMock(side_effect=[None, winner])),
        patch.object(repo, "_add_and_refresh", AsyncMock(side_effect=DuplicateEntryError)),
    ):
        user, created = await repo.ensure("u1", username="alice")

    assert user is winner
    assert created is False


@pytest.mark.asyncio
async def test_ensure_reraises_when_row_never_appears(session: AsyncSession) -> None:
    repo = UserRepository(session)

    with (
        patch.object(repo, "get_by_id", AsyncMock(return_value=None)),
        patch.object(repo, "_add_and_refresh", AsyncMock(side_effect=DuplicateEntryError)),
        pytest.raises(DuplicateEntryError),
    ):
        await repo.ensure("u1")


@pytest.mark.asyncio
async def test_category_names_are_unique(session: AsyncSession) -> None:
    repo = CategoryRepository(session)
    await repo.create("tech", display_name="TECH")

    with pytest.raises(DuplicateEntryError):
        await repo.create("tech", display_name="TECH")

    assert [c.name for c in await repo.list_all()] == ["tech"]
