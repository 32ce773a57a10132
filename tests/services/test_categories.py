# tests/services/test_categories.py
"""Tests for the category registry."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from quillblog.errors import (
    ConflictError,
    DatabaseConnectionError,
    DuplicateEntryError,
    StorageError,
    ValidationError,
)
from quillblog.models import CategoryDB
from quillblog.services.categories import CategoryRegistry, ResolutionOutcome


async def test_creates_normalized_category(session: AsyncSession) -> None:
    registry = CategoryRegistry(session)

    resolution = await registry.resolve("  Tech ")

    assert resolution.outcome is ResolutionOutcome.CREATED
    assert resolution.category.name == "tech"
    assert resolution.category.display_name == "TECH"


async def test_resolution_is_idempotent(session: AsyncSession) -> None:
    registry = CategoryRegistry(session)

    first = await registry.resolve("Tech")
    second = await registry.resolve("tech")
    third = await registry.resolve(" TECH ")

    assert first.category.id == second.category.id == third.category.id
    assert [second.outcome, third.outcome] == [ResolutionOutcome.EXISTING] * 2
    assert len(await registry.list_all()) == 1


async def test_blank_name_is_rejected(session: AsyncSession) -> None:
    with pytest.raises(ValidationError):
        await CategoryRegistry(session).resolve("   ")


async def test_list_all_is_ordered_by_name(session: AsyncSession) -> None:
    registry = CategoryRegistry(session)
    for name in ("travel", "Art", "music"):
        await registry.resolve(name)

    assert [c.name for c in await registry.list_all()] == ["art", "music", "travel"]


async def test_lost_insert_race_is_recovered(session: AsyncSession) -> None:
    registry = CategoryRegistry(session)
    winner = CategoryDB(name="tech", display_name="TECH")
    registry.repository.get_by_name = AsyncMock(side_effect=[None, winner])
    registry.repository.create = AsyncMock(side_effect=DuplicateEntryError)

    resolution = await registry.resolve("Tech")

    assert resolution.outcome is ResolutionOutcome.RECOVERED
    assert resolution.category is winner
    assert registry.repository.get_by_name.await_count == 2


async def test_race_without_visible_winner_is_a_conflict(session: AsyncSession) -> None:
    registry = CategoryRegistry(session)
    registry.repository.get_by_name = AsyncMock(return_value=None)
    registry.repository.create = AsyncMock(side_effect=DuplicateEntryError)

    with pytest.raises(ConflictError):
        await registry.resolve("Tech")

    # Exactly one re-read after the conflict
    assert registry.repository.get_by_name.await_count == 2


async def test_other_storage_failures_are_translated(session: AsyncSession) -> None:
    registry = CategoryRegistry(session)
    registry.repository.get_by_name = AsyncMock(side_effect=DatabaseConnectionError)

    with pytest.raises(StorageError):
        await registry.resolve("Tech")


async def test_real_unique_violation_keeps_session_usable(session: AsyncSession) -> None:
    registry = CategoryRegistry(session)
    existing = (await registry.resolve("tech")).category
    # Simulate a concurrent writer: the first lookup misses, the insert collides
    real_get_by_name = registry.repository.get_by_name
    registry.repository.get_by_name = AsyncMock(side_effect=[None, existing])

    resolution = await registry.resolve("Tech")

    assert resolution.outcome is ResolutionOutcome.RECOVERED
    assert resolution.category.id == existing.id
    assert (await real_get_by_name("tech")) is not None
